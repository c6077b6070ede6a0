"""
The HTTP client against a live server, end to end.
"""
import pytest

from care.client import ApiError, ElderCareClient
from care.models import Activity, Medication


@pytest.fixture
def api(live_server):
    return ElderCareClient(live_server.url)


def test_register_create_patient_and_walk_records(api):
    user = api.register('flow@example.com', 'P@ssw0rd1', 'Flo', 'W')
    assert user['email'] == 'flow@example.com'
    assert api.token

    patient = api.create_patient('Ida', 'Wells')
    pid = patient['id']
    assert api.me()['patientId'] == pid
    assert api.list('medications', pid) == []

    med = Medication.objects.create(patient_id=pid, name='Metformin')
    log = api.log_medication(str(med.id), notes='after lunch')
    assert log['medication_id'] == str(med.id)

    act = Activity.objects.create(patient_id=pid, name='Walk')
    assert api.update_activity(str(act.id), True)['completed'] is True

    appt = api.create_appointment(pid, type='checkup', doctor='Dr. Patel',
                                  appointment_date='2030-01-02', appointment_time='09:00')
    assert api.list_appointments(pid)[0]['id'] == appt['id']
    assert api.cancel_appointment(appt['id'])['status'] == 'cancelled'
    api.delete_appointment(appt['id'])
    assert api.list_appointments(pid) == []

    msg = api.send_message(pid, 'hello')
    assert msg['message'] == 'hello'


def test_login_failure_raises_api_error(api):
    api.register('x@example.com', 'P@ssw0rd1')
    with pytest.raises(ApiError) as exc:
        api.login('x@example.com', 'wrong')
    assert exc.value.status == 401
    assert exc.value.body['error']['code'] == 'invalid_credentials'


def test_401_clears_the_stored_token(api, live_server):
    api.register('y@example.com', 'P@ssw0rd1')
    assert api.token
    with pytest.raises(ApiError):
        api.login('y@example.com', 'wrong')
    assert api.token is None

    anon = ElderCareClient(live_server.url)
    with pytest.raises(ApiError) as exc:
        anon.me()
    assert exc.value.status == 401


def test_probes(api):
    assert api.healthz() == 'ok'
