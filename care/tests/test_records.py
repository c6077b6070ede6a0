"""
Patient-scoped record lists and the record mutation endpoints.
"""
import uuid
from datetime import date, time, timedelta

import pytest
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from care.models import (
    Account,
    Activity,
    CheckIn,
    EmergencyContact,
    Invoice,
    Medication,
    MedicationLog,
    Message,
    Reminder,
    Vital,
)
from care.services.records import RESOURCES


@pytest.mark.parametrize('resource', sorted(RESOURCES))
def test_empty_lists_are_empty_arrays(auth_client, patient, resource):
    r = auth_client.get(f'/api/patients/{patient.id}/{resource}')
    assert r.status_code == 200
    assert r.data == []


def test_vitals_capped_at_50_newest_first(auth_client, patient):
    base = timezone.now()
    for i in range(60):
        Vital.objects.create(patient=patient, type='heart_rate', value=str(60 + i), unit='bpm',
                             recorded_at=base - timedelta(minutes=i))
    r = auth_client.get(f'/api/patients/{patient.id}/vitals')
    assert r.status_code == 200
    assert len(r.data) == 50
    stamps = [parse_datetime(v['recorded_at']) for v in r.data]
    assert stamps == sorted(stamps, reverse=True)
    assert r.data[0]['value'] == '60'


def test_checkins_capped_at_30(auth_client, patient):
    today = timezone.localdate()
    for i in range(35):
        CheckIn.objects.create(patient=patient, mood='good', checkin_date=today - timedelta(days=i))
    r = auth_client.get(f'/api/patients/{patient.id}/checkins')
    assert len(r.data) == 30
    assert r.data[0]['checkin_date'] == today.isoformat()


def test_lists_only_return_the_requested_patient(auth_client, patient):
    from care.models import Patient

    other = Patient.objects.create(first_name='Other')
    Medication.objects.create(patient=patient, name='Metformin')
    Medication.objects.create(patient=other, name='Warfarin')
    r = auth_client.get(f'/api/patients/{patient.id}/medications')
    assert [m['name'] for m in r.data] == ['Metformin']
    assert r.data[0]['patient_id'] == str(patient.id)


def test_emergency_contacts_primary_first(auth_client, patient):
    EmergencyContact.objects.create(patient=patient, name='Alice', phone='1')
    EmergencyContact.objects.create(patient=patient, name='Zed', phone='2', is_primary=True)
    EmergencyContact.objects.create(patient=patient, name='Bob', phone='3')
    r = auth_client.get(f'/api/patients/{patient.id}/emergency-contacts')
    assert [c['name'] for c in r.data] == ['Zed', 'Alice', 'Bob']


def test_reminders_soonest_first(auth_client, patient):
    today = timezone.localdate()
    Reminder.objects.create(patient=patient, title='later', reminder_date=today + timedelta(days=5))
    Reminder.objects.create(patient=patient, title='sooner', reminder_date=today + timedelta(days=1))
    r = auth_client.get(f'/api/patients/{patient.id}/reminders')
    assert [x['title'] for x in r.data] == ['sooner', 'later']


def test_invoice_amount_is_decimal_string(auth_client, patient):
    Invoice.objects.create(patient=patient, invoice_number='INV-1', amount='12.50')
    r = auth_client.get(f'/api/patients/{patient.id}/invoices')
    assert r.data[0]['amount'] == '12.50'
    assert r.data[0]['status'] == 'pending'


def test_malformed_patient_id_is_400(auth_client):
    r = auth_client.get('/api/patients/not-a-uuid/vitals')
    assert r.status_code == 400
    assert r.data['error']['message'] == 'Malformed patient id'


def test_activity_completion_toggle(auth_client, patient):
    act = Activity.objects.create(patient=patient, name='Walk')
    r = auth_client.put(f'/api/activities/{act.id}', {'completed': True}, format='json')
    assert r.status_code == 200
    assert r.data['completed'] is True
    act.refresh_from_db()
    assert act.completed is True


def test_activity_ignores_non_whitelisted_fields(auth_client, patient):
    act = Activity.objects.create(patient=patient, name='Walk')
    auth_client.put(f'/api/activities/{act.id}', {'completed': True, 'name': 'Run'}, format='json')
    act.refresh_from_db()
    assert act.name == 'Walk'


def test_update_missing_activity_is_404_and_creates_nothing(auth_client):
    r = auth_client.put(f'/api/activities/{uuid.uuid4()}', {'completed': True}, format='json')
    assert r.status_code == 404
    assert r.data['error']['code'] == 'not_found'
    assert Activity.objects.count() == 0


def test_reminder_completion_toggle(auth_client, patient):
    rem = Reminder.objects.create(patient=patient, title='Pills', reminder_date=date.today(),
                                  reminder_time=time(8, 0))
    r = auth_client.put(f'/api/reminders/{rem.id}', {'completed': True}, format='json')
    assert r.status_code == 200
    rem.refresh_from_db()
    assert rem.completed is True


def test_medication_log_defaults_taken_at_to_now(auth_client, account, patient):
    med = Medication.objects.create(patient=patient, name='Metformin')
    before = timezone.now()
    r = auth_client.post(f'/api/medications/{med.id}/log', {}, format='json')
    after = timezone.now()
    assert r.status_code == 200
    taken = parse_datetime(r.data['taken_at'])
    assert before - timedelta(seconds=1) <= taken <= after + timedelta(seconds=1)
    assert r.data['user_id'] == str(account.id)
    assert MedicationLog.objects.filter(medication=med).count() == 1


def test_medication_log_with_explicit_time_and_listing(auth_client, patient):
    med = Medication.objects.create(patient=patient, name='Metformin')
    r = auth_client.post(f'/api/medications/{med.id}/log',
                         {'takenAt': '2024-03-01T08:00:00Z', 'notes': 'with breakfast'}, format='json')
    assert r.status_code == 200
    assert r.data['notes'] == 'with breakfast'
    logs = auth_client.get(f'/api/medications/{med.id}/logs')
    assert logs.status_code == 200
    assert len(logs.data) == 1
    assert logs.data[0]['taken_at'].startswith('2024-03-01T08:00:00')


def test_log_for_unknown_medication_is_404(auth_client):
    r = auth_client.post(f'/api/medications/{uuid.uuid4()}/log', {}, format='json')
    assert r.status_code == 404


def test_messages_join_author_and_survive_author_deletion(auth_client, account, patient):
    r = auth_client.post(f'/api/patients/{patient.id}/messages', {'message': 'Lunch went well'},
                         format='json')
    assert r.status_code == 201
    assert r.data['first_name'] == account.first_name
    assert r.data['role'] == 'family'

    ghost = Account.objects.create_user('ghost@example.com', 'x-pass-123')
    Message.objects.create(patient=patient, author=ghost, message='orphan')
    ghost.delete()

    listed = auth_client.get(f'/api/patients/{patient.id}/messages')
    assert listed.status_code == 200
    assert len(listed.data) == 2
    orphan = next(m for m in listed.data if m['message'] == 'orphan')
    assert orphan['user_id'] is None
    assert orphan['first_name'] is None
    assert orphan['role'] is None


def test_message_markup_is_stripped(auth_client, patient):
    r = auth_client.post(f'/api/patients/{patient.id}/messages',
                         {'message': '<script>x</script>hello'}, format='json')
    assert r.status_code == 201
    assert '<script>' not in r.data['message']


def test_blank_message_rejected(auth_client, patient):
    r = auth_client.post(f'/api/patients/{patient.id}/messages', {'message': '   '}, format='json')
    assert r.status_code == 400


def test_activity_update_without_completed_is_400(auth_client, patient):
    act = Activity.objects.create(patient=patient, name='Walk', completed=True)
    r = auth_client.put(f'/api/activities/{act.id}', {}, format='json')
    assert r.status_code == 400
    act.refresh_from_db()
    assert act.completed is True


def test_reminder_update_without_completed_is_400(auth_client, patient):
    rem = Reminder.objects.create(patient=patient, title='Pills', reminder_date=date.today(), completed=True)
    r = auth_client.put(f'/api/reminders/{rem.id}', {'title': 'Renamed'}, format='json')
    assert r.status_code == 400
    rem.refresh_from_db()
    assert rem.completed is True
    assert rem.title == 'Pills'
