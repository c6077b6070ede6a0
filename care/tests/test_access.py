"""
Per-patient authorisation on top of the bearer-token gate.
"""
import uuid

import pytest
from django.test import override_settings
from rest_framework.test import APIClient

from care.models import Account, Activity, Medication, Patient
from care.services.access import accessible_patient_ids, can_access_patient, parse_identifier
from care.services.auth import issue_token


@pytest.fixture
def stranger(db):
    return Patient.objects.create(first_name='Not', last_name='Mine')


def test_foreign_patient_is_forbidden(auth_client, stranger):
    r = auth_client.get(f'/api/patients/{stranger.id}/medications')
    assert r.status_code == 403
    assert r.data['error']['code'] == 'patient_forbidden'


@override_settings(ENFORCE_PATIENT_ACCESS=False)
def test_any_valid_token_reaches_any_patient_when_check_disabled(auth_client, stranger):
    Medication.objects.create(patient=stranger, name='Aspirin')
    r = auth_client.get(f'/api/patients/{stranger.id}/medications')
    assert r.status_code == 200
    assert [m['name'] for m in r.data] == ['Aspirin']


def test_record_mutation_on_foreign_patient_is_forbidden(auth_client, stranger):
    act = Activity.objects.create(patient=stranger, name='Swim')
    r = auth_client.put(f'/api/activities/{act.id}', {'completed': True}, format='json')
    assert r.status_code == 403
    act.refresh_from_db()
    assert act.completed is False


def test_admin_reaches_every_patient(db, stranger):
    admin = Account.objects.create_user('root@example.com', 'pw-123456', role='admin')
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_token(admin)}')
    assert client.get(f'/api/patients/{stranger.id}/vitals').status_code == 200
    assert accessible_patient_ids(admin) is None


def test_creating_a_patient_grants_and_links(db):
    acc = Account.objects.create_user('new@example.com', 'pw-123456', role='caregiver')
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_token(acc)}')
    r = client.post('/api/patients', {'first_name': 'Rosa', 'last_name': 'Diaz'}, format='json')
    assert r.status_code == 201
    acc.refresh_from_db()
    assert str(acc.patient_id) == r.data['id']
    assert can_access_patient(acc, r.data['id'])

    detail = client.get(f"/api/patients/{r.data['id']}")
    assert detail.status_code == 200
    assert detail.data['first_name'] == 'Rosa'

    me = client.get('/api/auth/me')
    assert me.data['user']['patientId'] == r.data['id']


def test_second_patient_does_not_replace_link(auth_client, account, patient):
    r = auth_client.post('/api/patients', {'first_name': 'Second'}, format='json')
    assert r.status_code == 201
    account.refresh_from_db()
    assert account.patient_id == patient.id
    assert auth_client.get(f"/api/patients/{r.data['id']}/vitals").status_code == 200


def test_patient_requires_first_name(auth_client):
    r = auth_client.post('/api/patients', {'first_name': '  '}, format='json')
    assert r.status_code == 400


def test_parse_identifier_accepts_uuid_forms():
    u = uuid.uuid4()
    assert parse_identifier(u) == u
    assert parse_identifier(str(u).upper()) == u
    assert parse_identifier(f' {u} ') == u
