import pytest
from rest_framework.test import APIClient

from care.models import Account, Patient, PatientAccess
from care.services.auth import issue_token


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def patient(db):
    return Patient.objects.create(first_name='Edith', last_name='Crane')


@pytest.fixture
def account(db, patient):
    acc = Account.objects.create_user('family@example.com', 'P@ssw0rd1', role='family', patient=patient)
    PatientAccess.objects.create(account=acc, patient=patient)
    return acc


@pytest.fixture
def auth_client(account):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_token(account)}')
    return client
