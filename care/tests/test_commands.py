from io import StringIO

from django.core.management import call_command

from care.models import Account, Patient, Vital


def test_ensure_demo_accounts_is_idempotent(db):
    call_command('ensure_demo_accounts', stdout=StringIO())
    call_command('ensure_demo_accounts', password='changed-123', stdout=StringIO())
    assert Account.objects.count() == 4
    family = Account.objects.get(email='family@example.com')
    assert family.patient is not None
    assert family.check_password('changed-123')
    assert Patient.objects.count() == 1


def test_populate_data_seeds_every_resource(db):
    out = StringIO()
    call_command('populate_data', vitals=12, stdout=out)
    patient = Patient.objects.get()
    assert Vital.objects.filter(patient=patient).count() == 12
    for related in ('medications', 'appointments', 'emergency_contacts', 'checkins', 'messages',
                    'documents', 'activities', 'reminders', 'invoices'):
        assert getattr(patient, related).exists(), related
    assert 'Demo data created' in out.getvalue()
