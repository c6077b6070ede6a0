# care/management/commands/ensure_demo_accounts.py
from django.core.management.base import BaseCommand

from care.models import KNOWN_ROLES, Account, Patient, PatientAccess

DEMO_PASSWORD = "demo-pass-123"

DEMO_SET = [(f"{role}@example.com", role) for role in KNOWN_ROLES]


class Command(BaseCommand):
    help = "Ensure one demo account per role exists with the shared demo password (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--password", default=DEMO_PASSWORD)

    def handle(self, *args, **opts):
        password = opts["password"]
        patient, _ = Patient.objects.get_or_create(
            first_name="Demo", last_name="Patient", defaults={"notes": "Seeded demo patient"},
        )
        for email, role in DEMO_SET:
            account = Account.objects.filter(email=email).first()
            if account is None:
                account = Account.objects.create_user(email, password, role=role)
            else:
                # reset password, role and active flag
                account.set_password(password)
                account.role = role
                account.is_active = True
                account.save(update_fields=["password", "role", "is_active"])
            if role == "family" and account.patient_id != patient.id:
                account.patient = patient
                account.save(update_fields=["patient"])
            if role != "admin":
                PatientAccess.objects.get_or_create(account=account, patient=patient)
            self.stdout.write(self.style.SUCCESS(f"ok: {email} ({role})"))
        self.stdout.write(self.style.SUCCESS(f"All demo accounts ensured; demo patient {patient.id}."))
