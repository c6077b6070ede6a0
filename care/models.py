"""
Database models for the eldercare backend.

Every clinical record belongs to exactly one :class:`Patient`, and all
reads of a record collection are filtered by that patient.  Primary keys
are UUIDs so that identifiers are opaque and uniform across the API; the
field names mirror the JSON consumed by the front-end pages.
"""
from __future__ import annotations

import uuid

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models
from django.utils import timezone


ROLE_FAMILY = 'family'
ROLE_CAREGIVER = 'caregiver'
ROLE_CLINICIAN = 'clinician'
ROLE_ADMIN = 'admin'
KNOWN_ROLES = (ROLE_FAMILY, ROLE_CAREGIVER, ROLE_CLINICIAN, ROLE_ADMIN)


class Patient(models.Model):
    """The person receiving care; the scoping key of every clinical record."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    first_name = models.CharField(max_length=150)
    last_name = models.CharField(max_length=150, blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class AccountManager(BaseUserManager):
    """Manager for email-identified accounts.

    Emails are stored exactly as submitted; lookups are case-sensitive.
    """
    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError('The email must be set')
        account = self.model(email=email, **extra_fields)
        account.set_password(password)
        account.save(using=self._db)
        return account

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', ROLE_ADMIN)
        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')
        return self._create_user(email, password, **extra_fields)


class Account(AbstractUser):
    """A login identity: family member, caregiver, clinician or admin.

    ``role`` is free text; :data:`KNOWN_ROLES` lists the values the
    application itself understands.  An account may be linked to the
    patient it represents or primarily cares for.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    username = None
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=32, default=ROLE_FAMILY, db_index=True)
    patient = models.ForeignKey(
        Patient, null=True, blank=True, on_delete=models.SET_NULL, related_name='accounts'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS: list[str] = []

    objects = AccountManager()

    def __str__(self) -> str:
        return f"{self.email} ({self.role})"


class PatientAccess(models.Model):
    """Grants an account access to one patient's records (its care circle)."""
    account = models.ForeignKey(Account, on_delete=models.CASCADE, related_name='patient_grants')
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='access_grants')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = [('account', 'patient')]

    def __str__(self) -> str:
        return f"{self.account_id} -> {self.patient_id}"


class Medication(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='medications')
    name = models.CharField(max_length=255)
    dosage = models.CharField(max_length=100, blank=True)
    frequency = models.CharField(max_length=100, blank=True)
    # Schedule times as displayed, e.g. "08:00, 20:00"
    time = models.CharField(max_length=255, blank=True)
    instructions = models.TextField(blank=True)
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [models.Index(fields=['patient', 'created_at'], name='med_patient_created_idx')]

    def __str__(self) -> str:
        return f"{self.name} {self.dosage}".strip()


class MedicationLog(models.Model):
    """One dose recorded as taken."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    medication = models.ForeignKey(Medication, on_delete=models.CASCADE, related_name='logs')
    taken_at = models.DateTimeField(default=timezone.now)
    notes = models.TextField(null=True, blank=True)
    account = models.ForeignKey(
        Account, null=True, blank=True, on_delete=models.SET_NULL, related_name='medication_logs'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [models.Index(fields=['medication', 'taken_at'], name='medlog_med_taken_idx')]

    def __str__(self) -> str:
        return f"{self.medication_id} @ {self.taken_at:%F %T}"


class Appointment(models.Model):
    STATUS_SCHEDULED = 'scheduled'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_CHOICES = [
        (STATUS_SCHEDULED, 'Scheduled'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='appointments')
    type = models.CharField(max_length=100)
    doctor = models.CharField(max_length=255)
    appointment_date = models.DateField()
    appointment_time = models.TimeField()
    location = models.CharField(max_length=255, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_SCHEDULED)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [models.Index(fields=['patient', 'appointment_date'], name='appt_patient_date_idx')]

    def __str__(self) -> str:
        return f"{self.type} with {self.doctor} on {self.appointment_date}"


class Vital(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='vitals')
    # blood_pressure, heart_rate, temperature, weight, blood_sugar, ...
    type = models.CharField(max_length=50)
    value = models.CharField(max_length=50)
    unit = models.CharField(max_length=20, blank=True)
    recorded_at = models.DateTimeField(default=timezone.now)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [models.Index(fields=['patient', 'recorded_at'], name='vital_patient_recorded_idx')]

    def __str__(self) -> str:
        return f"{self.type}={self.value}{self.unit}"


class EmergencyContact(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='emergency_contacts')
    name = models.CharField(max_length=255)
    relationship = models.CharField(max_length=100, blank=True)
    phone = models.CharField(max_length=32)
    email = models.EmailField(blank=True)
    is_primary = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.relationship})"


class CheckIn(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='checkins')
    # morning / afternoon / evening
    type = models.CharField(max_length=50, blank=True)
    mood = models.CharField(max_length=50, blank=True)
    checkin_date = models.DateField(default=timezone.localdate)
    checkin_time = models.TimeField(null=True, blank=True)
    notes = models.TextField(blank=True)
    account = models.ForeignKey(
        Account, null=True, blank=True, on_delete=models.SET_NULL, related_name='checkins'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [models.Index(fields=['patient', 'checkin_date'], name='checkin_patient_date_idx')]

    def __str__(self) -> str:
        return f"{self.type} check-in {self.checkin_date}"


class Message(models.Model):
    """A care-team message about a patient.

    The author is nullable so a message outlives the account that wrote it.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='messages')
    author = models.ForeignKey(
        Account, null=True, blank=True, on_delete=models.SET_NULL, related_name='messages'
    )
    message = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [models.Index(fields=['patient', 'created_at'], name='msg_patient_created_idx')]

    def __str__(self) -> str:
        return f"msg {self.id} patient={self.patient_id}"


class Document(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='documents')
    name = models.CharField(max_length=255)
    # medical_record, insurance, legal, prescription, ...
    type = models.CharField(max_length=50, blank=True)
    file_url = models.CharField(max_length=512, blank=True)
    file_size = models.PositiveIntegerField(default=0)
    uploaded_by = models.ForeignKey(
        Account, null=True, blank=True, on_delete=models.SET_NULL, related_name='documents'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.name


class Activity(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='activities')
    name = models.CharField(max_length=255)
    activity_date = models.DateTimeField(default=timezone.now)
    duration = models.CharField(max_length=50, blank=True)
    notes = models.TextField(blank=True)
    completed = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [models.Index(fields=['patient', 'activity_date'], name='activity_patient_date_idx')]

    def __str__(self) -> str:
        return self.name


class Reminder(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='reminders')
    title = models.CharField(max_length=255)
    reminder_date = models.DateField()
    reminder_time = models.TimeField(null=True, blank=True)
    notes = models.TextField(blank=True)
    completed = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [models.Index(fields=['patient', 'reminder_date'], name='reminder_patient_date_idx')]

    def __str__(self) -> str:
        return self.title


class Invoice(models.Model):
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('paid', 'Paid'),
        ('overdue', 'Overdue'),
    ]
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='invoices')
    invoice_number = models.CharField(max_length=64, blank=True)
    description = models.CharField(max_length=255, blank=True)
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default='pending')
    due_date = models.DateField(null=True, blank=True)
    paid_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [models.Index(fields=['patient', 'created_at'], name='invoice_patient_created_idx')]

    def __str__(self) -> str:
        return f"#{self.invoice_number} {self.amount} ({self.status})"


class AuditEvent(models.Model):
    user = models.ForeignKey(Account, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.CharField(max_length=64, blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='audit_action_created_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='audit_object_created_idx'),
        ]

    def __str__(self):
        return f"{self.action}:{self.user_id}@{self.created_at:%F %T}"
