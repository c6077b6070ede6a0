"""
The patient-scoped resource pattern.

Each resource type is described by a :class:`ResourceSpec`: its model,
ordering, optional cap on list size and the whitelist of fields that may
be changed after creation.  Reads always filter by exactly one patient.
Only vitals and check-ins are capped; the other collections are returned
whole, matching the API the front-end was built against.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from django.db import models
from django.utils import timezone
from rest_framework import serializers as drf_serializers
from rest_framework.exceptions import ValidationError

from care.exceptions import NotFoundError, PatientAccessDenied
from care.models import (
    Account,
    Activity,
    Appointment,
    CheckIn,
    Document,
    EmergencyContact,
    Invoice,
    Medication,
    MedicationLog,
    Message,
    Patient,
    Reminder,
    Vital,
)
from care.serializers import records as rs
from care.services.access import can_access_patient, grant_access, parse_identifier
from care.services.audit import log_action

VITALS_LIMIT = 50
CHECKINS_LIMIT = 30


@dataclass(frozen=True)
class ResourceSpec:
    name: str
    model: type[models.Model]
    serializer: type[drf_serializers.ModelSerializer]
    ordering: tuple[str, ...]
    limit: Optional[int] = None
    mutable_fields: frozenset = field(default_factory=frozenset)
    select_related: tuple[str, ...] = ()


RESOURCES: dict[str, ResourceSpec] = {
    spec.name: spec
    for spec in (
        ResourceSpec('medications', Medication, rs.MedicationSerializer, ('-created_at',)),
        ResourceSpec(
            'appointments', Appointment, rs.AppointmentSerializer,
            ('appointment_date', 'appointment_time'),
            mutable_fields=frozenset({'type', 'doctor', 'appointment_date', 'appointment_time',
                                      'location', 'notes', 'status'}),
        ),
        ResourceSpec('vitals', Vital, rs.VitalSerializer, ('-recorded_at',), limit=VITALS_LIMIT),
        ResourceSpec('emergency-contacts', EmergencyContact, rs.EmergencyContactSerializer,
                     ('-is_primary', 'name')),
        ResourceSpec('checkins', CheckIn, rs.CheckInSerializer, ('-checkin_date', '-checkin_time'),
                     limit=CHECKINS_LIMIT),
        ResourceSpec('messages', Message, rs.MessageSerializer, ('-created_at',),
                     select_related=('author',)),
        ResourceSpec('documents', Document, rs.DocumentSerializer, ('-created_at',)),
        ResourceSpec('activities', Activity, rs.ActivitySerializer, ('-activity_date',),
                     mutable_fields=frozenset({'completed'})),
        ResourceSpec('reminders', Reminder, rs.ReminderSerializer, ('reminder_date', 'reminder_time'),
                     mutable_fields=frozenset({'completed'})),
        ResourceSpec('invoices', Invoice, rs.InvoiceSerializer, ('-created_at',)),
    )
}


def get_spec(resource: str) -> ResourceSpec:
    try:
        return RESOURCES[resource]
    except KeyError:
        raise NotFoundError(f'Unknown resource: {resource}')


def list_records(resource: str, patient_id) -> list[models.Model]:
    spec = get_spec(resource)
    qs = spec.model.objects.filter(patient_id=parse_identifier(patient_id, 'patient id'))
    if spec.select_related:
        # Nullable FKs join as LEFT OUTER, so orphaned rows are kept.
        qs = qs.select_related(*spec.select_related)
    qs = qs.order_by(*spec.ordering)
    if spec.limit:
        qs = qs[:spec.limit]
    return list(qs)


def get_record(resource: str, record_id, account: Optional[Account] = None):
    """Fetch one record by id; 404 when missing, 403 when out of scope."""
    spec = get_spec(resource)
    record = spec.model.objects.filter(id=parse_identifier(record_id)).first()
    if record is None:
        raise NotFoundError()
    if account is not None and not can_access_patient(account, record.patient_id):
        raise PatientAccessDenied()
    return record


def update_record(resource: str, record_id, fields: dict, account: Optional[Account] = None):
    """Apply whitelisted ``fields`` to one record and return it."""
    spec = get_spec(resource)
    changes = {k: v for k, v in (fields or {}).items() if k in spec.mutable_fields}
    record = get_record(resource, record_id, account)
    if not changes:
        raise ValidationError(f'No updatable fields; allowed: {", ".join(sorted(spec.mutable_fields))}')
    if 'completed' in changes:
        changes['completed'] = bool(changes['completed'])
    for name, value in changes.items():
        setattr(record, name, value)
    update_fields = list(changes)
    if any(f.name == 'updated_at' for f in spec.model._meta.get_fields()):
        update_fields.append('updated_at')
    record.save(update_fields=update_fields)
    return record


# ---------------------------------------------------------------------
# Resource specific operations
# ---------------------------------------------------------------------
def log_medication_taken(medication_id, account: Optional[Account] = None, taken_at=None, notes=None) -> MedicationLog:
    medication = Medication.objects.filter(id=parse_identifier(medication_id, 'medication id')).first()
    if medication is None:
        raise NotFoundError('Medication not found')
    if account is not None and not can_access_patient(account, medication.patient_id):
        raise PatientAccessDenied()
    entry = MedicationLog.objects.create(
        medication=medication,
        taken_at=taken_at or timezone.now(),
        notes=notes or None,
        account=account,
    )
    log_action(user=account, action='medication_log', object_type='medication',
               object_id=medication.id, detail={'log': str(entry.id)})
    return entry


def list_medication_logs(medication_id, account: Optional[Account] = None) -> list[MedicationLog]:
    medication = get_record('medications', medication_id, account)
    return list(medication.logs.order_by('-taken_at'))


def post_message(patient_id, account: Account, text: str) -> Message:
    patient = Patient.objects.filter(id=parse_identifier(patient_id, 'patient id')).first()
    if patient is None:
        raise NotFoundError('Patient not found')
    return Message.objects.create(patient=patient, author=account, message=text)


def create_patient(account: Account, **fields) -> Patient:
    """Create a patient and put it in the creator's care circle.

    The creator is also linked to the new patient when it has no linked
    patient yet.
    """
    patient = Patient.objects.create(**fields)
    grant_access(account, patient)
    if not account.patient_id:
        account.patient = patient
        account.save(update_fields=['patient', 'updated_at'])
    log_action(user=account, action='patient_create', object_type='patient', object_id=patient.id)
    return patient
