"""
Patient scoping: identifier parsing and per-patient authorisation.

An account may reach the patient it is linked to plus every patient it
holds a :class:`~care.models.PatientAccess` grant for; admins reach all
patients.  The check is skipped entirely when ``ENFORCE_PATIENT_ACCESS``
is off, which reproduces the legacy "any valid token, any patient"
behaviour.
"""
from __future__ import annotations

import uuid
from typing import Optional

from django.conf import settings
from rest_framework.exceptions import ValidationError

from care.exceptions import NotFoundError, PatientAccessDenied
from care.models import Account, Patient, PatientAccess, ROLE_ADMIN


def parse_identifier(value, label: str = 'id') -> uuid.UUID:
    """Normalise a path or body identifier; malformed values are a 400."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value).strip())
    except (TypeError, ValueError, AttributeError):
        raise ValidationError(f'Malformed {label}')


def accessible_patient_ids(account: Account) -> Optional[set[uuid.UUID]]:
    """Return the patient ids the account may access, or None for all."""
    if account.role == ROLE_ADMIN:
        return None
    ids = set(PatientAccess.objects.filter(account=account).values_list('patient_id', flat=True))
    if account.patient_id:
        ids.add(account.patient_id)
    return ids


def can_access_patient(account: Account, patient_id) -> bool:
    if not getattr(settings, 'ENFORCE_PATIENT_ACCESS', True):
        return True
    allowed = accessible_patient_ids(account)
    return allowed is None or parse_identifier(patient_id, 'patient id') in allowed


def ensure_patient_access(account: Account, patient_id) -> uuid.UUID:
    pid = parse_identifier(patient_id, 'patient id')
    if not can_access_patient(account, pid):
        raise PatientAccessDenied()
    return pid


def grant_access(account: Account, patient: Patient) -> PatientAccess:
    grant, _ = PatientAccess.objects.get_or_create(account=account, patient=patient)
    return grant


def get_patient_or_404(patient_id) -> Patient:
    patient = Patient.objects.filter(id=parse_identifier(patient_id, 'patient id')).first()
    if patient is None:
        raise NotFoundError('Patient not found')
    return patient
