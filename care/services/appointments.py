"""
Appointment scheduling: create, update, cancel and delete.

Every operation checks that the acting account may reach the
appointment's patient before touching the row.
"""
from __future__ import annotations

from django.db import transaction

from care.exceptions import NotFoundError
from care.models import Account, Appointment, Patient
from care.services.access import ensure_patient_access
from care.services.audit import log_action
from care.services.records import get_record, update_record


def create_appointment(account: Account, data: dict) -> Appointment:
    data = dict(data)
    pid = ensure_patient_access(account, data.pop('patient_id'))
    patient = Patient.objects.filter(id=pid).first()
    if patient is None:
        raise NotFoundError('Patient not found')
    data.setdefault('status', Appointment.STATUS_SCHEDULED)
    with transaction.atomic():
        appt = Appointment.objects.create(patient=patient, **data)
        log_action(user=account, action='appointment_create', object_type='appointment',
                   object_id=appt.id, detail={'patient': str(patient.id)})
    return appt


def update_appointment(account: Account, appointment_id, data: dict) -> Appointment:
    with transaction.atomic():
        appt = update_record('appointments', appointment_id, data, account)
        log_action(user=account, action='appointment_update', object_type='appointment',
                   object_id=appt.id, detail={'fields': sorted(k for k in data if k != 'patient_id')})
    return appt


def cancel_appointment(account: Account, appointment_id) -> Appointment:
    with transaction.atomic():
        appt = update_record('appointments', appointment_id,
                             {'status': Appointment.STATUS_CANCELLED}, account)
        log_action(user=account, action='appointment_cancel', object_type='appointment',
                   object_id=appt.id)
    return appt


def delete_appointment(account: Account, appointment_id) -> None:
    appt = get_record('appointments', appointment_id, account)
    with transaction.atomic():
        log_action(user=account, action='appointment_delete', object_type='appointment',
                   object_id=appt.id, detail={'patient': str(appt.patient_id)})
        appt.delete()
