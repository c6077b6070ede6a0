"""
Appointment create / update / cancel / delete.
"""
import uuid
from datetime import date, time

from rest_framework import status
from rest_framework.test import APITestCase

from care.models import Account, Appointment, AuditEvent, Patient, PatientAccess
from care.services.auth import issue_token


class AppointmentAPITests(APITestCase):
    def setUp(self) -> None:
        self.patient = Patient.objects.create(first_name='Walter', last_name='Hale')
        self.account = Account.objects.create_user('carer@example.com', 'pw-123456', role='caregiver')
        PatientAccess.objects.create(account=self.account, patient=self.patient)
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_token(self.account)}')

    def create(self, **overrides):
        payload = {
            'patient_id': str(self.patient.id),
            'type': 'checkup',
            'doctor': 'Dr. Patel',
            'appointment_date': '2030-05-02',
            'appointment_time': '10:30',
            'location': 'Riverside Clinic',
        }
        payload.update(overrides)
        return self.client.post('/api/appointments', payload, format='json')

    def test_create_defaults_to_scheduled(self):
        r = self.create()
        self.assertEqual(r.status_code, status.HTTP_201_CREATED)
        self.assertEqual(r.data['status'], 'scheduled')
        self.assertEqual(r.data['patient_id'], str(self.patient.id))
        self.assertTrue(AuditEvent.objects.filter(action='appointment_create').exists())

    def test_create_requires_fields(self):
        r = self.client.post('/api/appointments', {'patient_id': str(self.patient.id)}, format='json')
        self.assertEqual(r.status_code, 400)
        self.assertFalse(Appointment.objects.exists())

    def test_create_for_unknown_patient_with_access_disabled_is_404(self):
        with self.settings(ENFORCE_PATIENT_ACCESS=False):
            r = self.create(patient_id=str(uuid.uuid4()))
        self.assertEqual(r.status_code, 404)

    def test_list_ordered_by_date_and_time(self):
        self.create(appointment_date='2030-06-01', doctor='Later')
        self.create(appointment_date='2030-05-01', appointment_time='15:00', doctor='Afternoon')
        self.create(appointment_date='2030-05-01', appointment_time='09:00', doctor='Morning')
        for url in (f'/api/appointments/{self.patient.id}', f'/api/patients/{self.patient.id}/appointments'):
            r = self.client.get(url)
            self.assertEqual(r.status_code, 200)
            self.assertEqual([a['doctor'] for a in r.data], ['Morning', 'Afternoon', 'Later'])

    def test_update_changes_whitelisted_fields(self):
        appt_id = self.create().data['id']
        r = self.client.put(f'/api/appointments/{appt_id}', {'doctor': 'Dr. Osei', 'notes': 'bring scans'},
                            format='json')
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data['doctor'], 'Dr. Osei')
        self.assertEqual(r.data['notes'], 'bring scans')

    def test_update_cannot_move_appointment_to_another_patient(self):
        appt_id = self.create().data['id']
        other = Patient.objects.create(first_name='Other')
        r = self.client.put(f'/api/appointments/{appt_id}',
                            {'patient_id': str(other.id), 'location': 'Home visit'}, format='json')
        self.assertEqual(r.status_code, 200)
        self.assertEqual(Appointment.objects.get(id=appt_id).patient_id, self.patient.id)

    def test_cancel(self):
        appt_id = self.create().data['id']
        r = self.client.patch(f'/api/appointments/{appt_id}/cancel')
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data['status'], 'cancelled')

    def test_delete(self):
        appt_id = self.create().data['id']
        r = self.client.delete(f'/api/appointments/{appt_id}')
        self.assertEqual(r.status_code, 204)
        self.assertFalse(Appointment.objects.filter(id=appt_id).exists())

    def test_missing_appointment_is_404(self):
        missing = uuid.uuid4()
        self.assertEqual(self.client.put(f'/api/appointments/{missing}', {'notes': 'x'}, format='json').status_code, 404)
        self.assertEqual(self.client.patch(f'/api/appointments/{missing}/cancel').status_code, 404)
        self.assertEqual(self.client.delete(f'/api/appointments/{missing}').status_code, 404)

    def test_foreign_appointment_is_forbidden(self):
        other = Patient.objects.create(first_name='Other')
        appt = Appointment.objects.create(patient=other, type='x', doctor='y',
                                          appointment_date=date(2030, 1, 1), appointment_time=time(9, 0))
        self.assertEqual(self.client.delete(f'/api/appointments/{appt.id}').status_code, 403)
        self.assertTrue(Appointment.objects.filter(id=appt.id).exists())

    def test_update_with_no_allowed_field_is_400(self):
        appt_id = self.create().data['id']
        r = self.client.put(f'/api/appointments/{appt_id}', {}, format='json')
        self.assertEqual(r.status_code, 400)
        self.assertEqual(Appointment.objects.get(id=appt_id).doctor, 'Dr. Patel')
