"""
Management command to populate the database with demo care records.
"""
import random
from datetime import time, timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from care.models import (
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


class Command(BaseCommand):
    help = 'Populate the database with a demo patient and records of every type'

    def add_arguments(self, parser):
        parser.add_argument('--vitals', type=int, default=60, help='number of vital readings to create')

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write('Creating demo data...')
        patient = Patient.objects.create(first_name='Margaret', last_name='Hughes',
                                         notes='Type 2 diabetes, mild hypertension')

        medications = self.create_medications(patient)
        self.create_medication_logs(medications)
        self.create_appointments(patient)
        self.create_vitals(patient, options['vitals'])
        self.create_contacts(patient)
        self.create_checkins(patient)
        self.create_messages(patient)
        self.create_documents(patient)
        self.create_activities(patient)
        self.create_reminders(patient)
        self.create_invoices(patient)

        self.stdout.write(self.style.SUCCESS(f'Demo data created for patient {patient.id}'))

    def create_medications(self, patient):
        data = [
            ('Metformin', '500mg', 'twice daily', '08:00, 20:00', 'Take with food'),
            ('Lisinopril', '10mg', 'once daily', '08:00', ''),
            ('Vitamin D', '1000IU', 'once daily', '12:00', ''),
        ]
        meds = [
            Medication.objects.create(patient=patient, name=n, dosage=d, frequency=f, time=t, instructions=i)
            for n, d, f, t, i in data
        ]
        self.stdout.write(f'  medications: {len(meds)}')
        return meds

    def create_medication_logs(self, medications):
        now = timezone.now()
        count = 0
        for med in medications:
            for day in range(3):
                MedicationLog.objects.create(medication=med, taken_at=now - timedelta(days=day))
                count += 1
        self.stdout.write(f'  medication logs: {count}')

    def create_appointments(self, patient):
        today = timezone.localdate()
        rows = [
            ('checkup', 'Dr. Patel', today + timedelta(days=3), time(10, 30), 'Riverside Clinic'),
            ('cardiology', 'Dr. Osei', today + timedelta(days=14), time(14, 0), 'City Hospital'),
            ('dental', 'Dr. Lindqvist', today - timedelta(days=10), time(9, 15), 'Smile Dental'),
        ]
        for kind, doctor, day, at, location in rows:
            status = Appointment.STATUS_COMPLETED if day < today else Appointment.STATUS_SCHEDULED
            Appointment.objects.create(patient=patient, type=kind, doctor=doctor, appointment_date=day,
                                       appointment_time=at, location=location, status=status)
        self.stdout.write(f'  appointments: {len(rows)}')

    def create_vitals(self, patient, count):
        now = timezone.now()
        for i in range(count):
            Vital.objects.create(
                patient=patient,
                type='blood_pressure',
                value=f'{random.randint(115, 145)}/{random.randint(70, 92)}',
                unit='mmHg',
                recorded_at=now - timedelta(hours=12 * i),
            )
        self.stdout.write(f'  vitals: {count}')

    def create_contacts(self, patient):
        EmergencyContact.objects.create(patient=patient, name='Daniel Hughes', relationship='son',
                                        phone='+44 7700 900123', is_primary=True)
        EmergencyContact.objects.create(patient=patient, name='Ruth Alder', relationship='neighbour',
                                        phone='+44 7700 900456')
        self.stdout.write('  emergency contacts: 2')

    def create_checkins(self, patient):
        today = timezone.localdate()
        moods = ['good', 'okay', 'tired', 'great']
        for i in range(35):
            CheckIn.objects.create(patient=patient, type='daily', mood=random.choice(moods),
                                   checkin_date=today - timedelta(days=i), checkin_time=time(9, 0))
        self.stdout.write('  check-ins: 35')

    def create_messages(self, patient):
        for text in ('Mum had a good lunch today.', 'Physio visit moved to Thursday.'):
            Message.objects.create(patient=patient, message=text)
        self.stdout.write('  messages: 2')

    def create_documents(self, patient):
        Document.objects.create(patient=patient, name='Care plan.pdf', type='pdf',
                                file_url='/files/care-plan.pdf', file_size=48213)
        self.stdout.write('  documents: 1')

    def create_activities(self, patient):
        now = timezone.now()
        for i, name in enumerate(['Morning walk', 'Chair yoga', 'Crossword club']):
            Activity.objects.create(patient=patient, name=name, activity_date=now - timedelta(days=i),
                                    duration='30 min', completed=i > 0)
        self.stdout.write('  activities: 3')

    def create_reminders(self, patient):
        today = timezone.localdate()
        Reminder.objects.create(patient=patient, title='Refill prescription',
                                reminder_date=today + timedelta(days=2))
        Reminder.objects.create(patient=patient, title='Book eye test',
                                reminder_date=today + timedelta(days=7), reminder_time=time(11, 0))
        self.stdout.write('  reminders: 2')

    def create_invoices(self, patient):
        Invoice.objects.create(patient=patient, invoice_number='INV-1001', description='Home care, week 1',
                               amount=Decimal('420.00'), status='paid', paid_at=timezone.now())
        Invoice.objects.create(patient=patient, invoice_number='INV-1002', description='Home care, week 2',
                               amount=Decimal('420.00'),
                               due_date=timezone.localdate() + timedelta(days=14))
        self.stdout.write('  invoices: 2')
