"""
Serializers for patients and their clinical records.

Output field names are snake_case to match what the front-end pages
read (``appointment_date``, ``is_primary``, ``recorded_at`` ...).
"""
import bleach
from rest_framework import serializers

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


def clean_text(v):
    return bleach.clean((v or '').strip(), strip=True)


class PatientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Patient
        fields = ['id', 'first_name', 'last_name', 'date_of_birth', 'notes', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_first_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('First name is required')
        return v

    def validate_last_name(self, v):
        return clean_text(v)


class PatientRecordSerializer(serializers.ModelSerializer):
    """Base for records owned by a patient."""
    patient_id = serializers.UUIDField(read_only=True)


class MedicationSerializer(PatientRecordSerializer):
    class Meta:
        model = Medication
        fields = ['id', 'patient_id', 'name', 'dosage', 'frequency', 'time', 'instructions',
                  'active', 'created_at']


class MedicationLogSerializer(serializers.ModelSerializer):
    medication_id = serializers.UUIDField(read_only=True)
    user_id = serializers.UUIDField(source='account_id', read_only=True)

    class Meta:
        model = MedicationLog
        fields = ['id', 'medication_id', 'taken_at', 'notes', 'user_id', 'created_at']


class AppointmentSerializer(PatientRecordSerializer):
    class Meta:
        model = Appointment
        fields = ['id', 'patient_id', 'type', 'doctor', 'appointment_date', 'appointment_time',
                  'location', 'status', 'notes', 'created_at', 'updated_at']


class VitalSerializer(PatientRecordSerializer):
    class Meta:
        model = Vital
        fields = ['id', 'patient_id', 'type', 'value', 'unit', 'recorded_at', 'notes', 'created_at']


class EmergencyContactSerializer(PatientRecordSerializer):
    class Meta:
        model = EmergencyContact
        fields = ['id', 'patient_id', 'name', 'relationship', 'phone', 'email', 'is_primary',
                  'created_at']


class CheckInSerializer(PatientRecordSerializer):
    class Meta:
        model = CheckIn
        fields = ['id', 'patient_id', 'type', 'mood', 'checkin_date', 'checkin_time', 'notes',
                  'created_at']


class MessageSerializer(PatientRecordSerializer):
    """A message with its author's name and role joined in.

    Author fields are null when the author account no longer exists.
    """
    user_id = serializers.UUIDField(source='author_id', read_only=True)
    first_name = serializers.CharField(source='author.first_name', read_only=True, allow_null=True)
    last_name = serializers.CharField(source='author.last_name', read_only=True, allow_null=True)
    role = serializers.CharField(source='author.role', read_only=True, allow_null=True)

    class Meta:
        model = Message
        fields = ['id', 'patient_id', 'user_id', 'message', 'created_at', 'first_name',
                  'last_name', 'role']


class DocumentSerializer(PatientRecordSerializer):
    class Meta:
        model = Document
        fields = ['id', 'patient_id', 'name', 'type', 'file_url', 'file_size', 'created_at']


class ActivitySerializer(PatientRecordSerializer):
    class Meta:
        model = Activity
        fields = ['id', 'patient_id', 'name', 'activity_date', 'duration', 'notes', 'completed',
                  'created_at', 'updated_at']


class ReminderSerializer(PatientRecordSerializer):
    class Meta:
        model = Reminder
        fields = ['id', 'patient_id', 'title', 'reminder_date', 'reminder_time', 'notes',
                  'completed', 'created_at', 'updated_at']


class InvoiceSerializer(PatientRecordSerializer):
    class Meta:
        model = Invoice
        fields = ['id', 'patient_id', 'invoice_number', 'description', 'amount', 'status',
                  'due_date', 'paid_at', 'created_at']


# ---------------------------------------------------------------------
# Input serializers
# ---------------------------------------------------------------------
class CompletedSerializer(serializers.Serializer):
    completed = serializers.BooleanField()


class AppointmentWriteSerializer(serializers.Serializer):
    patient_id = serializers.CharField()
    type = serializers.CharField(max_length=100)
    doctor = serializers.CharField(max_length=255)
    appointment_date = serializers.DateField()
    appointment_time = serializers.TimeField()
    location = serializers.CharField(max_length=255, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=[c for c, _ in Appointment.STATUS_CHOICES], required=False)

    def validate_type(self, v):
        return clean_text(v)

    def validate_doctor(self, v):
        return clean_text(v)

    def validate_notes(self, v):
        return clean_text(v)


class MedicationLogWriteSerializer(serializers.Serializer):
    takenAt = serializers.DateTimeField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class MessageWriteSerializer(serializers.Serializer):
    message = serializers.CharField(max_length=4000)

    def validate_message(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Message cannot be empty')
        return v
