"""
Django admin registrations for the care models.

Hooks the models into the built-in admin at ``/admin/`` so operators can
inspect care circles and fix records by hand.
"""
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import (
    Account,
    Activity,
    Appointment,
    AuditEvent,
    CheckIn,
    Document,
    EmergencyContact,
    Invoice,
    Medication,
    MedicationLog,
    Message,
    Patient,
    PatientAccess,
    Reminder,
    Vital,
)


@admin.register(Account)
class AccountAdmin(BaseUserAdmin):
    ordering = ('email',)
    list_display = ('email', 'first_name', 'last_name', 'role', 'patient', 'is_active')
    list_filter = ('role', 'is_active', 'is_staff')
    search_fields = ('email', 'first_name', 'last_name')
    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Profile', {'fields': ('first_name', 'last_name', 'role', 'patient')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser')}),
    )
    add_fieldsets = (
        (None, {'classes': ('wide',), 'fields': ('email', 'password1', 'password2', 'role')}),
    )


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('id', 'first_name', 'last_name', 'date_of_birth', 'created_at')
    search_fields = ('first_name', 'last_name')


@admin.register(PatientAccess)
class PatientAccessAdmin(admin.ModelAdmin):
    list_display = ('account', 'patient', 'created_at')
    search_fields = ('account__email', 'patient__last_name')


@admin.register(Medication)
class MedicationAdmin(admin.ModelAdmin):
    list_display = ('name', 'patient', 'dosage', 'frequency', 'active')
    list_filter = ('active',)
    search_fields = ('name',)


@admin.register(MedicationLog)
class MedicationLogAdmin(admin.ModelAdmin):
    list_display = ('medication', 'taken_at', 'account')


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('patient', 'type', 'doctor', 'appointment_date', 'appointment_time', 'status')
    list_filter = ('status',)


@admin.register(Vital)
class VitalAdmin(admin.ModelAdmin):
    list_display = ('patient', 'type', 'value', 'unit', 'recorded_at')
    list_filter = ('type',)


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ('patient', 'author', 'created_at')
    search_fields = ('message',)


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('action', 'user', 'object_type', 'object_id', 'created_at')
    list_filter = ('action',)
    readonly_fields = ('user', 'action', 'object_type', 'object_id', 'detail', 'created_at')


for model in (EmergencyContact, CheckIn, Document, Activity, Reminder, Invoice):
    admin.site.register(model)
