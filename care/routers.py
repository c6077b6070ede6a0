"""
URL mappings for the eldercare API.

Paths follow the ones the front-end service layer calls.  Trailing
slashes are deliberately omitted.
"""
from django.urls import include, path

from .auth_views import login_view, me_view, register_view
from .services.records import RESOURCES
from .views import appointments, health, patients, records

# Messages have their own view (GET + POST); every other resource shares
# the generic list view.
_generic_lists = [
    path(f'api/patients/<str:patient_id>/{name}', patients.patient_records, {'resource': name})
    for name in RESOURCES
    if name != 'messages'
]

urlpatterns = [
    path('healthz', health.healthz),
    path('readyz', health.readyz),
    path('health', health.health),
    path('', include('django_prometheus.urls')),

    # Auth
    path('api/auth/register', register_view),
    path('api/auth/login', login_view),
    path('api/auth/me', me_view),

    # Patients and their records
    path('api/patients', patients.create_patient_view),
    path('api/patients/<str:patient_id>', patients.patient_detail_view),
    path('api/patients/<str:patient_id>/messages', patients.patient_messages),
    *_generic_lists,

    # Appointments
    path('api/appointments', appointments.create_appointment),
    path('api/appointments/<str:pk>/cancel', appointments.cancel_appointment),
    # GET lists a patient's appointments; PUT and DELETE address one appointment
    path('api/appointments/<str:pk>', appointments.appointment_detail),

    # Record mutations
    path('api/activities/<str:pk>', records.update_activity),
    path('api/reminders/<str:pk>', records.update_reminder),
    path('api/medications/<str:pk>/log', records.log_medication),
    path('api/medications/<str:pk>/logs', records.medication_logs),
]
