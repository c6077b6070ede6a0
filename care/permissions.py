"""
Custom permission classes for patient based access control.
"""
from rest_framework.permissions import BasePermission

from care.services.access import can_access_patient, parse_identifier


class HasPatientAccess(BasePermission):
    """The account must be allowed to reach the ``patient_id`` in the URL.

    Malformed identifiers surface as a 400 from ``parse_identifier``.
    """
    message = 'Forbidden for this patient'
    code = 'patient_forbidden'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        if not (user and user.is_authenticated):
            return False
        patient_id = view.kwargs.get('patient_id')
        if patient_id is None:
            return True
        return can_access_patient(user, parse_identifier(patient_id, 'patient id'))
