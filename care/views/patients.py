"""
Patient and patient-scoped record views.

Every route carrying a ``patient_id`` sits behind bearer authentication
and :class:`~care.permissions.HasPatientAccess`.  The list endpoint is
shared by all ten record types; the route table passes the resource name
as an extra keyword argument.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from care.permissions import HasPatientAccess
from care.serializers.records import MessageSerializer, MessageWriteSerializer, PatientSerializer
from care.services import records as record_service
from care.services.access import get_patient_or_404


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def create_patient_view(request):
    """Create a patient; the caller joins its care circle."""
    s = PatientSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    patient = record_service.create_patient(request.user, **s.validated_data)
    return Response(PatientSerializer(patient).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated, HasPatientAccess])
def patient_detail_view(request, patient_id):
    return Response(PatientSerializer(get_patient_or_404(patient_id)).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, HasPatientAccess])
def patient_records(request, patient_id, resource):
    spec = record_service.get_spec(resource)
    rows = record_service.list_records(resource, patient_id)
    return Response(spec.serializer(rows, many=True).data)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, HasPatientAccess])
def patient_messages(request, patient_id):
    """List the care-team thread (GET) or post to it (POST)."""
    if request.method == 'GET':
        rows = record_service.list_records('messages', patient_id)
        return Response(MessageSerializer(rows, many=True).data)
    s = MessageWriteSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    msg = record_service.post_message(patient_id, request.user, s.validated_data['message'])
    return Response(MessageSerializer(msg).data, status=status.HTTP_201_CREATED)
