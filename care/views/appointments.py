"""
Appointment endpoints in the shape the front-end service layer calls.

``/api/appointments/<id>`` is shared: GET reads ``id`` as a patient id and
lists that patient's appointments, PUT and DELETE read it as an
appointment id.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from care.serializers.records import AppointmentSerializer, AppointmentWriteSerializer
from care.services import appointments as appointment_service
from care.services import records as record_service
from care.services.access import ensure_patient_access


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def create_appointment(request):
    s = AppointmentWriteSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    appt = appointment_service.create_appointment(request.user, s.validated_data)
    return Response(AppointmentSerializer(appt).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def appointment_detail(request, pk):
    if request.method == 'GET':
        patient_id = ensure_patient_access(request.user, pk)
        rows = record_service.list_records('appointments', patient_id)
        return Response(AppointmentSerializer(rows, many=True).data)
    if request.method == 'DELETE':
        appointment_service.delete_appointment(request.user, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
    s = AppointmentWriteSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    appt = appointment_service.update_appointment(request.user, pk, s.validated_data)
    return Response(AppointmentSerializer(appt).data)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def cancel_appointment(request, pk):
    appt = appointment_service.cancel_appointment(request.user, pk)
    return Response(AppointmentSerializer(appt).data)
