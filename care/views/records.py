"""
Record mutation views addressed by record id.

The patient scope is checked against the record's owner after the
lookup, so a missing id is a 404 and a foreign one a 403.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from care.serializers.records import (
    ActivitySerializer,
    CompletedSerializer,
    MedicationLogSerializer,
    MedicationLogWriteSerializer,
    ReminderSerializer,
)
from care.services import records as record_service


def _toggle_completed(request, resource, pk, serializer_class):
    s = CompletedSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    record = record_service.update_record(resource, pk, s.validated_data, request.user)
    return Response(serializer_class(record).data)


@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def update_activity(request, pk):
    return _toggle_completed(request, 'activities', pk, ActivitySerializer)


@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def update_reminder(request, pk):
    return _toggle_completed(request, 'reminders', pk, ReminderSerializer)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def log_medication(request, pk):
    """Record a dose as taken; ``takenAt`` defaults to now."""
    s = MedicationLogWriteSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    entry = record_service.log_medication_taken(
        pk,
        account=request.user,
        taken_at=s.validated_data.get('takenAt'),
        notes=s.validated_data.get('notes'),
    )
    return Response(MedicationLogSerializer(entry).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def medication_logs(request, pk):
    rows = record_service.list_medication_logs(pk, request.user)
    return Response(MedicationLogSerializer(rows, many=True).data)
