"""
Authentication views.

Registration and login are the only unauthenticated API endpoints.  Both
return ``{token, user}`` where ``token`` is a bearer JWT valid for 7 days.
Login answers unknown emails and wrong passwords with the same 401 body.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from care.serializers.auth import LoginSerializer, RegisterSerializer
from care.services import auth as auth_service


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def register_view(request):
    s = RegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    token, account = auth_service.register(
        vd['email'],
        vd['password'],
        first_name=vd.get('firstName'),
        last_name=vd.get('lastName'),
        role=vd.get('role'),
        ip=request.META.get('REMOTE_ADDR'),
    )
    return Response({'token': token, 'user': auth_service.public_account(account)}, status=200)

register_view.cls.throttle_scope = 'register'


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    token, account = auth_service.login(
        s.validated_data.get('email', ''),
        s.validated_data.get('password', ''),
        request=request,
        ip=request.META.get('REMOTE_ADDR'),
    )
    return Response({'token': token, 'user': auth_service.public_account(account)}, status=200)

# ScopedRateThrottle reads throttle_scope from the wrapped view class
login_view.cls.throttle_scope = 'login'


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me_view(request):
    """Return the account behind the bearer token."""
    return Response({'user': auth_service.public_account(request.user)})
