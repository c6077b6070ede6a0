"""
Account registration, login and bearer-token handling.

Tokens are stateless simplejwt access tokens carrying the account id and
a 7 day expiry; nothing is stored server-side, so a token stays valid for
its whole lifetime.
"""
from __future__ import annotations

import logging
from typing import Optional

from django.contrib.auth import authenticate
from django.db import IntegrityError, transaction
from rest_framework.exceptions import ValidationError
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings as jwt_settings
from rest_framework_simplejwt.tokens import AccessToken

from care.exceptions import AuthenticationError, ConflictError, InvalidTokenError
from care.models import Account, ROLE_ADMIN, ROLE_FAMILY
from care.services.audit import log_action

logger = logging.getLogger(__name__)

# Roles that may not be claimed through public registration.
PRIVILEGED_ROLES = {ROLE_ADMIN}


def public_account(account: Account) -> dict:
    """Return the public projection of an account (never the hash)."""
    return {
        'id': str(account.id),
        'email': account.email,
        'firstName': account.first_name or None,
        'lastName': account.last_name or None,
        'role': account.role,
        'patientId': str(account.patient_id) if account.patient_id else None,
    }


def issue_token(account: Account) -> str:
    return str(AccessToken.for_user(account))


def register(
    email: str,
    password: str,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    role: Optional[str] = None,
    ip: Optional[str] = None,
) -> tuple[str, Account]:
    if not email or not password:
        raise ValidationError('Email and password required')
    role = (role or '').strip() or ROLE_FAMILY
    if role in PRIVILEGED_ROLES:
        raise ValidationError('Role cannot be self-assigned')

    if Account.objects.filter(email=email).exists():
        raise ConflictError('Email already registered')
    try:
        with transaction.atomic():
            account = Account.objects.create_user(
                email=email,
                password=password,
                first_name=first_name or '',
                last_name=last_name or '',
                role=role,
            )
            log_action(user=account, action='register', object_type='account',
                       object_id=account.id, detail={'role': role, 'ip': ip})
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email.
        raise ConflictError('Email already registered')

    return issue_token(account), account


def login(email: str, password: str, request=None, ip: Optional[str] = None) -> tuple[str, Account]:
    account = authenticate(request, email=email, password=password) if email and password else None
    if account is None:
        log_action(user=None, action='login', object_type='account', object_id=None,
                   detail={'result': 'fail', 'email': email, 'ip': ip})
        raise AuthenticationError()
    log_action(user=account, action='login', object_type='account', object_id=account.id,
               detail={'result': 'ok', 'ip': ip})
    return issue_token(account), account


def verify(raw_token) -> Account:
    """Resolve a bearer token to its active account.

    Any failure (structure, signature, expiry, unknown or inactive account)
    raises the same :class:`InvalidTokenError`.
    """
    try:
        token = AccessToken(raw_token)
    except TokenError as e:
        logger.debug('token rejected: %s', e)
        raise InvalidTokenError()
    account_id = token.get(jwt_settings.USER_ID_CLAIM)
    if not account_id:
        raise InvalidTokenError()
    account = Account.objects.filter(id=account_id, is_active=True).first()
    if account is None:
        raise InvalidTokenError()
    return account
