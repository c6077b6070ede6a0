"""
Bearer token authentication for the API.

A request without an ``Authorization: Bearer <token>`` header carries no
principal, so ``IsAuthenticated`` answers 401 (this class advertises the
``Bearer`` challenge).  A header that is present but whose token does not
verify is rejected with a generic 403 regardless of why it failed.
"""
from __future__ import annotations

from rest_framework import authentication

from care.exceptions import InvalidTokenError
from care.services import auth as auth_service


class BearerTokenAuthentication(authentication.BaseAuthentication):
    """Resolve ``Authorization: Bearer <jwt>`` to an :class:`~care.models.Account`."""

    keyword = 'Bearer'
    www_authenticate_realm = 'api'

    def authenticate(self, request):
        parts = authentication.get_authorization_header(request).split()
        if not parts or parts[0].lower() != self.keyword.lower().encode():
            return None
        if len(parts) == 1:
            return None
        if len(parts) > 2:
            raise InvalidTokenError()
        try:
            raw_token = parts[1].decode()
        except UnicodeError:
            raise InvalidTokenError()
        account = auth_service.verify(raw_token)
        return account, raw_token

    def authenticate_header(self, request):
        return f'{self.keyword} realm="{self.www_authenticate_realm}"'
