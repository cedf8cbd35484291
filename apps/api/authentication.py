"""
JWT Authentication for Warehouse Stock Backend API.

A token only proves who logged in; the session it names must still be open
in the session store, so logging out invalidates the token.
"""
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

import jwt
from django.conf import settings
from django.utils.translation import gettext_lazy as _
from rest_framework import authentication, exceptions
from apps.users.entities import Warehouseman
from apps.users.services.session_store import SessionStore


class JWTAuthentication(authentication.BaseAuthentication):
    """
    JWT Authentication class for DRF.
    """

    def authenticate(self, request) -> Optional[Tuple[Warehouseman, dict]]:
        """
        Authenticate a warehouseman using a JWT token.

        Returns:
            Tuple of (warehouseman, token_payload) or None if no token is sent
        """
        auth_header = request.META.get('HTTP_AUTHORIZATION')

        if not auth_header:
            return None

        try:
            auth_method, token = auth_header.split(' ', 1)
        except ValueError:
            return None

        if auth_method.lower() != 'bearer':
            return None

        try:
            payload = jwt.decode(
                token,
                settings.SECRET_KEY,
                algorithms=['HS256']
            )
        except jwt.ExpiredSignatureError:
            raise exceptions.AuthenticationFailed(_('Token has expired'))
        except jwt.InvalidTokenError:
            raise exceptions.AuthenticationFailed(_('Invalid token'))

        if payload.get('type') != 'access' or 'sid' not in payload:
            raise exceptions.AuthenticationFailed(_('Invalid token'))

        warehouseman = SessionStore.load(payload['sid'])
        if warehouseman is None or warehouseman.id != payload.get('warehouseman_id'):
            raise exceptions.AuthenticationFailed(_('Session has ended, please log in again'))

        return (warehouseman, payload)

    def authenticate_header(self, request):
        """
        Return a string to be used as the value of the `WWW-Authenticate`
        header in a `401 Unauthenticated` response.
        """
        return 'Bearer'


class JWTService:
    """Service for JWT token management."""

    @staticmethod
    def new_session_id() -> str:
        return secrets.token_urlsafe(24)

    @staticmethod
    def generate_token(warehouseman: Warehouseman, session_id: str) -> dict:
        """
        Generate an access token bound to a session.

        Args:
            warehouseman: Logged-in warehouseman
            session_id: Session opened in the session store

        Returns:
            Dictionary with access_token, token_type and expires_in
        """
        now = datetime.now(timezone.utc)
        lifetime = timedelta(hours=settings.STOCK_SYSTEM['ACCESS_TOKEN_HOURS'])

        payload = {
            'warehouseman_id': warehouseman.id,
            'sid': session_id,
            'iat': now,
            'exp': now + lifetime,
            'type': 'access'
        }

        access_token = jwt.encode(
            payload,
            settings.SECRET_KEY,
            algorithm='HS256'
        )

        return {
            'access_token': access_token,
            'token_type': 'Bearer',
            'expires_in': int(lifetime.total_seconds()),
        }
