"""
Supabase Auth wrapper

Sign-up, password sign-in and token lookups. Provider errors come back as
AuthenticationError carrying the provider's own message.
"""

import logging
from typing import Any, Dict, Optional

from ..errors import AuthenticationError
from ..models import AuthUser


class IdentityRepository:
    def __init__(self, supabase, logger: Optional[logging.Logger] = None):
        self.supabase = supabase
        self.logger = logger or logging.getLogger(__name__)

    def _session_payload(self, response, email: str, operation: str) -> Dict[str, Any]:
        user = getattr(response, 'user', None)
        if user is None:
            raise AuthenticationError(f'No user data returned from {operation}')

        session = getattr(response, 'session', None)
        return {
            'user': AuthUser(id=str(user.id), email=user.email or email),
            'access_token': getattr(session, 'access_token', None),
        }

    def sign_up(self, email: str, password: str) -> Dict[str, Any]:
        try:
            response = self.supabase.auth.sign_up({'email': email, 'password': password})
        except Exception as e:
            self.logger.warning(f'Sign up rejected for {email}: {str(e)}')
            raise AuthenticationError(str(e)) from e
        return self._session_payload(response, email, 'sign up')

    def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        try:
            response = self.supabase.auth.sign_in_with_password({'email': email, 'password': password})
        except Exception as e:
            self.logger.warning(f'Sign in rejected for {email}: {str(e)}')
            raise AuthenticationError(str(e)) from e
        return self._session_payload(response, email, 'sign in')

    def get_user(self, access_token: str) -> Optional[AuthUser]:
        """Resolve an access token to the signed-in user, None when the token is not valid"""
        if not access_token:
            return None
        try:
            response = self.supabase.auth.get_user(access_token)
        except Exception as e:
            # Expired or revoked tokens land here too
            self.logger.warning(f'Token lookup failed: {str(e)}')
            return None

        user = getattr(response, 'user', None) if response else None
        if user is None:
            return None
        return AuthUser(id=str(user.id), email=user.email or '')
