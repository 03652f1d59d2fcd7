"""
Authentication service

Credentials are checked here, then handed to Supabase Auth. Every signed-in
user also gets a row in our own users table, and a profile on first sign-in.
"""

import logging
from typing import Any, Dict, Optional

from onboarding.validation import is_blank, process_field

from .. import config
from ..errors import UpstreamError, ValidationError
from ..models import AuthUser


def check_credentials(email: Any, password: Any):
    errors = {}

    email, email_error = process_field(email, 'email', required=True)
    if email_error:
        errors['email'] = email_error

    min_length = config.LENGTH_LIMITS['password']['min']
    if not isinstance(password, str) or is_blank(password):
        errors['password'] = 'Password is required'
    elif len(password) < min_length:
        errors['password'] = f'Password must be at least {min_length} characters long'

    if errors:
        raise ValidationError(errors)
    return email, password


class AuthService:
    def __init__(self, identity, users, logger: Optional[logging.Logger] = None):
        self.identity = identity
        self.users = users
        self.logger = logger or logging.getLogger(__name__)

    def _ensure_user(self, email: str):
        user = self.users.find_by_email(email)
        if user is None:
            user = self.users.create(email)
            if user is None:
                raise UpstreamError('Failed to create user record')
            self.logger.info(f'User record created for {email}')
        return user

    def sign_up(self, email: Any, password: Any) -> Dict[str, Any]:
        """
        Register a new account

        Returns:
            {'user': AuthUser, 'access_token': str or None, 'redirect_to': str}

        Raises:
            ValidationError: malformed email or password
            AuthenticationError: the identity provider refused the sign-up
        """
        email, password = check_credentials(email, password)

        session = self.identity.sign_up(email, password)
        user = self._ensure_user(email)

        self.logger.info(f'User signed up: {email} ({user.id})')
        return {**session, 'redirect_to': config.ROUTES['auth_redirect']}

    def sign_in(self, email: Any, password: Any) -> Dict[str, Any]:
        email, password = check_credentials(email, password)

        session = self.identity.sign_in(email, password)
        user = self._ensure_user(email)

        if self.users.find_profile(user.id) is None:
            self.users.upsert_profile(user.id, {})

        self.logger.info(f'User signed in: {email} ({user.id})')
        return {**session, 'redirect_to': config.ROUTES['auth_redirect']}

    def get_current_user(self, access_token: Optional[str]) -> Optional[AuthUser]:
        return self.identity.get_user(access_token)
