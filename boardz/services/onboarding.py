"""
Onboarding submission flow

Each step's answers are sanitized, validated against the page configuration
and shallow-merged into the user's profile. Saving never removes keys; the
last write wins for keys present in both.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from onboarding import steps
from onboarding.dynamic_validation import PageValidator
from onboarding.validation import process_field, sanitize_field

from .. import config
from ..errors import UpstreamError, UserNotFoundError, ValidationError
from ..models import UserProfile

STEP_MARKER_PATTERN = re.compile(r'^step_\d+_completed$', re.IGNORECASE)

UNKNOWN_FIELD_MESSAGE = 'Unknown field'


def profile_columns(profiles: Iterable[UserProfile]) -> List[str]:
    """Every profile_data key seen across profiles, in first-seen order, minus step markers"""
    columns: List[str] = []
    for profile in profiles:
        for key in profile.profile_data:
            if key not in columns and not STEP_MARKER_PATTERN.match(key):
                columns.append(key)
    return columns


class OnboardingService:
    def __init__(self, users, registry, page_configs,
                 logger: Optional[logging.Logger] = None, clock=None):
        self.users = users
        self.registry = registry
        self.page_configs = page_configs
        self.logger = logger or logging.getLogger(__name__)
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def _parse_submission(self, step: Any, form_data: Any):
        errors = {}

        step_number = steps.parse_step(step)
        if step_number is None or not steps.is_valid_step(step_number):
            errors['step'] = f'Step must be a number between {config.FIRST_STEP} and {config.LAST_STEP}'

        if not isinstance(form_data, dict):
            errors['formData'] = 'Form data must be an object'
            raise ValidationError(errors)

        values = dict(form_data)
        email, email_error = process_field(values.pop('email', None), 'email', required=True)
        if email_error:
            errors['email'] = email_error

        if errors:
            raise ValidationError(errors)

        return step_number, email, values

    def _sanitize_values(self, values: Dict[str, Any], components,
                         ignore_unknown: bool = False) -> Dict[str, Any]:
        """Sanitize each value for its component type; unknown keys are reported unless ignored"""
        sanitized = {}
        unknown = {}

        for key, value in values.items():
            component = components.get(key)
            if component is None:
                if ignore_unknown:
                    self.logger.debug(f'Ignoring form key "{key}"')
                else:
                    unknown[key] = UNKNOWN_FIELD_MESSAGE
                continue
            sanitized[key] = sanitize_field(value, component.type)

        if unknown:
            raise ValidationError(unknown)
        return sanitized

    def submit_step(self, step: Any, form_data: Dict[str, Any],
                    ignore_unknown: bool = False) -> Dict[str, Any]:
        """
        Save one onboarding step

        Args:
            step: Step number (int or numeric string)
            form_data: Submitted values plus the user's email under 'email'
            ignore_unknown: Drop keys that are not component names instead of
                rejecting them (classic form posts carry button fields)

        Returns:
            {'step': n, 'next_step': n + 1 or None, 'complete': bool}

        Raises:
            ValidationError: bad step, bad email, unknown keys or field errors
            UserNotFoundError: no user with that email
        """
        step_number, email, values = self._parse_submission(step, form_data)

        definitions = self.registry.find_all()
        components = {component.name: component for component in definitions}

        sanitized = self._sanitize_values(values, components, ignore_unknown)

        page_config = self.page_configs.get_for_page(step_number)
        field_errors = PageValidator(page_config, definitions, self.logger).validate(sanitized)
        if field_errors:
            self.logger.warning(f'Step {step_number} rejected for {email}: {len(field_errors)} field errors')
            raise ValidationError(field_errors)

        user = self.users.find_by_email(email)
        if user is None:
            raise UserNotFoundError()

        existing = self.users.find_profile(user.id)
        merged = dict(existing.profile_data) if existing else {}
        # Unparsable optional numbers sanitize to None; keep the stored value
        merged.update({key: value for key, value in sanitized.items() if value is not None})
        merged['last_updated'] = self.clock().isoformat()

        if self.users.upsert_profile(user.id, merged) is None:
            raise UpstreamError('Failed to update profile')

        self.logger.info(f'Step {step_number} saved for user {user.id}')

        following = steps.next_step(step_number)
        return {
            'step': step_number,
            'next_step': following,
            'complete': following is None,
        }

    def get_profile(self, email: str) -> Dict[str, Any]:
        """
        Saved answers for pre-filling the forms

        Returns:
            profile_data, or {} when there is no such user or profile
        """
        email, error = process_field(email, 'email', required=True)
        if error:
            raise ValidationError({'email': error}, 'Invalid email address')

        user = self.users.find_by_email(email)
        if user is None:
            return {}

        profile = self.users.find_profile(user.id)
        return dict(profile.profile_data) if profile else {}

    def get_all_profiles(self) -> List[UserProfile]:
        return self.users.find_all_profiles()
