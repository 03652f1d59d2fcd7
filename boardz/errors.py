"""
Error types for the onboarding service

Every error carries a user-facing message. Field-level problems travel in
`errors`, a flat {field: message} map that the presentation layer shows as-is.
"""

from typing import Dict, List, Optional


class OnboardingError(Exception):
    """Base class for all onboarding service errors"""

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or {}


class ValidationError(OnboardingError):
    """One or more fields failed validation"""

    def __init__(self, errors: Dict[str, str], message: str = 'Validation failed'):
        super().__init__(message, errors)


class InvalidNameError(ValidationError):
    """Component name does not match the naming rules"""

    def __init__(self, message: str):
        super().__init__({'name': message}, message)


class InvalidTypeError(OnboardingError):
    """A stored component type is not one of the known types"""

    def __init__(self, value):
        super().__init__(f'Invalid component type: {value}')
        self.value = value


class NotFoundError(OnboardingError):
    pass


class UserNotFoundError(NotFoundError):
    def __init__(self, message: str = 'User not found'):
        super().__init__(message)


class ConflictError(OnboardingError):
    """Request conflicts with the current state of the store"""


class DuplicateNameError(ConflictError):
    def __init__(self, name: str):
        super().__init__('Component name already exists', {'name': 'Component name already exists'})
        self.name = name


class EmptyPageError(ConflictError):
    def __init__(self, page: int):
        super().__init__(f'Page {page} must have at least one component')
        self.page = page


class UnknownComponentError(ConflictError):
    def __init__(self, names: List[str]):
        super().__init__(f"Invalid components: {', '.join(names)}")
        self.names = list(names)


class AuthenticationError(OnboardingError):
    """Identity provider rejected the credentials"""


class UpstreamError(OnboardingError):
    """The remote store failed or returned something unexpected"""
