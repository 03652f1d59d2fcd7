"""
Field Sanitization and Validation for Onboarding Forms

sanitize_field() cleans a raw value for its field type and never raises.
validate_field() returns an error message, or None when the value is acceptable.
Sanitizing twice gives the same result as sanitizing once.
"""

import math
import re
from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlparse

from boardz.config import LENGTH_LIMITS
from boardz.models import ADDRESS_FIELDS

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
PHONE_PATTERN = re.compile(r'^[\d\s()\-+.]{10,}$')
COMPONENT_NAME_PATTERN = re.compile(r'^[a-z_]+$')
ZIP_CODE_PATTERN = re.compile(r'^\d{5}(-\d{4})?$')
URL_SCHEME_PATTERN = re.compile(r'^https?://', re.IGNORECASE)

SCRIPT_TAG_PATTERN = re.compile(r'<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>', re.IGNORECASE)
HTML_CHARS_PATTERN = re.compile(r'[<>\'"&]')
EMAIL_DISALLOWED_PATTERN = re.compile(r'[^a-z0-9@._-]')
PHONE_DISALLOWED_PATTERN = re.compile(r'[^0-9+()\-.\s]')
NUMBER_DISALLOWED_PATTERN = re.compile(r'[^0-9.\-]')
NUMBER_PREFIX_PATTERN = re.compile(r'^-?(?:\d+(?:\.\d*)?|\.\d+)')
NAME_DISALLOWED_PATTERN = re.compile(r'[^a-z_]+')

REQUIRED_MESSAGE = 'This field is required'


def is_blank(value: Any) -> bool:
    """True for None, whitespace-only strings and empty dicts"""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ''
    if isinstance(value, dict):
        return all(is_blank(v) for v in value.values())
    return False


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# ── Sanitizers ───────────────────────────────────────────────────────────


def sanitize_string(value: Any) -> str:
    """Remove script blocks and HTML-special characters from text"""
    if not isinstance(value, str):
        return ''
    value = SCRIPT_TAG_PATTERN.sub('', value)
    value = HTML_CHARS_PATTERN.sub('', value)
    return value.strip()


def sanitize_email(value: Any) -> str:
    return EMAIL_DISALLOWED_PATTERN.sub('', sanitize_string(value).lower())


def sanitize_phone(value: Any) -> str:
    if not isinstance(value, str):
        return ''
    return PHONE_DISALLOWED_PATTERN.sub('', value).strip()


def sanitize_url(value: Any) -> str:
    if not isinstance(value, str):
        return ''
    value = value.strip()
    if value and not URL_SCHEME_PATTERN.match(value):
        return f'https://{value}'
    return value


def sanitize_number(value: Any) -> Optional[float]:
    if _is_number(value):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        # Longest leading number, so "1-2" reads as 1 and "1.2.3" as 1.2
        match = NUMBER_PREFIX_PATTERN.match(NUMBER_DISALLOWED_PATTERN.sub('', value))
        if match is None:
            return None
        number = float(match.group(0))
    else:
        return None
    return number if math.isfinite(number) else None


def sanitize_date(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ''


def sanitize_address(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {key: sanitize_string(value[key]) for key in ADDRESS_FIELDS if key in value}


def sanitize_component_name(value: Any) -> str:
    """
    Normalize a raw component name for storage

    Args:
        value: Raw name input, e.g. " My Field! "

    Returns:
        Lowercase name made of letters and single underscores, e.g. "my_field"
    """
    if not isinstance(value, str):
        return ''

    name = value.lower().strip()

    # Anything that is not a letter or underscore becomes an underscore
    name = NAME_DISALLOWED_PATTERN.sub('_', name)

    # Collapse runs and trim the ends
    name = re.sub(r'_{2,}', '_', name)
    return name.strip('_')


SANITIZERS = {
    'text': sanitize_string,
    'textarea': sanitize_string,
    'email': sanitize_email,
    'phone': sanitize_phone,
    'url': sanitize_url,
    'number': sanitize_number,
    'date': sanitize_date,
    'address': sanitize_address,
}


def _type_name(field_type: Any) -> str:
    return getattr(field_type, 'value', field_type)


def sanitize_field(value: Any, field_type: Any) -> Any:
    """
    Sanitize a raw value for its field type

    Args:
        value: Raw input
        field_type: ComponentType or its string value

    Returns:
        Cleaned value. Unknown types get text sanitization.
    """
    sanitizer = SANITIZERS.get(_type_name(field_type), sanitize_string)
    return sanitizer(value)


# ── Validators ───────────────────────────────────────────────────────────


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value))


def is_valid_phone(value: str) -> bool:
    return bool(PHONE_PATTERN.match(re.sub(r'\s', '', value)))


def is_valid_url(value: str) -> bool:
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def is_valid_zip_code(value: Any) -> bool:
    return isinstance(value, str) and bool(ZIP_CODE_PATTERN.match(value.strip()))


def _parse_date(value: str) -> Optional[date]:
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def validate_email(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return 'Email must be a string'
    if is_blank(value):
        return 'Email is required'
    if not is_valid_email(value):
        return 'Please enter a valid email address'
    return None


def validate_url(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return 'URL must be a string'
    if is_blank(value):
        return 'URL is required'
    if not is_valid_url(value):
        return 'Please enter a valid URL'
    return None


def validate_phone(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return 'Phone number must be a string'
    if is_blank(value):
        return 'Phone number is required'
    if not is_valid_phone(value):
        return 'Please enter a valid phone number'
    return None


def validate_date(value: Any, today: Optional[date] = None) -> Optional[str]:
    if not isinstance(value, str):
        return 'Date must be a string'
    if is_blank(value):
        return 'Date is required'

    parsed = _parse_date(value)
    if parsed is None:
        return 'Please enter a valid date'
    if parsed > (today or date.today()):
        return 'Date cannot be in the future'
    return None


def validate_text(value: Any, min_length: int = 1, max_length: int = 1000) -> Optional[str]:
    if not isinstance(value, str):
        return 'Text must be a string'
    if is_blank(value):
        return REQUIRED_MESSAGE
    if len(value) < min_length:
        return f'Text must be at least {min_length} characters'
    if len(value) > max_length:
        return f'Text must be no more than {max_length} characters'
    return None


def validate_number(value: Any, min_value: Optional[float] = None,
                    max_value: Optional[float] = None) -> Optional[str]:
    if not (_is_number(value) or isinstance(value, str)):
        return 'Please enter a valid number'
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return 'Please enter a valid number'

    if not math.isfinite(number):
        return 'Please enter a valid number'
    if min_value is not None and number < min_value:
        return f'Number must be at least {min_value:g}'
    if max_value is not None and number > max_value:
        return f'Number must be no more than {max_value:g}'
    return None


def validate_component_name(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return 'Component name must be a string'
    if is_blank(value):
        return 'Component name is required'
    if not COMPONENT_NAME_PATTERN.match(value):
        return 'Component name must contain only lowercase letters and underscores'

    limits = LENGTH_LIMITS['component_name']
    if len(value) < limits['min']:
        return f"Component name must be at least {limits['min']} characters"
    if len(value) > limits['max']:
        return f"Component name must be no more than {limits['max']} characters"
    return None


def validate_field(value: Any, field_type: Any, required: bool = False,
                   min_length: Optional[int] = None, max_length: Optional[int] = None,
                   min_value: Optional[float] = None, max_value: Optional[float] = None) -> Optional[str]:
    """
    Validate a single (already sanitized) value

    Args:
        value: Field value
        field_type: ComponentType or its string value
        required: Whether an empty value is an error
        min_length / max_length: Length bounds for text and textarea
        min_value / max_value: Range for numbers

    Returns:
        Error message, or None if the value is acceptable
    """
    if is_blank(value):
        return REQUIRED_MESSAGE if required else None

    field_type = _type_name(field_type)

    if field_type == 'email':
        return validate_email(value)
    if field_type == 'url':
        return validate_url(value)
    if field_type == 'phone':
        return validate_phone(value)
    if field_type == 'date':
        return validate_date(value)
    if field_type == 'number':
        return validate_number(value, min_value, max_value)
    if field_type in ('text', 'textarea'):
        limits = LENGTH_LIMITS[field_type]
        return validate_text(
            value,
            limits['min'] if min_length is None else min_length,
            limits['max'] if max_length is None else max_length
        )
    if field_type == 'address':
        if not isinstance(value, dict):
            return 'Address must be an object'
        zip_code = value.get('zipCode')
        if not is_blank(zip_code) and not is_valid_zip_code(zip_code):
            return 'Please enter a valid ZIP code'
        return None

    return 'Unknown field type'


def process_field(value: Any, field_type: Any, **options) -> Tuple[Any, Optional[str]]:
    """Sanitize then validate; returns (sanitized value, error or None)"""
    sanitized = sanitize_field(value, field_type)
    return sanitized, validate_field(sanitized, field_type, **options)
