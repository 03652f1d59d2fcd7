"""
Onboarding form logic
Field sanitization/validation, per-page validation built from the admin
configuration, and step navigation. The HTTP routes live in onboarding.form.
"""

from .dynamic_validation import PageValidator, build_validator
from .validation import process_field, sanitize_field, validate_field

__all__ = ['PageValidator', 'build_validator', 'process_field', 'sanitize_field', 'validate_field']
