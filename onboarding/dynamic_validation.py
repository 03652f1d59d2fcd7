"""
Per-page validation built from the admin configuration

The page config says which components appear on a page; the component
definitions say how each one is checked. PageValidator combines the two
into a single validate(values) -> {field: message} call.
"""

import logging
from typing import Any, Callable, Dict, Iterable, Optional

from boardz.models import ComponentDefinition, ComponentType, PageConfig

from .validation import is_blank, is_valid_zip_code, validate_field

ADDRESS_REQUIRED_MESSAGES = {
    'street': 'Street address is required',
    'city': 'City is required',
    'state': 'State is required',
    'zipCode': 'ZIP code is required',
    'country': 'Country is required',
}

ZIP_CODE_MESSAGE = 'Please enter a valid ZIP code'


class PageValidator:
    def __init__(self, page_config: Optional[PageConfig],
                 components: Iterable[ComponentDefinition],
                 logger: Optional[logging.Logger] = None):
        self.page_config = page_config
        self.components = {component.name: component for component in components}
        self.logger = logger or logging.getLogger(__name__)

    @property
    def field_names(self):
        if self.page_config is None:
            return []
        return list(self.page_config.components)

    def validate(self, values: Dict[str, Any]) -> Dict[str, str]:
        """
        Validate one page submission

        Args:
            values: Submitted values keyed by component name

        Returns:
            {field: message}; empty when the submission is acceptable.
            Address errors are keyed "address.<subfield>".
        """
        errors: Dict[str, str] = {}

        for name in self.field_names:
            component = self.components.get(name)
            if component is None:
                # Page references a component that is not in the registry
                self.logger.warning(
                    f'Page {self.page_config.page} lists unknown component "{name}", skipping'
                )
                continue

            if component.type == ComponentType.ADDRESS:
                errors.update(self._validate_address(component, values.get(name)))
                continue

            value = values.get(name)

            if is_blank(value):
                if component.required:
                    errors[name] = f'{component.label} is required'
                continue

            error = validate_field(value, component.type)
            if error:
                errors[name] = error

        return errors

    __call__ = validate

    def _validate_address(self, component: ComponentDefinition, value: Any) -> Dict[str, str]:
        address = value if isinstance(value, dict) else {}
        prefix = component.name
        errors = {}

        if component.required:
            for key, message in ADDRESS_REQUIRED_MESSAGES.items():
                if is_blank(address.get(key)):
                    errors[f'{prefix}.{key}'] = message

        zip_code = address.get('zipCode')
        if not is_blank(zip_code) and not is_valid_zip_code(zip_code):
            errors[f'{prefix}.zipCode'] = ZIP_CODE_MESSAGE

        return errors


def build_validator(page_config: Optional[PageConfig],
                    components: Iterable[ComponentDefinition],
                    logger: Optional[logging.Logger] = None) -> Callable[[Dict[str, Any]], Dict[str, str]]:
    """Return a validate(values) function for the given page"""
    return PageValidator(page_config, components, logger).validate
