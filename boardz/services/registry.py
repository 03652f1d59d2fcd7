"""
Component registry

Admin-defined form fields. Names are unique and follow the component naming
rules; everything else is checked per field and reported together.
"""

import logging
from typing import Any, Dict, List, Optional

from onboarding.validation import (
    sanitize_string,
    validate_component_name,
)

from .. import config
from ..cache import TimedCache
from ..errors import (
    DuplicateNameError,
    InvalidNameError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from ..models import ComponentDefinition, ComponentType

CACHE_KEY = 'components'

UPDATABLE_FIELDS = ('name', 'label', 'type', 'required', 'placeholder', 'options')


def check_definition_fields(data: Dict[str, Any], partial: bool = False) -> Dict[str, str]:
    """
    Check everything except the name

    Args:
        data: Raw definition fields
        partial: Only check the keys that are present

    Returns:
        {field: message} for every failing field
    """
    errors = {}

    if not partial or 'label' in data:
        label = data.get('label')
        if not isinstance(label, str) or not label.strip():
            errors['label'] = 'Component label is required'
        elif len(label.strip()) > config.LENGTH_LIMITS['label']['max']:
            errors['label'] = f"Label must be no more than {config.LENGTH_LIMITS['label']['max']} characters"

    if not partial or 'type' in data:
        if data.get('type') not in ComponentType.values():
            errors['type'] = 'Invalid component type'

    if not partial or 'required' in data:
        if not isinstance(data.get('required'), bool):
            errors['required'] = 'Required field must be a boolean'

    if not partial or 'placeholder' in data:
        placeholder = data.get('placeholder', '')
        if placeholder is None:
            placeholder = ''
        if not isinstance(placeholder, str):
            errors['placeholder'] = 'Placeholder must be a string'
        elif len(placeholder) > config.LENGTH_LIMITS['placeholder']['max']:
            errors['placeholder'] = f"Placeholder must be no more than {config.LENGTH_LIMITS['placeholder']['max']} characters"

    if not partial or 'options' in data:
        options = data.get('options')
        if options is not None and (
            not isinstance(options, list) or not all(isinstance(opt, str) for opt in options)
        ):
            errors['options'] = 'Options must be an array of strings or null'

    return errors


def clean_definition_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    """Sanitized copy of the (already checked) definition fields present in data"""
    cleaned = {}
    if 'name' in data:
        cleaned['name'] = data['name']
    if 'label' in data:
        cleaned['label'] = sanitize_string(data['label'])
    if 'type' in data:
        cleaned['type'] = data['type']
    if 'required' in data:
        cleaned['required'] = data['required']
    if 'placeholder' in data:
        cleaned['placeholder'] = sanitize_string(data['placeholder'] or '')
    if 'options' in data:
        options = data['options']
        cleaned['options'] = [opt.strip() for opt in options] if options is not None else None
    return cleaned


class ComponentRegistry:
    def __init__(self, repository, cache: Optional[TimedCache] = None,
                 logger: Optional[logging.Logger] = None):
        self.repository = repository
        self.cache = cache or TimedCache(0)
        self.logger = logger or logging.getLogger(__name__)

    def _check_name(self, name: Any) -> None:
        error = validate_component_name(name)
        if error:
            raise InvalidNameError(error)

    def create(self, definition: Dict[str, Any]) -> ComponentDefinition:
        """
        Create a new component

        Args:
            definition: {name, label, type, required, placeholder, options}

        Returns:
            The stored ComponentDefinition

        Raises:
            InvalidNameError: name breaks the naming rules
            ValidationError: one or more other fields are invalid
            DuplicateNameError: a component with this name already exists
        """
        if not isinstance(definition, dict):
            raise ValidationError({'general': 'Invalid component data'})

        name = definition.get('name')
        self._check_name(name)

        errors = check_definition_fields(definition)
        if errors:
            self.logger.warning(f'Component "{name}" rejected: {len(errors)} invalid fields')
            raise ValidationError(errors)

        if self.repository.find_by_name(name) is not None:
            raise DuplicateNameError(name)

        record = clean_definition_fields({
            'name': name,
            'label': definition['label'],
            'type': definition['type'],
            'required': definition['required'],
            'placeholder': definition.get('placeholder') or '',
            'options': definition.get('options'),
        })

        component = self.repository.create(record)
        if component is None:
            raise UpstreamError('Failed to create component')

        self.cache.invalidate(CACHE_KEY)
        self.logger.info(f'Component created: {component.name} ({component.type.value})')
        return component

    def find_all(self) -> List[ComponentDefinition]:
        return self.cache.get_or_load(CACHE_KEY, self.repository.find_all)

    def find_by_name(self, name: str) -> Optional[ComponentDefinition]:
        return self.repository.find_by_name(name)

    def find_by_id(self, component_id: str) -> Optional[ComponentDefinition]:
        return self.repository.find_by_id(component_id)

    def missing_names(self, names: List[str]) -> List[str]:
        """Names from the list that have no registered component, in order"""
        existing = set(self.repository.list_names())
        return [name for name in names if name not in existing]

    def update(self, component_id: str, changes: Dict[str, Any]) -> ComponentDefinition:
        current = self.repository.find_by_id(component_id)
        if current is None:
            raise NotFoundError(f'Component {component_id} not found')

        if changes is None:
            changes = {}
        if not isinstance(changes, dict):
            raise ValidationError({'general': 'Invalid component data'})

        changes = {key: value for key, value in changes.items() if key in UPDATABLE_FIELDS}

        if 'name' in changes and changes['name'] != current.name:
            self._check_name(changes['name'])
            if self.repository.find_by_name(changes['name']) is not None:
                raise DuplicateNameError(changes['name'])

        errors = check_definition_fields(changes, partial=True)
        if errors:
            raise ValidationError(errors)

        if not changes:
            return current

        component = self.repository.update(component_id, clean_definition_fields(changes))
        if component is None:
            raise UpstreamError('Failed to update component')

        self.cache.invalidate(CACHE_KEY)
        self.logger.info(f'Component updated: {component.name}')
        return component

    def delete(self, component_id: str) -> bool:
        if not self.repository.delete(component_id):
            raise NotFoundError(f'Component {component_id} not found')

        self.cache.invalidate(CACHE_KEY)
        self.logger.info(f'Component deleted: {component_id}')
        return True
