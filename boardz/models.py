"""
Typed records for the onboarding tables

Rows coming back from Supabase are parsed here once. Anything downstream
works with these models and never re-checks raw strings.
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, BeforeValidator, Field, field_validator

from .errors import InvalidTypeError


class ComponentType(str, Enum):
    TEXT = 'text'
    TEXTAREA = 'textarea'
    DATE = 'date'
    NUMBER = 'number'
    EMAIL = 'email'
    PHONE = 'phone'
    URL = 'url'
    ADDRESS = 'address'

    @classmethod
    def parse(cls, value: Any) -> 'ComponentType':
        """
        Parse a stored type string

        Raises:
            InvalidTypeError: value is not one of the known types
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidTypeError(value) from None

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


ADDRESS_FIELDS = ['street', 'city', 'state', 'zipCode', 'country']


def _as_str(value: Any) -> Any:
    return str(value) if isinstance(value, int) and not isinstance(value, bool) else value


# Supabase returns bigint or uuid ids depending on the table
RowId = Annotated[str, BeforeValidator(_as_str)]


class ComponentDefinition(BaseModel):
    """Admin-defined form field (custom_components row)"""

    id: RowId = Field(..., description='Row identifier')
    name: str = Field(..., description='Unique field key, lowercase and underscores')
    label: str = Field(..., description='Label shown next to the field')
    type: ComponentType = Field(..., description='Field type')
    required: bool = Field(False, description='Whether the field must be filled in')
    placeholder: str = Field('', description='Input placeholder text')
    options: Optional[List[str]] = Field(None, description='Choices for the field, if any')
    created_at: Optional[str] = None

    @field_validator('placeholder', mode='before')
    @classmethod
    def _placeholder_default(cls, value):
        return '' if value is None else value

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'ComponentDefinition':
        # Parse the type first so an unknown type surfaces as InvalidTypeError
        component_type = ComponentType.parse(row.get('type'))
        return cls.model_validate({**row, 'type': component_type})

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode='json')


class PageConfig(BaseModel):
    """Ordered list of component names shown on one onboarding page"""

    id: Optional[RowId] = None
    page: int
    title: Optional[str] = None
    components: List[str] = Field(default_factory=list)
    updated_at: Optional[str] = None

    @field_validator('components', mode='before')
    @classmethod
    def _components_default(cls, value):
        return [] if value is None else value

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'PageConfig':
        return cls.model_validate(row)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode='json')


class UserRecord(BaseModel):
    id: RowId
    email: str
    created_at: Optional[str] = None


class UserProfile(BaseModel):
    """One user's accumulated onboarding answers (user_profiles row)"""

    id: Optional[RowId] = None
    user_id: RowId
    profile_data: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    email: Optional[str] = None

    @field_validator('profile_data', mode='before')
    @classmethod
    def _profile_default(cls, value):
        return {} if value is None else value

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode='json')


class AuthUser(BaseModel):
    id: str
    email: str

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()
