"""Supabase-backed repositories"""

from .components import ComponentRepository
from .identity import IdentityRepository
from .page_configs import PageConfigRepository
from .users import UserRepository

__all__ = [
    'ComponentRepository',
    'IdentityRepository',
    'PageConfigRepository',
    'UserRepository',
]
