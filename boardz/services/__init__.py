"""
Onboarding services

build_services() wires the repositories, cache and logger together. Tests
pass their own Supabase stand-in and clock.
"""

import logging
import time
from typing import Callable, NamedTuple, Optional

from .. import config
from ..cache import TimedCache
from ..repositories import (
    ComponentRepository,
    IdentityRepository,
    PageConfigRepository,
    UserRepository,
)
from .auth import AuthService
from .onboarding import OnboardingService
from .page_configs import PageConfigStore
from .registry import ComponentRegistry


class Services(NamedTuple):
    registry: ComponentRegistry
    page_configs: PageConfigStore
    onboarding: OnboardingService
    auth: AuthService
    cache: TimedCache
    logger: logging.Logger


def build_services(supabase=None, logger: Optional[logging.Logger] = None,
                   cache_seconds: Optional[float] = None,
                   clock: Callable[[], float] = time.monotonic) -> Services:
    """
    Wire up every service against one Supabase client

    Args:
        supabase: Supabase client (defaults to get_supabase())
        logger: Logger handed to every service
        cache_seconds: TTL for cached component and page-config lists
        clock: Monotonic clock for the cache

    Returns:
        Services
    """
    if supabase is None:
        from ..supabase_client import get_supabase
        supabase = get_supabase()

    logger = logger or logging.getLogger('boardz')
    cache = TimedCache(config.CACHE_SECONDS if cache_seconds is None else cache_seconds, clock)

    users = UserRepository(supabase, logger)
    registry = ComponentRegistry(ComponentRepository(supabase, logger), cache, logger)
    page_configs = PageConfigStore(PageConfigRepository(supabase, logger), registry, cache, logger=logger)
    onboarding = OnboardingService(users, registry, page_configs, logger)
    auth = AuthService(IdentityRepository(supabase, logger), users, logger)

    return Services(registry, page_configs, onboarding, auth, cache, logger)


__all__ = [
    'AuthService',
    'ComponentRegistry',
    'OnboardingService',
    'PageConfigStore',
    'Services',
    'build_services',
]
