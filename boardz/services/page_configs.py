"""
Page configuration store

Maps onboarding pages to the ordered list of components shown on them.
Required pages can never be left empty and every listed name must exist
in the component registry.
"""

import logging
from typing import Any, Dict, List, Optional

from .. import config
from ..cache import TimedCache
from ..errors import (
    ConflictError,
    EmptyPageError,
    UnknownComponentError,
    UpstreamError,
    ValidationError,
)
from ..models import PageConfig

CACHE_KEY = 'page_configs'


def check_page_update(page: Any, components: Any) -> Dict[str, str]:
    errors = {}

    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        errors['page'] = 'Page must be a positive integer'

    if not isinstance(components, list) or not all(isinstance(name, str) for name in components):
        errors['components'] = 'Components must be an array of strings'
    else:
        for index, name in enumerate(components):
            if not name.strip():
                errors[f'component_{index}'] = f'Component at index {index} must be a non-empty string'

    return errors


class PageConfigStore:
    def __init__(self, repository, registry, cache: Optional[TimedCache] = None,
                 required_pages: Optional[List[int]] = None,
                 logger: Optional[logging.Logger] = None):
        self.repository = repository
        self.registry = registry
        self.cache = cache or TimedCache(0)
        self.required_pages = list(config.REQUIRED_COMPONENT_PAGES if required_pages is None else required_pages)
        self.logger = logger or logging.getLogger(__name__)

    def get_all(self) -> List[PageConfig]:
        """All page configs ordered by page number"""
        return self.cache.get_or_load(CACHE_KEY, self.repository.find_all)

    def get_for_page(self, page: int) -> Optional[PageConfig]:
        for page_config in self.get_all():
            if page_config.page == page:
                return page_config
        return None

    def upsert(self, page: int, components: List[str]) -> PageConfig:
        """
        Replace the component list for a page

        Args:
            page: Page number
            components: Ordered component names

        Returns:
            The stored PageConfig

        Raises:
            ValidationError: malformed page number or component list
            EmptyPageError: a required page would be left without components
            UnknownComponentError: one or more names are not registered
        """
        errors = check_page_update(page, components)
        if errors:
            raise ValidationError(errors)

        components = [name.strip() for name in components]

        if page in self.required_pages and not components:
            raise EmptyPageError(page)

        missing = self.registry.missing_names(components) if components else []
        if missing:
            raise UnknownComponentError(missing)

        page_config = self.repository.upsert(page, components)
        if page_config is None:
            raise UpstreamError('Failed to update page config')

        self.cache.invalidate(CACHE_KEY)
        self.logger.info(f'Page {page} config updated with {len(components)} components')
        return page_config

    def default_assignments(self, component_names: List[str]) -> Dict[int, List[str]]:
        """
        Pick one starting component for each required page

        The first required page prefers aboutMe, then birthdate, then the first
        component. The second prefers address, then anything the first page did
        not take. Later required pages take any unused component.
        """
        special = config.SPECIAL_COMPONENTS
        assignments: Dict[int, List[str]] = {}
        used: List[str] = []

        for index, page in enumerate(self.required_pages):
            if index == 0:
                preferred = [special['about_me'], special['birthdate']]
            elif index == 1:
                preferred = [special['address']]
            else:
                preferred = []

            choice = next((name for name in preferred if name in component_names), None)
            if choice is None:
                unused = [name for name in component_names if name not in used]
                if unused:
                    choice = unused[0]
                elif len(component_names) > 1:
                    choice = component_names[1]
                else:
                    choice = component_names[0]

            assignments[page] = [choice]
            used.append(choice)

        return assignments

    def initialize_defaults(self) -> Dict[str, Any]:
        """
        Give every required page a starting config if it has none

        Returns:
            {'initialized': [pages written]}; empty list when nothing was needed

        Raises:
            ConflictError: the registry is empty
        """
        existing = {page_config.page for page_config in self.repository.find_by_pages(self.required_pages)}
        pending = [page for page in self.required_pages if page not in existing]

        if not pending:
            self.logger.debug('Default page configs already present')
            return {'initialized': []}

        component_names = [component.name for component in self.registry.find_all()]
        if not component_names:
            raise ConflictError('No components available for default setup')

        assignments = self.default_assignments(component_names)
        to_write = {page: assignments[page] for page in pending}

        self.repository.upsert_many(to_write)
        self.cache.invalidate(CACHE_KEY)
        self.logger.info(f'Default page configs written for pages {sorted(to_write)}')
        return {'initialized': sorted(to_write)}
