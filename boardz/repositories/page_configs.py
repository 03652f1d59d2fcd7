"""
Page configuration repository (page_components table)
"""

from typing import Dict, List, Optional

from .. import config
from ..models import PageConfig
from .base import BaseRepository, utc_now


class PageConfigRepository(BaseRepository):
    table_name = config.PAGE_COMPONENTS_TABLE

    def find_all(self) -> List[PageConfig]:
        """All page configs ordered by page number"""
        rows = self.execute(self.table().select('*').order('page'), 'find_all')
        return [self.parse(PageConfig.from_row, row, 'find_all') for row in rows]

    def find_by_page(self, page: int) -> Optional[PageConfig]:
        row = self.first(
            self.table().select('*').eq('page', page).limit(1),
            'find_by_page'
        )
        return self.parse(PageConfig.from_row, row, 'find_by_page') if row else None

    def find_by_pages(self, pages: List[int]) -> List[PageConfig]:
        rows = self.execute(
            self.table().select('*').in_('page', pages).order('page'),
            'find_by_pages'
        )
        return [self.parse(PageConfig.from_row, row, 'find_by_pages') for row in rows]

    def upsert(self, page: int, components: List[str]) -> Optional[PageConfig]:
        """Overwrite the component list for page, stamping updated_at"""
        row = self.first(
            self.table().upsert(
                [{'page': page, 'components': list(components), 'updated_at': utc_now()}],
                on_conflict='page'
            ),
            'upsert'
        )
        return self.parse(PageConfig.from_row, row, 'upsert') if row else None

    def upsert_many(self, assignments: Dict[int, List[str]]) -> List[PageConfig]:
        now = utc_now()
        records = [
            {'page': page, 'components': list(components), 'updated_at': now}
            for page, components in sorted(assignments.items())
        ]
        rows = self.execute(
            self.table().upsert(records, on_conflict='page'),
            'upsert_many'
        )
        return [self.parse(PageConfig.from_row, row, 'upsert_many') for row in rows]
