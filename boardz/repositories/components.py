"""
Component repository (custom_components table)
"""

from typing import Any, Dict, List, Optional

from .. import config
from ..models import ComponentDefinition
from .base import BaseRepository


class ComponentRepository(BaseRepository):
    table_name = config.COMPONENTS_TABLE

    def find_all(self) -> List[ComponentDefinition]:
        """All components, newest first"""
        rows = self.execute(
            self.table().select('*').order('created_at', desc=True),
            'find_all'
        )
        return [self.parse(ComponentDefinition.from_row, row, 'find_all') for row in rows]

    def find_by_id(self, component_id: str) -> Optional[ComponentDefinition]:
        row = self.first(
            self.table().select('*').eq('id', component_id).limit(1),
            'find_by_id'
        )
        return self.parse(ComponentDefinition.from_row, row, 'find_by_id') if row else None

    def find_by_name(self, name: str) -> Optional[ComponentDefinition]:
        row = self.first(
            self.table().select('*').eq('name', name).limit(1),
            'find_by_name'
        )
        return self.parse(ComponentDefinition.from_row, row, 'find_by_name') if row else None

    def list_names(self) -> List[str]:
        rows = self.execute(self.table().select('name'), 'list_names')
        return [row['name'] for row in rows if row.get('name')]

    def create(self, record: Dict[str, Any]) -> Optional[ComponentDefinition]:
        row = self.first(self.table().insert(record), 'create')
        return self.parse(ComponentDefinition.from_row, row, 'create') if row else None

    def update(self, component_id: str, changes: Dict[str, Any]) -> Optional[ComponentDefinition]:
        row = self.first(
            self.table().update(changes).eq('id', component_id),
            'update'
        )
        return self.parse(ComponentDefinition.from_row, row, 'update') if row else None

    def delete(self, component_id: str) -> bool:
        rows = self.execute(self.table().delete().eq('id', component_id), 'delete')
        return len(rows) > 0
