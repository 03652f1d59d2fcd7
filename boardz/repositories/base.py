"""
Shared plumbing for the Supabase-backed repositories
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as ModelValidationError

from ..errors import InvalidTypeError, UpstreamError


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class BaseRepository:
    """Runs PostgREST queries and turns failures into UpstreamError"""

    table_name: str = ''

    def __init__(self, supabase, logger: Optional[logging.Logger] = None):
        self.supabase = supabase
        self.logger = logger or logging.getLogger(__name__)

    def table(self):
        return self.supabase.table(self.table_name)

    def execute(self, query, operation: str) -> List[Dict[str, Any]]:
        """
        Execute a query builder and return its rows

        Args:
            query: PostgREST request builder
            operation: Name used in log records and error messages

        Returns:
            List of row dicts (possibly empty)

        Raises:
            UpstreamError: the request failed
        """
        try:
            result = query.execute()
        except Exception as e:
            self.logger.error(f'{type(self).__name__}.{operation} failed: {str(e)}')
            raise UpstreamError(f'{operation} failed') from e

        if result is None or result.data is None:
            return []
        if isinstance(result.data, dict):
            return [result.data]
        return list(result.data)

    def first(self, query, operation: str) -> Optional[Dict[str, Any]]:
        rows = self.execute(query, operation)
        return rows[0] if rows else None

    def parse(self, parser, row: Dict[str, Any], operation: str):
        """Parse a row into a model, reporting malformed rows as upstream failures"""
        try:
            return parser(row)
        except (ModelValidationError, InvalidTypeError) as e:
            self.logger.error(f'{type(self).__name__}.{operation}: malformed row: {str(e)}')
            raise UpstreamError(f'{operation} returned a malformed row') from e
