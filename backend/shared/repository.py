"""
Base repository class for table access.

Repositories own one Supabase table each and map its rows to a Pydantic
model. Error translation is left to subclasses, which know which upstream
failure their callers expect.
"""

from typing import Any, Generic, Optional, TypeVar

from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides:
    - Supabase client access via self._db
    - the owned table name via self._table
    - single-row lookup by a key column

    Example:
        class ProfileRepository(BaseRepository[ProfileRecord]):
            def get(self, uid: str) -> Optional[ProfileRecord]:
                row = self._first_row("id", uid)
                return self._map_to_record(row) if row else None
    """

    def __init__(self, db: Client, table: str) -> None:
        """
        Args:
            db: Supabase client instance for database operations.
            table: Name of the table this repository reads and writes.
        """
        self._db = db
        self._table = table

    @property
    def table(self) -> str:
        return self._table

    def _first_row(self, key: str, value: Any, columns: str = "*") -> Optional[dict[str, Any]]:
        """First row where ``key == value``, or None. Client errors propagate."""
        result = self._db.table(self._table).select(columns).eq(key, value).limit(1).execute()
        if not result.data:
            return None
        return result.data[0]
