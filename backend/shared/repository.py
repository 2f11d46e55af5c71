"""
Base repository class for database access.

Provides a common abstraction layer for Supabase-backed repositories,
encapsulating client access and table naming.
"""

from typing import TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for Supabase repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Table name via self._table
    - Generic type parameter for model type hints

    Subclasses implement domain-specific data access methods and handle
    dict-to-Pydantic model mapping internally.

    Example:
        class UserRepository(BaseRepository[User]):
            def find_by_id(self, user_id: UUID) -> Optional[User]:
                result = self._query().select("*").eq("id", str(user_id)).execute()
                if not result.data:
                    return None
                return self._map_to_user(result.data[0])
    """

    def __init__(self, db: Client, table: str) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
            table: Name of the table this repository owns.
        """
        self._db = db
        self._table = table

    def _query(self):
        """Start a query builder on the repository's table."""
        return self._db.table(self._table)
