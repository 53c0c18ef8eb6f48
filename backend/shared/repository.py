"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and providing shared utilities for data operations.
"""

from typing import TypeVar, Generic, Optional, Any, Callable
from postgrest.exceptions import APIError
from supabase import AsyncClient


T = TypeVar("T")

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"

# Longest user-supplied search term turned into a pattern
MAX_SEARCH_TERM_LENGTH = 100

# PostgREST caps a single response at this many rows by default
FETCH_CHUNK_SIZE = 1000


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class GameRepository(BaseRepository[Game]):
            async def get_by_id(self, game_id: str) -> Optional[Game]:
                result = await self._db.table("games").select("*").eq("id", game_id).execute()
                if not result.data:
                    return None
                return self._map_to_game(result.data[0])
    """

    def __init__(self, db: AsyncClient) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Async Supabase client instance for database operations.
        """
        self._db = db

    async def _fetch_all(self, build_query: Callable[[], Any]) -> list[dict[str, Any]]:
        """
        Read every row of an ordered query, one response-sized chunk at a time.

        Args:
            build_query: Returns a fresh, ordered select builder on each call.
        """
        rows: list[dict[str, Any]] = []
        start = 0
        while True:
            result = await build_query().range(start, start + FETCH_CHUNK_SIZE - 1).execute()
            chunk = result.data or []
            rows.extend(chunk)
            if len(chunk) < FETCH_CHUNK_SIZE:
                return rows
            start += FETCH_CHUNK_SIZE


def is_unique_violation(exc: BaseException) -> bool:
    """True if a PostgREST error was caused by a unique index."""
    return isinstance(exc, APIError) and exc.code == UNIQUE_VIOLATION


def constraint_name(exc: APIError) -> Optional[str]:
    """Best-effort extraction of the violated constraint from an APIError."""
    message = exc.message or ""
    marker = 'constraint "'
    start = message.find(marker)
    if start == -1:
        return None
    start += len(marker)
    end = message.find('"', start)
    return message[start:end] if end != -1 else None


def escape_like(term: str) -> str:
    """
    Turn user input into a literal (I)LIKE fragment.

    LIKE wildcards are backslash-escaped and the PostgREST ``*`` wildcard
    is removed, so the term only ever matches as a plain substring.
    """
    term = term.strip()[:MAX_SEARCH_TERM_LENGTH]
    return (
        term.replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
        .replace("*", "")
    )


def contains_pattern(term: str) -> str:
    """Case-insensitive substring pattern for ``ilike``."""
    return f"%{escape_like(term)}%"


def quote_filter_value(value: str) -> str:
    """Double-quote a value for use inside a PostgREST or=/and= logic tree."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def ilike_conditions(columns: list[str], term: str) -> str:
    """Comma-joined ``col.ilike.pattern`` conditions, one per column."""
    pattern = quote_filter_value(contains_pattern(term))
    return ",".join(f"{column}.ilike.{pattern}" for column in columns)


def ilike_any(columns: list[str], term: str) -> str:
    """Build a nestable ``or(...)`` clause matching ``term`` in any of ``columns``."""
    return f"or({ilike_conditions(columns, term)})"
