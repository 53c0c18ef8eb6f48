"""
Catalog ingestion from the external game catalog.

Fetches the full external list and upserts it keyed by ``external_id``.
The local rating aggregates are never part of the payload, so a sync can
run at any time without disturbing review-derived data.
"""

import logging
from datetime import date, datetime, timezone
from typing import Optional, Any

import httpx

from .exceptions import CatalogSourceError
from .models import SyncResult
from .repository import GameRepository


logger = logging.getLogger(__name__)

UPSERT_BATCH_SIZE = 500


def parse_release_date(value: Any) -> Optional[date]:
    """Parse ``YYYY-MM-DD``; placeholders such as ``0000-00-00`` become None."""
    if not value or not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def split_platforms(value: Any) -> list[str]:
    if isinstance(value, list):
        return [str(p).strip() for p in value if str(p).strip()]
    if not value:
        return []
    return [p.strip() for p in str(value).split(",") if p.strip()]


def map_catalog_record(record: dict[str, Any], synced_at: datetime) -> dict[str, Any]:
    """
    Map one external catalog record to a ``games`` row.

    Raises:
        KeyError, TypeError, ValueError: If a required field is missing or malformed
    """
    external_id = int(record["id"])
    title = str(record["title"]).strip()
    if not title:
        raise ValueError("missing title")

    genre = record.get("genre")
    release_date = parse_release_date(record.get("release_date"))
    return {
        "external_id": external_id,
        "title": title,
        "thumbnail": record["thumbnail"],
        "short_description": (record.get("short_description") or "").strip() or title,
        "game_url": record["game_url"],
        "genre": [genre.strip()] if isinstance(genre, str) and genre.strip() else [],
        "platform": split_platforms(record.get("platform")),
        "publisher": (record.get("publisher") or "").strip(),
        "developer": (record.get("developer") or "").strip(),
        "release_date": release_date.isoformat() if release_date else None,
        "updated_at": synced_at.isoformat(),
    }


class CatalogSyncService:
    """
    Synchronizes the local catalog with the external catalog source.

    Args:
        repository: Game data access
        source_url: List endpoint of the external catalog
        timeout: Request timeout in seconds
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``)
    """

    def __init__(
        self,
        repository: GameRepository,
        source_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._repo = repository
        self._source_url = source_url
        self._timeout = timeout
        self._transport = transport

    async def sync(self) -> SyncResult:
        """
        Fetch the external catalog and upsert every record.

        Records that cannot be mapped are reported in ``errors`` and skipped;
        the rest of the run continues.

        Raises:
            CatalogSourceError: If the catalog cannot be fetched or is not a list
        """
        records = await self._fetch_catalog()
        synced_at = datetime.now(timezone.utc)
        result = SyncResult()

        rows: dict[int, dict[str, Any]] = {}
        for record in records:
            try:
                row = map_catalog_record(record, synced_at)
            except (KeyError, TypeError, ValueError) as e:
                label = record.get("title") if isinstance(record, dict) else None
                result.errors.append(f"{label or 'unknown'}: {e}")
                continue
            rows[row["external_id"]] = row

        existing = await self._repo.existing_external_ids()
        batch = list(rows.values())
        for start in range(0, len(batch), UPSERT_BATCH_SIZE):
            await self._repo.upsert_by_external_id(batch[start:start + UPSERT_BATCH_SIZE])

        result.total_processed = len(rows)
        result.new_games = sum(1 for external_id in rows if external_id not in existing)
        result.updated_games = result.total_processed - result.new_games

        logger.info(
            f"Catalog sync finished: {result.total_processed} processed, "
            f"{result.new_games} new, {result.updated_games} updated, "
            f"{len(result.errors)} errors"
        )
        return result

    async def _fetch_catalog(self) -> list[dict[str, Any]]:
        """Fetch the external catalog list."""
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(
                    self._source_url,
                    headers={"Accept": "application/json"},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise CatalogSourceError(
                f"Catalog source returned {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise CatalogSourceError(f"Catalog source unreachable: {e}") from e
        except ValueError as e:
            raise CatalogSourceError("Catalog source returned invalid JSON") from e

        if not isinstance(data, list):
            raise CatalogSourceError("Catalog source did not return a list of games")

        logger.info(f"Fetched {len(data)} games from catalog source")
        return data
