#!/usr/bin/env python
"""
Synchronize the game catalog with the external catalog source.

Intended for a weekly cron entry, e.g.:
    0 3 * * 0  cd /srv/gamehub/backend && python run_sync.py

Usage:
    python run_sync.py
    python run_sync.py --reconcile   # Also repair drifted rating aggregates
"""

import argparse
import asyncio
import logging
import sys
import time

from rich.console import Console
from rich.table import Table

from shared.config import get_settings
from shared.database import init_supabase_client
from shared.exceptions import ExternalServiceError
from modules.games.repository import GameRepository
from modules.games.sync import CatalogSyncService
from modules.reviews.aggregator import RatingAggregator
from modules.reviews.repository import ReviewRepository

console = Console()


async def run(reconcile: bool) -> int:
    settings = get_settings()
    db = await init_supabase_client()
    games = GameRepository(db)

    sync = CatalogSyncService(
        repository=games,
        source_url=settings.catalog_source_url,
        timeout=settings.catalog_sync_timeout,
    )

    console.print(f"[bold]Syncing catalog from[/bold] {settings.catalog_source_url}")
    started = time.monotonic()
    try:
        result = await sync.sync()
    except ExternalServiceError as e:
        console.print(f"[red]Sync failed:[/red] {e.message}")
        return 1

    table = Table(title="Catalog Sync")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Processed", str(result.total_processed))
    table.add_row("New", str(result.new_games))
    table.add_row("Updated", str(result.updated_games))
    table.add_row("Errors", str(len(result.errors)))
    table.add_row("Duration", f"{time.monotonic() - started:.1f}s")
    console.print(table)

    for error in result.errors:
        console.print(f"  [yellow]•[/yellow] {error}")

    if reconcile:
        aggregator = RatingAggregator(reviews=ReviewRepository(db), games=games)
        outcome = await aggregator.reconcile_all()
        console.print(
            f"Ratings reconciled: {outcome.games_corrected} of {outcome.games_checked} corrected"
        )

    return 0


def main():
    parser = argparse.ArgumentParser(description="Sync the GameHub catalog")
    parser.add_argument(
        "--reconcile",
        action="store_true",
        help="Recompute every game's rating after syncing",
    )
    args = parser.parse_args()

    logging.basicConfig(level=get_settings().log_level.upper())
    sys.exit(asyncio.run(run(args.reconcile)))


if __name__ == "__main__":
    main()
