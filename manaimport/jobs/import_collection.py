"""
Import a ManaBox collection export into the card store.

Replaces all stored cards with the enriched contents of the export and
writes a fresh collection summary. Any failure aborts the whole run
with exit status 1; re-run the import once the cause is fixed.

Usage:
    python -m manaimport.jobs.import_collection --csv MTG.csv
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from manaimport.config import Settings, settings
from manaimport.db.database import create_engine, create_session_factory, init_db
from manaimport.db.gateway import SqlCardStore
from manaimport.errors import ImportRunError, PersistenceFailedError
from manaimport.models.inventory import CollectionSummary
from manaimport.parsers.manabox import load_inventory
from manaimport.services.pipeline import ImportPipeline
from manaimport.services.scryfall_client import ScryfallClient

logger = logging.getLogger(__name__)


async def _init_store(engine: AsyncEngine) -> None:
    try:
        await init_db(engine)
    except SQLAlchemyError as e:
        raise PersistenceFailedError(f"Failed to initialize card store: {e}") from e


async def run_import(config: Settings, csv_path: Path | None = None) -> CollectionSummary:
    """
    Run one full import.

    Args:
        config: Database, Scryfall and pacing settings
        csv_path: ManaBox export to read. Defaults to config.csv_file

    Returns:
        The stored collection summary

    Raises:
        ImportRunError: If any step fails. Batches stored before the
            failure are not rolled back.
    """
    if csv_path is None:
        csv_path = Path(config.csv_file)

    try:
        engine = create_engine(config.database_url, echo=config.debug)
    except SQLAlchemyError as e:
        raise PersistenceFailedError(f"Invalid database URL: {e}") from e

    try:
        await _init_store(engine)

        async with create_session_factory(engine)() as session:
            store = SqlCardStore(session)
            await store.delete_all_summaries()
            await store.delete_all_cards()

            logger.info("Reading data from %s", csv_path)
            records = load_inventory(csv_path)

            async with ScryfallClient.create(config) as client:
                pipeline = ImportPipeline(
                    client,
                    store,
                    batch_size=config.batch_size,
                    pacing_seconds=config.request_interval_seconds,
                )
                return await pipeline.run(records)
    finally:
        await engine.dispose()


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import a ManaBox CSV export")
    parser.add_argument(
        "--csv",
        type=Path,
        default=None,
        help=f"ManaBox export to import (default: {settings.csv_file})",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="SQLAlchemy async database URL (default: DATABASE_URL or settings)",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point. Returns the process exit status."""
    args = _parse_args(argv)

    config = settings
    if args.database_url:
        config = settings.model_copy(update={"database_url": args.database_url})

    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger.info("Importing ManaBox data into %s", config.app_name)

    try:
        asyncio.run(run_import(config, args.csv))
    except ImportRunError as e:
        logger.error("Failed to import data: %s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
