"""Command-line interface for RecordBase.

This module provides the CLI commands for inspecting schemas and running
migrations from JSON exports.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, NoReturn

import click
from pydantic import ValidationError as SchemaValidationError

from recordbase.application.services.data_store_migration import (
    MigrationOptions,
    migrate_data_store,
)
from recordbase.core.config import get_settings
from recordbase.core.logging import configure_logging, get_logger
from recordbase.domain.entities.schema import SchemaDefinition
from recordbase.domain.exceptions import RecordBaseError
from recordbase.domain.services.schema_mapper import (
    map_schema_to_collections,
    map_schema_to_relationships,
    map_schema_to_things,
)
from recordbase.infrastructure.persistence.json_data_store import JsonFileDataStore
from recordbase.infrastructure.persistence.resource_store import ResourceStore


def load_schema(path: str) -> SchemaDefinition:
    """Load and parse a JSON schema file, exiting with a message if it is invalid."""
    try:
        return SchemaDefinition.model_validate_json(Path(path).read_text(encoding="utf-8"))
    except SchemaValidationError as e:
        click.echo(f"Error: invalid schema in {path}:\n{e}", err=True)
        raise SystemExit(1)


def export_store(store: ResourceStore) -> dict[str, list[dict[str, Any]]]:
    """Collect every record of every collection, in insertion order."""
    return {
        name: store.list(name, limit=store.count(name)).data
        for name in store.resources
    }


@click.group()
@click.version_option(version="0.1.0", prog_name="RecordBase")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default=None,
    help="Set log level (overrides RECORDBASE_LOG_LEVEL)",
)
def cli(log_level: str | None) -> None:
    """RecordBase - schema-described record store and data migration tool."""
    settings = get_settings()
    if log_level:
        settings = settings.model_copy(update={"log_level": log_level})
    configure_logging(settings)


@cli.command()
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False))
def schema(schema_file: str) -> None:
    """Print the collections, things and relationships derived from SCHEMA_FILE."""
    definition = load_schema(schema_file)

    click.echo(json.dumps(
        {
            "collections": map_schema_to_collections(definition),
            "things": [thing.to_dict() for thing in map_schema_to_things(definition)],
            "relationships": [
                rel.to_dict() for rel in map_schema_to_relationships(definition)
            ],
        },
        indent=2,
    ))


@cli.command()
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("source_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the migrated records to this JSON file",
)
@click.option("--dry-run", is_flag=True, default=False, help="Count without writing")
@click.option("--upsert", is_flag=True, default=False, help="Overwrite existing records")
@click.option(
    "--collection",
    "collections",
    multiple=True,
    help="Only migrate this collection (repeatable)",
)
@click.option(
    "--batch-size",
    type=click.IntRange(min=1),
    default=None,
    help="Records fetched per page (overrides RECORDBASE_MIGRATION_BATCH_SIZE)",
)
def migrate(
    schema_file: str,
    source_file: str,
    output: str | None,
    dry_run: bool,
    upsert: bool,
    collections: tuple[str, ...],
    batch_size: int | None,
) -> None:
    """Migrate the JSON export SOURCE_FILE into a store built from SCHEMA_FILE.

    SOURCE_FILE maps collection names to lists of records. The migration
    result is printed as JSON; the exit code is 1 if any record failed.
    """
    logger = get_logger(__name__)
    definition = load_schema(schema_file)

    try:
        source = JsonFileDataStore.load(source_file)
    except (ValueError, json.JSONDecodeError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    target = ResourceStore(definition)
    options = MigrationOptions(
        dry_run=dry_run,
        upsert=upsert,
        collections=list(collections) or None,
        batch_size=batch_size,
    )

    try:
        result = asyncio.run(migrate_data_store(source, target, definition, options))
    except RecordBaseError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    click.echo(json.dumps(result.to_dict(), indent=2))

    if output and not dry_run:
        JsonFileDataStore(export_store(target)).dump(output)
        logger.info("Migrated records written", path=output)

    if not result.success:
        raise SystemExit(1)


@cli.command()
def info() -> None:
    """Display RecordBase configuration."""
    settings = get_settings()

    click.echo(f"""
RecordBase v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}

Store:
  Page Limit:   {settings.default_page_limit}

Migration:
  Batch Size:   {settings.migration_batch_size}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `recordbase` command is run
    or when using `python -m recordbase`.
    """
    cli()


if __name__ == "__main__":
    main()
