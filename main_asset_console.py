"""Mini README: Entry point CLI for the asset hierarchy engine.

This script exposes a Typer CLI that builds classification trees from JSON
record exports, resolves asset file names to keys and scans drop folders.
Settings come from ``ASSETHIERARCHY_*`` environment variables; command
options override them where both exist.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer

from assethierarchy.configuration import get_settings
from assethierarchy.errors import RecordLoadError
from assethierarchy.hierarchy import HierarchyBuilder, build_pivot, render_tree
from assethierarchy.identifiers import AssetFileIndex, IdentifierNormalizer, scan_directory
from assethierarchy.logging_utils import configure_root_logger
from assethierarchy.records import load_records

cli = typer.Typer(help="Build asset classification hierarchies and resolve asset file names.")


def _load_or_exit(records_file: Path):
    try:
        return load_records(records_file)
    except RecordLoadError as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=2) from error


@cli.command()
def build(
    records_file: Path = typer.Argument(..., help="JSON export of asset records."),
    as_json: bool = typer.Option(False, "--json", help="Print the full JSON payload."),
    models: Optional[Path] = typer.Option(None, help="Directory of model files."),
    panoramas: Optional[Path] = typer.Option(None, help="Directory of panorama images."),
) -> None:
    """Build the classification tree and print it with its statistics."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    records = _load_or_exit(records_file)

    normalizer = IdentifierNormalizer.from_settings(settings)
    file_index = AssetFileIndex.from_directories(
        models or settings.model_directory,
        panoramas or settings.panorama_directory,
        normalizer,
    )
    result = HierarchyBuilder.from_settings(settings).build(records)

    if as_json:
        typer.echo(json.dumps(result.as_dict(file_index), indent=2, default=str))
        return
    outline = render_tree(result, file_index)
    if outline:
        typer.echo(outline)
    summary = result.summary()
    typer.echo(
        f"Total assets: {summary['total_assets']} | classified: {summary['classified_assets']}"
        f" | unclassified: {summary['orphaned_assets']} | max depth: {summary['max_depth']}"
    )
    for level, count in summary["level_distribution"].items():
        typer.echo(f"  Level {level}: {count} assets")


@cli.command()
def normalize(
    filenames: List[str] = typer.Argument(..., help="File names to resolve."),
) -> None:
    """Resolve file names to asset keys; exits with 1 if any name fails."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    normalizer = IdentifierNormalizer.from_settings(settings)
    failed = False
    for filename in filenames:
        result = normalizer.normalize(filename)
        if result.matched:
            typer.echo(f"{filename} -> {result.key} (rule {result.rule_index}: {result.rule.value})")
        else:
            failed = True
            typer.echo(f"{filename} -> no match")
    if failed:
        raise typer.Exit(code=1)


@cli.command()
def scan(
    directory: Path = typer.Argument(..., help="Folder of dropped asset files."),
) -> None:
    """Resolve every file in a folder and print the per-file report."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    report = scan_directory(directory, IdentifierNormalizer.from_settings(settings))
    typer.echo(json.dumps(report.as_dict(), indent=2))


@cli.command()
def pivot(
    records_file: Path = typer.Argument(..., help="JSON export of asset records."),
) -> None:
    """Print every asset against the union of metadata parameters."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    records = _load_or_exit(records_file)
    typer.echo(json.dumps(build_pivot(records).as_dict(), indent=2, default=str))


if __name__ == "__main__":
    cli()
