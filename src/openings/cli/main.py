"""Typer CLI for opening placement."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from openings.application import RunOutput, get_factory
from openings.application.config import (
    ConfigError,
    MaterializationPolicy,
    PlacementSettingsConfig,
    load_config,
    load_settings,
    merge_settings,
)
from openings.cli.commands import display_load_error, validate_command
from openings.domain import OpeningPlacementError, TieBreak
from openings.infrastructure.exporters import ExporterRegistry

app = typer.Typer(
    name="openings",
    help="Place openings where straight ducts and pipes cross walls.",
)

app.command(name="validate")(validate_command)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _parse_formats(output_formats: str) -> list[str]:
    if output_formats.lower() == "all":
        return ExporterRegistry.available_formats()
    formats = [f.strip().lower() for f in output_formats.split(",") if f.strip()]
    available = ExporterRegistry.available_formats()
    invalid = [f for f in formats if f not in available]
    if invalid:
        typer.echo(f"Unknown formats: {', '.join(invalid)}", err=True)
        typer.echo(f"Available formats: {', '.join(available)}", err=True)
        raise typer.Exit(code=1)
    return formats


def _export(
    output: RunOutput, formats: list[str], output_dir: Path, project_name: str
) -> None:
    manager = get_factory().create_export_manager(output_dir)
    try:
        paths = manager.export_all(formats, output, project_name)
    except OSError as e:
        typer.echo(f"Error: export failed: {e}", err=True)
        raise typer.Exit(code=1)
    for format_name, path in paths.items():
        typer.echo(f"Wrote {format_name}: {path}")


@app.command()
def place(
    scene_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON scene file"),
    ],
    settings_file: Annotated[
        Path | None,
        typer.Option("--settings", "-s", help="Path to a JSON placement settings file"),
    ] = None,
    policy: Annotated[
        MaterializationPolicy | None,
        typer.Option("--policy", help="Reaction to opening creation failures"),
    ] = None,
    tie_break: Annotated[
        TieBreak | None,
        typer.Option("--tie-break", help="Which hit represents several hits on one wall"),
    ] = None,
    output_formats: Annotated[
        str | None,
        typer.Option(
            "--output-formats",
            help="Comma-separated export formats (json, dxf) or 'all'",
        ),
    ] = None,
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Directory for exported files"),
    ] = Path("."),
    project_name: Annotated[
        str,
        typer.Option("--project-name", help="Base name for exported files"),
    ] = "openings",
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Place openings for every straight duct and pipe crossing a wall.

    Examples:
        openings place tower-b.json
        openings place tower-b.json --policy abort_category --tie-break nearest
        openings place tower-b.json --output-formats all --output-dir ./out
    """
    _configure_logging(verbose)
    formats = _parse_formats(output_formats) if output_formats else []

    try:
        scene = load_config(scene_file)
        settings: PlacementSettingsConfig | None = (
            load_settings(settings_file) if settings_file is not None else None
        )
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    scene = merge_settings(
        scene, settings, materialization_policy=policy, tie_break=tie_break
    )

    factory = get_factory()
    host = factory.create_host(scene)
    command = factory.create_place_command(host, scene.settings)
    try:
        output = command.execute()
    except OpeningPlacementError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(factory.get_report_formatter().format(output))

    if formats:
        typer.echo()
        _export(output, formats, output_dir, project_name)


@app.command(name="formats")
def list_formats() -> None:
    """List available export formats."""
    for format_name in ExporterRegistry.available_formats():
        typer.echo(format_name)


if __name__ == "__main__":
    app()
