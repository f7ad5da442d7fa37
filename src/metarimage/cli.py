"""METAR image report CLI application.

This module provides the command-line interface: the report command,
registered under the configured name and alias, and configuration
utilities.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Final

import typer
import yaml

from metarimage.controller import MetarReporter
from metarimage.i18n import get_messages
from metarimage.settings import UserSettings

logger: Final = logging.getLogger(__name__)  # Will be "metarimage.cli"

# Options for the report command
ICAO_ARGUMENT = typer.Argument(None, help="ICAO airport code, e.g. KSFO")
CONFIG_OPTION = typer.Option(None, "--config", "-c", exists=True, dir_okay=False)
OUTPUT_OPTION = typer.Option(
    None, "--output", "-o", dir_okay=False, help="Image path (default: <ICAO>.jpg)"
)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")


def create_app(settings: UserSettings | None = None) -> typer.Typer:
    """Build the CLI with the report command under the configured names.

    Args:
        settings: Settings providing command name and alias (default: defaults)

    Returns:
        Typer application
    """
    settings = settings or UserSettings()
    messages = get_messages(settings.locale)

    app = typer.Typer(help="METAR image report CLI", add_completion=False)
    config_app = typer.Typer(help="Config helpers")
    app.add_typer(config_app, name="config")

    def report(
        ctx: typer.Context,
        icao: str | None = ICAO_ARGUMENT,
        config: Path | None = CONFIG_OPTION,
        output: Path | None = OUTPUT_OPTION,
        debug: bool = DEBUG_OPTION,
    ) -> None:
        try:
            run_settings = UserSettings.load(config) if config else settings
        except RuntimeError as exc:
            typer.secho(str(exc), fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1) from exc
        run_messages = get_messages(run_settings.locale)

        if not icao or not icao.strip():
            typer.echo(run_messages.invalid_icao)
            typer.echo(ctx.get_help())
            raise typer.Exit(code=1)

        reporter = MetarReporter(run_settings, debug=debug)
        outcome = reporter.handle(icao)
        if not outcome.ok or outcome.image is None:
            typer.secho(outcome.message or run_messages.fetch_failed, fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

        dst = output or Path(f"{icao.strip().upper()}.jpg")
        dst.write_bytes(outcome.image)
        typer.echo(run_messages.image_saved.format(path=dst))

    help_text = f"{messages.command_description}\n\n{messages.command_usage}"
    app.command(settings.command_name, help=help_text)(report)
    if settings.command_alias != settings.command_name:
        app.command(settings.command_alias, help=help_text, hidden=True)(report)

    # ───────────────────────── config sub-commands ───────────────────────────
    @config_app.command("validate")
    def validate_config(file: Path) -> None:
        """Validate a YAML config file against the schema."""
        try:
            UserSettings.load(file)
            typer.echo("✅ Config valid")
        except (FileNotFoundError, RuntimeError) as exc:
            typer.secho(str(exc), fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1) from exc

    @config_app.command("defaults")
    def dump_defaults() -> None:
        """Print the default configuration, lookup tables included, as YAML."""
        typer.echo(
            yaml.safe_dump(
                UserSettings().model_dump(mode="json"),
                allow_unicode=True,
                sort_keys=False,
            )
        )

    return app


app = create_app()


def main() -> None:
    """Console entry point: load settings, then run the CLI."""
    try:
        settings = UserSettings.load()
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        sys.exit(1)

    try:
        create_app(settings)()
    except KeyboardInterrupt:
        sys.exit(0)


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    main()
