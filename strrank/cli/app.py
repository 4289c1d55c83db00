from __future__ import annotations

import logging
import os
from typing import Optional

import typer

from strrank import __version__
from strrank.utils import configure_logging


LOGGER_NAME = "strrank.cli"
LOG_LEVEL_ENV_VARS = ("STRRANK_LOG_LEVEL", "LOG_LEVEL")


def _resolve_log_level(log_level: Optional[str]) -> int | str:
    """Pick the CLI flag, then the first set environment variable, then INFO."""

    if log_level:
        return log_level
    for name in LOG_LEVEL_ENV_VARS:
        env_level = os.getenv(name)
        if env_level:
            return env_level
    return logging.INFO


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"strrank {__version__}")
        raise typer.Exit()


def create_app() -> typer.Typer:
    app = typer.Typer(
        help="Rank strings by similarity to a query",
        no_args_is_help=True,
    )

    @app.callback()
    def _configure_cli(
        log_level: Optional[str] = typer.Option(None, help="Python logging level"),
        version: bool = typer.Option(
            False,
            "--version",
            callback=_print_version,
            is_eager=True,
            help="Show the strrank version and exit.",
        ),
    ) -> None:
        """Configure logging before running any command."""

        try:
            configure_logging(level=_resolve_log_level(log_level))
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--log-level") from exc

    return app


logger = logging.getLogger(LOGGER_NAME)

app = create_app()

__all__ = ["app", "logger"]
