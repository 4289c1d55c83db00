from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

import typer

from strrank.config import AppConfig, load_config
from strrank.errors import ConfigError
from strrank.utils import parse_scalar, read_candidates


ConfigOption = typer.Option(
    None,
    "--config",
    exists=True,
    file_okay=True,
    dir_okay=False,
    readable=True,
    resolve_path=True,
    path_type=Path,
    help="Path to a TOML configuration file.",
)

CandidatesFileOption = typer.Option(
    None,
    "--file",
    "-f",
    exists=True,
    dir_okay=False,
    readable=True,
    path_type=Path,
    help="Read additional candidates from a file, one per line.",
)


def load_app_config(config_path: Optional[Path]) -> AppConfig:
    if config_path is None:
        return AppConfig()
    try:
        return load_config(config_path.resolve())
    except (ConfigError, TypeError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc


def parse_build_args(values: Optional[Iterable[str]]) -> List[object]:
    return [parse_scalar(value) for value in values or ()]


def collect_candidates(
    candidates: Optional[Iterable[str]], candidates_file: Optional[Path]
) -> List[str]:
    items = list(candidates or ())
    if candidates_file is not None:
        items.extend(read_candidates(candidates_file))
    return items


__all__ = [
    "CandidatesFileOption",
    "ConfigOption",
    "collect_candidates",
    "load_app_config",
    "parse_build_args",
]
