from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional


def configure_logging(level: int | str = logging.INFO) -> None:
    """Initialize application logging if it has not already been configured."""

    if isinstance(level, str):
        resolved_level = logging.getLevelName(level.upper())
        if isinstance(resolved_level, int):
            level = resolved_level
        else:
            raise ValueError(f"Invalid log level: {level}")

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def ensure_file_exists(path: Path, description: Optional[str] = None) -> Path:
    """Ensure ``path`` exists, raising a helpful :class:`FileNotFoundError`."""

    if not path.exists():
        desc = description or "file"
        raise FileNotFoundError(f"Required {desc} not found at {path}")
    return path


def parse_scalar(text: str) -> Any:
    """Interpret a command line token as an int, a float, or a plain string."""

    value = text.strip()
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return text


def read_candidates(path: Path, encoding: str = "utf-8") -> List[str]:
    """Read one candidate per line, skipping blank lines."""

    ensure_file_exists(path, "candidates file")
    with path.open("r", encoding=encoding) as fh:
        return [line.rstrip("\r\n") for line in fh if line.strip()]


__all__ = [
    "configure_logging",
    "ensure_file_exists",
    "parse_scalar",
    "read_candidates",
]
