from __future__ import annotations

from .app import app

# Import command modules so they register with the shared Typer application.
from . import rank as _rank  # noqa: F401
from . import bench as _bench  # noqa: F401

__all__ = ["app"]
