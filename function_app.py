"""Azure Functions v2 programming model entry point."""

from __future__ import annotations

from app import app

__all__ = ["app"]
