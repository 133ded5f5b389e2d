"""Application package exposing the shared FunctionApp instance.

The FunctionApp is configured with FUNCTION-level authentication so every route
requires a function key unless it explicitly opts out. Naming is a pure
computation, so no per-route role checks are applied.
"""

from __future__ import annotations

import azure.functions as func

app = func.FunctionApp(http_auth_level=func.AuthLevel.FUNCTION)

# Import route modules so decorators execute at import time
from .routes import docs as _docs_routes  # noqa: F401
from .routes import names as _name_routes  # noqa: F401
from .routes import rules as _rule_routes  # noqa: F401

__all__ = ["app"]
