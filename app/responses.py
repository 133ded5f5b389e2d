"""JSON response builders shared by the naming routes."""

from __future__ import annotations

import json
from typing import Mapping

import azure.functions as func


def json_payload(payload: Mapping[str, object], *, status_code: int = 200) -> func.HttpResponse:
    """Serialise ``payload`` as JSON with sorted keys."""

    return func.HttpResponse(
        json.dumps(payload, sort_keys=True),
        mimetype="application/json",
        status_code=status_code,
    )


def json_message(message: str, *, status_code: int) -> func.HttpResponse:
    return json_payload({"message": message}, status_code=status_code)
