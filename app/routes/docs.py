"""Routes serving OpenAPI metadata and Swagger UI."""

from __future__ import annotations

import json
from typing import Any

import azure.functions as func
from azure_functions_openapi.openapi import get_openapi_json
from azure_functions_openapi.swagger_ui import render_swagger_ui

from app import app
from app.constants import API_TITLE, API_VERSION


def _hoist_defs(node: Any, components: dict[str, Any]) -> None:
    if isinstance(node, dict):
        defs = node.pop("$defs", None)
        if defs:
            for name, schema in defs.items():
                components.setdefault(name, schema)
        for key, value in node.items():
            if key == "$ref" and isinstance(value, str) and value.startswith("#/$defs/"):
                node[key] = value.replace("#/$defs/", "#/components/schemas/")
            else:
                _hoist_defs(value, components)
    elif isinstance(node, list):
        for item in node:
            _hoist_defs(item, components)


def _normalise_openapi_spec(raw_json: str) -> str:
    document = json.loads(raw_json)
    components = document.setdefault("components", {}).setdefault("schemas", {})
    _hoist_defs(document, components)
    servers = document.setdefault("servers", [])
    if not any(server.get("url") == "/api" for server in servers):
        # Relative server URL keeps the Functions /api route prefix in Swagger UI requests.
        servers.append({"url": "/api"})
    return json.dumps(document)


@app.function_name(name="openapi_spec")
@app.route(route="openapi.json", methods=[func.HttpMethod.GET], auth_level=func.AuthLevel.ANONYMOUS)
def openapi_spec(req: func.HttpRequest) -> func.HttpResponse:
    """Serve the generated OpenAPI document for the HTTP API."""

    raw = get_openapi_json(title=API_TITLE, version=API_VERSION)
    return func.HttpResponse(_normalise_openapi_spec(raw), mimetype="application/json", status_code=200)


@app.function_name(name="swagger_ui")
@app.route(route="docs", methods=[func.HttpMethod.GET], auth_level=func.AuthLevel.ANONYMOUS)
def swagger_ui(req: func.HttpRequest) -> func.HttpResponse:
    """Serve an interactive Swagger UI backed by the generated OpenAPI document."""

    return render_swagger_ui(title=f"{API_TITLE} - Swagger", openapi_url="/api/openapi.json")
