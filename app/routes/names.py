"""HTTP routes for generating and sanitizing names."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict

import azure.functions as func
from azure_functions_openapi.decorator import openapi as openapi_doc

from app import app
from app.constants import DEFAULT_SANITIZATION_CLASS
from app.errors import handle_naming_error
from app.models import (
    NameLookupResponse,
    NamingRequest,
    NamingResponse,
    SanitizeRequest,
    SanitizeResponse,
)
from app.responses import json_message, json_payload
from core.name_service import generate_names, lookup_name
from core.sanitizer import sanitize


def _read_payload(req: func.HttpRequest) -> Dict[str, Any] | None:
    try:
        payload = req.get_json()
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


def _with_timestamp(payload: Dict[str, Any]) -> Dict[str, Any]:
    if payload.get("createdOn") or payload.get("created_on"):
        return payload
    stamped = dict(payload)
    stamped["created_on"] = datetime.now(timezone.utc).isoformat()
    return stamped


def _handle_generate(req: func.HttpRequest) -> func.HttpResponse:
    logging.info("[generate_names] Processing naming request.")

    payload = _read_payload(req)
    if payload is None:
        return json_message("Invalid JSON payload.", status_code=400)

    try:
        result = generate_names(_with_timestamp(payload))
    except Exception as exc:
        return handle_naming_error(exc, log_prefix="generate_names")
    return json_payload(result.to_dict())


def _handle_lookup(req: func.HttpRequest) -> func.HttpResponse:
    resource_type = (req.route_params.get("resource_type") or "").strip()
    if not resource_type:
        return json_message("Resource type is required.", status_code=400)

    sanitization_class = (req.params.get("class") or DEFAULT_SANITIZATION_CLASS).strip()
    logging.info("[lookup_name] Resolving %s name for '%s'.", sanitization_class, resource_type)

    payload = _read_payload(req)
    if payload is None:
        return json_message("Invalid JSON payload.", status_code=400)

    try:
        body = lookup_name(_with_timestamp(payload), resource_type, sanitization_class)
    except Exception as exc:
        return handle_naming_error(exc, log_prefix="lookup_name")
    return json_payload(body)


def _handle_sanitize(req: func.HttpRequest) -> func.HttpResponse:
    payload = _read_payload(req)
    if payload is None:
        return json_message("Invalid JSON payload.", status_code=400)

    name = payload.get("name")
    if not isinstance(name, str):
        return json_message("Missing required field: name.", status_code=400)
    sanitization_class = str(payload.get("class") or DEFAULT_SANITIZATION_CLASS)

    try:
        sanitized = sanitize(name, sanitization_class)
    except Exception as exc:
        return handle_naming_error(exc, log_prefix="sanitize_name")
    return json_payload({"name": name, "class": sanitization_class.lower(), "sanitized": sanitized})


@app.function_name(name="generate_names")
@app.route(route="names", methods=[func.HttpMethod.POST])
@openapi_doc(
    summary="Generate names for every resource type",
    description=(
        "Composes prefix-type-environment-region-suffix names for the built-in and custom "
        "resource types, sanitizes them for each sanitization class, and expands suffix variants."
    ),
    tags=["Names"],
    request_model=NamingRequest,
    response_model=NamingResponse,
    operation_id="generateNames",
    route="/names",
    method="post",
)
def generate_names_route(req: func.HttpRequest) -> func.HttpResponse:
    """Generate every derived name for the request."""

    return _handle_generate(req)


@app.function_name(name="lookup_name")
@app.route(route="names/{resource_type}", methods=[func.HttpMethod.POST])
@openapi_doc(
    summary="Generate the name for a single resource type",
    description="Returns one sanitized name and its suffix variants. Unknown resource types yield 404.",
    tags=["Names"],
    request_model=NamingRequest,
    response_model=NameLookupResponse,
    operation_id="lookupName",
    route="/names/{resource_type}",
    method="post",
)
def lookup_name_route(req: func.HttpRequest) -> func.HttpResponse:
    """Generate the name for one resource type."""

    return _handle_lookup(req)


@app.function_name(name="sanitize_name")
@app.route(route="sanitize", methods=[func.HttpMethod.POST])
@openapi_doc(
    summary="Sanitize an arbitrary name",
    description="Strips disallowed characters, folds case and truncates for the requested class.",
    tags=["Names"],
    request_model=SanitizeRequest,
    response_model=SanitizeResponse,
    operation_id="sanitizeName",
    route="/sanitize",
    method="post",
)
def sanitize_name_route(req: func.HttpRequest) -> func.HttpResponse:
    """Sanitize a single name."""

    return _handle_sanitize(req)
