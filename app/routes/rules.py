"""Routes exposing sanitization rules and the resource-type vocabulary."""

from __future__ import annotations

import azure.functions as func
from azure_functions_openapi.decorator import openapi as openapi_doc

from app import app
from app.models import SanitizationRuleResponse
from app.responses import json_message, json_payload
from core import naming_rules
from core.resource_types import DEFAULT_RESOURCE_TYPES


def _handle_list_rules(req: func.HttpRequest) -> func.HttpResponse:
    expand = (req.params.get("expand") or "").lower()
    classes = naming_rules.list_sanitization_classes()

    if expand in {"details", "full"}:
        details = [naming_rules.describe_rule(sanitization_class) for sanitization_class in classes]
        return json_payload({"rules": details})

    return json_payload({"classes": list(classes)})


def _handle_get_rule(req: func.HttpRequest) -> func.HttpResponse:
    sanitization_class = (req.route_params.get("sanitization_class") or "").strip()
    if not sanitization_class:
        return json_message("Sanitization class is required.", status_code=400)

    try:
        description = naming_rules.describe_rule(sanitization_class)
    except naming_rules.UnknownSanitizationClassError as exc:
        return json_message(exc.message, status_code=404)

    return json_payload(description)


def _handle_list_resource_types(req: func.HttpRequest) -> func.HttpResponse:
    return json_payload({"resourceTypes": dict(DEFAULT_RESOURCE_TYPES)})


@app.function_name(name="list_sanitization_rules")
@app.route(route="rules", methods=[func.HttpMethod.GET], auth_level=func.AuthLevel.ANONYMOUS)
@openapi_doc(
    summary="List sanitization classes",
    description="Returns the known sanitization classes. Use expand=details for full rule definitions.",
    tags=["Sanitization Rules"],
    operation_id="listSanitizationRules",
    route="/rules",
    method="get",
)
def list_sanitization_rules(req: func.HttpRequest) -> func.HttpResponse:
    """Return the collection of sanitization classes."""

    return _handle_list_rules(req)


@app.function_name(name="get_sanitization_rule")
@app.route(route="rules/{sanitization_class}", methods=[func.HttpMethod.GET], auth_level=func.AuthLevel.ANONYMOUS)
@openapi_doc(
    summary="Retrieve a sanitization rule",
    description="Returns the allowed characters, length cap and case policy for a class.",
    tags=["Sanitization Rules"],
    response_model=SanitizationRuleResponse,
    operation_id="getSanitizationRule",
    route="/rules/{sanitization_class}",
    method="get",
)
def get_sanitization_rule(req: func.HttpRequest) -> func.HttpResponse:
    """Return the rule details for a single class."""

    return _handle_get_rule(req)


@app.function_name(name="list_resource_types")
@app.route(route="resource-types", methods=[func.HttpMethod.GET], auth_level=func.AuthLevel.ANONYMOUS)
@openapi_doc(
    summary="List built-in resource types",
    description="Returns the default resource type to short-name table that custom types are merged over.",
    tags=["Resource Types"],
    operation_id="listResourceTypes",
    route="/resource-types",
    method="get",
)
def list_resource_types(req: func.HttpRequest) -> func.HttpResponse:
    """Return the built-in resource-type vocabulary."""

    return _handle_list_resource_types(req)
