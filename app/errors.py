"""Shared error helpers for HTTP routes."""

from __future__ import annotations

import logging

import azure.functions as func

from core.name_service import NamingValidationError, ResourceTypeNotFoundError, UnknownSanitizationClassError

from .responses import json_message, json_payload


def handle_naming_error(exc: Exception, *, log_prefix: str) -> func.HttpResponse:
    if isinstance(exc, NamingValidationError):
        return json_payload(exc.to_dict(), status_code=400)
    if isinstance(exc, ResourceTypeNotFoundError):
        return json_payload(exc.to_dict(), status_code=404)
    if isinstance(exc, UnknownSanitizationClassError):
        return json_message(exc.message, status_code=400)

    logging.exception("[%s] Unexpected error", log_prefix)
    return json_message("Error generating names.", status_code=500)
