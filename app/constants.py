"""Shared constants for the naming Function routes."""

API_TITLE = "Hub-and-Spoke Naming API"
API_VERSION = "1.0.0"
DEFAULT_SANITIZATION_CLASS = "general"
