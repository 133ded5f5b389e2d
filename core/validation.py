"""Upfront validation for naming components."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping

COMPONENT_FIELDS = ("prefix", "suffix", "environment", "region")
_COMPONENT_PATTERN = re.compile(r"[a-zA-Z0-9-]+")


class NamingValidationError(ValueError):
    """Raised when an input field violates its format constraint."""

    def __init__(self, field: str, value: Any, message: str | None = None) -> None:
        self.field = field
        self.value = value
        super().__init__(message or f"{field} '{value}' may only contain letters, digits, and hyphens.")

    def to_dict(self) -> Dict[str, Any]:
        value = self.value if isinstance(self.value, (str, int, float, bool)) or self.value is None else repr(self.value)
        return {"message": str(self), "field": self.field, "value": value}


def is_absent(value: Any) -> bool:
    return value is None or value == ""


def validate_component(field: str, value: Any) -> None:
    """Raise :class:`NamingValidationError` when a present component is malformed."""

    if is_absent(value):
        return
    if not isinstance(value, str):
        raise NamingValidationError(field, value, f"{field} must be a string.")
    if not _COMPONENT_PATTERN.fullmatch(value):
        raise NamingValidationError(field, value)


def validate_components(components: Mapping[str, Any]) -> None:
    """Check every naming component, stopping at the first violation."""

    for field in COMPONENT_FIELDS:
        validate_component(field, components.get(field))


def validate_suffixes(suffixes: Any, field: str = "name_suffixes") -> List[str]:
    if suffixes is None:
        return []
    if isinstance(suffixes, (str, bytes)) or not isinstance(suffixes, (list, tuple)):
        raise NamingValidationError(field, suffixes, f"{field} must be an array of strings.")
    for suffix in suffixes:
        if not isinstance(suffix, str) or not suffix:
            raise NamingValidationError(field, suffix, f"{field} entries must be non-empty strings.")
    return list(suffixes)
