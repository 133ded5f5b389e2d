"""Sanitize composed names for a target resource class."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping

from core.naming_rules import list_sanitization_classes, load_sanitization_rule


def sanitize(name: str, sanitization_class: str = "general") -> str:
    """Return ``name`` reduced to the class's characters, case and length.

    Truncation is a plain left-anchored cut. Two long names sharing a prefix can
    therefore collapse to the same result.
    """

    return load_sanitization_rule(sanitization_class).apply(name)


def sanitize_all(
    names: Mapping[str, str],
    sanitization_classes: Iterable[str] | None = None,
) -> Dict[str, Dict[str, str]]:
    """Sanitize every name under every class: ``{class: {resource_type: name}}``."""

    classes = list(sanitization_classes) if sanitization_classes is not None else list_sanitization_classes()
    result: Dict[str, Dict[str, str]] = {}
    for sanitization_class in classes:
        rule = load_sanitization_rule(sanitization_class)
        result[sanitization_class] = {resource_type: rule.apply(name) for resource_type, name in names.items()}
    return result
