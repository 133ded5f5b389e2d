"""Shared orchestrator turning a naming request into every derived name."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from core.name_generator import NamingComponents, build_variants, compose_name
from core.naming_rules import UnknownSanitizationClassError, list_sanitization_classes
from core.resource_types import (
    DEFAULT_RESOURCE_TYPES,
    ResourceTypeNotFoundError,
    lookup_short_name,
    merge_resource_types,
)
from core.sanitizer import sanitize_all
from core.validation import NamingValidationError, validate_components, validate_suffixes

logger = logging.getLogger(__name__)

CREATED_ON_TAG = "CreatedOn"
VARIANT_SOURCE_CLASS = "general"

_FIELD_ALIASES = {
    "customResourceTypes": "custom_resource_types",
    "nameSuffixes": "name_suffixes",
    "createdOn": "created_on",
}


@dataclass
class NameGenerationResult:
    components: NamingComponents
    resource_types: Dict[str, str]
    composed: Dict[str, str]
    names: Dict[str, Dict[str, str]]
    variants: Dict[str, Dict[str, str]]
    suffixes: List[str] = field(default_factory=list)
    tags: Dict[str, str] = field(default_factory=dict)

    def _require(self, resource_type: str) -> None:
        if resource_type not in self.resource_types:
            raise ResourceTypeNotFoundError(resource_type, self.resource_types.keys())

    def get_name(self, resource_type: str, sanitization_class: str = VARIANT_SOURCE_CLASS) -> str:
        """Return one sanitized name; a missing key is an error, never ``""``."""

        self._require(resource_type)
        try:
            by_type = self.names[sanitization_class.lower()]
        except KeyError:
            raise UnknownSanitizationClassError(sanitization_class, self.names) from None
        return by_type[resource_type]

    def get_variants(self, resource_type: str) -> Dict[str, str]:
        self._require(resource_type)
        return dict(self.variants[resource_type])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "components": self.components.to_dict(),
            "resourceTypes": dict(self.resource_types),
            "composed": dict(self.composed),
            "names": {key: dict(value) for key, value in self.names.items()},
            "nameSuffixes": list(self.suffixes),
            "variants": {key: dict(value) for key, value in self.variants.items()},
            "tags": dict(self.tags),
        }


def build_tags(tags: Optional[Mapping[str, Any]], created_on: Optional[str]) -> Dict[str, str]:
    """Merge caller tags with the ``CreatedOn`` audit tag."""

    if tags is not None and not isinstance(tags, Mapping):
        raise NamingValidationError("tags", tags, "tags must be an object of string values.")
    merged = {str(key): str(value) for key, value in (tags or {}).items()}
    if created_on:
        merged[CREATED_ON_TAG] = str(created_on)
    return merged


def _normalise_payload(payload: Mapping[str, Any]) -> Dict[str, Any]:
    if not isinstance(payload, Mapping):
        raise NamingValidationError("payload", payload, "Request payload must be a JSON object.")
    normalised = dict(payload)
    for alias, target in _FIELD_ALIASES.items():
        if alias in normalised and target not in normalised:
            normalised[target] = normalised.pop(alias)
    return normalised


def generate_names(
    payload: Mapping[str, Any],
    *,
    defaults: Mapping[str, str] = DEFAULT_RESOURCE_TYPES,
) -> NameGenerationResult:
    """Validate the request, then derive names for every resource type."""

    normalised = _normalise_payload(payload)

    validate_components(normalised)
    suffixes = validate_suffixes(normalised.get("name_suffixes"))
    resource_types = merge_resource_types(defaults, normalised.get("custom_resource_types"))
    tags = build_tags(normalised.get("tags"), normalised.get("created_on"))

    components = NamingComponents.from_mapping(normalised)
    composed = {
        resource_type: compose_name(components, short_name)
        for resource_type, short_name in resource_types.items()
    }

    classes = list_sanitization_classes()
    names = sanitize_all(composed, classes)
    variant_source = names.get(VARIANT_SOURCE_CLASS) or names[classes[0]]
    variants = build_variants(variant_source, suffixes)

    logger.info(
        "Generated %d names across %d sanitization classes with %d suffix variants each.",
        len(composed),
        len(names),
        len(suffixes),
    )

    return NameGenerationResult(
        components=components,
        resource_types=resource_types,
        composed=composed,
        names=names,
        variants=variants,
        suffixes=suffixes,
        tags=tags,
    )


def lookup_name(
    payload: Mapping[str, Any],
    resource_type: str,
    sanitization_class: str = VARIANT_SOURCE_CLASS,
) -> Dict[str, Any]:
    """Generate names and return the entry for a single resource type."""

    result = generate_names(payload)
    name = result.get_name(resource_type, sanitization_class)
    return {
        "resourceType": resource_type,
        "shortName": lookup_short_name(result.resource_types, resource_type),
        "class": sanitization_class.lower(),
        "composed": result.composed[resource_type],
        "name": name,
        "variants": result.get_variants(resource_type),
        "tags": dict(result.tags),
    }


__all__ = [
    "CREATED_ON_TAG",
    "NameGenerationResult",
    "NamingValidationError",
    "ResourceTypeNotFoundError",
    "UnknownSanitizationClassError",
    "build_tags",
    "generate_names",
    "lookup_name",
]
