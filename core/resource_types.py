"""Built-in resource-type vocabulary and override merging."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping, Sequence

from core.validation import NamingValidationError


class ResourceTypeNotFoundError(LookupError):
    """Raised when a resource-type key is absent from the merged vocabulary."""

    def __init__(self, resource_type: str, known: Sequence[str] = ()) -> None:
        self.resource_type = resource_type
        self.known = tuple(sorted(known))
        super().__init__(f"Unknown resource type '{resource_type}'.")

    def to_dict(self) -> Dict[str, object]:
        return {
            "message": str(self),
            "resourceType": self.resource_type,
            "knownResourceTypes": list(self.known),
        }


# Short-name tokens for the hub-and-spoke landing zone.
DEFAULT_RESOURCE_TYPES: Mapping[str, str] = MappingProxyType(
    {
        "availability_set": "avail",
        "custom_vm": "vm",
        "key_vault": "kv",
        "linux_virtual_machine": "vm",
        "load_balancer": "lb",
        "log_analytics_workspace": "log",
        "managed_disk": "disk",
        "monitor_diagnostic_setting": "diag",
        "network_interface": "nic",
        "network_security_group": "nsg",
        "network_security_group_rule": "nsgr",
        "palo_alto_vm_series": "palofw",
        "private_dns_zone_link": "pdnslink",
        "private_endpoint": "pe",
        "private_service_connection": "psc",
        "public_ip": "pip",
        "resource_group": "rg",
        "route_table": "rt",
        "route_table_route": "route",
        "storage_account": "st",
        "subnet": "snet",
        "virtual_network": "vnet",
        "virtual_network_peering": "peer",
    }
)


def _require_string_mapping(value: object, field: str) -> Mapping[str, str]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise NamingValidationError(field, value, f"{field} must be an object mapping resource types to short names.")
    for key, short_name in value.items():
        if not isinstance(key, str) or not key:
            raise NamingValidationError(field, key, f"{field} keys must be non-empty strings.")
        if not isinstance(short_name, str) or not short_name.strip("-"):
            raise NamingValidationError(
                field,
                short_name,
                f"{field} entry '{key}' must map to a non-empty string that is not only hyphens.",
            )
    return value


def merge_resource_types(
    defaults: Mapping[str, str] = DEFAULT_RESOURCE_TYPES,
    overrides: Mapping[str, str] | None = None,
) -> Dict[str, str]:
    """Return a new vocabulary where ``overrides`` win on key collision."""

    merged = dict(_require_string_mapping(defaults, "resource_types"))
    merged.update(_require_string_mapping(overrides, "custom_resource_types"))
    return merged


def lookup_short_name(resource_types: Mapping[str, str], resource_type: str) -> str:
    try:
        return resource_types[resource_type]
    except KeyError:
        raise ResourceTypeNotFoundError(resource_type, resource_types.keys()) from None


__all__ = [
    "DEFAULT_RESOURCE_TYPES",
    "ResourceTypeNotFoundError",
    "lookup_short_name",
    "merge_resource_types",
]
