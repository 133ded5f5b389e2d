import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.resource_types import (
    DEFAULT_RESOURCE_TYPES,
    ResourceTypeNotFoundError,
    lookup_short_name,
    merge_resource_types,
)
from core.validation import NamingValidationError


def test_defaults_include_firewall_and_route_entries():
    assert DEFAULT_RESOURCE_TYPES["palo_alto_vm_series"] == "palofw"
    assert DEFAULT_RESOURCE_TYPES["route_table_route"] == "route"
    assert DEFAULT_RESOURCE_TYPES["custom_vm"] == "vm"


def test_defaults_are_immutable():
    with pytest.raises(TypeError):
        DEFAULT_RESOURCE_TYPES["custom_vm"] = "xvm"  # type: ignore[index]


def test_override_takes_precedence():
    merged = merge_resource_types(DEFAULT_RESOURCE_TYPES, {"custom_vm": "xvm"})
    assert merged["custom_vm"] == "xvm"
    assert merged["palo_alto_vm_series"] == "palofw"
    assert DEFAULT_RESOURCE_TYPES["custom_vm"] == "vm"


def test_new_keys_are_added_alongside_defaults():
    merged = merge_resource_types(DEFAULT_RESOURCE_TYPES, {"fortinet_firewall": "fgfw"})
    assert merged["fortinet_firewall"] == "fgfw"
    for key, value in DEFAULT_RESOURCE_TYPES.items():
        assert merged[key] == value
    assert len(merged) == len(DEFAULT_RESOURCE_TYPES) + 1


def test_merge_without_overrides_copies_defaults():
    merged = merge_resource_types()
    assert merged == dict(DEFAULT_RESOURCE_TYPES)
    merged["resource_group"] = "changed"
    assert DEFAULT_RESOURCE_TYPES["resource_group"] == "rg"


@pytest.mark.parametrize(
    "overrides",
    [
        ["custom_vm", "xvm"],
        "custom_vm=xvm",
        {"custom_vm": 5},
        {"custom_vm": ""},
        {"custom_vm": "-"},
        {"": "xvm"},
    ],
)
def test_merge_rejects_non_string_mappings(overrides):
    with pytest.raises(NamingValidationError) as exc:
        merge_resource_types(DEFAULT_RESOURCE_TYPES, overrides)
    assert exc.value.field == "custom_resource_types"


def test_lookup_short_name_miss_is_reported():
    with pytest.raises(ResourceTypeNotFoundError) as exc:
        lookup_short_name({"resource_group": "rg"}, "fortinet_firewall")
    assert exc.value.resource_type == "fortinet_firewall"
    assert exc.value.to_dict()["knownResourceTypes"] == ["resource_group"]
