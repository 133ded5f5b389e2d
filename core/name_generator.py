# File: core/name_generator.py
# Summary: Composes hub-and-spoke resource names and their suffix variants.

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence


@dataclass(frozen=True)
class NamingComponents:
    """The caller-supplied pieces every generated name is built from."""

    prefix: Optional[str] = None
    suffix: Optional[str] = None
    environment: Optional[str] = None
    region: Optional[str] = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, object]) -> "NamingComponents":
        values = {}
        for field in ("prefix", "suffix", "environment", "region"):
            raw = payload.get(field)
            values[field] = str(raw) if raw not in (None, "") else None
        return cls(**values)

    def segments(self, short_name: str) -> List[str]:
        """Ordered non-empty segments with edge hyphens trimmed, so joins never double up."""

        ordered = [self.prefix, short_name, self.environment, self.region, self.suffix]
        trimmed = (segment.strip("-") for segment in ordered if segment)
        return [segment for segment in trimmed if segment]

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "prefix": self.prefix,
            "suffix": self.suffix,
            "environment": self.environment,
            "region": self.region,
        }


def compose_name(components: NamingComponents, short_name: str) -> str:
    """
    Join the components around the resource-type short name.

    Parameters:
    - components: prefix, suffix, environment and region (any may be absent)
    - short_name: the resource type token (e.g. "palofw" or "rg")

    Returns:
    - ``prefix-short_name-environment-region-suffix`` with absent segments
      dropped along with their hyphen. Leading and trailing hyphens of each
      segment are trimmed; a hyphen-only segment counts as absent. No character
      or length checks happen here.
    """
    if not isinstance(short_name, str) or not short_name.strip("-"):
        raise ValueError("short_name must be a non-empty string")
    return "-".join(components.segments(short_name))


def build_variants(names: Mapping[str, str], suffixes: Sequence[str]) -> Dict[str, Dict[str, str]]:
    """Expand every name into ``{suffix: "name-suffix"}`` keyed by resource type."""

    return {
        resource_type: {suffix: f"{name}-{suffix}" for suffix in suffixes}
        for resource_type, name in names.items()
    }
