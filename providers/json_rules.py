"""Sanitization rule provider that loads definitions from JSON files."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Sequence

from core.naming_rules import BUILTIN_RULES, SanitizationRule, UnknownSanitizationClassError


@dataclass(slots=True)
class _RuleLayer:
    path: Path
    priority: int
    enabled: bool
    name: str
    classes_config: Dict[str, Mapping[str, Any]]


class JsonRuleProvider:
    """Layer JSON sanitization classes over a base rule set."""

    def __init__(
        self,
        *,
        rules_path: str | Path,
        base_rules: Mapping[str, SanitizationRule] = BUILTIN_RULES,
    ) -> None:
        self._path = Path(rules_path)
        if not self._path.exists():
            raise FileNotFoundError(f"Naming rules path '{self._path}' does not exist.")
        self._base_rules = dict(base_rules)
        self._rules: Dict[str, SanitizationRule] = {}
        self.reload()

    def reload(self) -> None:
        """Reload rule definitions from disk."""

        rules: Dict[str, SanitizationRule] = {key.lower(): rule for key, rule in self._base_rules.items()}

        for layer in _load_rule_layers(self._path):
            for key, config in layer.classes_config.items():
                rules[key] = _to_rule(key, config, fallback_rule=rules.get(key), source=layer.path)

        if not rules:
            raise ValueError(f"No sanitization classes defined under '{self._path}'.")
        self._rules = rules

    def get_rule(self, sanitization_class: str) -> SanitizationRule:
        key = sanitization_class.lower()
        if key not in self._rules:
            raise UnknownSanitizationClassError(sanitization_class, self._rules)
        return self._rules[key]

    def list_classes(self) -> Sequence[str]:
        return tuple(sorted(self._rules))

    def export_rules(self) -> Dict[str, SanitizationRule]:
        """Return a copy of the merged rules for inspection."""

        return dict(self._rules)


def _to_rule(
    name: str,
    config: Mapping[str, object],
    *,
    fallback_rule: SanitizationRule | None,
    source: Path,
) -> SanitizationRule:
    if "allowed_characters" in config:
        allowed = str(config["allowed_characters"])
    elif fallback_rule is not None:
        allowed = fallback_rule.allowed_characters
    else:
        raise ValueError(f"Class '{name}' in '{source}' must provide 'allowed_characters'.")

    if not allowed:
        raise ValueError(f"Class '{name}' in '{source}' has an empty 'allowed_characters'.")
    try:
        re.compile(f"[^{allowed}]")
    except re.error as exc:
        raise ValueError(f"Class '{name}' in '{source}' has an invalid character class: {exc}") from exc

    if "max_length" in config:
        max_length = int(config["max_length"])
    elif fallback_rule is not None:
        max_length = fallback_rule.max_length
    else:
        raise ValueError(f"Class '{name}' in '{source}' must provide 'max_length'.")
    if max_length < 1:
        raise ValueError(f"Class '{name}' in '{source}' must have a positive 'max_length'.")

    if "lowercase" in config:
        lowercase = config["lowercase"]
        if not isinstance(lowercase, bool):
            raise ValueError(f"Class '{name}' in '{source}' must set 'lowercase' to true or false.")
    elif fallback_rule is not None:
        lowercase = fallback_rule.lowercase
    else:
        lowercase = True

    description = config.get("description")
    if description is None and fallback_rule is not None:
        description = fallback_rule.description

    return SanitizationRule(
        name=name,
        allowed_characters=allowed,
        max_length=max_length,
        lowercase=lowercase,
        description=str(description) if description else None,
    )


def _load_rule_layers(path: Path) -> list[_RuleLayer]:
    if path.is_dir():
        candidates = sorted(file for file in path.glob("*.json") if file.is_file())
        layers = [_parse_rule_layer(candidate) for candidate in candidates]
    else:
        layers = [_parse_rule_layer(path)]

    enabled_layers = [layer for layer in layers if layer.enabled]
    enabled_layers.sort(key=lambda layer: (layer.priority, layer.path.name))
    return enabled_layers


def _parse_rule_layer(path: Path) -> _RuleLayer:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, Mapping):
        raise ValueError(f"Rule file '{path}' must contain a JSON object at the top level.")

    metadata = data.get("metadata") or {}
    if not isinstance(metadata, Mapping):
        raise ValueError(f"Rule file '{path}' must contain an object for 'metadata'.")

    classes_raw = data.get("classes") or {}
    if not isinstance(classes_raw, Mapping):
        raise ValueError(f"'classes' in '{path}' must be an object mapping class names to definitions.")

    classes_config: Dict[str, Mapping[str, Any]] = {}
    for key, value in classes_raw.items():
        if not isinstance(value, Mapping):
            raise ValueError(f"Class definition for '{key}' in '{path}' must be an object.")
        classes_config[str(key).lower()] = value

    return _RuleLayer(
        path=path,
        priority=int(metadata.get("priority", 0)),
        enabled=bool(metadata.get("enabled", True)),
        name=str(metadata.get("name") or path.stem),
        classes_config=classes_config,
    )


def load_provider_from_json(path: str | Path) -> JsonRuleProvider:
    """Convenience helper for environment-driven configuration."""

    return JsonRuleProvider(rules_path=path)
