"""Table-driven sanitization rules and their pluggable providers."""

from __future__ import annotations

import importlib
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SanitizationRule:
    """Character allow-list, length cap and case policy for one target class."""

    name: str
    allowed_characters: str
    max_length: int
    lowercase: bool = True
    description: Optional[str] = None

    @property
    def strip_pattern(self) -> "re.Pattern[str]":
        return re.compile(f"[^{self.allowed_characters}]")

    def apply(self, name: str) -> str:
        """Strip, fold, then left-truncate ``name``."""

        cleaned = self.strip_pattern.sub("", name)
        if self.lowercase:
            cleaned = cleaned.lower()
        return cleaned[: self.max_length]

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {
            "class": self.name,
            "allowedCharacters": self.allowed_characters,
            "maxLength": self.max_length,
            "lowercase": self.lowercase,
        }
        if self.description:
            data["description"] = self.description
        return data


GENERAL_RULE = SanitizationRule(
    name="general",
    allowed_characters="a-zA-Z0-9-",
    max_length=63,
    description="Most Azure resources: letters, digits and hyphens.",
)
STORAGE_RULE = SanitizationRule(
    name="storage",
    allowed_characters="a-zA-Z0-9",
    max_length=24,
    description="Storage-account style names: letters and digits only.",
)
BUILTIN_RULES: Mapping[str, SanitizationRule] = {
    GENERAL_RULE.name: GENERAL_RULE,
    STORAGE_RULE.name: STORAGE_RULE,
}


class UnknownSanitizationClassError(KeyError):
    """Raised when a caller asks for a sanitization class no provider defines."""

    def __init__(self, sanitization_class: str, known: Iterable[str]) -> None:
        self.sanitization_class = sanitization_class
        self.known = sorted(known)
        super().__init__(f"Unknown sanitization class '{sanitization_class}'. Known classes: {self.known}")

    @property
    def message(self) -> str:
        return str(self.args[0])


class SanitizationRuleProvider(Protocol):
    """Contract for pluggable sanitization rule providers."""

    def get_rule(self, sanitization_class: str) -> SanitizationRule:
        """Return the rule for the class or raise ``UnknownSanitizationClassError``."""

    def list_classes(self) -> Sequence[str]:
        """Enumerate the sanitization classes this provider knows."""


class DictionaryRuleProvider:
    """In-memory provider backed by a plain mapping of rules."""

    def __init__(self, rules: Mapping[str, SanitizationRule]) -> None:
        if not rules:
            raise ValueError("At least one sanitization rule must be configured.")
        self._rules = {key.lower(): rule for key, rule in rules.items()}

    def get_rule(self, sanitization_class: str) -> SanitizationRule:
        key = sanitization_class.lower()
        if key not in self._rules:
            raise UnknownSanitizationClassError(sanitization_class, self._rules)
        return self._rules[key]

    def list_classes(self) -> Sequence[str]:
        return tuple(sorted(self._rules))


_RULES_PATH_ENV = "NAMING_RULES_PATH"
_PROVIDER_ENV = "NAMING_RULE_PROVIDER"


def _load_default_provider() -> SanitizationRuleProvider:
    override = os.environ.get(_RULES_PATH_ENV)
    if not override:
        return DictionaryRuleProvider(BUILTIN_RULES)

    from providers.json_rules import JsonRuleProvider  # Local import to avoid circular dependency

    return JsonRuleProvider(rules_path=Path(override))


def _load_provider_from_env() -> Optional[SanitizationRuleProvider]:
    provider_path = os.environ.get(_PROVIDER_ENV)
    if not provider_path:
        return None

    try:
        module_path, _, attr_name = provider_path.rpartition(".")
        if not module_path or not attr_name:
            raise ValueError(f"{_PROVIDER_ENV} must be in 'module.attr' format")

        module = importlib.import_module(module_path)
        factory = getattr(module, attr_name)
        provider = factory() if callable(factory) else factory
        if not hasattr(provider, "get_rule") or not hasattr(provider, "list_classes"):
            raise TypeError("Provider must define 'get_rule' and 'list_classes' methods")
        return provider  # type: ignore[return-value]
    except Exception:  # pragma: no cover - logged and ignored
        logger.exception("Failed to load sanitization rule provider from environment")
        return None


_provider: SanitizationRuleProvider = _load_default_provider()
_env_provider = _load_provider_from_env()
if _env_provider:
    _provider = _env_provider


def set_rule_provider(provider: SanitizationRuleProvider) -> None:
    """Override the active sanitization rule provider at runtime."""

    global _provider
    _provider = provider


def get_rule_provider() -> SanitizationRuleProvider:
    return _provider


def load_sanitization_rule(sanitization_class: str) -> SanitizationRule:
    """Return the rule for ``sanitization_class``; ``UnknownSanitizationClassError`` when unknown."""

    return _provider.get_rule(sanitization_class)


def list_sanitization_classes() -> Sequence[str]:
    """Return the known classes, ``general`` first when present."""

    classes: List[str] = [str(name).lower() for name in _provider.list_classes()]
    if "general" in classes:
        classes.remove("general")
        classes.insert(0, "general")
    return tuple(classes)


def describe_rule(sanitization_class: str) -> Dict[str, object]:
    """Provide a JSON-compatible description of a sanitization class."""

    rule = load_sanitization_rule(sanitization_class)
    description = rule.to_dict()
    description["outputPattern"] = _output_pattern(rule)
    return description


def _output_pattern(rule: SanitizationRule) -> str:
    allowed = rule.allowed_characters
    if rule.lowercase:
        allowed = allowed.replace("A-Z", "")
    return f"^[{allowed}]{{0,{rule.max_length}}}$"
