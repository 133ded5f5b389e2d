"""Provider adding Azure resource-specific sanitization classes."""

from __future__ import annotations

from typing import Sequence

from core import naming_rules
from core.naming_rules import DictionaryRuleProvider, SanitizationRule

KEY_VAULT_RULE = SanitizationRule(
    name="key_vault",
    allowed_characters="a-zA-Z0-9-",
    max_length=24,
    description="Key Vault names: letters, digits and hyphens, at most 24 characters.",
)
WINDOWS_VM_RULE = SanitizationRule(
    name="windows_vm",
    allowed_characters="a-zA-Z0-9-",
    max_length=15,
    description="Windows computer names (NetBIOS limit of 15 characters).",
)


class AzureResourceRuleProvider:
    """Extend a base provider with Key Vault and Windows VM classes."""

    def __init__(self, base: naming_rules.SanitizationRuleProvider | None = None) -> None:
        self._base = base or DictionaryRuleProvider(naming_rules.BUILTIN_RULES)
        self._extra = {
            KEY_VAULT_RULE.name: KEY_VAULT_RULE,
            WINDOWS_VM_RULE.name: WINDOWS_VM_RULE,
        }

    def get_rule(self, sanitization_class: str) -> SanitizationRule:
        rule = self._extra.get(sanitization_class.lower())
        if rule is not None:
            return rule
        return self._base.get_rule(sanitization_class)

    def list_classes(self) -> Sequence[str]:
        return tuple(sorted(set(self._base.list_classes()) | set(self._extra)))


def get_provider() -> AzureResourceRuleProvider:
    """Factory used by the NAMING_RULE_PROVIDER environment variable."""

    return AzureResourceRuleProvider()
