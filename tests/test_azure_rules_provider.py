import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core import naming_rules
from core.naming_rules import DictionaryRuleProvider, SanitizationRule
from providers.azure_rules import AzureResourceRuleProvider, get_provider


def test_adds_key_vault_and_windows_vm_classes():
    provider = get_provider()

    assert provider.list_classes() == ("general", "key_vault", "storage", "windows_vm")
    assert provider.get_rule("key_vault").max_length == 24
    assert provider.get_rule("WINDOWS_VM").max_length == 15


def test_falls_back_to_base_provider():
    provider = AzureResourceRuleProvider()
    assert provider.get_rule("storage") == naming_rules.STORAGE_RULE
    with pytest.raises(KeyError):
        provider.get_rule("unknown")


def test_wraps_custom_base_provider():
    base = DictionaryRuleProvider({"tiny": SanitizationRule(name="tiny", allowed_characters="a-z", max_length=3)})
    provider = AzureResourceRuleProvider(base=base)

    assert provider.list_classes() == ("key_vault", "tiny", "windows_vm")
    assert provider.get_rule("tiny").apply("abcdef") == "abc"
