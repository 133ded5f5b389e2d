import json
import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core import naming_rules
from providers.json_rules import JsonRuleProvider


def _write_rules(tmp_path, filename, payload):
    rules_file = tmp_path / filename
    rules_file.write_text(json.dumps(payload), encoding="utf-8")
    return rules_file


def _base_layer():
    return {
        "metadata": {"name": "base", "priority": 0},
        "classes": {
            "storage": {"max_length": 20},
        },
    }


def test_provider_layers_over_builtin_rules(tmp_path):
    _write_rules(tmp_path, "base.json", _base_layer())

    provider = JsonRuleProvider(rules_path=tmp_path)

    storage = provider.get_rule("storage")
    assert storage.max_length == 20
    assert storage.allowed_characters == "a-zA-Z0-9"
    assert provider.get_rule("general") == naming_rules.GENERAL_RULE
    assert provider.list_classes() == ("general", "storage")


def test_provider_merges_layers_by_priority(tmp_path):
    _write_rules(tmp_path, "base.json", _base_layer())
    overlay = {
        "metadata": {"name": "overlay", "priority": 10},
        "classes": {
            "storage": {"max_length": 18, "description": "Tighter storage names"},
            "key_vault": {"allowed_characters": "a-zA-Z0-9-", "max_length": 24},
        },
    }
    _write_rules(tmp_path, "overlay.json", overlay)

    provider = JsonRuleProvider(rules_path=tmp_path)

    assert provider.get_rule("storage").max_length == 18
    assert provider.get_rule("storage").description == "Tighter storage names"
    key_vault = provider.get_rule("Key_Vault")
    assert key_vault.max_length == 24
    assert key_vault.lowercase is True
    assert key_vault.apply("Neko-KV-Prod-WEU-Platform-Connectivity") == "neko-kv-prod-weu-platfor"


def test_provider_skips_disabled_layers(tmp_path):
    _write_rules(tmp_path, "base.json", _base_layer())
    disabled = {
        "metadata": {"name": "disabled", "priority": 999, "enabled": False},
        "classes": {"storage": {"max_length": 3}},
    }
    _write_rules(tmp_path, "disabled.json", disabled)

    provider = JsonRuleProvider(rules_path=tmp_path)
    assert provider.get_rule("storage").max_length == 20


def test_provider_unknown_class_raises_key_error(tmp_path):
    _write_rules(tmp_path, "base.json", _base_layer())
    provider = JsonRuleProvider(rules_path=tmp_path)

    with pytest.raises(KeyError):
        provider.get_rule("mystery")


def test_provider_reload_picks_up_directory_changes(tmp_path):
    _write_rules(tmp_path, "base.json", _base_layer())

    provider = JsonRuleProvider(rules_path=tmp_path)
    assert provider.get_rule("storage").max_length == 20

    updated = _base_layer()
    updated["classes"]["storage"]["max_length"] = 22
    _write_rules(tmp_path, "base.json", updated)

    provider.reload()
    assert provider.get_rule("storage").max_length == 22


def test_provider_accepts_single_file(tmp_path):
    rules_file = _write_rules(tmp_path, "rules.json", {"classes": {"general": {"max_length": 40}}})

    provider = JsonRuleProvider(rules_path=rules_file)
    assert provider.get_rule("general").max_length == 40


def test_provider_without_base_rules_requires_definitions(tmp_path):
    rules_file = _write_rules(tmp_path, "rules.json", {"classes": {}})

    with pytest.raises(ValueError):
        JsonRuleProvider(rules_path=rules_file, base_rules={})


def test_provider_missing_path(tmp_path):
    with pytest.raises(FileNotFoundError):
        JsonRuleProvider(rules_path=tmp_path / "absent.json")


@pytest.mark.parametrize(
    "classes",
    [
        {"alpha": None},
        {"alpha": 123},
        {"alpha": "text"},
        {"alpha": {"max_length": 10}},
        {"alpha": {"allowed_characters": "a-z"}},
        {"alpha": {"allowed_characters": "", "max_length": 10}},
        {"alpha": {"allowed_characters": "z-a", "max_length": 10}},
        {"storage": {"max_length": 0}},
    ],
)
def test_provider_rejects_invalid_class_config(tmp_path, classes):
    rules_file = _write_rules(tmp_path, "rules.json", {"classes": classes})

    with pytest.raises(ValueError):
        JsonRuleProvider(rules_path=rules_file)


def test_default_provider_uses_rules_path_from_environment(tmp_path, monkeypatch):
    rules_file = _write_rules(tmp_path, "rules.json", {"classes": {"storage": {"max_length": 12}}})
    monkeypatch.setenv("NAMING_RULES_PATH", str(rules_file))

    provider = naming_rules._load_default_provider()

    assert isinstance(provider, JsonRuleProvider)
    assert provider.get_rule("storage").max_length == 12


def test_default_provider_without_environment_uses_builtins(monkeypatch):
    monkeypatch.delenv("NAMING_RULES_PATH", raising=False)

    provider = naming_rules._load_default_provider()

    assert provider.list_classes() == ("general", "storage")


def test_provider_factory_loaded_from_environment(monkeypatch):
    monkeypatch.setenv("NAMING_RULE_PROVIDER", "providers.azure_rules.get_provider")

    provider = naming_rules._load_provider_from_env()

    assert provider is not None
    assert "key_vault" in provider.list_classes()


def test_set_rule_provider_replaces_active_provider(tmp_path, monkeypatch):
    monkeypatch.setattr(naming_rules, "_provider", naming_rules.get_rule_provider())
    rules_file = _write_rules(tmp_path, "rules.json", {"classes": {"storage": {"max_length": 10}}})

    naming_rules.set_rule_provider(JsonRuleProvider(rules_path=rules_file))

    assert naming_rules.load_sanitization_rule("storage").max_length == 10


@pytest.mark.parametrize("lowercase", ["false", 0, None])
def test_provider_rejects_non_boolean_lowercase(tmp_path, lowercase):
    _write_rules(
        tmp_path,
        "rules.json",
        {"classes": {"mixed": {"allowed_characters": "a-zA-Z", "max_length": 10, "lowercase": lowercase}}},
    )

    with pytest.raises(ValueError, match="lowercase"):
        JsonRuleProvider(rules_path=tmp_path)


def test_provider_honours_boolean_lowercase(tmp_path):
    _write_rules(
        tmp_path,
        "rules.json",
        {"classes": {"mixed": {"allowed_characters": "a-zA-Z", "max_length": 10, "lowercase": False}}},
    )

    provider = JsonRuleProvider(rules_path=tmp_path)
    assert provider.get_rule("mixed").apply("AbC") == "AbC"
