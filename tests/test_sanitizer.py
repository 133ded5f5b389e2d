import pathlib
import re
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core import naming_rules
from core.naming_rules import DictionaryRuleProvider, SanitizationRule
from core.sanitizer import sanitize, sanitize_all


AWKWARD_NAMES = [
    "",
    "neko-palofw-prod-weu-01",
    "Neko-PaloFW-Prod-WEU-01",
    "---",
    "a" * 200,
    "neko_rg.prod weu/01",
    "Ünïcödé-nämé-ß",
    "  spaced  out  ",
    "x-" * 80,
    "UPPER" * 20,
    "!@#$%^&*()",
]


@pytest.fixture(autouse=True)
def builtin_rules(monkeypatch):
    monkeypatch.setattr(naming_rules, "_provider", DictionaryRuleProvider(naming_rules.BUILTIN_RULES))


def test_storage_strips_hyphens_and_lowercases():
    assert sanitize("Neko-PaloFW-Prod-WEU-01", "storage") == "nekopalofwprodweu01"


def test_general_keeps_hyphens_and_lowercases():
    assert sanitize("Neko-PaloFW-Prod-WEU-01") == "neko-palofw-prod-weu-01"


def test_strips_characters_outside_allow_list():
    assert sanitize("neko_rg.prod weu/01", "general") == "nekorgprodweu01"


@pytest.mark.parametrize("sanitization_class,limit", [("general", 63), ("storage", 24)])
def test_truncates_to_class_limit(sanitization_class, limit):
    result = sanitize("abc" * 50, sanitization_class)
    assert len(result) == limit
    assert result == ("abc" * 50)[:limit]


def test_everything_stripped_yields_empty_string():
    assert sanitize("!@#$%", "storage") == ""
    assert sanitize("---", "storage") == ""


@pytest.mark.parametrize("name", AWKWARD_NAMES)
@pytest.mark.parametrize("sanitization_class", ["general", "storage"])
def test_sanitize_is_idempotent(name, sanitization_class):
    once = sanitize(name, sanitization_class)
    assert sanitize(once, sanitization_class) == once


@pytest.mark.parametrize("name", AWKWARD_NAMES)
def test_outputs_respect_length_and_character_class(name):
    general = sanitize(name, "general")
    storage = sanitize(name, "storage")

    assert len(general) <= 63
    assert len(storage) <= 24
    assert re.fullmatch(r"[a-z0-9-]*", general)
    assert re.fullmatch(r"[a-z0-9]*", storage)


def test_truncation_can_collide_for_long_prefixes():
    prefix = "contosoplatformconnectivity"
    first = sanitize(f"{prefix}-rg-prod-weu-01", "storage")
    second = sanitize(f"{prefix}-kv-prod-weu-01", "storage")
    assert first == second == "contosoplatformconnectiv"


def test_unknown_class_raises_key_error():
    with pytest.raises(KeyError) as exc:
        sanitize("name", "mystery")
    assert isinstance(exc.value, naming_rules.UnknownSanitizationClassError)
    assert exc.value.sanitization_class == "mystery"
    assert exc.value.known == ["general", "storage"]
    assert "general" in exc.value.message


def test_class_lookup_is_case_insensitive():
    assert sanitize("Neko-RG", "STORAGE") == "nekorg"


def test_sanitize_all_uses_every_registered_class():
    result = sanitize_all({"resource_group": "Neko-RG-Prod"})
    assert result == {
        "general": {"resource_group": "neko-rg-prod"},
        "storage": {"resource_group": "nekorgprod"},
    }


def test_new_class_is_a_data_change(monkeypatch):
    rules = dict(naming_rules.BUILTIN_RULES)
    rules["short"] = SanitizationRule(name="short", allowed_characters="a-zA-Z", max_length=5)
    monkeypatch.setattr(naming_rules, "_provider", DictionaryRuleProvider(rules))

    assert sanitize("Neko-RG-01", "short") == "nekor"
    assert naming_rules.list_sanitization_classes() == ("general", "short", "storage")


def test_rule_without_lowercase_preserves_case():
    rule = SanitizationRule(name="mixed", allowed_characters="a-zA-Z", max_length=10, lowercase=False)
    assert rule.apply("Neko-RG-01") == "NekoRG"


def test_describe_rule_reports_output_pattern():
    description = naming_rules.describe_rule("storage")
    assert description["class"] == "storage"
    assert description["maxLength"] == 24
    assert description["lowercase"] is True
    assert description["outputPattern"] == "^[a-z0-9]{0,24}$"


def test_describe_rule_unknown_class():
    with pytest.raises(KeyError):
        naming_rules.describe_rule("unknown")


def test_list_sanitization_classes_puts_general_first():
    assert naming_rules.list_sanitization_classes() == ("general", "storage")
