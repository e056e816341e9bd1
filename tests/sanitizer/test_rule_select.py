# tests/sanitizer/test_rule_select.py
import pytest

from sanitizer.exceptions import ConfigurationAmbiguityError, InvalidSanitizationError
from sanitizer.model import RuleRecord, RunOptions
from sanitizer.services.rule_select_service import RuleSelectService


def make_service(config, path=None):
    return RuleSelectService(config, RunOptions(path=path))


def test_canonicalize_scalar_value():
    """Een kale waarde wordt verpakt als één record."""
    records = make_service({"selector": "div.content"}).canonicalize("selector")
    assert len(records) == 1
    assert records[0].value == "div.content"
    assert records[0].path is None


def test_canonicalize_single_record():
    """Een enkel record met 'value' wordt in een lijst gezet."""
    records = make_service({"selector": {"value": "main", "path": "^/blog"}}).canonicalize("selector")
    assert [(r.value, r.path) for r in records] == [("main", "^/blog")]


def test_canonicalize_list_of_records_keeps_order():
    config = {"selector": [{"value": "a"}, {"value": "b"}, {"value": "c"}]}
    records = make_service(config).canonicalize("selector")
    assert [r.value for r in records] == ["a", "b", "c"]


def test_canonicalize_absent_kind_returns_none():
    assert make_service({}).canonicalize("selector") is None
    assert make_service({}).select("selector") is None


def test_canonicalize_array_kind_records_without_value():
    """dom_transform records hebben geen 'value' maar blijven records."""
    config = {"dom_transform": [{"type": "remove", "selector": ".ad"}]}
    records = make_service(config).canonicalize("dom_transform")
    assert len(records) == 1
    assert records[0].get("type") == "remove"
    assert records[0].get("selector") == ".ad"


def test_canonicalize_rejects_malformed_entries():
    config = {"sanitization": [{"pattern": "x"}, "not-a-record"]}
    with pytest.raises(InvalidSanitizationError):
        make_service(config).canonicalize("sanitization")


@pytest.mark.parametrize("record", [
    {"value": "div", "path": 5},
    {"value": "div", "disabled": "maybe"},
])
def test_canonicalize_rejects_invalid_record_fields(record):
    with pytest.raises(InvalidSanitizationError) as exc:
        make_service({"selector": record}).canonicalize("selector")
    assert "selector" in str(exc.value)


def test_select_single_match():
    assert make_service({"remove_spacing": True}).select("remove_spacing").value is True


def test_select_too_many_rules_is_fatal():
    """Twee toepasbare selectors: de engine weigert te gokken."""
    config = {"selector": [{"value": "a"}, {"value": "b"}]}
    with pytest.raises(ConfigurationAmbiguityError) as exc:
        make_service(config).select("selector")
    assert exc.value.kind == "selector"
    assert "too many matching rules of type selector" in str(exc.value)


def test_select_both_paths_match_is_ambiguous():
    config = {"selector": [{"value": "a", "path": "^/blog"}, {"value": "b", "path": "blog"}]}
    with pytest.raises(ConfigurationAmbiguityError):
        make_service(config, path="/blog/post").select("selector")


def test_select_path_filters_rules():
    config = {"selector": [{"value": "a", "path": "^/blog"}, {"value": "b", "path": "^/shop"}]}
    assert make_service(config, path="/shop/item/1").select("selector").value == "b"


def test_path_uses_search_not_full_match():
    rule = RuleRecord(value="x", path="blog")
    assert make_service({}, path="/en/blog/post").want(rule)
    assert not make_service({}, path="/en/news").want(rule)


def test_want_without_run_path_keeps_rule():
    assert make_service({}).want(RuleRecord(value="x", path="^/blog"))


def test_want_disabled_and_missing():
    service = make_service({})
    assert not service.want(None)
    assert not service.want(RuleRecord(value="x", disabled=True))
    assert service.want(RuleRecord(value="x", disabled=False))


def test_disabled_rule_does_not_count_as_match():
    config = {"selector": [{"value": "a", "disabled": True}, {"value": "b"}]}
    assert make_service(config).select("selector").value == "b"


def test_invalid_path_pattern():
    with pytest.raises(InvalidSanitizationError):
        make_service({}, path="/x").want(RuleRecord(value="x", path="("))


def test_applicable_returns_all_wanted_in_order():
    config = {"sanitization": [
        {"pattern": "1"},
        {"pattern": "2", "disabled": True},
        {"pattern": "3", "path": "^/other"},
        {"pattern": "4"},
    ]}
    records = make_service(config, path="/page").applicable("sanitization")
    assert [r.get("pattern") for r in records] == ["1", "4"]
