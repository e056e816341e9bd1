# tests/sanitizer/test_sanitize_pipeline.py
import pytest

from sanitizer.controllers.sanitize_controller import Sanitizer, sanitize
from sanitizer.exceptions import (
    ConfigurationAmbiguityError,
    ConfigurationError,
    InvalidSanitizationError,
    UnknownTransformKindError,
)
from sanitizer.model import RunOptions

PAGE = """<!DOCTYPE html>
<html>
<head><title>Page</title></head>
<body>
  <nav class="menu">Home | About</nav>
  <div class="content"><span class="ts">12345</span> hi</div>
  <aside class="ad">Buy now</aside>
  <footer>Generated at 2024-01-01 10:00:00</footer>
</body>
</html>"""


def test_empty_input_short_circuits():
    assert sanitize("", {"selector": "div"}) == ""
    assert sanitize(b"", {}) == ""


def test_remove_spacing_round_trip():
    out = sanitize("<p>a   b</p>", {"remove_spacing": True}, {})
    assert "a b" in out
    assert "a  b" not in out


def test_remove_spacing_disabled_keeps_spaces():
    out = sanitize("<p>a   b</p>", {"remove_spacing": False})
    assert "a   b" in out


def test_selector_and_tree_scoped_rule():
    """Het end-to-end scenario: alleen div.content blijft over, met TIMESTAMP."""
    config = {
        "selector": "div.content",
        "sanitization": [{"selector": "span.ts", "value": [r"\d+", "TIMESTAMP"]}],
    }
    out = sanitize('<div class="content"><span class="ts">12345</span> hi</div>', config, {})
    assert '<div class="content">' in out
    assert "TIMESTAMP" in out
    assert "12345" not in out


def test_selector_discards_surrounding_structure():
    out = sanitize(PAGE, {"selector": "div.content"})
    assert "content" in out
    assert "menu" not in out
    assert "Buy now" not in out
    assert "DOCTYPE" not in out


def test_scoped_rules_run_before_global_rules():
    """Scoped regels draaien op de boom, globale daarna op de string, elk in eigen volgorde."""
    config = {"sanitization": [
        {"pattern": "s2done", "substitute": "g1done"},
        {"selector": "p.x", "pattern": "foo", "substitute": "bar"},
        {"pattern": "g1done", "substitute": "final"},
        {"selector": "p.x", "pattern": "bar", "substitute": "s2done"},
    ]}
    out = sanitize('<p class="x">foo</p>', config)
    assert "final" in out
    assert "foo" not in out


def test_global_rule_sees_serialized_markup():
    config = {"sanitization": [{"pattern": r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", "substitute": "DATE"}]}
    out = sanitize(PAGE, config)
    assert "Generated at DATE" in out


def test_dom_transforms_in_order():
    config = {
        "dom_transform": [
            {"type": "remove", "selector": ["nav", "aside"]},
            {"type": "remove", "selector": "footer", "disabled": True},
            {"type": "unwrap", "selector": "span.ts"},
        ],
    }
    out = sanitize(PAGE, config)
    assert "Home" not in out
    assert "Buy now" not in out
    assert "Generated at" in out
    assert 'class="ts"' not in out
    assert "12345 hi" in out


def test_path_scoped_rules():
    config = {"dom_transform": [{"type": "remove", "selector": "footer", "path": "^/blog/"}]}
    assert "Generated at" not in sanitize(PAGE, config, {"path": "/blog/post"})
    assert "Generated at" in sanitize(PAGE, config, RunOptions(path="/shop/item"))


def test_regions_reassemble_document():
    config = {
        "regions": [
            {"name": "main", "selector": "div.content"},
            {"name": "foot", "selector": "footer"},
        ],
        "selector": "nav",
    }
    out = sanitize(PAGE, config, {"output": ["foot", "main"]})
    assert out.index('<region id="foot">') < out.index('<region id="main">')
    assert "Home" not in out  # selector is skipped when regions apply


def test_malformed_regions_fall_back_to_selector():
    config = {"regions": [{"name": "main"}], "selector": "div.content"}
    out = sanitize(PAGE, config, {"output": ["main"]})
    assert "<region" not in out
    assert "content" in out
    assert "menu" not in out


def test_non_list_output_falls_back_to_selector():
    config = {"regions": [{"name": "main", "selector": "div.content"}], "selector": "div.content"}
    out = sanitize(PAGE, config, {"output": "main"})
    assert "<region" not in out
    assert "12345" in out
    assert "menu" not in out


def test_invalid_run_options_are_configuration_errors():
    with pytest.raises(ConfigurationError):
        sanitize(PAGE, {}, {"path": ["not", "a", "path"]})


def test_malformed_rule_record_is_named_error():
    with pytest.raises(InvalidSanitizationError):
        sanitize(PAGE, {"selector": {"value": "div", "path": 5}}, {"path": "/x"})


def test_regions_without_output_fall_back():
    config = {"regions": [{"name": "main", "selector": "div.content"}]}
    out = sanitize(PAGE, config, {})
    assert "<region" not in out
    assert "Home" in out


def test_ambiguous_selector_is_fatal():
    with pytest.raises(ConfigurationAmbiguityError):
        sanitize(PAGE, {"selector": [{"value": "nav"}, {"value": "footer"}]})


def test_unknown_transform_is_fatal():
    with pytest.raises(UnknownTransformKindError):
        sanitize(PAGE, {"dom_transform": [{"type": "explode", "selector": "p"}]})


def test_invalid_bytes_are_dropped():
    out = sanitize(b'<p title="x\xff">ok\xfe\xc3\xa9</p>', {})
    out.encode("utf-8")
    assert "oké" in out


def test_lone_surrogates_are_dropped():
    out = sanitize("<p>a\udcffb</p>", {})
    out.encode("utf-8")
    assert "ab" in out


def test_output_has_no_wrapper_artifacts():
    out = sanitize(PAGE, {"remove_spacing": True})
    lines = out.splitlines()
    assert not out.startswith("<?xml")
    assert "<html>" not in lines and "</html>" not in lines
    assert all(line.strip() for line in lines)


def test_sanitizer_releases_tree_after_run():
    run = Sanitizer("<p>x</p>", {})
    out = run.sanitize()
    assert run.node is None
    assert run.html == out
