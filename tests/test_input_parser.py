from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from entity_autocomplete.input_parser import parse_input


def test_parse_input_without_separator_has_no_namespace():
    parsed = parse_input("testService")
    assert parsed.namespace is None
    assert parsed.name_pattern == "testService"
    assert parsed.raw == "testService"
    assert parsed.has_namespace is False


def test_parse_input_splits_namespace_and_name():
    parsed = parse_input("pl/testService")
    assert parsed.namespace == "pl"
    assert parsed.name_pattern == "testService"
    assert parsed.has_namespace is True


def test_parse_input_splits_only_at_first_separator():
    parsed = parse_input("px/http_data/extra")
    assert parsed.namespace == "px"
    assert parsed.name_pattern == "http_data/extra"


def test_parse_input_trailing_separator_keeps_namespace_with_empty_pattern():
    parsed = parse_input("pl/")
    assert parsed.namespace == "pl"
    assert parsed.name_pattern == ""
    assert parsed.is_wildcard is True


def test_parse_input_leading_separator_keeps_empty_namespace():
    parsed = parse_input("/abc")
    assert parsed.namespace == ""
    assert parsed.has_namespace is True
    assert parsed.name_pattern == "abc"


def test_parse_input_empty_string_is_a_wildcard():
    parsed = parse_input("")
    assert parsed.namespace is None
    assert parsed.name_pattern == ""
    assert parsed.is_wildcard is True


def test_parse_input_does_not_validate_or_unescape():
    parsed = parse_input("  we ird\\ns /Na me ")
    assert parsed.namespace == "  we ird\\ns "
    assert parsed.name_pattern == "Na me "
