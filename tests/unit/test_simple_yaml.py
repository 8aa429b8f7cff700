"""Unit tests for machina_mcp/parsers/simple_yaml.py - lenient YAML subset."""

import pytest

from machina_mcp.parsers.simple_yaml import (
    InvalidValueKind,
    coerce_scalar,
    needs_quotes,
    parse,
    serialize,
)


class TestCoerceScalar:
    """Test scalar coercion rules and their ordering."""

    def test_quoted_text_is_stripped(self):
        assert coerce_scalar('"hello world"') == "hello world"
        assert coerce_scalar("'single'") == "single"

    def test_quoted_numeral_stays_text(self):
        assert coerce_scalar('"42"') == "42"
        assert coerce_scalar("'true'") == "true"

    def test_no_escape_processing(self):
        assert coerce_scalar('"a\\nb"') == "a\\nb"

    def test_mismatched_quotes_are_text(self):
        assert coerce_scalar("\"abc'") == "\"abc'"

    def test_booleans_and_null(self):
        assert coerce_scalar("true") is True
        assert coerce_scalar("false") is False
        assert coerce_scalar("null") is None

    def test_booleans_are_case_sensitive(self):
        assert coerce_scalar("True") == "True"
        assert coerce_scalar("NULL") == "NULL"

    def test_numbers(self):
        assert coerce_scalar("42") == 42
        assert isinstance(coerce_scalar("42"), int)
        assert coerce_scalar("-7") == -7
        assert coerce_scalar("3.5") == 3.5
        assert coerce_scalar("-0.25") == -0.25

    def test_exponent_numbers(self):
        assert coerce_scalar("1e-05") == 1e-05
        assert coerce_scalar("1e+16") == 1e16
        assert coerce_scalar("-2E3") == -2000.0
        assert isinstance(coerce_scalar("2E3"), float)

    def test_version_strings_are_text(self):
        assert coerce_scalar("1.0.0") == "1.0.0"
        assert coerce_scalar("12abc") == "12abc"

    def test_bracket_sequence(self):
        assert coerce_scalar("[1, 2, 3]") == [1, 2, 3]
        assert coerce_scalar('["a", "b"]') == ["a", "b"]
        assert coerce_scalar("[]") == []

    def test_bracket_fallback_keeps_raw_text(self):
        assert coerce_scalar("[1, 2,") == "[1, 2,"
        assert coerce_scalar("[soccer, nba]") == "[soccer, nba]"

    def test_plain_text(self):
        assert coerce_scalar("reporter-recap") == "reporter-recap"
        assert coerce_scalar("$.get('event')") == "$.get('event')"


class TestParse:
    """Test indentation-tracked parsing."""

    def test_empty_input(self):
        assert parse("") == {}
        assert parse("\n\n# only a comment\n") == {}

    def test_flat_mapping(self):
        assert parse("name: recap\ncount: 3\nactive: true") == {
            "name": "recap",
            "count": 3,
            "active": True,
        }

    def test_nested_mapping_depth(self):
        text = "key1:\n  key2:\n    key3: value"
        assert parse(text) == {"key1": {"key2": {"key3": "value"}}}

    def test_dedent_returns_to_parent(self):
        text = "a:\n  b:\n    c: 1\n  d: 2\ne: 3"
        assert parse(text) == {"a": {"b": {"c": 1}, "d": 2}, "e": 3}

    def test_comment_and_blank_line_tolerance(self):
        clean = "setup:\n  title: Recap\n  version: 2\nworkflow:\n  name: recap"
        noisy = (
            "# header comment\n\n"
            "setup:\n"
            "  # nested comment\n"
            "  title: Recap\n\n"
            "  version: 2\n"
            "    # deeper comment\n"
            "workflow:\n\n"
            "  name: recap\n"
        )
        assert parse(noisy) == parse(clean)

    def test_list_items_aggregate_under_items(self):
        text = "tags:\n  - a\n  - b\n  - c"
        assert parse(text) == {"tags": {"items": ["a", "b", "c"]}}

    def test_top_level_list_items(self):
        assert parse("- 1\n- two\n-") == {"items": [1, "two", ""]}

    def test_list_items_coerce_scalars(self):
        text = "values:\n  - 1\n  - true\n  - \"x: y\""
        assert parse(text) == {"values": {"items": [1, True, "x: y"]}}

    def test_split_on_first_colon_only(self):
        assert parse("url: https://docs.machina.gg/intro") == {
            "url": "https://docs.machina.gg/intro"
        }

    def test_numeric_vs_quoted_numeral(self):
        assert parse("key: 42") == {"key": 42}
        assert parse('key: "42"') == {"key": "42"}

    def test_bracket_fallback(self):
        assert parse("key: [1, 2,") == {"key": "[1, 2,"}

    def test_inline_sequence(self):
        assert parse('sports: ["soccer", "nba"]') == {"sports": ["soccer", "nba"]}

    def test_duplicate_keys_overwrite(self):
        assert parse("a: 1\na: 2") == {"a": 2}

    def test_unparseable_lines_are_ignored(self):
        text = "title: Recap\njust some words\n-dash-without-space\nversion: 1"
        assert parse(text) == {"title": "Recap", "version": 1}

    def test_empty_value_creates_empty_mapping(self):
        assert parse("setup:\nworkflow:\n  name: x") == {"setup": {}, "workflow": {"name": "x"}}

    def test_deeper_line_without_parent_stays_in_current_mapping(self):
        assert parse("a: 1\n  b: 2\nc: 3") == {"a": 1, "b": 2, "c": 3}

    def test_parameter_marker_preserved(self, sample_template_yaml):
        result = parse(sample_template_yaml)
        event_code = result["workflow"]["inputs"]["event_code"]
        assert event_code == {
            "type": "parameter",
            "description": "Sport event identifier",
            "required": True,
        }
        assert result["setup"]["version"] == "1.0.0"
        assert result["workflow"]["outputs"]["status"] == "$.get('workflow-status')"


class TestNeedsQuotes:
    """Test quoting decisions for text values."""

    @pytest.mark.parametrize(
        "text",
        ["", "a: b", "line\nbreak", "#tag", " leading", "trailing ", "\tindented"],
    )
    def test_requires_quotes(self, text):
        assert needs_quotes(text) is True

    @pytest.mark.parametrize(
        "text",
        ["plain", "reporter-recap", "two words", "1.0.0", "$.get('x')", "42"],
    )
    def test_no_quotes(self, text):
        assert needs_quotes(text) is False


class TestSerialize:
    """Test value-to-text rendering."""

    def test_scalars(self):
        assert serialize(None) == "null"
        assert serialize(True) == "true"
        assert serialize(False) == "false"
        assert serialize(42) == "42"
        assert serialize(2.5) == "2.5"
        assert serialize("plain") == "plain"

    def test_quoted_text(self):
        assert serialize("a: b") == '"a: b"'
        assert serialize("") == '""'
        assert serialize('say "hi": now') == '"say \\"hi\\": now"'

    def test_unquoted_text_is_verbatim(self):
        assert serialize({"k": 'say "hi"'}) == 'k: say "hi"'

    def test_empty_containers(self):
        assert serialize({}) == "{}"
        assert serialize([]) == "[]"
        assert serialize({"a": {}, "b": []}) == "a: {}\nb: []"

    def test_nested_mapping(self):
        value = {"key1": {"key2": {"key3": "value"}}, "flag": False}
        assert serialize(value) == "key1:\n  key2:\n    key3: value\nflag: false"

    def test_sequence_under_key(self):
        assert serialize({"tags": ["a", "b"]}) == "tags:\n  - a\n  - b"

    def test_sequence_of_mappings(self):
        value = {"tasks": [{"type": "document", "name": "load"}, {"type": "prompt"}]}
        assert serialize(value) == (
            "tasks:\n"
            "  - type: document\n"
            "    name: load\n"
            "  - type: prompt"
        )

    def test_nested_sequences(self):
        assert serialize([["a", "b"], "c"]) == "- - a\n  - b\n- c"

    def test_indent_offset(self):
        assert serialize({"a": 1, "b": {"c": 2}}, indent=4) == "    a: 1\n    b:\n      c: 2"

    def test_tuples_render_as_sequences(self):
        assert serialize({"pair": (1, 2)}) == "pair:\n  - 1\n  - 2"

    def test_determinism(self):
        value = {"z": 1, "a": [{"m": None, "b": "x: y"}], "k": {"q": 2.5}}
        assert serialize(value) == serialize(value)
        assert serialize(value).splitlines()[0] == "z: 1"

    def test_invalid_value_kind(self):
        with pytest.raises(InvalidValueKind):
            serialize({"when": object()})
        with pytest.raises(InvalidValueKind):
            serialize({1: "numeric key"})

    def test_invalid_value_kind_is_type_error(self):
        with pytest.raises(TypeError):
            serialize([{"nested": {1, 2}}])


class TestRoundTrip:
    """Test serialize followed by parse on the supported subset."""

    @pytest.mark.parametrize(
        "value",
        [
            None,
            True,
            False,
            0,
            42,
            -7,
            3.25,
            1e-05,
            1e16,
            1.5e300,
            -2.5e-10,
            "plain",
            "reporter-recap-soccer",
            "a: b",
            "#hashtag",
            " padded ",
            "",
        ],
    )
    def test_scalar_round_trip(self, value):
        text = serialize({"key": value})
        assert parse(text) == {"key": value}

    def test_nested_mapping_round_trip(self):
        value = {
            "setup": {"title": "Recap", "version": "1.0.0"},
            "workflow": {"inputs": {"event_code": {"type": "parameter", "required": True}}},
        }
        assert parse(serialize(value)) == value

    def test_multiline_text_is_truncated(self):
        text = serialize({"key": "a\nb", "other": 1})
        assert parse(text) == {"key": '"a', "other": 1}

    def test_keys_are_written_verbatim(self):
        assert serialize({"a:b": 1}) == "a:b: 1"
        assert parse(serialize({"a:b": 1})) == {"a": "b: 1"}
        assert parse(serialize({"- x": 1})) == {"items": ["x: 1"]}

    def test_sequence_round_trip_is_lossy(self):
        # Block sequences come back under the synthetic "items" key
        value = {"tags": ["a", "b"]}
        assert parse(serialize(value)) == {"tags": {"items": ["a", "b"]}}
