import pytest

from json_log_extractor.repair import (
    ADDED_CLOSING_BRACES,
    ADDED_CLOSING_BRACKETS,
    CLOSED_UNMATCHED_QUOTES,
    FIXED_UNQUOTED_KEYS,
    INSERTED_MISSING_COMMAS,
    REMOVED_EXCESS_BRACES,
    REMOVED_TRAILING_COMMAS,
    TRIMMED_TRAILING_CONTENT,
    TRIMMED_WHITESPACE,
    repair_json,
    trim_after_last_brace,
    validate_and_recover,
)


class TestDirectParse:
    @pytest.mark.parametrize(
        "text",
        [
            '{"a":1}',
            '{"a": {"b": [1, 2, {"c": null}]}, "d": "x,}"}',
            '{"msg":"He said \\"hi\\""}',
            '{}',
        ],
    )
    def test_valid_json_is_untouched(self, text):
        result = validate_and_recover(text)
        assert result.is_valid is True
        assert result.warnings == ()
        assert result.recovered_text == text

    def test_nan_is_not_accepted_directly(self):
        result = validate_and_recover('{"a": NaN}')
        assert result.is_valid is False
        assert result.data is None


class TestRepairs:
    def test_trailing_comma(self):
        result = validate_and_recover('{"a":1,"b":2,}')
        assert result.is_valid is True
        assert result.data == {"a": 1, "b": 2}
        assert result.warnings == (REMOVED_TRAILING_COMMAS,)
        assert result.recovered_text == '{"a":1,"b":2}'

    def test_trailing_comma_in_array(self):
        result = validate_and_recover('{"a":[1,2,]}')
        assert result.data == {"a": [1, 2]}
        assert REMOVED_TRAILING_COMMAS in result.warnings

    def test_unquoted_key(self):
        result = validate_and_recover('{a:1}')
        assert result.is_valid is True
        assert result.data == {"a": 1}
        assert result.warnings == (FIXED_UNQUOTED_KEYS,)

    def test_several_unquoted_keys(self):
        result = validate_and_recover('{user_id: 5, name : "bob"}')
        assert result.data == {"user_id": 5, "name": "bob"}
        assert result.recovered_text == '{"user_id": 5, "name" : "bob"}'

    def test_unquoted_key_warning_only_when_changed(self):
        result = validate_and_recover('{"a":1,}')
        assert FIXED_UNQUOTED_KEYS not in result.warnings

    def test_unterminated_string_and_object(self):
        result = validate_and_recover('{"a":"hello')
        assert result.is_valid is True
        assert result.data == {"a": "hello"}
        assert result.warnings == (CLOSED_UNMATCHED_QUOTES, ADDED_CLOSING_BRACES)

    def test_escaped_quote_is_not_counted(self):
        text, warnings = repair_json('{"a":"say \\"x\\""')
        assert CLOSED_UNMATCHED_QUOTES not in warnings
        assert text == '{"a":"say \\"x\\""}'

    def test_excess_closing_brace(self):
        result = validate_and_recover('{"a":1}}')
        assert result.is_valid is True
        assert result.data == {"a": 1}
        assert result.warnings == (REMOVED_EXCESS_BRACES,)

    def test_missing_comma_between_strings(self):
        result = validate_and_recover('{"a":"x" "b":"y"}')
        assert result.is_valid is True
        assert result.data == {"a": "x", "b": "y"}
        assert result.warnings == (INSERTED_MISSING_COMMAS,)

    def test_empty_string_is_not_split(self):
        text, warnings = repair_json('{"a":"", "b":1,}')
        assert INSERTED_MISSING_COMMAS not in warnings
        assert text == '{"a":"", "b":1}'

    def test_trailing_garbage(self):
        result = validate_and_recover('{"a":1} and then some')
        assert result.is_valid is True
        assert result.data == {"a": 1}
        assert result.warnings == (TRIMMED_TRAILING_CONTENT,)

    def test_trailing_line_whitespace(self):
        text, warnings = repair_json('{"a":1,   \n  "b":2}   ')
        assert text == '{"a":1,\n  "b":2}'
        assert warnings == [TRIMMED_WHITESPACE]

    def test_whitespace_only_repair_is_reported(self):
        result = validate_and_recover('{"a":1\xa0\n}')
        assert result.is_valid is True
        assert result.recovered_text == '{"a":1\n}'
        assert result.warnings == (TRIMMED_WHITESPACE,)

    def test_braces_inside_strings_are_not_counted(self):
        result = validate_and_recover('{"msg":"{", "n":1,}')
        assert result.is_valid is True
        assert result.data == {"msg": "{", "n": 1}
        assert result.warnings == (REMOVED_TRAILING_COMMAS,)

    def test_brackets_inside_strings_are_not_counted(self):
        text, warnings = repair_json('{"a":"[", "b":[1,]}')
        assert text == '{"a":"[", "b":[1]}'
        assert ADDED_CLOSING_BRACKETS not in warnings

    def test_key_pattern_inside_string_value_is_left_alone(self):
        result = validate_and_recover('{"range":"10,20:30", "n":1,}')
        assert result.is_valid is True
        assert result.data == {"range": "10,20:30", "n": 1}
        assert result.warnings == (REMOVED_TRAILING_COMMAS,)


class TestFailures:
    def test_unrecoverable_fragment(self):
        result = validate_and_recover('{"a": tru}')
        assert result.is_valid is False
        assert result.data is None
        assert len(result.warnings) == 1
        assert result.warnings[0].startswith("Failed to parse JSON: ")
        assert result.recovered_text == '{"a": tru}'

    def test_failure_keeps_repair_trail(self):
        result = validate_and_recover('{"a":[1,2}')
        assert result.is_valid is False
        assert result.warnings[:2] == (ADDED_CLOSING_BRACKETS, TRIMMED_TRAILING_CONTENT)
        assert result.warnings[-1].startswith("Failed to parse JSON: ")
        assert result.recovered_text == '{"a":[1,2}'

    @pytest.mark.parametrize("text", ["", "{", "}", '"', "{[", "\\", "{{{{"])
    def test_never_raises(self, text):
        result = validate_and_recover(text)
        assert isinstance(result.warnings, tuple)


class TestIdempotence:
    @pytest.mark.parametrize(
        "text",
        [
            '{"a":1,"b":2,}',
            '{a:1}',
            '{"a":"hello',
            '{"a":"x" "b":"y"}',
            '{"a":1}}',
            '{"a":1} trailing',
            '{"a":[1,2,],\n "b":{c:3}',
            '{"a":"}"} x',
            '{"a":"{", "b":"[",}',
        ],
    )
    def test_second_repair_changes_nothing(self, text):
        result = validate_and_recover(text)
        assert result.is_valid is True
        again, warnings = repair_json(result.recovered_text)
        assert again == result.recovered_text
        assert warnings == []


class TestTrimAfterLastBrace:
    def test_no_brace(self):
        assert trim_after_last_brace('abc') == 'abc'

    def test_brace_is_last(self):
        assert trim_after_last_brace('{"a":1}') == '{"a":1}'

    def test_cuts_tail(self):
        assert trim_after_last_brace('{"a":1} ...') == '{"a":1}'
