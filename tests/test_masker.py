"""Tests for the masking engine — tokenizer + masker + cursor repositioning."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from input_facade import (
    CharClass, Literal, Placeholder,
    Modifiers, MaskConfig, MaskResult,
    CursorEdit, EditType,
    tokenize, describe, apply_mask, process_edit, reposition,
)


# ── Tokenizer ────────────────────────────────────────────────────────

def test_tokenize_symbols():
    assert tokenize("#A*-") == (
        Placeholder(CharClass.DIGIT),
        Placeholder(CharClass.LETTER),
        Placeholder(CharClass.ALPHANUMERIC),
        Literal("-"),
    )


def test_tokenize_empty_pattern():
    assert tokenize("") == ()
    assert tokenize(None) == ()


def test_tokenize_is_case_sensitive():
    tokens = tokenize("a#")
    assert tokens[0] == Literal("a")
    assert tokens[1] == Placeholder(CharClass.DIGIT)


@pytest.mark.parametrize("pattern", ["##.##", "AAA-###-", "+1 (###) ###-####", "**/**"])
def test_describe_inverts_tokenize(pattern):
    assert describe(tokenize(pattern)) == pattern


def test_char_classes():
    assert CharClass.DIGIT.accepts("7")
    assert not CharClass.DIGIT.accepts("x")
    assert CharClass.LETTER.accepts("Q")
    assert not CharClass.LETTER.accepts("é")
    assert CharClass.ALPHANUMERIC.accepts("z")
    assert CharClass.ALPHANUMERIC.accepts("0")
    assert not CharClass.ALPHANUMERIC.accepts("-")


# ── Masker ───────────────────────────────────────────────────────────

def test_literal_insertion():
    result = apply_mask("1234", tokenize("##.##"))
    assert result == MaskResult(masked="12.34", unmasked="1234")


def test_passthrough_without_pattern():
    result = apply_mask("a1-b", tokenize(""))
    assert result.masked == result.unmasked == "a1-b"


def test_bad_character_dropped():
    result = apply_mask("AB1C23", tokenize("AAA-###-"))
    assert result.masked == "ABC-23"
    assert result.unmasked == "ABC23"


def test_all_characters_rejected():
    assert apply_mask("abc", tokenize("###")) == MaskResult("", "")


def test_overflow_is_ignored():
    result = apply_mask("123456", tokenize("##.##"))
    assert result == MaskResult("12.34", "1234")


def test_trailing_literals_shown_by_default():
    assert apply_mask("12", tokenize("##.##")).masked == "12."
    assert apply_mask("ABC123", tokenize("AAA-###-")).masked == "ABC-123-"


def test_short_modifier():
    result = apply_mask("12", tokenize("##.##"), Modifiers(short=True))
    assert result == MaskResult("12", "12")


def test_prefill_modifier():
    tokens = tokenize("+1 ###")
    assert apply_mask("", tokens, Modifiers(prefill=True)) == MaskResult("+1 ", "")
    assert apply_mask("777", tokens, Modifiers(prefill=True)) == MaskResult("+1 777", "777")


def test_empty_input_without_prefill():
    assert apply_mask("", tokenize("+1 ###")).masked == ""


def test_short_and_prefill_together():
    both = Modifiers(short=True, prefill=True)
    assert apply_mask("", tokenize("+1 ###"), both).masked == "+1 "
    assert apply_mask("12", tokenize("##.##"), both).masked == "12"


def test_formatted_input_remasks_to_itself():
    result = apply_mask("(555) 123-4567", tokenize("(###) ###-####"))
    assert result == MaskResult("(555) 123-4567", "5551234567")


def test_digit_literals_not_read_as_input():
    # "1" in the prefix is a literal, not the first digit
    result = apply_mask("+1 777", tokenize("+1 ###"))
    assert result == MaskResult("+1 777", "777")


def test_non_ascii_letters_rejected():
    assert apply_mask("éa", tokenize("AA")).masked == "a"


@pytest.mark.parametrize("pattern,raw", [
    ("##.##", "1234"),
    ("##.##", "9"),
    ("AAA-###-", "abc123"),
    ("AAA-###-", "ab-c1x2"),
    ("(###) ###-####", "555 123 4567"),
    ("+1 ###", "777"),
    ("+1 ###", "+1 123"),
    ("**/**", "x9y8"),
    ("##/##/####", "12/31/1999"),
    ("1-###", "x123"),
    ("1-###", "123"),
    ("1-###", "1-123"),
])
def test_round_trip(pattern, raw):
    tokens = tokenize(pattern)
    first = apply_mask(raw, tokens)
    again = apply_mask(first.unmasked, tokens)
    assert again == first
    # masking the display value is idempotent too
    assert apply_mask(first.masked, tokens) == first


# ── Cursor ───────────────────────────────────────────────────────────

# A pipe "|" in the raw value marks where the cursor is; it is not a
# valid character, so the masker drops it.

@pytest.mark.parametrize("edit_type", [EditType.INSERT, EditType.UNKNOWN])
@pytest.mark.parametrize("raw,expected", [
    ("ABC1|23", 5),      # stays next to the char just inserted
    ("ABC123", 8),       # end of field: step over the trailing literals
    ("ABC-1J|2", 5),     # J rejected: cursor does not advance past it
])
def test_cursor_follows_insertion(edit_type, raw, expected):
    config = MaskConfig.compile("AAA-###-")
    cursor = raw.index("|") if "|" in raw else len(raw)
    edit = CursorEdit(previous_masked="", raw_input=raw, origin_offset=cursor, edit_type=edit_type)
    result = process_edit(config, edit)
    assert result.cursor_offset == expected


def test_cursor_untouched_without_mask():
    config = MaskConfig.compile("")
    edit = CursorEdit(previous_masked="", raw_input="ABC-1J|2", origin_offset=6)
    result = process_edit(config, edit)
    assert result.masked == "ABC-1J|2"
    assert result.cursor_offset is None


def test_reposition_without_tokens():
    edit = CursorEdit(previous_masked="", raw_input="abc", origin_offset=2)
    assert reposition(edit, MaskResult("abc", "abc"), ()) is None


def test_cursor_insert_in_middle():
    config = MaskConfig.compile("(###) ###-####")
    edit = CursorEdit(
        previous_masked="(555) 123-4567",
        raw_input="(555) 1293-4567",
        origin_offset=9,
        edit_type=EditType.INSERT,
    )
    result = process_edit(config, edit)
    assert result.masked == "(555) 129-3456"
    assert result.cursor_offset == 9


def test_cursor_skips_auto_inserted_literals():
    config = MaskConfig.compile("(###) ###-####")
    edit = CursorEdit(previous_masked="(555", raw_input="(5551", origin_offset=5,
                      edit_type=EditType.INSERT)
    result = process_edit(config, edit)
    assert result.masked == "(555) 1"
    assert result.cursor_offset == 7


def test_cursor_before_first_fill():
    config = MaskConfig.compile("##.##")
    edit = CursorEdit(previous_masked="12.", raw_input="x12.", origin_offset=1,
                      edit_type=EditType.INSERT)
    result = process_edit(config, edit)
    assert result.masked == "12."
    assert result.cursor_offset == 0


@pytest.mark.parametrize("edit_type", [EditType.DELETE, EditType.UNKNOWN])
def test_delete_does_not_restore_trailing_literal(edit_type):
    config = MaskConfig.compile("AAA-###-")
    edit = CursorEdit(previous_masked="ABC-", raw_input="ABC", origin_offset=3, edit_type=edit_type)
    result = process_edit(config, edit)
    assert result.masked == "ABC"
    assert result.cursor_offset == 3


def test_delete_in_middle():
    config = MaskConfig.compile("AAA-###-")
    edit = CursorEdit(previous_masked="ABC-123-", raw_input="ABC-13-", origin_offset=5,
                      edit_type=EditType.DELETE)
    result = process_edit(config, edit)
    assert result.masked == "ABC-13"
    assert result.cursor_offset == 5


def test_delete_literal_keeps_position():
    config = MaskConfig.compile("AAA-###-")
    edit = CursorEdit(previous_masked="ABC-123-", raw_input="ABC123-", origin_offset=3,
                      edit_type=EditType.DELETE)
    result = process_edit(config, edit)
    assert result.masked == "ABC-123"
    assert result.unmasked == "ABC123"
    assert result.cursor_offset == 3


def test_prefill_prefix_is_sticky():
    config = MaskConfig.compile("+1 ###", Modifiers(prefill=True))
    edit = CursorEdit(previous_masked="+1 ", raw_input="+1", origin_offset=2,
                      edit_type=EditType.DELETE)
    result = process_edit(config, edit)
    assert result.masked == "+1 "
    assert result.cursor_offset == 3


def test_leading_literal_that_is_valid_input():
    tokens = tokenize("1-###")
    assert apply_mask("123", tokens) == MaskResult("1-123", "123")
    assert apply_mask("1-123", tokens) == MaskResult("1-123", "123")


def test_input_ending_inside_literal_run():
    tokens = tokenize("+1 ###")
    # "+1" can only be display text, so it is not fed to the digit slot
    assert apply_mask("+1", tokens, Modifiers(prefill=True)) == MaskResult("+1 ", "")
    # a lone "1" could be a digit, so it is kept
    assert apply_mask("1", tokenize("1-###")) == MaskResult("1-1", "1")


def test_cursor_inside_leading_literal_run():
    config = MaskConfig.compile("1-###")
    edit = CursorEdit(previous_masked="1-12", raw_input="1-123", origin_offset=1,
                      edit_type=EditType.INSERT)
    result = process_edit(config, edit)
    assert result.masked == "1-123"
    assert result.cursor_offset == 2


def test_shorter_paste_is_not_a_delete():
    config = MaskConfig.compile("##.##")
    edit = CursorEdit(previous_masked="12.34", raw_input="9", origin_offset=1)
    result = process_edit(config, edit)
    assert result.masked == "9."
    assert result.cursor_offset == 2


def test_edit_type_from_host_hint():
    assert EditType.from_input_type("insertText") is EditType.INSERT
    assert EditType.from_input_type("insertFromPaste") is EditType.INSERT
    assert EditType.from_input_type("deleteContentBackward") is EditType.DELETE
    assert EditType.from_input_type(None) is EditType.UNKNOWN
    assert EditType.from_input_type("historyUndo") is EditType.UNKNOWN


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
