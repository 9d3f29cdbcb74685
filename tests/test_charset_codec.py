import pytest

from canon_codec.charset import (
    CHARSET,
    CHARSET_BASE,
    from_charset_text,
    to_charset_text,
)
from canon_core.errors import CharacterNotInSet


def test_charset_is_sorted_and_unique():
    assert list(CHARSET) == sorted(set(CHARSET))
    assert CHARSET_BASE == len(CHARSET)
    assert CHARSET[0] == "\t"


def test_zero_is_empty_text():
    assert to_charset_text(0) == ""
    assert from_charset_text("") == 0


def test_single_character_values():
    assert from_charset_text(CHARSET[1]) == 1
    assert to_charset_text(CHARSET_BASE - 1) == CHARSET[-1]


def test_most_significant_character_first():
    text = CHARSET[2] + CHARSET[5]
    assert from_charset_text(text) == 2 * CHARSET_BASE + 5


@pytest.mark.parametrize("text", ["Hello, World!", "x ≠ y ± 1", "€100 → ¥", "ÿ"])
def test_round_trip(text):
    assert to_charset_text(from_charset_text(text)) == text


def test_leading_zero_characters_are_dropped():
    assert to_charset_text(from_charset_text("\t\tab")) == "ab"


def test_unknown_character_reports_position():
    with pytest.raises(CharacterNotInSet) as excinfo:
        from_charset_text("ab🙂c")
    assert excinfo.value.position == 2
    assert excinfo.value.character == "🙂"
    assert "U+1F642" in str(excinfo.value)
