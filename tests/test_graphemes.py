import pytest

from emojisearch.core.graphemes import count_graphemes, split_codepoints, split_graphemes


def test_split_basic_string():
    assert split_graphemes("hello") == ["h", "e", "l", "l", "o"]


def test_split_empty_string():
    assert split_graphemes("") == []
    assert count_graphemes("") == 0


@pytest.mark.parametrize("emoji", ["🫶🏻", "\u2764\ufe0f", "🎀", "\u2764\ufe0f\u200d\U0001FA79"])
def test_single_emoji_is_one_grapheme(emoji):
    assert split_graphemes(emoji) == [emoji]
    assert count_graphemes(emoji) == 1


def test_emoji_sequence():
    assert split_graphemes("🫶🏻💌") == ["🫶🏻", "💌"]
    assert count_graphemes("🫶🏻💌") == 2


@pytest.mark.parametrize("text, expected", [
    ("hello123", 8),
    ("c0d3r", 5),
    ("hello@world", 11),
    ("test#123!", 9),
])
def test_count_alphanumeric_and_symbols(text, expected):
    assert count_graphemes(text) == expected


def test_combining_mark_stays_with_base():
    assert split_graphemes("cafe\u0301") == ["c", "a", "f", "e\u0301"]


def test_zwj_join_across_concatenation():
    # coração + ZWJ + curativo forma um único cluster; contados separadamente, não
    left, right = "\u2764\ufe0f", "\u200d\U0001FA79"
    assert count_graphemes(left + right) == 1
    assert count_graphemes(left) + count_graphemes(right) != count_graphemes(left + right)


def test_split_is_idempotent():
    text = "a🫶🏻\u2764\ufe0f\u200d\U0001FA79b"
    parts = split_graphemes(text)
    assert split_graphemes("".join(parts)) == parts
    assert all(split_graphemes(p) == [p] for p in parts)


def test_split_codepoints():
    assert split_codepoints("\u2764\ufe0f") == ["\u2764", "\ufe0f"]
    assert split_codepoints("") == []
