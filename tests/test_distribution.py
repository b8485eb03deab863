import pytest

from emojisearch.core.distribution import (
    CharFrequency,
    calculate_character_distribution,
    select_char_from_distribution,
)


def test_distribution_simple_words():
    distribution = calculate_character_distribution(["hello", "world"], 0, 10)
    # h,e,l,o,w,r,d
    assert len(distribution) == 7
    assert distribution[0].char == "l"
    assert distribution[0].cumulative_freq > 0
    assert distribution[-1].cumulative_freq == pytest.approx(1.0)


def test_distribution_is_strictly_increasing():
    distribution = calculate_character_distribution(["banana", "bandana"], 3, 10)
    values = [d.cumulative_freq for d in distribution]
    assert all(a < b for a, b in zip(values, values[1:]))


def test_distribution_empty():
    assert calculate_character_distribution([], 0, 10) == []


def test_distribution_with_emoji_and_symbols():
    distribution = calculate_character_distribution(["🫶🏻hello@1", "\u2764\ufe0fworld#"], 0, 10)
    chars = {d.char for d in distribution}
    assert {"🫶🏻", "\u2764\ufe0f", "@", "#", "1"} <= chars


def test_distribution_interpolates_towards_rare_chars():
    first = calculate_character_distribution(["aab"], 0, 10)
    last = calculate_character_distribution(["aab"], 9, 10)
    assert [d.char for d in first] == ["a", "b"]
    assert first[0].cumulative_freq == pytest.approx(2 / 3)
    # na última tentativa o mais comum recebe o peso do mais raro
    assert last[0].cumulative_freq == pytest.approx(1 / 3)
    assert last[-1].cumulative_freq == pytest.approx(1.0)


def test_distribution_single_attempt_does_not_divide_by_zero():
    distribution = calculate_character_distribution(["aab"], 0, 1)
    assert distribution[0].cumulative_freq == pytest.approx(2 / 3)


DIST = [CharFrequency("a", 0.5), CharFrequency("b", 1.0)]


@pytest.mark.parametrize("draw, expected", [(0.25, "a"), (0.5, "a"), (0.75, "b")])
def test_select_char(draw, expected):
    assert select_char_from_distribution(DIST, lambda: draw) == expected


def test_select_char_edges():
    distribution = calculate_character_distribution(["hello", "world"], 0, 10)
    assert select_char_from_distribution(distribution, lambda: 0.0) == distribution[0].char
    just_below = distribution[-1].cumulative_freq - 1e-12
    assert select_char_from_distribution(distribution, lambda: just_below) == distribution[-1].char


def test_select_char_floating_point_drift_returns_last():
    drifted = [CharFrequency("🫶🏻", 0.5), CharFrequency("\u2764\ufe0f", 0.9999999)]
    assert select_char_from_distribution(drifted, lambda: 0.99999999) == "\u2764\ufe0f"


def test_select_char_empty_distribution():
    with pytest.raises(ValueError):
        select_char_from_distribution([], lambda: 0.5)
