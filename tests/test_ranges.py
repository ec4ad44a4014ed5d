import pytest

from molmodel.ranges import Range, parse_range


def test_parse_simple():
    r = parse_range("3..7")
    assert r == Range(3, 7)
    assert r.size() == 5


def test_parse_swaps_reversed_ends():
    assert parse_range("9..2") == Range(2, 9)


def test_parse_allows_whitespace_and_signs():
    assert parse_range(" -4 .. 6 ") == Range(-4, 6)


def test_string_round_trip():
    r = Range(-2, 11)
    assert parse_range(str(r)) == r
    assert str(r) == "-2..11"


def test_iteration_matches_size():
    r = parse_range("5..12")
    values = list(r)
    assert len(values) == r.size()
    assert values[0] == r.lo and values[-1] == r.hi
    assert 8 in r and 13 not in r


@pytest.mark.parametrize("text", ["3-7", "3..", "..7", "a..b", "3.7", ""])
def test_parse_errors(text):
    with pytest.raises(ValueError):
        parse_range(text)