import pytest

from authselect.textutil import (
    ExplodeFlags,
    explode,
    implode,
    is_empty,
    levenshtein,
    trim,
    trim_left,
    trim_noempty,
    trim_right,
)


@pytest.mark.parametrize("value,expected", [(None, True), ("", True), (" ", False), ("a", False)])
def test_is_empty(value, expected):
    assert is_empty(value) is expected


def test_trim_left():
    assert trim_left(" \t\nabc  ") == "abc  "
    assert trim_left(None) is None


def test_trim_right():
    assert trim_right("  abc \t\n") == "  abc"
    assert trim_right("") == ""
    assert trim_right(None) is None


def test_trim_right_keeps_first_character_of_blank_string():
    assert trim_right("   ") == " "


def test_trim_both_sides():
    assert trim("  abc def \n") == "abc def"
    assert trim("   ") == ""
    assert trim(None) is None


def test_trim_noempty():
    assert trim_noempty("  x ") == "x"
    assert trim_noempty("  \t ") is None
    assert trim_noempty(None) is None


def test_explode_plain():
    assert explode("a,b,c", ",") == ["a", "b", "c"]


def test_explode_empty_string():
    assert explode("", ",") == []


def test_explode_trailing_delimiter():
    assert explode("a,b,", ",") == ["a", "b", ""]
    assert explode("a,b,", ",", ExplodeFlags.SKIP_EMPTY) == ["a", "b"]


def test_explode_keeps_inner_empty_items():
    assert explode("a,,b", ",") == ["a", "", "b"]


def test_explode_trim_flags():
    text = " a , b "
    assert explode(text, ",", ExplodeFlags.TRIM_LEFT) == ["a ", "b "]
    assert explode(text, ",", ExplodeFlags.TRIM_RIGHT) == [" a", " b"]
    both = ExplodeFlags.TRIM_LEFT | ExplodeFlags.TRIM_RIGHT
    assert explode(text, ",", both) == ["a", "b"]


def test_explode_all_skips_comments_and_blank_lines():
    text = "  # comment\n x \n\n   \n y\n"
    assert explode(text, "\n", ExplodeFlags.ALL) == ["x", "y"]


def test_explode_comment_only_skipped_with_flag():
    assert explode("#a,b", ",") == ["#a", "b"]
    assert explode("#a,b", ",", ExplodeFlags.SKIP_COMMENT) == ["b"]


@pytest.mark.parametrize("text", ["a,b,c", "a,,b", "a,b,", ",", "single"])
def test_explode_implode_round_trip(text):
    assert implode(explode(text, ","), ",") == text


def test_implode_empty():
    assert implode([], "\n") == ""


def test_levenshtein_identical():
    assert levenshtein("system-auth", "system-auth") == 0


def test_levenshtein_against_empty():
    assert levenshtein("", "abcd") == len("abcd")
    assert levenshtein("abcd", "") == len("abcd")


def test_levenshtein_single_substitution():
    assert levenshtein("a", "b") == 1