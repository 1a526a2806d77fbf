import re

import pytest

from lxstd.patterns import (
    RegexMatch,
    find_all,
    is_match,
    match,
    replace,
    replace_all,
    split,
)


def test_match_fields_ascii():
    text = "ab123cd"
    m = match(r"\d+", text)
    assert isinstance(m, RegexMatch)
    assert m.text == "123"
    assert text[m.start : m.end] == m.text


def test_match_offsets_are_bytes():
    m = match("b", "éb")
    assert m.start == len("é".encode("utf-8"))
    assert m.end == m.start + 1


def test_match_none():
    assert match("z", "abc") is None


def test_find_all():
    assert find_all(r"\d+", "a1b22c333") == ["1", "22", "333"]


def test_replace_first_only():
    text = "foo boo"
    assert replace("o", "0", text).count("o") == text.count("o") - 1
    assert replace_all("o", "0", text).count("o") == 0


def test_numbered_groups():
    assert replace_all(r"(\w+)@(\w+)", "$2 at $1", "user@host") == "host at user"


def test_named_braced_group():
    assert replace(r"(?P<word>\w+)", "[${word}]", "hi") == "[hi]"


def test_dollar_escape():
    assert replace("x", "$$", "x") == "$"


def test_missing_group_expands_empty():
    assert replace("x", "$9", "axb") == "ab"


def test_split_round_trip():
    parts = split(",", "a,b,,c")
    assert len(parts) == 4
    assert ",".join(parts) == "a,b,,c"


def test_split_excludes_captures():
    assert split("(,)", "a,b") == ["a", "b"]


def test_compiled_pattern_accepted():
    compiled = re.compile(r"\s+")
    assert is_match(compiled, "a b")
    assert not is_match(compiled, "ab")


def test_invalid_pattern():
    with pytest.raises(ValueError, match="invalid pattern"):
        is_match("(", "x")


def test_bad_pattern_type():
    with pytest.raises(TypeError, match="Regex or Str"):
        find_all(5, "x")


def test_input_must_be_str():
    with pytest.raises(TypeError, match="Str input"):
        split(",", 5)