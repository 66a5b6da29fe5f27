"""Tests for the primitive scanners."""

import pytest

from ptxscan import ParseError
from ptxscan._scan import (
    parse_braced_balanced,
    parse_name,
    parse_parenthesized_naive,
    parse_space1,
    parse_tag,
)


class TestParenthesizedNaive:

    def test_no_newline(self):
        assert parse_parenthesized_naive("(hello)", 0) == (7, "hello")

    def test_newline(self):
        assert parse_parenthesized_naive("(hello\n)", 0) == (8, "hello\n")

    def test_one_left_parenthesis(self):
        with pytest.raises(ParseError) as info:
            parse_parenthesized_naive("(hello", 0)
        assert info.value.position == 6

    def test_two_left_one_right(self):
        source = "((hello)"
        pos, inner = parse_parenthesized_naive(source, 0)
        assert inner == "(hello"
        assert pos == len(source)

    def test_rewrapped_output_matches_again(self):
        _, inner = parse_parenthesized_naive("((hello)", 0)
        rewrapped = f"({inner})"
        assert parse_parenthesized_naive(rewrapped, 0)[1] == inner

    def test_stops_at_first_close(self):
        source = "(a)(b)"
        pos, inner = parse_parenthesized_naive(source, 0)
        assert inner == "a"
        assert source[pos:] == "(b)"

    def test_empty_group(self):
        with pytest.raises(ParseError):
            parse_parenthesized_naive("()", 0)

    def test_missing_open(self):
        with pytest.raises(ParseError) as info:
            parse_parenthesized_naive(" (a)", 0)
        assert info.value.position == 0

    def test_offset(self):
        source = "name(x)"
        pos, inner = parse_parenthesized_naive(source, 4)
        assert (pos, inner.start, inner.end) == (7, 5, 6)


class TestBracedBalanced:

    def test_one_pair(self):
        assert parse_braced_balanced("{hello}", 0) == (7, "hello")

    def test_two_pairs(self):
        source = "{hello}{world}"
        pos, inner = parse_braced_balanced(source, 0)
        assert inner == "hello"
        assert source[pos:] == "{world}"

    def test_nested_pair(self):
        source = "{hello{world}}"
        pos, inner = parse_braced_balanced(source, 0)
        assert inner == "hello{world}"
        assert pos == len(source)

    def test_imbalanced(self):
        source = "{hello{world}"
        with pytest.raises(ParseError) as info:
            parse_braced_balanced(source, 0)
        assert info.value.position == len(source)

    def test_empty(self):
        assert parse_braced_balanced("{}", 0) == (2, "")

    def test_mock_function_body(self):
        assert parse_braced_balanced("{.reg .b32 %r<3>}", 0)[1] == ".reg .b32 %r<3>"

    def test_missing_open(self):
        with pytest.raises(ParseError):
            parse_braced_balanced("hello}", 0)


class TestName:

    @pytest.mark.parametrize("source,name", [
        ("_Z6kernelPiS_i", "_Z6kernelPiS_i"),
        ("_foo(", "_foo"),
        ("kernel{", "kernel"),
        ("a$b c", "a$b"),
        ("x;", "x"),
        ("name\n(", "name"),
        ("n.b", "n"),
    ])
    def test_names(self, source, name):
        pos, result = parse_name(source, 0)
        assert result == name
        assert pos == len(name)

    @pytest.mark.parametrize("source", [
        "", " name", ".func", "(x)", "%r1", "/x", "[0]", "{", ",", ":", ";",
    ])
    def test_not_names(self, source):
        with pytest.raises(ParseError):
            parse_name(source, 0)


def test_tag():
    assert parse_tag(".func f", 0, ".func") == (5, ".func")
    with pytest.raises(ParseError):
        parse_tag(".fun", 0, ".func")


def test_space1():
    assert parse_space1(" \t x", 0)[0] == 3
    with pytest.raises(ParseError):
        parse_space1("\nx", 0)
