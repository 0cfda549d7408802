import pytest

from mcdocparse.constraints import parse_array_constraints, parse_type_constraints
from mcdocparse.cursor import TokenCursor
from mcdocparse.nodes import ArrayConstraints, TypeConstraints
from mcdocparse.tokens import ParseError, Token, TokenKind


def num(value):
    return Token(TokenKind.NUMBER, value)


def cursor_of(*tokens):
    return TokenCursor([*tokens, Token(TokenKind.EOF)])


DOTS = Token(TokenKind.DOT_DOT)


def test_array_single_number_fixes_length():
    cursor = cursor_of(num(3))
    assert parse_array_constraints(cursor) == ArrayConstraints(min=3, max=3)
    assert cursor.is_at_end()


def test_array_closed_range():
    cursor = cursor_of(num(1), DOTS, num(10))
    assert parse_array_constraints(cursor) == ArrayConstraints(min=1, max=10)
    assert cursor.is_at_end()


def test_array_open_upper_range():
    cursor = cursor_of(num(5), DOTS)
    assert parse_array_constraints(cursor) == ArrayConstraints(min=5, max=None)


def test_array_open_upper_range_keeps_following_token():
    cursor = cursor_of(num(5), DOTS, Token(TokenKind.COMMA))
    assert parse_array_constraints(cursor) == ArrayConstraints(min=5, max=None)
    assert cursor.current_token().kind is TokenKind.COMMA


def test_array_open_lower_range():
    cursor = cursor_of(DOTS, num(5))
    assert parse_array_constraints(cursor) == ArrayConstraints(min=None, max=5)


def test_array_lengths_are_whole_and_not_negative():
    result = parse_array_constraints(cursor_of(num(-80), DOTS, num(2.7)))
    assert result.max == 2
    assert result.min == 0


def test_no_constraint_leaves_cursor():
    cursor = cursor_of(Token(TokenKind.IDENTIFIER, "int"))
    assert parse_array_constraints(cursor) is None
    assert parse_type_constraints(cursor) is None
    assert cursor.index == 0


@pytest.mark.parametrize("parse", [parse_array_constraints, parse_type_constraints])
def test_dots_at_end_of_input(parse):
    with pytest.raises(ParseError) as info:
        parse(cursor_of(DOTS))
    assert info.value.expected == "number after '..'"
    assert info.value.found == "end of input"


@pytest.mark.parametrize("parse", [parse_array_constraints, parse_type_constraints])
def test_dots_followed_by_non_number(parse):
    following = Token(TokenKind.IDENTIFIER, "x")
    with pytest.raises(ParseError) as info:
        parse(cursor_of(DOTS, following))
    assert info.value.found == following.describe()


def test_type_negative_range():
    cursor = cursor_of(num(-80), DOTS, num(80))
    assert parse_type_constraints(cursor) == TypeConstraints(min=-80.0, max=80.0)
    assert cursor.is_at_end()


def test_type_single_value_keeps_fraction():
    assert parse_type_constraints(cursor_of(num(2.7))) == TypeConstraints(min=2.7, max=2.7)


def test_type_open_ranges():
    assert parse_type_constraints(cursor_of(num(-4), DOTS)) == TypeConstraints(min=-4.0, max=None)
    assert parse_type_constraints(cursor_of(DOTS, num(4))) == TypeConstraints(min=None, max=4.0)


def test_empty_cursor_raises():
    with pytest.raises(ParseError):
        parse_array_constraints(TokenCursor([]))