"""Parsing of ``@`` constraints: array lengths and value ranges."""

from __future__ import annotations

import math
from typing import Callable, Optional, TypeVar

from mcdocparse.cursor import TokenCursor
from mcdocparse.nodes import ArrayConstraints, TypeConstraints
from mcdocparse.tokens import TokenKind

_U32_MAX = 2**32 - 1

T = TypeVar("T")


def _to_u32(number: float) -> int:
    """Convert a number to an unsigned 32-bit count, saturating at the bounds."""
    if math.isnan(number):
        return 0
    if number <= 0:
        return 0
    if number >= _U32_MAX:
        return _U32_MAX
    return int(number)


def _parse_range(
    cursor: TokenCursor, convert: Callable[[float], T]
) -> Optional[tuple]:
    token = cursor.current_token()

    if token.kind is TokenKind.NUMBER:
        cursor.advance()
        low = convert(token.value)  # type: ignore[arg-type]
        if not cursor.check(TokenKind.DOT_DOT):
            return low, low
        cursor.advance()
        high = None
        if not cursor.is_at_end():
            following = cursor.peek(0)
            if following is not None and following.kind is TokenKind.NUMBER:
                cursor.advance()
                high = convert(following.value)  # type: ignore[arg-type]
        return low, high

    if token.kind is TokenKind.DOT_DOT:
        cursor.advance()
        if cursor.is_at_end():
            raise cursor.syntax_error("number after '..'", "end of input")
        following = cursor.current_token()
        if following.kind is not TokenKind.NUMBER:
            raise cursor.syntax_error("number after '..'", following.describe())
        cursor.advance()
        return None, convert(following.value)  # type: ignore[arg-type]

    return None


def parse_array_constraints(cursor: TokenCursor) -> Optional[ArrayConstraints]:
    """Parse ``n``, ``a..b``, ``a..`` or ``..b`` as array length bounds.

    A single number fixes the length exactly. Returns ``None`` when the
    current token starts no constraint.
    """
    bounds = _parse_range(cursor, _to_u32)
    if bounds is None:
        return None
    return ArrayConstraints(min=bounds[0], max=bounds[1])


def parse_type_constraints(cursor: TokenCursor) -> Optional[TypeConstraints]:
    """Parse ``n``, ``a..b``, ``a..`` or ``..b`` as value bounds.

    A single number fixes the value exactly. Returns ``None`` when the
    current token starts no constraint.
    """
    bounds = _parse_range(cursor, float)
    if bounds is None:
        return None
    return TypeConstraints(min=bounds[0], max=bounds[1])