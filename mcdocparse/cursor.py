"""A cursor over a token list with the helpers every parsing step shares."""

from __future__ import annotations

from typing import Iterable, List, Optional

from mcdocparse.nodes import Annotation
from mcdocparse.tokens import ParseError, Position, Token, TokenKind

_SYNC_KINDS = frozenset(
    {
        TokenKind.STRUCT,
        TokenKind.ENUM,
        TokenKind.TYPE,
        TokenKind.DISPATCH,
        TokenKind.USE,
    }
)


class TokenCursor:
    """Walks a token list, reading and consuming tokens one at a time.

    ``index`` is the position of the current token and may be moved back by
    callers that need to re-read a token.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self.tokens: List[Token] = list(tokens)
        self.index = 0

    def current_pos(self) -> Position:
        """The position of the current token, or the origin past the end."""
        token = self.peek(0)
        return token.position if token is not None else Position()

    def current_token(self) -> Token:
        """The current token; raises :class:`ParseError` past the end."""
        token = self.peek(0)
        if token is None:
            raise self.syntax_error("token", "EOF")
        return token

    def peek(self, offset: int = 0) -> Optional[Token]:
        """The token ``offset`` places ahead of the current one, if any."""
        where = self.index + offset
        if 0 <= where < len(self.tokens):
            return self.tokens[where]
        return None

    def check(self, kind: TokenKind) -> bool:
        """Whether the current token is of ``kind`` (never true at the end)."""
        if self.is_at_end():
            return False
        return self.tokens[self.index].kind is kind

    def advance(self) -> None:
        """Move to the next token, unless at the end."""
        if not self.is_at_end():
            self.index += 1

    def is_at_end(self) -> bool:
        """Whether the tokens are used up or the current token is EOF."""
        token = self.peek(0)
        return token is None or token.kind is TokenKind.EOF

    def skip_whitespace(self) -> None:
        """Skip whitespace, newlines and comments."""
        while True:
            token = self.peek(0)
            if token is None or not token.kind.is_trivia:
                return
            self.advance()

    def syntax_error(self, expected: str, found: str) -> ParseError:
        """A :class:`ParseError` located at the current token."""
        return ParseError(expected, found, self.current_pos())

    def _found(self) -> str:
        token = self.peek(0)
        return token.describe() if token is not None else "EOF"

    def consume(self, kind: TokenKind, message: str) -> None:
        """Skip whitespace, then consume a token of ``kind`` or raise."""
        self.skip_whitespace()
        if self.check(kind):
            self.advance()
            return
        raise self.syntax_error(message, self._found())

    def identifier(self) -> str:
        """Consume an identifier; keywords are accepted as names too."""
        self.skip_whitespace()
        token = self.current_token()
        if token.kind is TokenKind.IDENTIFIER:
            self.advance()
            return token.value  # type: ignore[return-value]
        keyword = token.kind.keyword_text
        if keyword is not None:
            self.advance()
            return keyword
        raise self.syntax_error("identifier", token.describe())

    def identifier_or_special(self) -> str:
        """Consume an identifier, a keyword, or a ``%name`` pattern.

        For ``%name`` the name is returned without the percent sign.
        """
        self.skip_whitespace()
        token = self.current_token()
        if token.kind is TokenKind.IDENTIFIER:
            self.advance()
            return token.value  # type: ignore[return-value]
        if token.kind is TokenKind.PERCENT:
            self.advance()
            following = self.peek(0)
            if following is None:
                raise self.syntax_error("identifier after %", "end of input")
            if following.kind is not TokenKind.IDENTIFIER:
                raise self.syntax_error("identifier after %", following.describe())
            self.advance()
            return following.value  # type: ignore[return-value]
        keyword = token.kind.keyword_text
        if keyword is not None:
            self.advance()
            return keyword
        raise self.syntax_error("identifier or special pattern", token.describe())

    def synchronize(self) -> None:
        """Recover after an error: skip to a newline or a declaration keyword."""
        self.advance()
        while not self.is_at_end():
            kind = self.tokens[self.index].kind
            if kind is TokenKind.NEWLINE or kind in _SYNC_KINDS:
                return
            self.advance()

    def parse_annotations(self) -> List[Annotation]:
        """Consume consecutive annotation tokens and return them parsed."""
        annotations: List[Annotation] = []
        while True:
            token = self.peek(0)
            if token is None or token.kind is not TokenKind.ANNOTATION:
                return annotations
            self.advance()
            annotations.append(Annotation.from_text(token.value, token.position))  # type: ignore[arg-type]