"""Tokens, source positions and the errors raised while parsing."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Iterator, Union


class TokenKind(enum.Enum):
    """Every kind of token the parser understands."""

    USE = "Use"
    STRUCT = "Struct"
    ENUM = "Enum"
    TYPE = "Type"
    DISPATCH = "Dispatch"
    TO = "To"
    SUPER = "Super"
    TRUE = "True"
    FALSE = "False"
    IDENTIFIER = "Identifier"
    STRING = "String"
    NUMBER = "Number"
    ANNOTATION = "Annotation"
    LEFT_BRACE = "LeftBrace"
    RIGHT_BRACE = "RightBrace"
    LEFT_BRACKET = "LeftBracket"
    RIGHT_BRACKET = "RightBracket"
    LEFT_PAREN = "LeftParen"
    RIGHT_PAREN = "RightParen"
    LESS = "Less"
    GREATER = "Greater"
    COLON = "Colon"
    DOUBLE_COLON = "DoubleColon"
    SEMICOLON = "Semicolon"
    COMMA = "Comma"
    DOT_DOT = "DotDot"
    DOT_DOT_DOT = "DotDotDot"
    QUESTION = "Question"
    AT = "At"
    PIPE = "Pipe"
    EQUAL = "Equal"
    PERCENT = "Percent"
    WHITESPACE = "Whitespace"
    NEWLINE = "Newline"
    LINE_COMMENT = "LineComment"
    BLOCK_COMMENT = "BlockComment"
    EOF = "Eof"

    @property
    def carries_value(self) -> bool:
        """Whether tokens of this kind hold a text or number payload."""
        return self in _VALUE_KINDS

    @property
    def is_trivia(self) -> bool:
        """Whether tokens of this kind are skipped between meaningful tokens."""
        return self in _TRIVIA_KINDS

    @property
    def keyword_text(self) -> str | None:
        """The source text of a keyword that may also serve as a name."""
        return _KEYWORD_TEXT.get(self)


_VALUE_KINDS = frozenset(
    {
        TokenKind.IDENTIFIER,
        TokenKind.STRING,
        TokenKind.NUMBER,
        TokenKind.ANNOTATION,
        TokenKind.LINE_COMMENT,
        TokenKind.BLOCK_COMMENT,
    }
)

_TRIVIA_KINDS = frozenset(
    {
        TokenKind.WHITESPACE,
        TokenKind.NEWLINE,
        TokenKind.LINE_COMMENT,
        TokenKind.BLOCK_COMMENT,
    }
)

_KEYWORD_TEXT = {
    TokenKind.TYPE: "type",
    TokenKind.STRUCT: "struct",
    TokenKind.ENUM: "enum",
    TokenKind.DISPATCH: "dispatch",
    TokenKind.USE: "use",
    TokenKind.TO: "to",
    TokenKind.SUPER: "super",
    TokenKind.TRUE: "true",
    TokenKind.FALSE: "false",
}


@dataclass(frozen=True, order=True)
class Position:
    """A line and column in the source text."""

    line: int = 0
    column: int = 0


def _quote(text: str) -> str:
    escaped = (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


@dataclass(frozen=True)
class Token:
    """A token with its optional payload and its position."""

    kind: TokenKind
    value: Union[str, float, None] = None
    position: Position = Position()

    def __post_init__(self) -> None:
        if self.kind.carries_value:
            if self.kind is TokenKind.NUMBER:
                if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
                    raise ValueError(f"{self.kind.value} token needs a number")
                object.__setattr__(self, "value", float(self.value))
            elif not isinstance(self.value, str):
                raise ValueError(f"{self.kind.value} token needs a text value")
        elif self.value is not None:
            raise ValueError(f"{self.kind.value} token takes no value")

    def describe(self) -> str:
        """A short description of the token, as used in error messages."""
        if self.value is None:
            return self.kind.value
        if isinstance(self.value, float):
            return f"{self.kind.value}({self.value!r})"
        return f"{self.kind.value}({_quote(self.value)})"

    def __str__(self) -> str:
        return self.describe()


class ParseError(Exception):
    """A syntax error: something was expected and something else was found."""

    def __init__(self, expected: str, found: str, position: Position = Position()) -> None:
        self.expected = expected
        self.found = found
        self.position = position
        super().__init__(
            f"expected {expected}, found {found} "
            f"at line {position.line}, column {position.column}"
        )


class ParseErrors(Exception):
    """All the syntax errors collected while parsing one file."""

    def __init__(self, errors: Iterable[ParseError]) -> None:
        self.errors = list(errors)
        if not self.errors:
            raise ValueError("ParseErrors needs at least one error")
        lines = "\n".join(f"  {error}" for error in self.errors)
        super().__init__(f"{len(self.errors)} parse error(s):\n{lines}")

    def __iter__(self) -> Iterator[ParseError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)