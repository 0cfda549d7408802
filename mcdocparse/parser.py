"""The top-level parser for MCDOC files."""

from __future__ import annotations

from typing import Iterable, List, Optional

from mcdocparse.nodes import (
    Annotation,
    Declaration,
    DispatchDeclaration,
    DispatchSource,
    EnumDeclaration,
    EnumVariant,
    ImportPath,
    ImportStatement,
    McDocFile,
    StructDeclaration,
    TypeDeclaration,
)
from mcdocparse.tokens import ParseError, ParseErrors, Position, Token, TokenKind
from mcdocparse.typeexpr import TypeParser


class Parser(TypeParser):
    """Parses a token list into an :class:`McDocFile`."""

    def __init__(self, tokens: Iterable[Token]) -> None:
        super().__init__(tokens)
        self._errors: List[ParseError] = []

    def parse(self) -> McDocFile:
        """Parse the whole file; raises :class:`ParseErrors` on any syntax error."""
        result = McDocFile()
        self.skip_whitespace()

        while not self.is_at_end():
            token = self.current_token()
            if token.kind is TokenKind.USE:
                try:
                    result.imports.append(self.parse_import())
                except ParseError as error:
                    self._errors.append(error)
                    self.synchronize()
                else:
                    self._skip_semicolon()
            else:
                try:
                    declaration = self.parse_declaration()
                except ParseError as error:
                    self._errors.append(error)
                    self.synchronize()
                else:
                    if declaration is None:
                        self.advance()
                    else:
                        result.declarations.append(declaration)
                        self._skip_semicolon()
            self.skip_whitespace()

        if self._errors:
            errors, self._errors = self._errors, []
            raise ParseErrors(errors)
        return result

    def parse_import(self) -> ImportStatement:
        """Parse ``use path::to::item``."""
        position = self.current_pos()
        self.consume(TokenKind.USE, "Expected 'use'")
        self.skip_whitespace()

        relative = False
        if self.check(TokenKind.DOUBLE_COLON):
            self.advance()
        elif self.check(TokenKind.SUPER):
            relative = True
            self.advance()
            self.consume(TokenKind.DOUBLE_COLON, "Expected '::' after 'super'")

        segments = [self.identifier()]
        while self.check(TokenKind.DOUBLE_COLON):
            self.advance()
            segments.append(self.identifier())
        return ImportStatement(ImportPath(segments, relative), position)

    def parse_declaration(self) -> Optional[Declaration]:
        """Parse one annotated declaration, or return ``None`` if there is none.

        A stray token with no annotations is recorded as an error and skipped.
        """
        annotations = self.parse_annotations()
        position = self.current_pos()
        self.skip_whitespace()
        if self.is_at_end():
            return None

        kind = self.current_token().kind
        if kind is TokenKind.STRUCT:
            return self.parse_struct_declaration(annotations, position)
        if kind is TokenKind.ENUM:
            return self.parse_enum_declaration(annotations, position)
        if kind is TokenKind.TYPE:
            return self.parse_type_declaration(annotations, position)
        if kind is TokenKind.DISPATCH:
            return self.parse_dispatch_declaration(annotations, position)

        if annotations:
            raise self.syntax_error("declaration keyword", "annotations only")
        self._errors.append(
            self.syntax_error("declaration keyword", self.current_token().describe())
        )
        self.synchronize()
        return None

    def parse_struct_declaration(
        self, annotations: List[Annotation], position: Position
    ) -> StructDeclaration:
        """Parse ``struct Name { ... }``."""
        self.consume(TokenKind.STRUCT, "Expected 'struct'")
        name = self.identifier()
        members = self.parse_struct_body()
        return StructDeclaration(name, members, list(annotations), position)

    def parse_enum_declaration(
        self, annotations: List[Annotation], position: Position
    ) -> EnumDeclaration:
        """Parse ``enum(base) Name { ... }`` or ``enum Name: base { ... }``."""
        self.consume(TokenKind.ENUM, "Expected 'enum'")

        if self.check(TokenKind.LEFT_PAREN):
            self.advance()
            base_type: Optional[str] = self.identifier()
            self.consume(TokenKind.RIGHT_PAREN, "Expected ')' after enum base type")
            name = self.identifier()
        else:
            name = self.identifier()
            base_type = None
            if self.check(TokenKind.COLON):
                self.advance()
                base_type = self.identifier()

        self.consume(TokenKind.LEFT_BRACE, "Expected '{' to start enum body")
        variants: List[EnumVariant] = []
        self.skip_whitespace()
        while not self.check(TokenKind.RIGHT_BRACE) and not self.is_at_end():
            variant_annotations = self.parse_annotations()
            variant_position = self.current_pos()
            variant_name = self.identifier()

            value = None
            if self.check(TokenKind.EQUAL):
                self.advance()
                token = self.current_token()
                if token.kind in (TokenKind.STRING, TokenKind.NUMBER):
                    value = token.value
                elif token.kind is TokenKind.TRUE:
                    value = True
                elif token.kind is TokenKind.FALSE:
                    value = False
                else:
                    raise self.syntax_error("literal", "other")
                self.advance()

            variants.append(
                EnumVariant(variant_name, value, variant_annotations, variant_position)
            )
            if self.check(TokenKind.COMMA):
                self.advance()
            self.skip_whitespace()
        self.consume(TokenKind.RIGHT_BRACE, "Expected '}' to end enum body")

        return EnumDeclaration(name, base_type, variants, list(annotations), position)

    def parse_type_declaration(
        self, annotations: List[Annotation], position: Position
    ) -> TypeDeclaration:
        """Parse ``type Name<T, ...> = expression``."""
        self.consume(TokenKind.TYPE, "Expected 'type'")
        name = self.identifier()

        type_params: List[str] = []
        if self.check(TokenKind.LESS):
            self.advance()
            type_params.append(self.identifier())
            while self.check(TokenKind.COMMA):
                self.advance()
                self.skip_whitespace()
                type_params.append(self.identifier())
            self.consume(TokenKind.GREATER, "Expected '>' after generic parameters")

        self.consume(TokenKind.EQUAL, "Expected '=' after type name")
        type_expr = self.parse_type_expression()
        return TypeDeclaration(name, type_expr, type_params, list(annotations), position)

    def parse_dispatch_declaration(
        self, annotations: List[Annotation], position: Position
    ) -> DispatchDeclaration:
        """Parse ``dispatch ns:path[key, ...] to expression``.

        Only the first key is kept; further keys are read and dropped.
        """
        self.consume(TokenKind.DISPATCH, "Expected 'dispatch'")
        registry = self.identifier()
        self.consume(TokenKind.COLON, "Expected ':'")
        self.identifier()

        key: Optional[str] = None
        if self.check(TokenKind.LEFT_BRACKET):
            self.advance()
            self.skip_whitespace()
            key = self._dispatch_key()
            while self.check(TokenKind.COMMA):
                self.advance()
                self.skip_whitespace()
                self._dispatch_key()
                self.skip_whitespace()
            self.skip_whitespace()
            self.consume(TokenKind.RIGHT_BRACKET, "Expected ']'")

        self.consume(TokenKind.TO, "Expected 'to'")
        target_type = self.parse_type_expression()

        return DispatchDeclaration(
            source=DispatchSource(registry, key, position),
            target_type=target_type,
            targets=[],
            annotations=list(annotations),
            position=position,
        )

    def _dispatch_key(self) -> str:
        token = self.current_token()
        if token.kind in (TokenKind.IDENTIFIER, TokenKind.STRING):
            self.advance()
            return token.value  # type: ignore[return-value]
        if token.kind is TokenKind.PERCENT:
            return self.identifier_or_special()
        raise self.syntax_error("identifier, string, or % pattern", token.describe())

    def _skip_semicolon(self) -> None:
        if self.check(TokenKind.SEMICOLON):
            self.advance()


def parse_tokens(tokens: Iterable[Token]) -> McDocFile:
    """Parse a token list into an :class:`McDocFile`."""
    return Parser(tokens).parse()