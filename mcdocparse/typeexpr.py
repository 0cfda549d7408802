"""Parsing of type expressions and struct bodies."""

from __future__ import annotations

from typing import List, Optional

from mcdocparse.constraints import parse_array_constraints, parse_type_constraints
from mcdocparse.cursor import TokenCursor
from mcdocparse.nodes import (
    ArrayConstraints,
    ArrayType,
    ConstrainedType,
    DynamicFieldDeclaration,
    DynamicReference,
    DynamicReferenceKind,
    FieldDeclaration,
    GenericType,
    ImportPath,
    LiteralType,
    ReferenceType,
    SimpleType,
    SpreadExpression,
    StructMember,
    StructType,
    TypeExpression,
    UnionType,
)
from mcdocparse.tokens import TokenKind

_UNION_STOPS = (TokenKind.RIGHT_PAREN, TokenKind.RIGHT_BRACE, TokenKind.COMMA)


class TypeParser(TokenCursor):
    """Reads type expressions and struct members from a token stream."""

    def parse_type_expression(self) -> TypeExpression:
        """Parse a type with optional array suffix and ``|`` alternatives."""
        type_expr = self.parse_single_type()

        if self.check(TokenKind.AT):
            self.advance()
            # Bounds on a plain type are read but not kept.
            parse_array_constraints(self)

        if self.check(TokenKind.LEFT_BRACKET):
            self.advance()
            self.consume(
                TokenKind.RIGHT_BRACKET, "Expected ']' after type in array declaration"
            )
            type_expr = ArrayType(type_expr, self._optional_array_constraints())

        if self.check(TokenKind.PIPE):
            self.advance()
            types = [type_expr]
            while True:
                self.skip_whitespace()
                if self.is_at_end() or any(self.check(kind) for kind in _UNION_STOPS):
                    break
                types.append(self.parse_single_type())
                self.skip_whitespace()
                if not self.check(TokenKind.PIPE):
                    break
                self.advance()
            type_expr = UnionType(types)

        return type_expr

    def parse_single_type(self) -> TypeExpression:
        """Parse one type term, without union alternatives."""
        self.skip_whitespace()
        # Annotations in front of a type are accepted but not kept.
        self.parse_annotations()
        self.skip_whitespace()

        token = self.current_token()
        kind = token.kind

        if kind is TokenKind.IDENTIFIER:
            self.advance()
            return self._after_type_name(token.value)  # type: ignore[arg-type]

        if kind is TokenKind.DOT_DOT_DOT:
            self.advance()
            namespace = self.identifier()
            self.consume(TokenKind.COLON, "Expected ':' after namespace in spread")
            registry = self.identifier()
            return SpreadExpression(namespace, registry, position=self.current_pos())

        if kind is TokenKind.LEFT_BRACKET:
            self.advance()
            element = self.parse_single_type()
            if self.check(TokenKind.AT):
                self.advance()
                inner = parse_type_constraints(self)
                if inner is not None:
                    element = ConstrainedType(element, inner)
            self.consume(TokenKind.RIGHT_BRACKET, "Expected ']' after array element type")
            return ArrayType(element, self._optional_array_constraints())

        if kind is TokenKind.STRUCT:
            self.advance()
            following = self.peek(0)
            if following is None:
                raise self.syntax_error("struct body", "end of input")
            if following.kind is TokenKind.IDENTIFIER:
                self.advance()
                return StructType(self.parse_struct_body())
            if following.kind is TokenKind.LEFT_BRACE:
                return StructType(self.parse_struct_body())
            raise self.syntax_error("struct name or '{'", following.describe())

        if kind is TokenKind.LEFT_PAREN:
            self.advance()
            inner_expr = self.parse_type_expression()
            self.consume(TokenKind.RIGHT_PAREN, "Expected ')' after parenthesized type")
            return inner_expr

        if kind in (TokenKind.STRING, TokenKind.NUMBER):
            self.advance()
            return LiteralType(token.value)  # type: ignore[arg-type]
        if kind is TokenKind.TRUE:
            self.advance()
            return LiteralType(True)
        if kind is TokenKind.FALSE:
            self.advance()
            return LiteralType(False)

        raise self.syntax_error("type", token.describe())

    def parse_struct_body(self) -> List[StructMember]:
        """Parse ``{ member, ... }`` and return the members."""
        self.consume(TokenKind.LEFT_BRACE, "Expected '{' to start struct body")
        members: List[StructMember] = []
        self.skip_whitespace()
        while not self.check(TokenKind.RIGHT_BRACE) and not self.is_at_end():
            members.append(self.parse_struct_member())
            self.skip_whitespace()
        self.consume(TokenKind.RIGHT_BRACE, "Expected '}' to end struct body")
        return members

    def parse_struct_member(self) -> StructMember:
        """Parse a field, a dynamic ``[key]: value`` field, or a spread."""
        self.skip_whitespace()
        annotations = self.parse_annotations()
        self.skip_whitespace()

        if self.check(TokenKind.DOT_DOT_DOT):
            self.advance()
            return self._parse_spread_member(annotations)

        if self.check(TokenKind.LEFT_BRACKET):
            position = self.current_pos()
            self.advance()
            key_type = self.parse_type_expression()
            self.consume(
                TokenKind.RIGHT_BRACKET, "Expected ']' after dynamic field key type"
            )
            optional = self._optional_mark()
            self.consume(TokenKind.COLON, "Expected ':' after dynamic field key")
            value_type = self.parse_type_expression()
            self._skip_comma()
            return DynamicFieldDeclaration(
                key_type, value_type, optional, annotations, position
            )

        position = self.current_pos()
        name = self.identifier()
        optional = self._optional_mark()
        self.consume(TokenKind.COLON, "Expected ':' after field name")
        type_annotations = self.parse_annotations()
        field_type = self.parse_type_expression()
        self._skip_comma()
        return FieldDeclaration(
            name, field_type, optional, annotations + type_annotations, position
        )

    def _parse_spread_member(self, annotations) -> SpreadExpression:
        if self.check(TokenKind.STRUCT):
            self.advance()
            # The inline struct is read to move past it; it is not kept.
            self.parse_struct_body()
            self._skip_comma()
            return SpreadExpression(
                "", "", None, annotations, position=self.current_pos()
            )

        if self.check(TokenKind.SUPER) or self.check(TokenKind.DOUBLE_COLON):
            if self.check(TokenKind.SUPER):
                self.advance()
                self.consume(TokenKind.DOUBLE_COLON, "Expected '::' after 'super'")
                namespace = "super"
            else:
                self.advance()
                namespace = ""
            registry = self.identifier()
        else:
            name = self.identifier()
            if self.check(TokenKind.COLON):
                self.advance()
                namespace, registry = name, self.identifier()
            elif self.check(TokenKind.LESS):
                self.index = max(self.index - 1, 0)
                spread_type = self.parse_single_type()
                if isinstance(spread_type, (GenericType, SimpleType)):
                    namespace, registry = spread_type.name, ""
                else:
                    namespace, registry = "", ""
            else:
                namespace, registry = name, ""

        dynamic_key = self._dynamic_key()
        self._skip_comma()
        return SpreadExpression(
            namespace, registry, dynamic_key, annotations, position=self.current_pos()
        )

    def _after_type_name(self, type_name: str) -> TypeExpression:
        if self.check(TokenKind.COLON):
            self.advance()
            registry = self.identifier()
            dynamic_key = self._dynamic_key()
            if dynamic_key is not None:
                return SpreadExpression(
                    type_name, registry, dynamic_key, position=self.current_pos()
                )
            if self.check(TokenKind.LEFT_BRACKET):
                self.advance()
                key = self.identifier()
                self.consume(
                    TokenKind.RIGHT_BRACKET, "Expected ']' in dispatch reference"
                )
                return ReferenceType(ImportPath([type_name, registry, key]))
            return ReferenceType(ImportPath([type_name, registry]))

        if self.check(TokenKind.LESS):
            self.advance()
            type_args = [self.parse_single_type()]
            while self.check(TokenKind.COMMA):
                self.advance()
                type_args.append(self.parse_single_type())
            self.consume(TokenKind.GREATER, "Expected '>' after generic arguments")
            return GenericType(type_name, type_args)

        simple: TypeExpression = SimpleType(type_name)
        if self.check(TokenKind.LEFT_BRACKET):
            self.advance()
            self.consume(
                TokenKind.RIGHT_BRACKET, "Expected ']' after type in array declaration"
            )
            simple = ArrayType(simple, self._optional_array_constraints())
        return simple

    def _dynamic_key(self) -> Optional[DynamicReference]:
        following = self.peek(1)
        if not (
            self.check(TokenKind.LEFT_BRACKET)
            and following is not None
            and following.kind is TokenKind.LEFT_BRACKET
        ):
            return None
        self.advance()
        self.advance()
        key = self.identifier_or_special()
        self.consume(TokenKind.RIGHT_BRACKET, "Expected ']' in dynamic reference")
        self.consume(TokenKind.RIGHT_BRACKET, "Expected ']]' in dynamic reference")
        return DynamicReference(key, DynamicReferenceKind.FIELD, self.current_pos())

    def _optional_array_constraints(self) -> Optional[ArrayConstraints]:
        if self.check(TokenKind.AT):
            self.advance()
            return parse_array_constraints(self)
        return None

    def _optional_mark(self) -> bool:
        if self.check(TokenKind.QUESTION):
            self.advance()
            return True
        return False

    def _skip_comma(self) -> None:
        if self.check(TokenKind.COMMA):
            self.advance()