# mcdocparse

A parser for MCDOC, the schema language that describes the JSON and NBT data
found in Minecraft datapacks. It turns a list of tokens into a typed syntax
tree of imports and declarations.

## Installation

```
pip install mcdocparse
```

To run the test suite:

```
pip install "mcdocparse[test]"
pytest
```

## Modules

- `mcdocparse.tokens` — `TokenKind`, `Position`, `Token`, and the exceptions
  `ParseError` (with `expected`, `found` and `position`) and `ParseErrors`
  (holding a list of `ParseError` in `errors`; it is also iterable).
- `mcdocparse.nodes` — the syntax tree dataclasses: `McDocFile`,
  `ImportStatement`, `ImportPath`, `Annotation`, `StructDeclaration`,
  `EnumDeclaration`, `TypeDeclaration`, `DispatchDeclaration`, the struct
  members `FieldDeclaration`, `DynamicFieldDeclaration` and
  `SpreadExpression`, and the type nodes `SimpleType`, `ArrayType`,
  `UnionType`, `StructType`, `GenericType`, `ReferenceType`, `LiteralType`
  and `ConstrainedType`.
- `mcdocparse.cursor` — `TokenCursor`, the token walker shared by all parsing
  steps.
- `mcdocparse.constraints` — `parse_array_constraints` and
  `parse_type_constraints` for `@ n`, `@ a..b`, `@ a..` and `@ ..b`.
- `mcdocparse.typeexpr` — `TypeParser`, which reads type expressions and
  struct bodies.
- `mcdocparse.parser` — `Parser` and the `parse_tokens` convenience function.

## What it understands

- `use` imports, absolute (`a::b::c`, `::a::b`) and relative (`super::Item`)
- `struct` declarations with plain, optional (`name?:`) and dynamic
  (`[KeyType]: ValueType`) fields, and spreads (`...Base`, `...Layer<T>`,
  `...super::Base`, `...minecraft:item[[type]]`, `...struct { ... }`)
- `enum` declarations in both `enum(string) Name { ... }` and
  `enum Name: string { ... }` forms, with string, number and boolean values
- `type` aliases, including generic parameters: `type Layer<T> = struct { ... }`
- `dispatch minecraft:registry[key, other] to SomeType`
- Type expressions: simple names, generics (`Map<string, int>`), unions
  (`string | int`), arrays (`string[]`, `[int] @ 3`), element constraints
  (`[float @ -80..80] @ 3`), namespaced references (`minecraft:item`),
  dispatch references (`minecraft:block_entity[piston]`), dynamic references
  (`minecraft:item[[type]]`, `[[%key]]`) and literal types (`"block"`, `42`,
  `true`)
- Annotations such as `#[id="mob_effect"]`, `#[id(registry="item")]` and
  `#[regex_pattern]`, kept on declarations, fields, spreads and enum variants

## Usage

Build a list of `Token` objects and hand it to `parse_tokens` or a `Parser`:

```python
from mcdocparse.nodes import SimpleType, TypeDeclaration
from mcdocparse.parser import parse_tokens
from mcdocparse.tokens import ParseErrors, Token, TokenKind

tokens = [
    Token(TokenKind.TYPE),
    Token(TokenKind.IDENTIFIER, "Name"),
    Token(TokenKind.EQUAL),
    Token(TokenKind.IDENTIFIER, "string"),
    Token(TokenKind.EOF),
]

try:
    document = parse_tokens(tokens)
except ParseErrors as errors:
    for error in errors:
        print(error)
else:
    declaration = document.declarations[0]
    assert isinstance(declaration, TypeDeclaration)
    assert declaration.type_expr == SimpleType("string")
```

`parse_tokens` returns an `McDocFile` with `imports` and `declarations` in
source order. Whitespace, newline and comment tokens are skipped wherever
they appear. After a syntax error the parser keeps going, resynchronising at
the next newline or declaration keyword, and at the end raises `ParseErrors`
holding every `ParseError` it collected.

A type expression on its own can be parsed with
`Parser(tokens).parse_type_expression()`.

## Limitations

- There is no lexer: the package does not read MCDOC source text. Tokens must
  be produced by other means.
- It only builds a syntax tree; it does not resolve imports or dispatches and
  does not validate JSON or any other data against a schema.
- Some syntax is read but not kept in the tree: annotations written in front
  of a type, bounds on a plain type (`int @ 1..10`), the members of an inline
  `...struct { ... }` spread, the name of a named inline struct, and every
  dispatch key after the first. `DispatchDeclaration.targets` is always empty.