"""Syntax tree nodes for parsed MCDOC files."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from mcdocparse.tokens import Position

LiteralValue = Union[str, float, bool]


@dataclass
class ImportPath:
    """A path such as ``a::b::c`` or ``super::x``."""

    segments: List[str] = field(default_factory=list)
    relative: bool = False

    def __str__(self) -> str:
        joined = "::".join(self.segments)
        return f"super::{joined}" if self.relative else joined


@dataclass
class ImportStatement:
    """A ``use`` statement."""

    path: ImportPath
    position: Position = Position()


@dataclass
class Annotation:
    """An annotation like ``#[name]``, ``#[name=value]`` or ``#[name(k=v, ...)]``.

    ``data`` is ``None`` for a bare name, a string for ``name=value`` and a
    dict for the parenthesised form.
    """

    name: str
    data: Union[str, Dict[str, str], None] = None
    position: Position = Position()

    @classmethod
    def from_text(cls, text: str, position: Position = Position()) -> "Annotation":
        """Build an annotation from its raw source text."""
        body = text
        while body.startswith("#["):
            body = body[2:]
        body = body.rstrip("]")

        paren = body.find("(")
        if paren >= 0:
            name = body[:paren].strip()
            params: Dict[str, str] = {}
            for param in body[paren + 1 :].rstrip(")").split(","):
                key, eq, value = param.partition("=")
                if eq:
                    params[key.strip()] = value.strip('"')
            return cls(name, params, position)

        name, eq, value = body.partition("=")
        if eq:
            return cls(name.strip(), value.strip('"'), position)
        return cls(body, None, position)


@dataclass
class ArrayConstraints:
    """Length bounds of an array, such as ``@ 1..10``."""

    min: Optional[int] = None
    max: Optional[int] = None


@dataclass
class TypeConstraints:
    """Value bounds of a type, such as ``@ -80..80``."""

    min: Optional[float] = None
    max: Optional[float] = None


class DynamicReferenceKind(enum.Enum):
    """What a ``[[...]]`` dynamic reference points at."""

    FIELD = "field"
    SPECIAL_KEY = "special_key"


@dataclass
class DynamicReference:
    """A dynamic key such as ``[[type]]`` or ``[[%key]]``."""

    name: str
    kind: DynamicReferenceKind = DynamicReferenceKind.FIELD
    position: Position = Position()


@dataclass
class SpreadExpression:
    """A spread such as ``...minecraft:item`` or ``...super::Base``."""

    namespace: str = ""
    registry: str = ""
    dynamic_key: Optional[DynamicReference] = None
    annotations: List[Annotation] = field(default_factory=list)
    position: Position = Position()


@dataclass
class SimpleType:
    """A named type such as ``string``."""

    name: str


@dataclass
class ArrayType:
    """An array of elements with optional length bounds."""

    element_type: "TypeExpression"
    constraints: Optional[ArrayConstraints] = None


@dataclass
class UnionType:
    """Alternatives separated by ``|``."""

    types: List["TypeExpression"] = field(default_factory=list)


@dataclass
class StructType:
    """An inline struct body."""

    members: List["StructMember"] = field(default_factory=list)


@dataclass
class GenericType:
    """A generic application such as ``Map<string, int>``."""

    name: str
    type_args: List["TypeExpression"] = field(default_factory=list)


@dataclass
class ReferenceType:
    """A reference such as ``mcdoc:block_states``."""

    path: ImportPath


@dataclass
class LiteralType:
    """A literal value used as a type: a string, number or boolean."""

    value: LiteralValue


@dataclass
class ConstrainedType:
    """A type with value bounds, such as ``float @ -80..80``."""

    base_type: "TypeExpression"
    constraints: TypeConstraints


TypeExpression = Union[
    SimpleType,
    ArrayType,
    UnionType,
    StructType,
    GenericType,
    ReferenceType,
    SpreadExpression,
    LiteralType,
    ConstrainedType,
]


@dataclass
class FieldDeclaration:
    """A named struct field."""

    name: str
    field_type: TypeExpression
    optional: bool = False
    annotations: List[Annotation] = field(default_factory=list)
    position: Position = Position()


@dataclass
class DynamicFieldDeclaration:
    """A struct field keyed by a type, such as ``[string]: Value``."""

    key_type: TypeExpression
    value_type: TypeExpression
    optional: bool = False
    annotations: List[Annotation] = field(default_factory=list)
    position: Position = Position()


StructMember = Union[FieldDeclaration, DynamicFieldDeclaration, SpreadExpression]


@dataclass
class EnumVariant:
    """One variant of an enum, with an optional literal value."""

    name: str
    value: Optional[LiteralValue] = None
    annotations: List[Annotation] = field(default_factory=list)
    position: Position = Position()


@dataclass
class StructDeclaration:
    """A top-level ``struct``."""

    name: str
    members: List[StructMember] = field(default_factory=list)
    annotations: List[Annotation] = field(default_factory=list)
    position: Position = Position()


@dataclass
class EnumDeclaration:
    """A top-level ``enum``."""

    name: str
    base_type: Optional[str] = None
    variants: List[EnumVariant] = field(default_factory=list)
    annotations: List[Annotation] = field(default_factory=list)
    position: Position = Position()


@dataclass
class TypeDeclaration:
    """A top-level ``type`` alias, possibly generic."""

    name: str
    type_expr: TypeExpression
    type_params: List[str] = field(default_factory=list)
    annotations: List[Annotation] = field(default_factory=list)
    position: Position = Position()


@dataclass
class DispatchSource:
    """The registry and optional key a dispatch applies to."""

    registry: str
    key: Optional[str] = None
    position: Position = Position()


@dataclass
class DispatchTarget:
    """A dispatch target: a specific key, or ``None`` for unknown."""

    key: Optional[str] = None

    @classmethod
    def unknown(cls) -> "DispatchTarget":
        return cls(None)

    @property
    def is_unknown(self) -> bool:
        return self.key is None


@dataclass
class DispatchDeclaration:
    """A top-level ``dispatch ... to ...``."""

    source: DispatchSource
    target_type: TypeExpression
    targets: List[DispatchTarget] = field(default_factory=list)
    annotations: List[Annotation] = field(default_factory=list)
    position: Position = Position()


Declaration = Union[StructDeclaration, EnumDeclaration, TypeDeclaration, DispatchDeclaration]


@dataclass
class McDocFile:
    """A parsed file: its imports and declarations in source order."""

    imports: List[ImportStatement] = field(default_factory=list)
    declarations: List[Declaration] = field(default_factory=list)