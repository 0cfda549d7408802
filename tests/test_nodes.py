import pytest

from mcdocparse.nodes import (
    Annotation,
    ArrayConstraints,
    ArrayType,
    ConstrainedType,
    DispatchDeclaration,
    DispatchSource,
    DispatchTarget,
    DynamicReference,
    DynamicReferenceKind,
    EnumDeclaration,
    EnumVariant,
    FieldDeclaration,
    GenericType,
    ImportPath,
    ImportStatement,
    LiteralType,
    McDocFile,
    SimpleType,
    SpreadExpression,
    StructDeclaration,
    StructType,
    TypeConstraints,
    TypeDeclaration,
    UnionType,
)
from mcdocparse.tokens import Position


def test_annotation_complex():
    annotation = Annotation.from_text('#[id(registry="minecraft:item")]')
    assert annotation.name == "id"
    assert annotation.data == {"registry": "minecraft:item"}


def test_annotation_complex_several_params():
    annotation = Annotation.from_text(
        '#[id(registry="texture",path="entity/equipment/humanoid/")]'
    )
    assert annotation.name == "id"
    assert annotation.data == {
        "registry": "texture",
        "path": "entity/equipment/humanoid/",
    }


def test_annotation_simple():
    annotation = Annotation.from_text('#[id="mob_effect"]')
    assert annotation.name == "id"
    assert annotation.data == "mob_effect"


def test_annotation_empty():
    annotation = Annotation.from_text("#[regex_pattern]")
    assert annotation.name == "regex_pattern"
    assert annotation.data is None


def test_annotation_params_without_equals_are_ignored():
    annotation = Annotation.from_text("#[id(foo)]")
    assert annotation.name == "id"
    assert annotation.data == {}


def test_annotation_keeps_position():
    position = Position(2, 3)
    annotation = Annotation.from_text('#[id="position_source_type"]', position)
    assert annotation.position == position
    assert annotation.data == "position_source_type"


def test_import_path_str_absolute():
    assert str(ImportPath(["a", "b", "c"])) == "a::b::c"


def test_import_path_str_relative():
    path = ImportPath(["ItemBase"], relative=True)
    assert str(path) == "super::ItemBase"
    assert path.relative


def test_import_statement_equality():
    first = ImportStatement(ImportPath(["a", "b"]), Position(1, 1))
    second = ImportStatement(ImportPath(["a", "b"]), Position(1, 1))
    assert first == second
    assert first != ImportStatement(ImportPath(["a", "b"], relative=True), Position(1, 1))


def test_dispatch_target_unknown():
    assert DispatchTarget.unknown().is_unknown
    assert not DispatchTarget("stone").is_unknown
    assert DispatchTarget("stone").key == "stone"


def test_array_type_structural_equality():
    first = ArrayType(SimpleType("string"))
    assert first == ArrayType(SimpleType("string"))
    assert first != ArrayType(SimpleType("int"))
    assert first.constraints is None


def test_nested_array_with_constrained_element():
    element = ConstrainedType(SimpleType("float"), TypeConstraints(-80.0, 80.0))
    array = ArrayType(element, ArrayConstraints(3, 3))
    assert array.element_type.base_type == SimpleType("float")
    assert array.element_type.constraints.min == -80.0
    assert array.constraints.max == 3


def test_mutable_defaults_are_not_shared():
    first = McDocFile()
    second = McDocFile()
    first.declarations.append(StructDeclaration("Test"))
    assert second.declarations == []
    assert len(first.declarations) == 1


def test_struct_declaration_members():
    field_one = FieldDeclaration("field1", SimpleType("string"), optional=True)
    field_two = FieldDeclaration("field2", SimpleType("int"))
    decl = StructDeclaration("Test", [field_one, field_two])
    assert [member.name for member in decl.members] == ["field1", "field2"]
    assert decl.members[0].optional
    assert not decl.members[1].optional


def test_spread_with_dynamic_key():
    reference = DynamicReference("type")
    spread = SpreadExpression("minecraft", "test_instance", reference)
    assert spread.dynamic_key.kind is DynamicReferenceKind.FIELD
    assert spread.dynamic_key.name == "type"
    assert spread.annotations == []


def test_struct_type_holds_spread_and_fields():
    members = [SpreadExpression("Layer"), FieldDeclaration("texture", SimpleType("T"))]
    struct = StructType(members)
    assert struct.members[0].namespace == "Layer"
    assert struct.members[1].field_type == SimpleType("T")


def test_generic_type_declaration():
    decl = TypeDeclaration(
        "MyGeneric", GenericType("Map", [SimpleType("string"), SimpleType("int")])
    )
    assert decl.type_params == []
    assert decl.type_expr.type_args == [SimpleType("string"), SimpleType("int")]


def test_union_of_literal():
    union = UnionType([SimpleType("string"), LiteralType("stone")])
    assert union.types[1].value == "stone"
    assert len(union.types) == 2


def test_enum_declaration():
    decl = EnumDeclaration(
        "Test",
        "string",
        [EnumVariant("Variant1", "v1"), EnumVariant("Variant2", "v2")],
    )
    assert decl.base_type == "string"
    assert [variant.value for variant in decl.variants] == ["v1", "v2"]


def test_dispatch_declaration_defaults():
    decl = DispatchDeclaration(DispatchSource("minecraft", "key"), SimpleType("Test"))
    assert decl.targets == []
    assert decl.source.key == "key"
    assert decl.target_type == SimpleType("Test")


@pytest.mark.parametrize("value", ["block", 42.0, True])
def test_literal_type_keeps_value(value):
    assert LiteralType(value).value == value