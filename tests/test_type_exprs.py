import pytest

from plfront.syntax.list_elements import (
    FieldDef,
    FieldDefQualifier,
    GenericParameter,
    Parameter,
    ParameterKind,
)
from plfront.syntax.nodes import (
    Emitter,
    Expression,
    Location,
    NodeList,
    TypeExpression,
    TypeProperty,
    Visitor,
)
from plfront.syntax.type_exprs import (
    BinaryTraitOp,
    BinaryTraitOpTypeExpr,
    DefaultEnumOp,
    DefaultEnumOpTypeExpr,
    FuncDefinition,
    FuncSignature,
    InferredTypeExpr,
    MapTypeExpr,
    NamedTypeExpr,
    PropertiesKind,
    PropertiesTypeExpr,
    RefTypeExpr,
    SliceTypeExpr,
    UnaryTraitOp,
    UnaryTraitOpTypeExpr,
    new_any_trait,
    new_implicit_inferred_type_expr,
)

LOC = Location("f.pl", 3, 4)


class Recorder(Visitor):
    def __init__(self):
        self.entered = []

    def enter(self, node):
        self.entered.append(node)


def messages(emitter):
    return [err.err for err in emitter.errors()]


def validate(node):
    emitter = Emitter()
    node.validate(emitter)
    return messages(emitter)


def test_implicit_inferred_type_expr_position():
    expr = new_implicit_inferred_type_expr(LOC)
    assert expr.is_implicit is True
    assert expr.loc() == LOC
    assert expr.end() == LOC


def test_any_trait_is_implicit_empty_trait():
    trait = new_any_trait(LOC)
    assert trait.kind == PropertiesKind.TRAIT
    assert trait.is_implicit is True
    assert trait.properties == []
    assert trait.loc() == LOC
    assert validate(trait) == []


def test_map_walk_visits_key_then_value():
    key = NamedTypeExpr(name="K")
    value = SliceTypeExpr(value=NamedTypeExpr(name="V"))
    m = MapTypeExpr(key=key, value=value)
    rec = Recorder()
    m.walk(rec)
    assert rec.entered == [m, key, value, value.value]


@pytest.mark.parametrize("op", list(DefaultEnumOp))
def test_default_enum_op_valid(op):
    assert validate(DefaultEnumOpTypeExpr(op=op)) == []


def test_default_enum_op_invalid():
    expr = DefaultEnumOpTypeExpr(op="%", start_pos=LOC)
    emitter = Emitter()
    expr.validate(emitter)
    errs = emitter.errors()
    assert [e.err for e in errs] == [
        "invalid ast construction. unexpected default enum op (%)"
    ]
    assert errs[0].loc == LOC


def test_unary_trait_op_validation():
    assert validate(UnaryTraitOpTypeExpr(op=UnaryTraitOp.ALL_PUBLIC_PROPERTIES)) == []
    assert validate(UnaryTraitOpTypeExpr(op="!")) == [
        "invalid ast construction. unexpected unary trait op (!)"
    ]


def test_binary_trait_op_validation():
    for op in BinaryTraitOp:
        assert validate(BinaryTraitOpTypeExpr(op=op)) == []
    assert validate(BinaryTraitOpTypeExpr(op="/")) == [
        "invalid ast construction. unexpected binary type expr op (/)"
    ]


def test_binary_trait_walk_order():
    left = NamedTypeExpr(name="A")
    right = NamedTypeExpr(name="B")
    expr = BinaryTraitOpTypeExpr(left=left, op=BinaryTraitOp.UNION, right=right)
    rec = Recorder()
    expr.walk(rec)
    assert rec.entered == [expr, left, right]


def test_properties_invalid_kind():
    assert validate(PropertiesTypeExpr(kind="class")) == [
        "invalid ast construction. unexpected properties type expr kind (class)"
    ]


def test_let_field_in_enum_rejected():
    props = PropertiesTypeExpr(
        kind=PropertiesKind.ENUM,
        properties=[FieldDef(qualifier=FieldDefQualifier.LET, name="a")],
    )
    assert validate(props) == ["unexpected let field"]


def test_default_field_rules():
    in_struct = PropertiesTypeExpr(
        kind=PropertiesKind.STRUCT,
        properties=[FieldDef(qualifier=FieldDefQualifier.DEFAULT, name="a")],
    )
    assert validate(in_struct) == ["unexpected default field"]

    in_enum = PropertiesTypeExpr(
        kind=PropertiesKind.ENUM,
        properties=[
            FieldDef(qualifier=FieldDefQualifier.DEFAULT, name="a"),
            FieldDef(qualifier=FieldDefQualifier.DEFAULT, name="b"),
        ],
    )
    assert validate(in_enum) == ["more than one default field"]


def test_padding_only_in_struct():
    padding = FieldDef(name="_")
    assert validate(PropertiesTypeExpr(kind=PropertiesKind.STRUCT, properties=[padding])) == []
    assert validate(
        PropertiesTypeExpr(kind=PropertiesKind.TRAIT, properties=[FieldDef(name="_")])
    ) == ["unexpected field padding"]


def test_method_signature_only_in_trait():
    sig = FuncSignature(name="f", generic_parameters=NodeList())
    assert validate(PropertiesTypeExpr(kind=PropertiesKind.TRAIT, properties=[sig])) == []
    assert validate(PropertiesTypeExpr(kind=PropertiesKind.STRUCT, properties=[sig])) == [
        "unexpected method signature in struct"
    ]


def test_function_definition_properties():
    anonymous = FuncDefinition(signature=FuncSignature())
    no_receiver = FuncDefinition(
        signature=FuncSignature(name="f", generic_parameters=NodeList())
    )
    method = FuncDefinition(
        signature=FuncSignature(
            name="m",
            generic_parameters=NodeList(),
            parameters=NodeList(elements=[Parameter(kind=ParameterKind.RECEIVER)]),
        )
    )
    props = PropertiesTypeExpr(properties=[anonymous, no_receiver, method])
    assert validate(props) == [
        "unexpected anonymous function definition",
        "unexpected method definition, expected receiver parameter",
    ]


def test_unknown_property_raises():
    props = PropertiesTypeExpr(properties=[TypeProperty()])
    with pytest.raises(TypeError):
        props.validate(Emitter())


def receiver_sig(receiver_type, generics=None):
    return FuncSignature(
        name="m",
        generic_parameters=generics if generics is not None else NodeList(),
        parameters=NodeList(
            elements=[Parameter(kind=ParameterKind.RECEIVER, type=receiver_type)]
        ),
    )


def test_is_method():
    assert receiver_sig(InferredTypeExpr()).is_method() is True
    assert FuncSignature(name="f", generic_parameters=NodeList()).is_method() is False
    anonymous = FuncSignature(
        parameters=NodeList(elements=[Parameter(kind=ParameterKind.RECEIVER)])
    )
    assert anonymous.is_method() is False


def test_named_signature_requires_generic_parameters():
    assert validate(FuncSignature(name="f")) == [
        "invalid ast construction, generic parameters not set for named func signature"
    ]


def test_anonymous_signature_rejects_generic_parameters():
    assert validate(FuncSignature(generic_parameters=NodeList())) == [
        "invalid ast construction, generic parameters set for anonymous func signature"
    ]


def test_method_receivers():
    assert validate(receiver_sig(RefTypeExpr(value=NamedTypeExpr(name="T")))) == []
    assert validate(receiver_sig(InferredTypeExpr())) == []
    assert validate(receiver_sig(NamedTypeExpr(pkg="other", name="T"))) == [
        "cannot define method for non-locally defined type"
    ]
    assert validate(receiver_sig(SliceTypeExpr())) == [
        "receiver must be simple named type"
    ]


def test_method_rejects_generic_parameters():
    generics = NodeList(elements=[GenericParameter(name="X")], start_pos=LOC)
    emitter = Emitter()
    receiver_sig(NamedTypeExpr(name="T"), generics).validate(emitter)
    errs = emitter.errors()
    assert [e.err for e in errs] == [
        "cannot specify generic parameters for method signature"
    ]
    assert errs[0].loc == LOC


def test_signature_walk_order():
    generics = NodeList()
    params = NodeList()
    ret = TypeExpression()
    sig = FuncSignature(
        name="f", generic_parameters=generics, parameters=params, return_type=ret
    )
    rec = Recorder()
    sig.walk(rec)
    assert rec.entered == [sig, generics, params, ret]

    anon = FuncSignature(parameters=params, return_type=ret)
    rec = Recorder()
    anon.walk(rec)
    assert rec.entered == [anon, params, ret]


def test_func_definition_walk_and_kinds():
    sig = FuncSignature()
    body = Expression()
    definition = FuncDefinition(signature=sig, body=body)
    rec = Recorder()
    definition.walk(rec)
    assert rec.entered[:2] == [definition, sig]
    assert rec.entered[-1] is body
    assert isinstance(definition, Expression) and isinstance(definition, TypeProperty)