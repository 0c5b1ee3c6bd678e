from plfront.analysis.anonymous_methods import AnonymousMethodTypesRejector
from plfront.syntax.control_flow import StatementsExpr
from plfront.syntax.list_elements import FieldDef, Parameter, ParameterKind
from plfront.syntax.nodes import Emitter, NodeList
from plfront.syntax.type_exprs import (
    FuncDefinition,
    FuncSignature,
    NamedTypeExpr,
    PropertiesTypeExpr,
    PropertiesKind,
)
from plfront.syntax.statements import TypeDef

MESSAGE = (
    "unexpected method definition, expecting either simple data type or named type"
)


def _run(*stmts):
    emitter = Emitter()
    AnonymousMethodTypesRejector(emitter).process(NodeList(elements=list(stmts)))
    return [str(err.err) for err in emitter.errors()]


def _method():
    return FuncDefinition(
        signature=FuncSignature(
            name="m",
            generic_parameters=NodeList(),
            parameters=NodeList(
                elements=[Parameter(kind=ParameterKind.RECEIVER, type=NamedTypeExpr(name="T"))]
            ),
            return_type=NamedTypeExpr(name="int"),
        ),
        body=StatementsExpr(),
    )


def _struct_with_method():
    return PropertiesTypeExpr(kind=PropertiesKind.STRUCT, properties=[_method()])


def test_methods_in_type_definition_are_allowed():
    assert _run(TypeDef(name="T", base_type=_struct_with_method())) == []


def test_method_in_field_type_is_rejected():
    outer = PropertiesTypeExpr(
        kind=PropertiesKind.STRUCT,
        properties=[FieldDef(name="f", type=_struct_with_method())],
    )
    assert _run(TypeDef(name="T", base_type=outer)) == [MESSAGE]


def test_method_in_signature_return_type_is_rejected():
    func = FuncDefinition(
        signature=FuncSignature(
            name="f",
            generic_parameters=NodeList(),
            parameters=NodeList(),
            return_type=_struct_with_method(),
        ),
        body=StatementsExpr(),
    )
    assert _run(func) == [MESSAGE]


def test_scope_is_restored_after_signature():
    func = FuncDefinition(
        signature=FuncSignature(
            name="f",
            generic_parameters=NodeList(),
            parameters=NodeList(),
            return_type=NamedTypeExpr(name="int"),
        ),
        body=StatementsExpr(
            statements=[TypeDef(name="Local", base_type=_struct_with_method())]
        ),
    )
    assert _run(func) == []


def test_each_statement_reports_independently():
    bad = PropertiesTypeExpr(
        kind=PropertiesKind.STRUCT,
        properties=[FieldDef(name="f", type=_struct_with_method())],
    )
    errors = _run(TypeDef(name="A", base_type=bad), TypeDef(name="B", base_type=bad))
    assert errors == [MESSAGE, MESSAGE]