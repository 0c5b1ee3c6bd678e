# plfront

`plfront` holds the syntax tree of a small statically typed language and a set
of analysis passes. The passes check a parsed source file before semantic
analysis.

It has no runtime dependencies.

## What is inside

`plfront.syntax` holds the syntax tree.

- `nodes`: `Location`, `LocationError`, `Emitter`, `Visitor`, `Node`, `Token`,
  `CommentGroup`, `CommentGroups` and `NodeList`, together with the base kinds
  `Statement`, `Expression`, `TypeExpression`, `TypeProperty` and
  `DirectiveExpression`.
- `package_id`: `PackageID`, `PackageIDError`, `parse_package_id` and
  `is_valid_identifier`.
- `list_elements`, `directives`, `type_exprs`, `patterns`, `statements`,
  `exprs` and `control_flow` hold every node kind. Many nodes have a
  `validate(emitter)` method that checks the node's own structure.

Every node has a `walk(visitor)` method. It calls `visitor.enter(node)`, then
walks the node's children, then calls `visitor.exit(node)`.

`plfront.analysis` holds passes over a `NodeList` of top-level statements.

- `pipeline`: `Pass`, `run_passes` and `walk_statements`.
  - `run_passes` runs groups of passes in order.
  - Passes in the same group run concurrently.
- `node_validator.NodeValidator` calls `validate` on every node.
- `directives_validator.DirectivesValidator` reports:
  - unknown directives;
  - a `build` directive that is not the first directive of the file;
  - a malformed `build` directive.
- `implicit_structs.ImplicitStructsValidator` reports improper and colon
  implicit structs in places where they are not allowed.
- `explicit_types.ExplicitlyTypedDefsValidator` reports inferred types in field
  definitions and in named function signatures.
- `anonymous_methods.AnonymousMethodTypesRejector` reports method definitions
  inside inline types.
- `patterns_analyzer.PatternsAnalyzer` checks where assignment, case, enum and
  declaration patterns appear.
  - `validate()` returns the pass that checks them.
  - `transform()` returns the pass that removes redundant `>` patterns.
- `imports_collector.ImportClausesCollector` gathers the import clauses whose
  package ids are valid, and reports the others.
- `build_constraints`: `BuildConfig`, `BuildConstraintEvaluator` and
  `evaluate_constraint`. They evaluate a leading `build` directive against a set
  of build tags.

## Usage

Problems in the program are collected on an `Emitter`. None of them is raised.

```python
from plfront.syntax.nodes import Emitter, NodeList
from plfront.syntax.directives import Directive, DirectivesDecl, DirectiveValueExpr
from plfront.analysis.pipeline import run_passes
from plfront.analysis.node_validator import NodeValidator
from plfront.analysis.directives_validator import DirectivesValidator
from plfront.analysis.imports_collector import ImportClausesCollector
from plfront.analysis.patterns_analyzer import PatternsAnalyzer
from plfront.analysis.build_constraints import BuildConfig, BuildConstraintEvaluator

statements = NodeList(elements=[
    DirectivesDecl(directives=[
        Directive(name="build", arguments=[DirectiveValueExpr(value="linux")]),
    ]),
])

emitter = Emitter()
patterns = PatternsAnalyzer(emitter)
imports = ImportClausesCollector(emitter)
evaluator = BuildConstraintEvaluator(BuildConfig(build_tags=frozenset({"linux"})))

run_passes(statements, [
    [NodeValidator(emitter), DirectivesValidator(emitter),
     patterns.validate(), imports, evaluator],
    [patterns.transform()],
])

print(evaluator.satisfy_constraints())  # True
print(imports.clauses())                # []
for error in emitter.errors():
    print(error)
```

## What it does not do

- There is no lexer or parser. Build trees from the node classes in
  `plfront.syntax`.
- There is no command-line tool.
- There is no single entry point that runs every pass. Put the passes you need
  together with `run_passes`.
- There is no semantic analysis or type checking.

## Running the tests

```
pip install -e ".[test]"
pytest
```