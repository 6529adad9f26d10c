# mokit

Data structures for Motoko syntax trees, plus tools that walk them and print them back out as source text.

## Installation

```
pip install mokit
```

## What it provides

- `mokit.ast` holds the syntax tree.
  - `Node` ties a value to a `Source` location. A `Source` is either a known span with a line and column (`Source.known`) or one of the labelled kinds in `SourceKind`. `Source.expand` joins two sources.
  - `Delim` is a delimited list that remembers whether it had a trailing separator.
  - There are frozen dataclasses for expressions (`ExpBin`, `ExpIf`, `ExpCall`, ...), declarations (`DecLet`, `DecVar`, `DecType`, ...), patterns (`PatVar`, `PatTuple`, ...) and types (`TypePrim`, `TypeTuple`, ...).
  - There are enums for operators and sorts (`BinOp`, `RelOp`, `UnOp`, `Mut`, `ObjSort`, `PrimType`, ...).
  - It has helpers for building trees: `prim_type`, `type_from_id_args`, `obj_field_fields`, `obj_id_fields`, `obj_base_bases`, `hoist_right_type_annotation` and `source_from_decs`.
- `mokit.doc` is a small pretty-printing document algebra.
  - It provides `text`, `space`, `line`, `line_`, `softline`, `hardline`, `Doc.append`, `Doc.group`, `Doc.nest`, `Doc.flat_alt` and `Doc.render(width)`.
  - It also has the layout helpers `enclose`, `enclose_space`, `strict_concat`, `concat`, `lines`, `kwd`, `quote_ident`, `wrap` and `wrap_`.
- `mokit.ast_traversal` walks a tree.
  - `children(node)` yields a node's direct children in source order.
  - `walk(node)` yields the node and all of its descendants in pre-order.
  - `breakpoint_span(node, line)` returns the `(start, end)` span of the first node with a known source that starts on the given line, or `None`.
- `mokit.format` prints trees.
  - `to_doc(item)` builds a document for a node, a `Delim` of declarations, or any other tree item.
  - `format_pretty(item, width)` lays the document out to fit the given width.
  - `format_one_line(item)` prints it on a single line.

## Example

```python
from mokit.ast import (
    BinOp, DecLet, Delim, ExpBin, ExpLiteral, Literal, LiteralKind, Node, PatVar,
)
from mokit.format import format_one_line


def nat(n):
    return Node(ExpLiteral(Literal(LiteralKind.NAT, n)))


prog = Delim.of([
    Node(DecLet(Node(PatVar(Node("x"))), Node(ExpBin(nat("1"), BinOp.ADD, nat("2"))))),
])
print(format_one_line(prog))  # let x = 1 + 2
```

## Limitations

- There is no lexer or parser. Trees have to be built in code from the classes in `mokit.ast`.
- There is no evaluator and no command-line tool.
- Some constructs cannot be formatted yet, and `to_doc` raises `ValueError` for them. These include function expressions and declarations, classes, module, actor and object declarations, imports bound with `let`, `try`, object literals, array and function types, and literal patterns.
- `children` raises `TypeError` when a node holds something that is not syntax.

## Running the tests

```
pip install -e ".[test]"
pytest
```