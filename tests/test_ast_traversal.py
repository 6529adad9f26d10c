import pytest

from mokit.ast import (
    BinOp,
    Case,
    DecExp,
    DecField,
    DecLet,
    Delim,
    ExpBin,
    ExpBlock,
    ExpCall,
    ExpField,
    ExpFunction,
    ExpIf,
    ExpObject,
    ExpSwitch,
    ExpVar,
    Function,
    Mut,
    Node,
    PatField,
    PatTuple,
    PatVar,
    PatWild,
    Source,
    TypeBind,
    BindSort,
    TypeOptional,
    TypePrim,
    PrimType,
)
from mokit.ast_traversal import breakpoint_span, children, walk


def var(name, source=None):
    return Node(ExpVar(name), source or Source())


def test_binary_expression_children_in_order():
    left, right = var("a"), var("b")
    node = Node(ExpBin(left, BinOp.ADD, right))
    result = list(children(node))
    assert result[0] is left and result[1] is right
    assert len(result) == 2


def test_leaf_has_no_children():
    assert list(children(var("x"))) == []


def test_if_without_else():
    cond, then = var("c"), var("t")
    assert list(children(Node(ExpIf(cond, then)))) == [cond, then]


def test_if_with_else():
    cond, then, other = var("c"), var("t"), var("e")
    assert list(children(Node(ExpIf(cond, then, other)))) == [cond, then, other]


def test_call_includes_type_instantiation():
    func, arg = var("f"), var("x")
    typ = Node(TypePrim(PrimType.NAT))
    node = Node(ExpCall(func, Delim.one(typ), arg))
    assert list(children(node)) == [func, typ, arg]


def test_function_children_order():
    bind = Node(TypeBind(Node("T"), BindSort.TYPE))
    pat = Node(PatWild())
    out = Node(TypePrim(PrimType.BOOL))
    body = var("b")
    fn = Function(None, None, Delim.one(bind), pat, out, body)
    assert list(children(Node(ExpFunction(fn)))) == [bind, pat, out, body]


def test_switch_yields_scrutinee_then_cases():
    scrut = var("s")
    case = Node(Case(Node(PatWild()), var("r")))
    node = Node(ExpSwitch(scrut, Delim.one(case)))
    assert list(children(node)) == [scrut, case]
    assert list(children(case)) == [case.data.pat, case.data.exp]


def test_exp_field_and_dec_field():
    exp = var("v")
    field = Node(ExpField(Mut.CONST, Node("k"), None, exp))
    assert list(children(field)) == [exp]
    dec = Node(DecExp(exp))
    assert list(children(Node(DecField(dec)))) == [dec]


def test_object_yields_bases_and_fields():
    base = var("o")
    field = Node(ExpField(Mut.VAR, Node("k"), None, var("v")))
    node = Node(ExpObject(Delim.one(base), Delim.one(field)))
    assert list(children(node)) == [base, field]


def test_pat_field_uses_inner_pattern_children():
    inner = Node(PatVar(Node("y")))
    field = Node(PatField(Node("x"), PatTuple(Delim.one(inner))))
    assert list(children(field)) == [inner]
    assert list(children(Node(PatField(Node("x"))))) == []


def test_type_optional_child():
    inner = Node(TypePrim(PrimType.TEXT))
    assert list(children(Node(TypeOptional(inner)))) == [inner]


def test_unknown_data_raises_type_error():
    with pytest.raises(TypeError):
        list(children(Node("just a name")))


def test_walk_is_preorder():
    a, b = var("a"), var("b")
    dec = Node(DecLet(Node(PatVar(Node("x"))), Node(ExpBin(a, BinOp.MUL, b))))
    nodes = list(walk(dec))
    assert nodes[0] is dec
    assert nodes[-2:] == [a, b]
    assert len(nodes) == 5


def _program():
    decs = [
        Node(DecExp(var(name, Source.known(i * 10, i * 10 + 5, i, 0))),
             Source.known(i * 10, i * 10 + 5, i, 0))
        for i, name in enumerate(["a", "b", "c"], start=1)
    ]
    root = Node(ExpBlock(Delim.of(decs)), Source.known(10, 35, 1, 0))
    return root, decs


def test_breakpoint_finds_declaration_on_line():
    root, decs = _program()
    assert breakpoint_span(root, 3) == decs[2].source.span()
    assert breakpoint_span(root, 2) == (20, 25)


def test_breakpoint_on_root_line_returns_root_span():
    root, _ = _program()
    assert breakpoint_span(root, 1) == root.source.span()


def test_breakpoint_before_root_is_none():
    root, _ = _program()
    assert breakpoint_span(root, 0) is None


def test_breakpoint_past_end_is_none():
    root, _ = _program()
    assert breakpoint_span(root, 99) is None


def test_breakpoint_with_unknown_source_is_none():
    assert breakpoint_span(var("x"), 0) is None