import pytest

from mokit.ast import (
    BinOp,
    Delim,
    ExpAnnot,
    ExpBin,
    ExpField,
    ExpObject,
    ExpVar,
    ExpLiteral,
    Literal,
    LiteralKind,
    Mut,
    Node,
    PrimType,
    Source,
    SourceKind,
    TypeNamed,
    TypePathId,
    TypePrim,
    TypeUnknown,
    Vis,
    VisKind,
    hoist_right_type_annotation,
    obj_base_bases,
    obj_field_fields,
    obj_id_fields,
    prim_type,
    source_from_decs,
    type_from_id_args,
)


def test_source_labels():
    assert str(Source()) == "(unknown source)"
    assert str(Source(SourceKind.EVALUATION)) == "(evaluation)"
    assert str(Source(SourceKind.CORE_CALL)) == "(Core.call())"


def test_known_source_display_and_span():
    s = Source.known(3, 7, 1, 4)
    assert str(s) == "3..7 @ 1:4"
    assert s.span() == (3, 7)
    assert Source().span() is None


def test_expand_known():
    a = Source.known(0, 2, 1, 0)
    b = Source.known(5, 9, 2, 3)
    e = a.expand(b)
    assert e.span() == (0, 9)
    assert (e.line, e.col) == (1, 3)


def test_expand_with_unknown():
    k = Source.known(1, 2, 1, 1)
    assert k.expand(Source()) == k
    assert Source().expand(k) == k
    assert Source().expand(Source()) == Source()


def test_expand_unsupported_raises():
    with pytest.raises(ValueError):
        Source(SourceKind.EVALUATION).expand(Source.known(0, 1, 1, 0))


def test_node_constructors():
    assert Node.without_source(5).source.kind is SourceKind.UNKNOWN
    assert Node.evaluated(5).source.kind is SourceKind.EVALUATION
    k = Source.known(0, 1, 1, 0)
    mapped = Node(2, k).map_node(lambda x: x * 10)
    assert mapped == Node(20, k)


def test_delim_constructors():
    assert Delim.one("a").items == ("a",)
    d = Delim.of(["a", "b"])
    assert list(d) == ["a", "b"]
    assert len(d) == 2
    assert d.has_trailing is False


def test_prim_type_from_id():
    assert PrimType.from_id("Nat") is PrimType.NAT
    assert PrimType.from_id("Principal") is PrimType.PRINCIPAL
    assert PrimType.from_id("Float") is None
    assert PrimType.from_id("Foo") is None


def test_prim_type_from_text():
    assert PrimType.from_text('"Int8"') is PrimType.INT8
    assert prim_type('"Text"') == TypePrim(PrimType.TEXT)
    assert prim_type('"Zzz"') == TypeUnknown('"Zzz"')


def test_type_from_id_args():
    nat = Node.without_source("Nat")
    assert type_from_id_args(nat, None) == TypePrim(PrimType.NAT)
    custom = Node.without_source("List")
    assert type_from_id_args(custom, None) == TypeNamed(TypePathId(custom), None)
    args = Delim.one(Node.without_source(TypePrim(PrimType.NAT)))
    assert type_from_id_args(nat, args) == TypeNamed(TypePathId(nat), args)


def test_vis_is_public():
    assert Vis(VisKind.PUBLIC).is_public()
    assert not Vis(VisKind.PRIVATE).is_public()
    assert not Vis(VisKind.SYSTEM).is_public()


def test_exp_field_resolved_exp():
    src = Source.known(0, 1, 1, 0)
    ident = Node("x", src)
    assert ExpField(Mut.CONST, ident).resolved_exp() == Node(ExpVar("x"), src)
    explicit = Node.without_source(ExpVar("y"))
    assert ExpField(Mut.VAR, ident, None, explicit).resolved_exp() == explicit


def test_obj_field_fields():
    f1 = Node.without_source("f1")
    f2 = Node.without_source("f2")
    assert obj_field_fields(f1, None) == ExpObject(None, Delim.one(f1))
    result = obj_field_fields(f1, Delim((f2,), True))
    assert result.fields.items == (f1, f2)
    assert result.fields.has_trailing is True


def test_obj_id_fields_puns_identifier():
    ident = Node.without_source("a")
    result = obj_id_fields(ident, Delim())
    first = result.fields.items[0].data
    assert first.id == ident
    assert first.mut is Mut.CONST
    assert first.exp.data == ExpVar("a")


def test_obj_base_bases():
    base = Node.without_source(ExpVar("b"))
    single = obj_base_bases(base, None, None)
    assert single.fields.items[0].data.id.data == "b"
    fields = Delim.one(Node.without_source("f"))
    assert obj_base_bases(base, None, fields) == ExpObject(Delim.one(base), fields)
    other = Node.without_source(ExpVar("c"))
    assert obj_base_bases(base, Delim.one(other), None).bases.items == (base, other)


def test_obj_base_bases_rejects_non_identifier():
    lit = Node.without_source(ExpLiteral(Literal(LiteralKind.NULL)))
    with pytest.raises(ValueError):
        obj_base_bases(lit, None, None)


def test_hoist_right_type_annotation():
    left = Node(ExpVar("a"), Source.known(0, 1, 1, 0))
    inner = Node(ExpVar("b"), Source.known(4, 5, 1, 4))
    typ = Node.without_source(TypePrim(PrimType.NAT))
    right = Node.without_source(ExpAnnot(False, inner, typ))
    result = hoist_right_type_annotation(ExpBin(left, BinOp.ADD, right))
    assert isinstance(result, ExpAnnot)
    assert result.hoisted is True
    assert result.typ == typ
    assert result.exp.data == ExpBin(left, BinOp.ADD, inner)
    assert result.exp.source.span() == (0, 5)


def test_hoist_leaves_other_expressions():
    e = ExpVar("z")
    assert hoist_right_type_annotation(e) == e
    already = ExpBin(
        Node.without_source(ExpVar("a")),
        BinOp.SUB,
        Node.without_source(
            ExpAnnot(True, Node.without_source(ExpVar("b")), Node.without_source(None))
        ),
    )
    assert hoist_right_type_annotation(already) == already


def test_source_from_decs():
    assert source_from_decs([]) == Source()
    a = Node("d1", Source.known(0, 3, 1, 0))
    b = Node("d2", Source.known(5, 8, 2, 2))
    assert source_from_decs(Delim.of([a, b])).span() == (0, 8)
    assert source_from_decs([a]) == a.source