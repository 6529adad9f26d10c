"""Rendering syntax trees as source text through pretty-printing documents."""

from __future__ import annotations

import sys
from typing import Any, get_args

from mokit.ast import (
    BindSort,
    BinOp,
    Case,
    Dec,
    DecExp,
    DecField,
    DecLet,
    DecType,
    DecVar,
    Delim,
    Exp,
    ExpAnd,
    ExpArray,
    ExpAssert,
    ExpAssign,
    ExpAwait,
    ExpBang,
    ExpBin,
    ExpBinAssign,
    ExpBlock,
    ExpBreak,
    ExpCall,
    ExpDebug,
    ExpDo,
    ExpDoOpt,
    ExpDot,
    ExpField,
    ExpFor,
    ExpHole,
    ExpIf,
    ExpIgnore,
    ExpImport,
    ExpIndex,
    ExpLabel,
    ExpLiteral,
    ExpLoop,
    ExpNot,
    ExpObjectBlock,
    ExpOpt,
    ExpOr,
    ExpParen,
    ExpRel,
    ExpReturn,
    ExpShow,
    ExpSwitch,
    ExpThrow,
    ExpTuple,
    ExpUn,
    ExpVar,
    ExpVariant,
    ExpWhile,
    Literal,
    LiteralKind,
    Mut,
    Node,
    ObjSort,
    Pat,
    PatOptional,
    PatParen,
    PatTuple,
    PatVar,
    PatVariant,
    PatWild,
    PrimType,
    RelOp,
    Stab,
    Type,
    TypeAnd,
    TypeAsync,
    TypeBind,
    TypeFieldType,
    TypeKnown,
    TypeObject,
    TypeOptional,
    TypeOr,
    TypeParen,
    TypePrim,
    TypeTuple,
    TypeUnknown,
    UnOp,
    ValTypeField,
    Vis,
    VisKind,
)
from mokit.doc import (
    Doc,
    enclose,
    enclose_space,
    kwd,
    line,
    nil,
    space,
    strict_concat,
    text,
)

_EXP_TYPES = get_args(Exp)
_DEC_TYPES = get_args(Dec)
_PAT_TYPES = get_args(Pat)
_TYPE_TYPES = get_args(Type)

_UNOPS = {UnOp.POS: "+", UnOp.NEG: "-", UnOp.NOT: "^"}

_BINOPS = {
    BinOp.ADD: "+",
    BinOp.SUB: "-",
    BinOp.MUL: "*",
    BinOp.DIV: "/",
    BinOp.MOD: "%",
    BinOp.POW: "**",
    BinOp.AND: "and",
    BinOp.OR: "or",
    BinOp.BITAND: "&",
    BinOp.BITOR: "|",
    BinOp.XOR: "^",
    BinOp.SHL: "<<",
    BinOp.SHR: " >>",
    BinOp.ROTL: "<<>",
    BinOp.ROTR: "<>>",
    BinOp.WADD: "+%",
    BinOp.WSUB: "-%",
    BinOp.WMUL: "*%",
    BinOp.WPOW: "**%",
    BinOp.CAT: "#",
}

_RELOPS = {
    RelOp.EQ: "==",
    RelOp.NEQ: "!=",
    RelOp.LT: "<",
    RelOp.GT: ">",
    RelOp.LE: "<=",
    RelOp.GE: ">=",
}

_OBJ_SORTS = {ObjSort.OBJECT: "object", ObjSort.ACTOR: "actor", ObjSort.MODULE: "module"}
_STABS = {Stab.STABLE: "stable", Stab.FLEXIBLE: "flexible"}
_VIS = {VisKind.PUBLIC: "public", VisKind.PRIVATE: "private", VisKind.SYSTEM: "system"}


def _unsupported(item: Any) -> ValueError:
    return ValueError(f"cannot format {type(item).__name__}: {item!r}")


def _delim(d: Delim, sep: str) -> Doc:
    doc = strict_concat((to_doc(x) for x in d), sep)
    return doc.append(sep) if d.has_trailing else doc


def _block(d: Delim) -> Doc:
    return enclose_space("{", _delim(d, ";"), "}")


def _tuple(d: Delim) -> Doc:
    return enclose("(", _delim(d, ","), ")")


def _field_block(d: Delim) -> Doc:
    return enclose("{", _delim(d, ","), "}")


def _array(mut: Mut, d: Delim) -> Doc:
    return enclose("[", to_doc(mut).append(_delim(d, ",")), "]")


def _bind(d: Delim) -> Doc:
    if len(d) == 0:
        return nil()
    return enclose("<", _delim(d, ","), ">")


def _bin_op(left: Any, op: Doc, right: Any) -> Doc:
    return to_doc(left).append(space()).append(op).append(space()).append(to_doc(right))


def _spaced(item: Any) -> Doc:
    """A space then ``item``, or nothing when ``item`` is absent."""
    return nil() if item is None else space().append(to_doc(item))


def _literal_doc(lit: Literal) -> Doc:
    match lit.kind:
        case LiteralKind.NULL:
            return text("null")
        case LiteralKind.BOOL:
            return text("true" if lit.value else "false")
        case LiteralKind.UNIT:
            return text("()")
        case LiteralKind.NAT | LiteralKind.FLOAT | LiteralKind.TEXT | LiteralKind.CHAR:
            return text(lit.value)
        case _:
            raise _unsupported(lit)


def _exp_doc(exp: Any) -> Doc:
    match exp:
        case ExpHole():
            return text("_?_")
        case ExpReturn(e):
            return kwd("return").append(to_doc(e))
        case ExpLiteral(lit):
            return _literal_doc(lit)
        case ExpUn(op, e):
            return to_doc(op).append(to_doc(e))
        case ExpBin(left, op, right) | ExpRel(left, op, right):
            return _bin_op(left, to_doc(op), right)
        case ExpTuple(items):
            return _tuple(items)
        case ExpVar(name):
            return text(name)
        case ExpShow(e):
            return kwd("debug_show").append(to_doc(e))
        case ExpOpt(e):
            return text("?").append(to_doc(e))
        case ExpDoOpt(e):
            return kwd("do ?").append(to_doc(e))
        case ExpBang(e):
            return to_doc(e).append("!")
        case ExpObjectBlock(sort, fields):
            return to_doc(sort).append(space()).append(_block(fields))
        case ExpVariant(id_, e):
            return text("#").append(to_doc(id_)).append(_spaced(e))
        case ExpDot(e, id_):
            return to_doc(e).append(".").append(to_doc(id_))
        case ExpAssign(target, value):
            return to_doc(target).append(" := ").append(to_doc(value))
        case ExpBinAssign(target, BinOp.ADD, value):
            return to_doc(target).append(" += ").append(to_doc(value))
        case ExpArray(mut, items):
            return _array(mut, items)
        case ExpIndex(e, index):
            return to_doc(e).append("[").append(to_doc(index)).append("]")
        case ExpCall(func, inst, arg):
            return (
                to_doc(func)
                .append(nil() if inst is None else _bind(inst))
                .append(enclose("(", to_doc(arg), ")"))
            )
        case ExpBlock(decs):
            return _block(decs)
        case ExpDo(e):
            return kwd("do").append(to_doc(e))
        case ExpNot(e):
            return kwd("not").append(to_doc(e))
        case ExpAnd(left, right):
            return _bin_op(left, text("and"), right)
        case ExpOr(left, right):
            return _bin_op(left, text("or"), right)
        case ExpIf(cond, then, else_):
            doc = kwd("if").append(to_doc(cond)).append(space()).append(to_doc(then))
            if else_ is not None:
                doc = doc.append(space()).append(kwd("else")).append(to_doc(else_))
            return doc
        case ExpSwitch(e, cases):
            return (
                kwd("switch")
                .append(to_doc(e))
                .append(space())
                .append(enclose_space("{", _delim(cases, ";"), "}"))
            )
        case ExpWhile(cond, body):
            return kwd("while").append(to_doc(cond)).append(space()).append(to_doc(body))
        case ExpLoop(body, cond):
            return kwd("loop").append(to_doc(body)).append(_spaced(cond))
        case ExpFor(pat, iterable, body):
            return (
                kwd("for")
                .append(to_doc(pat))
                .append(" of ")
                .append(to_doc(iterable))
                .append(space())
                .append(to_doc(body))
            )
        case ExpLabel(id_, typ, e):
            annot = nil() if typ is None else text(" : ").append(to_doc(typ))
            return (
                kwd("label").append(to_doc(id_)).append(annot).append(space()).append(to_doc(e))
            )
        case ExpBreak(id_, e):
            return kwd("break").append(to_doc(id_)).append(_spaced(e))
        case ExpDebug(e):
            return kwd("debug").append(to_doc(e))
        case ExpAwait(e):
            return kwd("await").append(to_doc(e))
        case ExpAssert(e):
            return kwd("assert").append(to_doc(e))
        case ExpImport(path):
            return kwd("import").append(text(path))
        case ExpThrow(e):
            return kwd("throw").append(to_doc(e))
        case ExpIgnore(e):
            return kwd("ignore").append(to_doc(e))
        case ExpParen(e):
            return enclose("(", to_doc(e), ")")
        case _:
            raise _unsupported(exp)


def _dec_doc(dec: Any) -> Doc:
    match dec:
        case DecExp(e):
            return to_doc(e)
        case DecLet(pat, e):
            return kwd("let").append(to_doc(pat)).append(" = ").append(to_doc(e))
        case DecVar(pat, e):
            return kwd("var").append(to_doc(pat)).append(" = ").append(to_doc(e))
        case DecType(id_, binds, typ):
            doc = kwd("type").append(to_doc(id_))
            if binds is not None:
                doc = doc.append(_bind(binds))
            return doc.append(" = ").append(to_doc(typ))
        case _:
            raise _unsupported(dec)


def _type_doc(typ: Any) -> Doc:
    match typ:
        case TypePrim(prim):
            return to_doc(prim)
        case TypeObject(sort, fields):
            return to_doc(sort).append(space()).append(_field_block(fields))
        case TypeOptional(t):
            return text("?").append(to_doc(t))
        case TypeTuple(items):
            return _tuple(items)
        case TypeAsync(t):
            return kwd("async").append(to_doc(t))
        case TypeAnd(left, right):
            return _bin_op(left, text("and"), right)
        case TypeOr(left, right):
            return _bin_op(left, text("or"), right)
        case TypeParen(t):
            return enclose("(", to_doc(t), ")")
        case TypeUnknown(name):
            return text(name)
        case TypeKnown(id_, t):
            return to_doc(id_).append(" : ").append(to_doc(t))
        case _:
            raise _unsupported(typ)


def _pat_doc(pat: Any) -> Doc:
    match pat:
        case PatWild():
            return text("_")
        case PatVar(id_):
            return to_doc(id_)
        case PatTuple(items):
            return _tuple(items)
        case PatOptional(p):
            return text("?").append(to_doc(p))
        case PatVariant(id_, p):
            return text("#").append(to_doc(id_)).append(to_doc(p))
        case PatParen(p):
            return enclose("(", to_doc(p), ")")
        case _:
            raise _unsupported(pat)


def to_doc(item: Any) -> Doc:
    """The pretty-printing document for a syntax tree item."""
    match item:
        case None:
            return nil()
        case Doc():
            return item
        case str():
            return text(item)
        case Node():
            return to_doc(item.data)
        case Delim():
            return _delim(item, ";")
        case Literal():
            return _literal_doc(item)
        case UnOp():
            return text(_UNOPS[item])
        case BinOp():
            return text(_BINOPS[item])
        case RelOp():
            return text(_RELOPS[item])
        case PrimType.UNIT:
            return text("()")
        case PrimType():
            return text(item.value)
        case Mut.VAR:
            return kwd("var")
        case Mut.CONST:
            return nil()
        case ObjSort():
            return text(_OBJ_SORTS[item])
        case Stab():
            return text(_STABS[item])
        case Vis(kind, name):
            if kind is VisKind.PUBLIC and name is not None:
                raise _unsupported(item)
            return text(_VIS[kind])
        case TypeBind(var, sort, bound):
            prefix = text("$") if sort is BindSort.SCOPE else nil()
            return prefix.append(to_doc(var)).append(" : ").append(to_doc(bound))
        case Case(pat, exp):
            return kwd("case").append(to_doc(pat)).append(line()).append(to_doc(exp)).group()
        case ValTypeField(_, id_, typ):
            return to_doc(id_).append(" : ").append(to_doc(typ))
        case TypeFieldType():
            raise _unsupported(item)
        case DecField(dec, vis, stab):
            doc = nil() if vis is None else to_doc(vis).append(space())
            if stab is not None:
                doc = doc.append(to_doc(stab)).append(space())
            return doc.append(to_doc(dec))
        case ExpField(mut, id_, typ, exp):
            annot = nil() if typ is None else text(" : ").append(to_doc(typ))
            return (
                to_doc(mut).append(to_doc(id_)).append(annot).append(" = ").append(to_doc(exp))
            )
        case _ if isinstance(item, _EXP_TYPES):
            return _exp_doc(item)
        case _ if isinstance(item, _DEC_TYPES):
            return _dec_doc(item)
        case _ if isinstance(item, _PAT_TYPES):
            return _pat_doc(item)
        case _ if isinstance(item, _TYPE_TYPES):
            return _type_doc(item)
        case _:
            raise _unsupported(item)


def format_pretty(item: Any, width: int) -> str:
    """``item`` as source text, broken to fit within ``width`` columns."""
    return to_doc(item).render(width)


def format_one_line(item: Any) -> str:
    """``item`` as source text laid out on a single line where possible."""
    return to_doc(item).group().render(sys.maxsize)