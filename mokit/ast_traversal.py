"""Walking the syntax tree: direct children, pre-order walks and breakpoints."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Optional

from mokit.ast import (
    Case,
    DecClass,
    DecExp,
    DecField,
    DecFunc,
    DecLet,
    DecLetActor,
    DecLetImport,
    DecLetModule,
    DecLetObject,
    DecType,
    DecVar,
    Delim,
    ExpActorUrl,
    ExpAnd,
    ExpAnnot,
    ExpArray,
    ExpAssert,
    ExpAssign,
    ExpAsync,
    ExpAsyncStar,
    ExpAwait,
    ExpAwaitStar,
    ExpBang,
    ExpBin,
    ExpBinAssign,
    ExpBlock,
    ExpBreak,
    ExpCall,
    ExpDebug,
    ExpDebugShow,
    ExpDo,
    ExpDoOpt,
    ExpDot,
    ExpField,
    ExpFor,
    ExpFromCandid,
    ExpFunction,
    ExpHole,
    ExpIf,
    ExpIgnore,
    ExpImport,
    ExpIndex,
    ExpLabel,
    ExpLiteral,
    ExpLoop,
    ExpNot,
    ExpObject,
    ExpObjectBlock,
    ExpOpt,
    ExpOr,
    ExpParen,
    ExpPrim,
    ExpProj,
    ExpRel,
    ExpReturn,
    ExpShow,
    ExpSwitch,
    ExpThrow,
    ExpToCandid,
    ExpTry,
    ExpTuple,
    ExpUn,
    ExpValue,
    ExpVar,
    ExpVariant,
    ExpWhile,
    Function,
    Node,
    PatAnnot,
    PatAnnotPat,
    PatField,
    PatLiteral,
    PatObject,
    PatOptional,
    PatOr,
    PatParen,
    PatTempVar,
    PatTuple,
    PatUnOpLiteral,
    PatVar,
    PatVariant,
    PatWild,
    SourceKind,
    TypeAnd,
    TypeArray,
    TypeAsync,
    TypeBind,
    TypeFieldType,
    TypeFunction,
    TypeItem,
    TypeKnown,
    TypeNamed,
    TypeObject,
    TypeOptional,
    TypeOr,
    TypeParen,
    TypePrim,
    TypeTuple,
    TypeUnknown,
    TypeVariant,
    ValTypeField,
)


def _present(*nodes: Optional[Node]) -> Iterator[Node]:
    return (n for n in nodes if n is not None)


def _items(delim: Optional[Delim]) -> Iterable[Node]:
    return delim if delim is not None else ()


def _function_children(fn: Function) -> Iterator[Node]:
    yield from _items(fn.binds)
    yield fn.input
    yield from _present(fn.output)
    yield fn.exp


def _exp_children(data: object) -> Iterator[Node]:
    match data:
        case ExpValue() | ExpHole() | ExpPrim() | ExpVar() | ExpLiteral() | ExpImport():
            return
        case ExpBin(left, _, right) | ExpRel(left, _, right):
            yield left
            yield right
        case ExpAnd(left, right) | ExpOr(left, right):
            yield left
            yield right
        case ExpAssign(target, value) | ExpBinAssign(target, _, value):
            yield target
            yield value
        case ExpIndex(exp, index):
            yield exp
            yield index
        case ExpUn(_, exp) | ExpProj(exp, _) | ExpDot(exp, _):
            yield exp
        case (
            ExpActorUrl(exp) | ExpShow(exp) | ExpFromCandid(exp) | ExpOpt(exp)
            | ExpDoOpt(exp) | ExpBang(exp) | ExpDo(exp) | ExpNot(exp)
            | ExpDebug(exp) | ExpDebugShow(exp) | ExpAsync(exp)
            | ExpAsyncStar(exp) | ExpAwait(exp) | ExpAwaitStar(exp)
            | ExpAssert(exp) | ExpThrow(exp) | ExpIgnore(exp) | ExpParen(exp)
        ):
            yield exp
        case ExpToCandid(items) | ExpTuple(items) | ExpArray(_, items) | ExpBlock(items):
            yield from items
        case ExpObjectBlock(_, fields):
            yield from fields
        case ExpObject(bases, fields):
            yield from _items(bases)
            yield from _items(fields)
        case ExpVariant(_, exp) | ExpBreak(_, exp) | ExpReturn(exp):
            yield from _present(exp)
        case ExpFunction(fn):
            yield from _function_children(fn)
        case ExpCall(func, inst, arg):
            yield func
            yield from _items(inst)
            yield arg
        case ExpIf(cond, then, else_):
            yield cond
            yield then
            yield from _present(else_)
        case ExpSwitch(exp, cases):
            yield exp
            yield from cases
        case ExpWhile(cond, body):
            yield cond
            yield body
        case ExpLoop(body, cond):
            yield body
            yield from _present(cond)
        case ExpFor(pat, iterable, body):
            yield pat
            yield iterable
            yield body
        case ExpLabel(_, typ, exp):
            yield from _present(typ)
            yield exp
        case ExpAnnot(_, exp, typ):
            yield exp
            yield typ
        case ExpTry(exp, case):
            yield exp
            yield case
        case _:
            raise TypeError(f"not a syntax tree node: {type(data).__name__}")


def _dec_children(data: object) -> Iterator[Node]:
    match data:
        case DecExp(exp):
            yield exp
        case DecLet(pat, exp) | DecVar(pat, exp):
            yield pat
            yield exp
        case DecLetImport(pat, _, _):
            yield pat
        case DecLetModule(_, _, fields) | DecLetActor(_, _, fields) | DecLetObject(_, _, fields):
            yield from fields
        case DecFunc(fn):
            yield from _function_children(fn)
        case DecType(_, binds, typ):
            yield from _items(binds)
            yield typ
        case DecClass(cls):
            if cls.shared is not None:
                yield cls.shared.pat
            yield from _items(cls.binds)
            yield cls.input
            yield from _present(cls.typ)
            yield from cls.fields
        case _:
            raise TypeError(f"not a syntax tree node: {type(data).__name__}")


def _pat_children(data: object) -> Iterator[Node]:
    match data:
        case PatWild() | PatVar() | PatTempVar() | PatLiteral() | PatUnOpLiteral():
            return
        case PatTuple(items):
            yield from items
        case PatObject(fields):
            yield from fields
        case PatOptional(pat) | PatParen(pat):
            yield pat
        case PatVariant(_, pat):
            yield from _present(pat)
        case PatOr(left, right):
            yield left
            yield right
        case PatAnnotPat(pat, typ):
            yield pat
            yield typ
        case PatAnnot(typ):
            yield typ
        case _:
            raise TypeError(f"not a syntax tree node: {type(data).__name__}")


def _type_children(data: object) -> Iterator[Node]:
    match data:
        case TypePrim() | TypeUnknown():
            return
        case TypeNamed(_, args):
            yield from _items(args)
        case TypeItem(_, typ) | TypeKnown(_, typ):
            yield typ
        case TypeVariant(tags):
            yield from _present(*(tag.data.typ for tag in tags))
        case TypeObject(_, fields):
            yield from fields
        case TypeArray(_, elem):
            yield elem
        case TypeOptional(typ) | TypeAsync(typ) | TypeParen(typ):
            yield typ
        case TypeTuple(items):
            yield from items
        case TypeFunction(_, binds, input_, output):
            yield from _items(binds)
            yield input_
            yield output
        case TypeAnd(left, right) | TypeOr(left, right):
            yield left
            yield right
        case _:
            raise TypeError(f"not a syntax tree node: {type(data).__name__}")


def children(node: Node) -> Iterator[Node]:
    """The direct syntax-tree children of ``node``, in source order."""
    data = node.data
    match data:
        case ExpField(_, _, typ, exp):
            yield from _present(typ, exp)
        case DecField(dec, _, _):
            yield dec
        case PatField(_, pat):
            if pat is not None:
                yield from _pat_children(pat)
        case ValTypeField(_, _, typ):
            yield typ
        case TypeFieldType():
            return
        case Case(pat, exp):
            yield pat
            yield exp
        case TypeBind(_, _, bound):
            yield from _present(bound)
        case DecExp() | DecLet() | DecLetImport() | DecLetModule() | DecLetActor() \
                | DecLetObject() | DecFunc() | DecVar() | DecType() | DecClass():
            yield from _dec_children(data)
        case PatWild() | PatVar() | PatTempVar() | PatLiteral() | PatUnOpLiteral() \
                | PatTuple() | PatObject() | PatOptional() | PatVariant() | PatOr() \
                | PatAnnotPat() | PatAnnot() | PatParen():
            yield from _pat_children(data)
        case TypePrim() | TypeUnknown() | TypeNamed() | TypeItem() | TypeKnown() \
                | TypeVariant() | TypeObject() | TypeArray() | TypeOptional() \
                | TypeAsync() | TypeParen() | TypeTuple() | TypeFunction() \
                | TypeAnd() | TypeOr():
            yield from _type_children(data)
        case _:
            yield from _exp_children(data)


def walk(node: Node) -> Iterator[Node]:
    """``node`` and all its descendants, in pre-order."""
    yield node
    for child in children(node):
        yield from walk(child)


def breakpoint_span(node: Node, line: int) -> Optional[tuple[int, int]]:
    """The span of the first node found starting on ``line``, if any."""
    source = node.source
    if source.kind is not SourceKind.KNOWN:
        return None
    if source.line == line:
        return source.span()
    if source.line < line:
        found = (breakpoint_span(child, line) for child in children(node))
        return next((span for span in found if span is not None), None)
    return None