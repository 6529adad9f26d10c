"""Abstract syntax tree for Motoko programs: nodes, sources and syntax variants."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Generic, Optional, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


class SourceKind(Enum):
    """Where a piece of syntax came from."""

    KNOWN = auto()
    UNKNOWN = auto()
    EVALUATION = auto()
    CORE_INIT = auto()
    CORE_CREATE_ACTOR = auto()
    CORE_UPGRADE_ACTOR = auto()
    CORE_SET_MODULE = auto()
    CORE_CALL = auto()
    IMPORT_PRIM = auto()


_SOURCE_LABELS = {
    SourceKind.UNKNOWN: "(unknown source)",
    SourceKind.EVALUATION: "(evaluation)",
    SourceKind.CORE_INIT: "(full program, via core init)",
    SourceKind.CORE_CREATE_ACTOR: "(Core.create_actor())",
    SourceKind.CORE_UPGRADE_ACTOR: "(Core.upgrade_actor())",
    SourceKind.CORE_CALL: "(Core.call())",
    SourceKind.CORE_SET_MODULE: "(Core.set_module())",
    SourceKind.IMPORT_PRIM: "(import ⛔)",
}


@dataclass(frozen=True, repr=False)
class Source:
    """A source location; only known sources carry a span, line and column."""

    kind: SourceKind = SourceKind.UNKNOWN
    start: int = 0
    end: int = 0
    line: int = 0
    col: int = 0

    @classmethod
    def known(cls, start: int, end: int, line: int, col: int) -> Source:
        return cls(SourceKind.KNOWN, start, end, line, col)

    def span(self) -> Optional[tuple[int, int]]:
        """The half-open byte span ``(start, end)``, or None if unknown."""
        if self.kind is SourceKind.KNOWN:
            return (self.start, self.end)
        return None

    def expand(self, other: Source) -> Source:
        """The source covering both this one and ``other``."""
        unknown = SourceKind.UNKNOWN
        if self.kind is unknown and other.kind is unknown:
            return Source()
        if self.kind is SourceKind.KNOWN and other.kind is SourceKind.KNOWN:
            return Source.known(self.start, other.end, self.line, other.col)
        if other.kind is unknown:
            return self
        if self.kind is unknown:
            return other
        raise ValueError(f"cannot expand source {self} with {other}")

    def __str__(self) -> str:
        if self.kind is SourceKind.KNOWN:
            return f"{self.start}..{self.end} @ {self.line}:{self.col}"
        return _SOURCE_LABELS[self.kind]

    __repr__ = __str__


@dataclass(frozen=True, repr=False)
class Node(Generic[T]):
    """A piece of syntax together with its source location."""

    data: T
    source: Source = field(default_factory=Source)

    @classmethod
    def without_source(cls, data: T) -> Node[T]:
        return cls(data, Source())

    @classmethod
    def evaluated(cls, data: T) -> Node[T]:
        return cls(data, Source(SourceKind.EVALUATION))

    def map_node(self, fn: Callable[[T], U]) -> Node[U]:
        return Node(fn(self.data), self.source)

    def __repr__(self) -> str:
        return f"<{self.data!r}@{self.source}>"


@dataclass(frozen=True)
class Delim(Generic[T]):
    """A delimited sequence, remembering whether it had a trailing separator."""

    items: tuple = ()
    has_trailing: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    @classmethod
    def one(cls, item: T) -> Delim[T]:
        return cls((item,))

    @classmethod
    def of(cls, items: Iterable[T]) -> Delim[T]:
        return cls(tuple(items))

    def prepend(self, item: T) -> Delim[T]:
        return Delim((item,) + self.items, self.has_trailing)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


class LiteralKind(Enum):
    NULL = auto()
    BOOL = auto()
    UNIT = auto()
    NAT = auto()
    FLOAT = auto()
    CHAR = auto()
    TEXT = auto()
    BLOB = auto()


@dataclass(frozen=True)
class Literal:
    """A literal; char and text values include their quotes."""

    kind: LiteralKind
    value: Any = None


class ObjSort(Enum):
    OBJECT = auto()
    ACTOR = auto()
    MODULE = auto()


class SharedSort(Enum):
    QUERY = auto()
    UPDATE = auto()


class BindSort(Enum):
    SCOPE = auto()
    TYPE = auto()


class Mut(Enum):
    """Mutability of arrays, record fields and bindings."""

    CONST = auto()
    VAR = auto()


class Stab(Enum):
    STABLE = auto()
    FLEXIBLE = auto()


class UnOp(Enum):
    POS = auto()
    NEG = auto()
    NOT = auto()


class BinOp(Enum):
    ADD = auto()
    SUB = auto()
    MUL = auto()
    DIV = auto()
    MOD = auto()
    POW = auto()
    AND = auto()
    OR = auto()
    XOR = auto()
    SHL = auto()
    SHR = auto()
    ROTL = auto()
    ROTR = auto()
    WADD = auto()
    WSUB = auto()
    WMUL = auto()
    WPOW = auto()
    CAT = auto()
    BITOR = auto()
    BITAND = auto()


class RelOp(Enum):
    EQ = auto()
    NEQ = auto()
    LT = auto()
    GT = auto()
    LE = auto()
    GE = auto()


class PrimType(Enum):
    NULL = "Null"
    UNIT = "Unit"
    BOOL = "Bool"
    NAT = "Nat"
    NAT8 = "Nat8"
    NAT16 = "Nat16"
    NAT32 = "Nat32"
    NAT64 = "Nat64"
    INT = "Int"
    INT8 = "Int8"
    INT16 = "Int16"
    INT32 = "Int32"
    INT64 = "Int64"
    FLOAT = "Float"
    TEXT = "Text"
    CHAR = "Char"
    PRINCIPAL = "Principal"

    @classmethod
    def from_id(cls, text: str) -> Optional[PrimType]:
        """The primitive type named by an identifier, if any."""
        return _PRIM_BY_ID.get(text)

    @classmethod
    def from_text(cls, text: str) -> Optional[PrimType]:
        """The primitive type named by a quoted identifier, if any."""
        if len(text) < 2:
            raise ValueError(f"expected a quoted type name, got {text!r}")
        return cls.from_id(text[1:-1])


_PRIM_BY_ID = {
    p.value: p
    for p in (
        PrimType.BOOL,
        PrimType.NAT,
        PrimType.NAT8,
        PrimType.NAT16,
        PrimType.NAT32,
        PrimType.NAT64,
        PrimType.INT,
        PrimType.INT8,
        PrimType.INT16,
        PrimType.INT32,
        PrimType.INT64,
        PrimType.PRINCIPAL,
        PrimType.TEXT,
    )
}


class VisKind(Enum):
    PUBLIC = auto()
    PRIVATE = auto()
    SYSTEM = auto()


@dataclass(frozen=True)
class Vis:
    kind: VisKind
    name: Optional[Node] = None

    def is_public(self) -> bool:
        return self.kind is VisKind.PUBLIC


@dataclass(frozen=True)
class SortPat:
    shared_keyword: bool
    sort: SharedSort
    pat: Node


@dataclass(frozen=True)
class TypeBind:
    var: Node
    sort: BindSort
    bound: Optional[Node] = None


@dataclass(frozen=True)
class ClassDef:
    shared: Optional[SortPat]
    sort: Optional[ObjSort]
    typ_id: Optional[Node]
    binds: Optional[Delim]
    input: Node
    typ: Optional[Node]
    name: Optional[Node]
    fields: Delim


@dataclass(frozen=True)
class Case:
    pat: Node
    exp: Node


@dataclass(frozen=True)
class ExpField:
    mut: Mut
    id: Node
    typ: Optional[Node] = None
    exp: Optional[Node] = None

    def resolved_exp(self) -> Node:
        """The field's expression, or a variable of the field's name (punning)."""
        if self.exp is not None:
            return self.exp
        return Node(ExpVar(self.id.data), self.id.source)


@dataclass(frozen=True)
class DecField:
    dec: Node
    vis: Optional[Node] = None
    stab: Optional[Node] = None


@dataclass(frozen=True)
class PatField:
    id: Node
    pat: Optional[Any] = None


@dataclass(frozen=True)
class ValTypeField:
    mut: Mut
    id: Node
    typ: Node


@dataclass(frozen=True)
class TypeFieldType:
    """A type-definition field inside an object type."""


@dataclass(frozen=True)
class TypeTag:
    id: Node
    typ: Optional[Node] = None


@dataclass(frozen=True)
class Function:
    name: Optional[Node]
    shared: Optional[SortPat]
    binds: Optional[Delim]
    input: Node
    output: Optional[Node]
    exp: Node
    sugar: bool = False


# ---- types ----


@dataclass(frozen=True)
class TypePathId:
    id: Node


@dataclass(frozen=True)
class TypePathDot:
    path: Node
    id: Node


@dataclass(frozen=True)
class TypeItem:
    id: Node
    typ: Node


@dataclass(frozen=True)
class TypeNamed:
    path: Union[TypePathId, TypePathDot]
    args: Optional[Delim] = None


@dataclass(frozen=True)
class TypePrim:
    prim: PrimType


@dataclass(frozen=True)
class TypeObject:
    sort: ObjSort
    fields: Delim


@dataclass(frozen=True)
class TypeArray:
    mut: Mut
    elem: Node


@dataclass(frozen=True)
class TypeOptional:
    typ: Node


@dataclass(frozen=True)
class TypeVariant:
    tags: Delim


@dataclass(frozen=True)
class TypeTuple:
    items: Delim


@dataclass(frozen=True)
class TypeFunction:
    shared: Optional[SortPat]
    binds: Optional[Delim]
    input: Node
    output: Node


@dataclass(frozen=True)
class TypeAsync:
    typ: Node


@dataclass(frozen=True)
class TypeAnd:
    left: Node
    right: Node


@dataclass(frozen=True)
class TypeOr:
    left: Node
    right: Node


@dataclass(frozen=True)
class TypeParen:
    typ: Node


@dataclass(frozen=True)
class TypeUnknown:
    text: str


@dataclass(frozen=True)
class TypeKnown:
    id: Node
    typ: Node


Type = Union[
    TypeItem, TypeNamed, TypePrim, TypeObject, TypeArray, TypeOptional,
    TypeVariant, TypeTuple, TypeFunction, TypeAsync, TypeAnd, TypeOr,
    TypeParen, TypeUnknown, TypeKnown,
]


def prim_type(text: str) -> Type:
    """A primitive type from its quoted name, or an unknown type."""
    prim = PrimType.from_text(text)
    return TypePrim(prim) if prim is not None else TypeUnknown(text)


def type_from_id_args(id_node: Node, type_args: Optional[Delim]) -> Type:
    """A named type; unparameterised primitive names become primitive types."""
    if type_args is None:
        prim = PrimType.from_id(id_node.data)
        if prim is not None:
            return TypePrim(prim)
        return TypeNamed(TypePathId(id_node), None)
    return TypeNamed(TypePathId(id_node), type_args)


# ---- declarations ----


@dataclass(frozen=True)
class DecExp:
    exp: Node


@dataclass(frozen=True)
class DecLet:
    pat: Node
    exp: Node


@dataclass(frozen=True)
class DecLetImport:
    pat: Node
    sugar: bool
    path: str


@dataclass(frozen=True)
class DecLetModule:
    id: Optional[Node]
    sugar: bool
    fields: Delim


@dataclass(frozen=True)
class DecLetActor:
    id: Optional[Node]
    sugar: bool
    fields: Delim


@dataclass(frozen=True)
class DecLetObject:
    id: Optional[Node]
    sugar: bool
    fields: Delim


@dataclass(frozen=True)
class DecFunc:
    function: Function


@dataclass(frozen=True)
class DecVar:
    pat: Node
    exp: Node


@dataclass(frozen=True)
class DecType:
    id: Node
    binds: Optional[Delim]
    typ: Node


@dataclass(frozen=True)
class DecClass:
    cls: ClassDef


Dec = Union[
    DecExp, DecLet, DecLetImport, DecLetModule, DecLetActor, DecLetObject,
    DecFunc, DecVar, DecType, DecClass,
]


# ---- patterns ----


@dataclass(frozen=True)
class PatWild:
    pass


@dataclass(frozen=True)
class PatVar:
    id: Node


@dataclass(frozen=True)
class PatLiteral:
    literal: Literal


@dataclass(frozen=True)
class PatUnOpLiteral:
    op: Node
    literal: Node


@dataclass(frozen=True)
class PatTuple:
    items: Delim


@dataclass(frozen=True)
class PatObject:
    fields: Delim


@dataclass(frozen=True)
class PatOptional:
    pat: Node


@dataclass(frozen=True)
class PatVariant:
    id: Node
    pat: Optional[Node] = None


@dataclass(frozen=True)
class PatOr:
    left: Node
    right: Node


@dataclass(frozen=True)
class PatAnnotPat:
    pat: Node
    typ: Node


@dataclass(frozen=True)
class PatAnnot:
    typ: Node


@dataclass(frozen=True)
class PatParen:
    pat: Node


@dataclass(frozen=True)
class PatTempVar:
    """A temporary variable used when matching values during evaluation."""

    index: int


Pat = Union[
    PatWild, PatVar, PatLiteral, PatUnOpLiteral, PatTuple, PatObject,
    PatOptional, PatVariant, PatOr, PatAnnotPat, PatAnnot, PatParen, PatTempVar,
]


# ---- expressions ----


@dataclass(frozen=True)
class ExpValue:
    value: Any


@dataclass(frozen=True)
class ExpHole:
    pass


@dataclass(frozen=True)
class ExpPrim:
    prim: Any


@dataclass(frozen=True)
class ExpVar:
    name: str


@dataclass(frozen=True)
class ExpLiteral:
    literal: Literal


@dataclass(frozen=True)
class ExpActorUrl:
    exp: Node


@dataclass(frozen=True)
class ExpUn:
    op: UnOp
    exp: Node


@dataclass(frozen=True)
class ExpBin:
    left: Node
    op: BinOp
    right: Node


@dataclass(frozen=True)
class ExpRel:
    left: Node
    op: RelOp
    right: Node


@dataclass(frozen=True)
class ExpShow:
    exp: Node


@dataclass(frozen=True)
class ExpToCandid:
    args: Delim


@dataclass(frozen=True)
class ExpFromCandid:
    exp: Node


@dataclass(frozen=True)
class ExpTuple:
    items: Delim


@dataclass(frozen=True)
class ExpProj:
    """A tuple projection; the index is a string when it parsed like a float."""

    exp: Node
    index: Union[int, str]


@dataclass(frozen=True)
class ExpOpt:
    exp: Node


@dataclass(frozen=True)
class ExpDoOpt:
    exp: Node


@dataclass(frozen=True)
class ExpBang:
    exp: Node


@dataclass(frozen=True)
class ExpObjectBlock:
    sort: ObjSort
    fields: Delim


@dataclass(frozen=True)
class ExpObject:
    bases: Optional[Delim]
    fields: Optional[Delim]


@dataclass(frozen=True)
class ExpVariant:
    id: Node
    exp: Optional[Node] = None


@dataclass(frozen=True)
class ExpDot:
    exp: Node
    id: Node


@dataclass(frozen=True)
class ExpAssign:
    target: Node
    value: Node


@dataclass(frozen=True)
class ExpBinAssign:
    target: Node
    op: BinOp
    value: Node


@dataclass(frozen=True)
class ExpArray:
    mut: Mut
    items: Delim


@dataclass(frozen=True)
class ExpIndex:
    exp: Node
    index: Node


@dataclass(frozen=True)
class ExpFunction:
    function: Function


@dataclass(frozen=True)
class ExpCall:
    func: Node
    inst: Optional[Delim]
    arg: Node


@dataclass(frozen=True)
class ExpBlock:
    decs: Delim


@dataclass(frozen=True)
class ExpDo:
    exp: Node


@dataclass(frozen=True)
class ExpNot:
    exp: Node


@dataclass(frozen=True)
class ExpAnd:
    left: Node
    right: Node


@dataclass(frozen=True)
class ExpOr:
    left: Node
    right: Node


@dataclass(frozen=True)
class ExpIf:
    cond: Node
    then: Node
    else_: Optional[Node] = None


@dataclass(frozen=True)
class ExpSwitch:
    exp: Node
    cases: Delim


@dataclass(frozen=True)
class ExpWhile:
    cond: Node
    body: Node


@dataclass(frozen=True)
class ExpLoop:
    body: Node
    cond: Optional[Node] = None


@dataclass(frozen=True)
class ExpFor:
    pat: Node
    iter: Node
    body: Node


@dataclass(frozen=True)
class ExpLabel:
    id: Node
    typ: Optional[Node]
    exp: Node


@dataclass(frozen=True)
class ExpBreak:
    id: Node
    exp: Optional[Node] = None


@dataclass(frozen=True)
class ExpReturn:
    exp: Optional[Node] = None


@dataclass(frozen=True)
class ExpDebug:
    exp: Node


@dataclass(frozen=True)
class ExpDebugShow:
    exp: Node


@dataclass(frozen=True)
class ExpAsync:
    exp: Node


@dataclass(frozen=True)
class ExpAsyncStar:
    exp: Node


@dataclass(frozen=True)
class ExpAwait:
    exp: Node


@dataclass(frozen=True)
class ExpAwaitStar:
    exp: Node


@dataclass(frozen=True)
class ExpAssert:
    exp: Node


@dataclass(frozen=True)
class ExpAnnot:
    """A type annotation; ``hoisted`` records a precedence fix-up was applied."""

    hoisted: bool
    exp: Node
    typ: Node


@dataclass(frozen=True)
class ExpImport:
    path: str


@dataclass(frozen=True)
class ExpThrow:
    exp: Node


@dataclass(frozen=True)
class ExpTry:
    exp: Node
    case: Node


@dataclass(frozen=True)
class ExpIgnore:
    exp: Node


@dataclass(frozen=True)
class ExpParen:
    exp: Node


Exp = Union[
    ExpValue, ExpHole, ExpPrim, ExpVar, ExpLiteral, ExpActorUrl, ExpUn, ExpBin,
    ExpRel, ExpShow, ExpToCandid, ExpFromCandid, ExpTuple, ExpProj, ExpOpt,
    ExpDoOpt, ExpBang, ExpObjectBlock, ExpObject, ExpVariant, ExpDot, ExpAssign,
    ExpBinAssign, ExpArray, ExpIndex, ExpFunction, ExpCall, ExpBlock, ExpDo,
    ExpNot, ExpAnd, ExpOr, ExpIf, ExpSwitch, ExpWhile, ExpLoop, ExpFor,
    ExpLabel, ExpBreak, ExpReturn, ExpDebug, ExpDebugShow, ExpAsync,
    ExpAsyncStar, ExpAwait, ExpAwaitStar, ExpAssert, ExpAnnot, ExpImport,
    ExpThrow, ExpTry, ExpIgnore, ExpParen,
]


def obj_field_fields(first: Node, fields: Optional[Delim]) -> ExpObject:
    """An object literal whose fields start with ``first``."""
    if fields is None:
        return ExpObject(None, Delim.one(first))
    return ExpObject(None, fields.prepend(first))


def obj_id_fields(id_node: Node, fields: Delim) -> ExpObject:
    """An object literal whose first field is punned from identifier ``id_node``."""
    exp = Node(ExpVar(id_node.data), id_node.source)
    first = Node(ExpField(Mut.CONST, id_node, None, exp), id_node.source)
    return ExpObject(None, fields.prepend(first))


def obj_base_bases(
    base: Node, bases: Optional[Delim], fields: Optional[Delim]
) -> ExpObject:
    """An object literal extending ``base`` (and further ``bases``)."""
    if bases is None and fields is None:
        if isinstance(base.data, ExpVar):
            return obj_id_fields(Node(base.data.name, base.source), Delim())
        raise ValueError("parse error: object base must be an identifier")
    if bases is None:
        return ExpObject(Delim.one(base), fields)
    return ExpObject(bases.prepend(base), fields)


def hoist_right_type_annotation(exp: Exp) -> Exp:
    """Move a right-hand type annotation above a binary operator."""
    if isinstance(exp, ExpBin):
        right = exp.right.data
        if isinstance(right, ExpAnnot) and not right.hoisted:
            source = exp.left.source.expand(right.exp.source)
            inner = Node(ExpBin(exp.left, exp.op, right.exp), source)
            return ExpAnnot(True, inner, right.typ)
    return exp


def source_from_decs(decs: Iterable[Node]) -> Source:
    """The source spanning the first through the last declaration."""
    nodes = list(decs)
    if not nodes:
        return Source()
    return nodes[0].source.expand(nodes[-1].source)