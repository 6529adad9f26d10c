"""Pretty-printing documents: building blocks and a width-aware renderer."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Union

INDENT_SPACE = 2


class _Mode(Enum):
    FLAT = auto()
    BREAK = auto()


class Doc:
    """An immutable document that can be laid out to fit a line width."""

    __slots__ = ()

    def append(self, other: Union[Doc, str]) -> Doc:
        """This document followed by ``other`` (a document or plain text)."""
        other = _coerce(other)
        if isinstance(self, _Nil):
            return other
        if isinstance(other, _Nil):
            return self
        return _Append(self, other)

    __add__ = append

    def group(self) -> Doc:
        """Lay this document out on one line if it fits, else break it."""
        return _Group(self)

    def nest(self, indent: int) -> Doc:
        """Indent line breaks inside this document by ``indent`` more columns."""
        return _Nest(indent, self)

    def flat_alt(self, other: Union[Doc, str]) -> Doc:
        """Use this document when broken and ``other`` when laid out flat."""
        return _FlatAlt(self, _coerce(other))

    def is_empty(self) -> bool:
        """Whether the document renders nothing in every layout."""
        match self:
            case _Nil():
                return True
            case _FlatAlt(broken, flat):
                return broken.is_empty() and flat.is_empty()
            case _Group(inner) | _Nest(_, inner):
                return inner.is_empty()
            case _:
                return False

    def render(self, width: int) -> str:
        """Lay the document out within ``width`` columns where possible."""
        out: list[str] = []
        pos = 0
        cmds: list[tuple[int, _Mode, Doc]] = [(0, _Mode.BREAK, self)]
        while cmds:
            ind, mode, doc = cmds.pop()
            match doc:
                case _Nil():
                    pass
                case _Text(s):
                    out.append(s)
                    pos += len(s)
                case _Append(left, right):
                    cmds.append((ind, mode, right))
                    cmds.append((ind, mode, left))
                case _Group(inner):
                    if mode is _Mode.FLAT or _fits(inner, cmds, pos, width):
                        cmds.append((ind, _Mode.FLAT, inner))
                    else:
                        cmds.append((ind, _Mode.BREAK, inner))
                case _Nest(extra, inner):
                    cmds.append((ind + extra, mode, inner))
                case _FlatAlt(broken, flat):
                    cmds.append((ind, mode, broken if mode is _Mode.BREAK else flat))
                case _Hardline():
                    out.append("\n" + " " * ind)
                    pos = ind
        return "".join(out)


@dataclass(frozen=True)
class _Nil(Doc):
    pass


@dataclass(frozen=True)
class _Text(Doc):
    text: str


@dataclass(frozen=True)
class _Append(Doc):
    left: Doc
    right: Doc


@dataclass(frozen=True)
class _Group(Doc):
    doc: Doc


@dataclass(frozen=True)
class _Nest(Doc):
    indent: int
    doc: Doc


@dataclass(frozen=True)
class _FlatAlt(Doc):
    broken: Doc
    flat: Doc


@dataclass(frozen=True)
class _Hardline(Doc):
    pass


_NIL = _Nil()
_HARDLINE = _Hardline()


def _coerce(value: Union[Doc, str]) -> Doc:
    if isinstance(value, Doc):
        return value
    if isinstance(value, str):
        return text(value)
    raise TypeError(f"cannot append {type(value).__name__} to a document")


def _fits(doc: Doc, rest: list[tuple[int, _Mode, Doc]], pos: int, width: int) -> bool:
    """Whether ``doc`` laid out flat, then the rest up to a break, fits the width."""
    stack = [doc]
    mode = _Mode.FLAT
    rest_index = len(rest)
    while True:
        if stack:
            current = stack.pop()
        elif rest_index == 0:
            return True
        else:
            rest_index -= 1
            mode = _Mode.BREAK
            current = rest[rest_index][2]
        match current:
            case _Nil():
                pass
            case _Text(s):
                pos += len(s)
                if pos > width:
                    return False
            case _Append(left, right):
                stack.append(right)
                stack.append(left)
            case _FlatAlt(broken, flat):
                stack.append(broken if mode is _Mode.BREAK else flat)
            case _Group(inner) | _Nest(_, inner):
                stack.append(inner)
            case _Hardline():
                return mode is _Mode.BREAK


def nil() -> Doc:
    return _NIL


def text(s: str) -> Doc:
    return _Text(s)


def space() -> Doc:
    return _Text(" ")


def hardline() -> Doc:
    return _HARDLINE


def line() -> Doc:
    """A line break, or a space when laid out flat."""
    return hardline().flat_alt(space())


def line_() -> Doc:
    """A line break, or nothing when laid out flat."""
    return hardline().flat_alt(nil())


def softline() -> Doc:
    return line().group()


def softline_() -> Doc:
    return line_().group()


def concat_docs(docs: Iterable[Doc]) -> Doc:
    """All the documents one after another."""
    result = nil()
    for doc in docs:
        result = result.append(doc)
    return result


def intersperse(docs: Iterable[Doc], separator: Union[Doc, str]) -> Doc:
    """The documents with ``separator`` between each pair."""
    separator = _coerce(separator)
    result = nil()
    for index, doc in enumerate(docs):
        if index:
            result = result.append(separator)
        result = result.append(doc)
    return result


def enclose(left: str, doc: Doc, right: str) -> Doc:
    """``doc`` between brackets, broken onto indented lines when too wide."""
    if doc.is_empty():
        return text(left).append(right)
    return (
        text(left)
        .append(line_())
        .append(doc)
        .nest(INDENT_SPACE)
        .append(line_())
        .append(right)
        .group()
    )


def enclose_space(left: str, doc: Doc, right: str) -> Doc:
    """Like :func:`enclose`, but with spaces inside the brackets when flat."""
    if doc.is_empty():
        return text(left).append(space()).append(right)
    return (
        text(left)
        .append(line())
        .append(doc)
        .nest(INDENT_SPACE)
        .append(line())
        .append(right)
        .group()
    )


def strict_concat(docs: Iterable[Doc], sep: str) -> Doc:
    """The documents separated by ``sep`` and a line."""
    return intersperse(docs, text(sep).append(line()))


def concat(docs: Iterable[Doc], sep: str) -> Doc:
    """Separator after every item; the last one is dropped when laid out flat."""
    items = list(docs)
    broken = intersperse((d.append(sep) for d in items), line())
    flat = intersperse(items, text(sep).append(line()))
    return broken.flat_alt(flat)


def lines(docs: Iterable[Doc]) -> Doc:
    """Each document followed by a hard line break."""
    return concat_docs(d.append(hardline()) for d in docs)


def kwd(s: object) -> Doc:
    """A keyword followed by a space."""
    return text(str(s)).append(space())


_ESCAPES = {
    "\0": "\\0",
    "\t": "\\t",
    "\r": "\\r",
    "\n": "\\n",
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
}


def _escape_debug(s: str) -> str:
    def escape(ch: str) -> str:
        if ch in _ESCAPES:
            return _ESCAPES[ch]
        if not ch.isprintable():
            return f"\\u{{{ord(ch):x}}}"
        return ch

    return "".join(escape(ch) for ch in s)


def quote_ident(ident: str) -> Doc:
    """An identifier in single quotes with special characters escaped."""
    return text("'").append(_escape_debug(ident)).append("'").append(space())


def wrap() -> Doc:
    """A soft break that becomes a space when it fits."""
    return softline().nest(INDENT_SPACE)


def wrap_() -> Doc:
    """A soft break that becomes nothing when it fits."""
    return softline_().nest(INDENT_SPACE)