import pytest

from mokit.doc import (
    INDENT_SPACE,
    concat,
    concat_docs,
    enclose,
    enclose_space,
    hardline,
    intersperse,
    kwd,
    line,
    line_,
    lines,
    nil,
    quote_ident,
    softline,
    space,
    strict_concat,
    text,
    wrap,
    wrap_,
)


def words(*names):
    return [text(n) for n in names]


def test_text_renders_itself():
    assert text("abc").render(10) == "abc"


def test_nil_renders_nothing_and_is_empty():
    assert nil().render(5) == ""
    assert nil().is_empty()


def test_append_accepts_plain_strings():
    assert text("a").append("b").render(80) == "a" + "b"


def test_append_nil_is_identity():
    doc = text("x")
    assert nil().append(doc) is doc
    assert doc.append(nil()) is doc


def test_append_rejects_other_types():
    with pytest.raises(TypeError):
        text("a").append(3)


def test_group_fits_on_one_line():
    doc = text("a").append(line()).append("b").group()
    assert doc.render(80) == "a b"


def test_group_breaks_when_too_narrow():
    doc = text("a").append(line()).append("b").group()
    assert doc.render(2).split("\n") == ["a", "b"]


def test_line_underscore_disappears_when_flat():
    doc = text("a").append(line_()).append("b").group()
    assert doc.render(80) == "a" + "b"


def test_nest_indents_broken_lines():
    doc = text("a").append(line()).append("b").nest(INDENT_SPACE)
    second = doc.render(80).split("\n")[1]
    assert second == " " * INDENT_SPACE + "b"


def test_hardline_forces_break_in_group():
    doc = text("a").append(hardline()).append(line()).append("b").group()
    rendered = doc.render(80)
    assert rendered.count("\n") == 2


def test_flat_alt_chooses_by_mode():
    doc = text("broken").flat_alt(text("flat"))
    assert doc.render(80) == "broken"
    assert doc.group().render(80) == "flat"


def test_is_empty_of_wrappers():
    assert nil().group().nest(4).is_empty()
    assert nil().flat_alt(nil()).is_empty()
    assert not line_().is_empty()
    assert not space().is_empty()


def test_enclose_empty_body():
    assert enclose("(", nil(), ")").render(80) == "(" + ")"


def test_enclose_space_empty_body():
    assert enclose_space("{", nil(), "}").render(80) == "{" + " " + "}"


def test_enclose_wide_stays_flat():
    rendered = enclose("[", strict_concat(words("a", "b"), ","), "]").render(80)
    assert "\n" not in rendered
    assert rendered.startswith("[") and rendered.endswith("]")


def test_enclose_narrow_breaks_and_indents():
    body = strict_concat(words("alpha", "beta", "gamma"), ",")
    rendered = enclose("(", body, ")").render(6)
    parts = rendered.split("\n")
    assert parts[0] == "("
    assert parts[-1] == ")"
    assert all(p.startswith(" " * INDENT_SPACE) for p in parts[1:-1])


def test_enclose_space_flat_has_inner_spaces():
    rendered = enclose_space("{", text("x"), "}").render(80)
    assert rendered == "{ x }"


def test_strict_concat_flat_and_broken():
    doc = strict_concat(words("a", "b", "c"), ";")
    assert "\n" not in doc.group().render(80)
    assert doc.render(80).count("\n") == 2


def test_concat_drops_last_separator_only_when_flat():
    doc = concat(words("a", "b"), ",")
    flat = doc.group().render(80)
    broken = doc.render(80)
    assert not flat.endswith(",")
    assert broken.endswith(",")
    assert broken.count("\n") == 1


def test_lines_ends_every_doc_with_newline():
    docs = words("x", "y", "z")
    rendered = lines(docs).render(80)
    assert rendered.count("\n") == len(docs)
    assert rendered.endswith("\n")


def test_intersperse_empty_is_nil():
    assert intersperse([], text(",")).is_empty()


def test_concat_docs_joins_in_order():
    assert concat_docs(words("p", "q", "r")).render(80) == "p" + "q" + "r"


def test_kwd_adds_trailing_space():
    assert kwd("let").render(80) == "let" + " "


def test_quote_ident_escapes_quote():
    rendered = quote_ident("a'b").render(80)
    assert rendered.startswith("'") and rendered.endswith("' ")
    assert "\\'" in rendered


def test_quote_ident_escapes_newline():
    assert "\n" not in quote_ident("x\ny").render(80)


def test_wrap_breaks_with_indent_when_narrow():
    doc = text("aaaa").append(wrap()).append("bbbb")
    assert "\n" not in doc.render(80)
    assert doc.render(5).split("\n")[1].startswith(" " * INDENT_SPACE)


def test_wrap_underscore_is_empty_when_fits():
    doc = text("a").append(wrap_()).append("b")
    assert doc.render(80) == "a" + "b"


def test_softline_is_group_of_line():
    doc = text("a").append(softline()).append("b")
    assert doc.render(80) == text("a").append(line()).append("b").group().render(80)


@pytest.mark.parametrize("width", [3, 8, 20, 80])
def test_flat_output_never_exceeds_width_when_it_fits(width):
    doc = enclose("(", strict_concat(words("ab", "cd"), ","), ")")
    rendered = doc.render(width)
    if "\n" not in rendered:
        assert len(rendered) <= width
    else:
        assert len(doc.render(10**6)) > width