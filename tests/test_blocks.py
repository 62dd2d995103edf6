"""Tests des blocs : arbre parent/enfants, Container, Text, Css, Js, confinement des erreurs."""
import pytest

from layout_pipeline.blocks import AbstractBlock, Container, Css, Js, Text


class Boom(AbstractBlock):
    def render(self) -> str:
        raise RuntimeError("panne --> rendu")


def container(name="c", **data):
    return Container(name, data)


# ── Arbre de blocs ───────────────────────────────────────────────────────────

class TestBlockTree:
    def test_add_child_sets_parent(self):
        parent, child = container("p"), Text("t")
        parent.add_child(child)
        assert child.parent is parent
        assert parent.children == (child,)

    def test_add_child_reparents(self):
        first, second, child = container("a"), container("b"), Text("t")
        first.add_child(child)
        second.add_child(child)
        assert first.children == ()
        assert second.children == (child,)
        assert child.parent is second

    def test_remove_child_by_name_and_by_block(self):
        parent, a, b = container("p"), Text("a"), Text("b")
        parent.add_child(a).add_child(b)
        parent.remove_child("a")
        parent.remove_child(b)
        assert parent.children == ()
        assert a.parent is None and b.parent is None

    def test_remove_unknown_child_is_noop(self):
        parent = container("p")
        parent.add_child(Text("a"))
        parent.remove_child("ghost")
        parent.remove_child(Text("a"))
        assert [c.name for c in parent.children] == ["a"]

    def test_alias_lookup(self):
        parent, child = container("p"), Text("real_name")
        parent.add_child(child, alias="short")
        assert parent.get_child("short") is child
        assert parent.get_child("real_name") is child
        parent.remove_child("short")
        assert parent.get_child("short") is None

    def test_cycle_is_refused(self):
        outer, inner = container("outer"), container("inner")
        outer.add_child(inner)
        with pytest.raises(ValueError):
            inner.add_child(outer)
        with pytest.raises(ValueError):
            outer.add_child(outer)

    def test_data_bag(self):
        block = Text("t", {"a": 1})
        assert block.set_data("b", 2) is block
        assert block.get_data() == {"a": 1, "b": 2}
        assert block.get_data("missing", "x") == "x"
        block.get_data()["c"] = 3
        assert not block.has_data("c")

    @pytest.mark.parametrize("value, expected", [
        ("true", True), ("1", True), ("false", False), ("0", False), (True, True), (False, False),
    ])
    def test_get_flag(self, value, expected):
        assert Text("t", {"f": value}).get_flag("f") is expected


# ── Container ────────────────────────────────────────────────────────────────

class TestContainer:
    def test_default_wrapper_is_div(self):
        assert container().to_html() == "<div></div>"

    def test_custom_tag_and_attributes(self):
        block = container(htmlTag="header", htmlId="top", htmlClass="page-header")
        block.add_child(Text("t", text="Hello"))
        assert block.to_html() == '<header id="top" class="page-header">Hello</header>'

    def test_empty_tag_renders_children_only(self):
        block = container(htmlTag="")
        block.add_child(Text("a", text="A")).add_child(Text("b", text="B"))
        assert block.to_html() == "AB"

    def test_attributes_are_escaped(self):
        block = container(htmlClass='x" onclick="alert(1)')
        assert block.to_html() == '<div class="x&#34; onclick=&#34;alert(1)"></div>'

    def test_invalid_tag_gives_diagnostic(self):
        html = container("bad", htmlTag="div onload=x").to_html()
        assert html.startswith("<!-- Block error [bad]:")
        assert "<div" not in html

    def test_void_tag_with_children_gives_diagnostic(self):
        block = container("media", htmlTag="img")
        block.add_child(Text("caption", text="Légende"))
        html = block.to_html()
        assert html.startswith("<!-- Block error [media]:")
        assert "Légende" not in html

    def test_void_tag_without_children(self):
        assert container(htmlTag="hr", htmlClass="sep").to_html() == '<hr class="sep" />'

    def test_nested_rendering_order(self):
        root = container("root", htmlTag="main")
        header = container("header", htmlTag="header")
        header.add_child(Text("logo", text="Logo"))
        root.add_child(header).add_child(Text("content", text="Body"))
        assert root.to_html() == "<main><header>Logo</header>Body</main>"


# ── Text / Css / Js ──────────────────────────────────────────────────────────

def test_text_prefers_data():
    assert Text("t", text="default").to_html() == "default"
    assert Text("t", {"text": "from data"}, text="default").to_html() == "from data"


def test_css_link():
    assert Css("s", {"href": "/a.css", "media": "print"}).to_html() == \
        '<link rel="stylesheet" href="/a.css" media="print">'
    assert Css("s").to_html() == ""


def test_js_flags():
    assert Js("j", {"src": "/a.js"}).to_html() == '<script src="/a.js" defer></script>'
    assert Js("j", {"src": "/a.js", "defer": "false", "async": "true"}).to_html() == \
        '<script src="/a.js" async></script>'
    assert Js("j").to_html() == ""


# ── Confinement des erreurs ──────────────────────────────────────────────────

def test_failing_block_is_contained(caplog):
    root = container("root")
    root.add_child(Text("before", text="A")).add_child(Boom("boom")).add_child(Text("after", text="B"))
    html = root.to_html()
    assert html.startswith("<div>A<!-- Block error [boom]: ")
    assert html.endswith(" -->B</div>")
    assert "-->" not in html[len("<div>A<!--"):-len(" -->B</div>")]
    assert "Rendu du bloc boom en échec" in caplog.text


def test_unnamed_failing_block_uses_class_name():
    assert Boom().to_html().startswith("<!-- Block error [Boom]:")
