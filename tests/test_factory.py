"""Tests LayoutFactory / Renderer — pipeline complet, de plusieurs modules au HTML."""
import pytest

from layout_pipeline.blocks import Text
from layout_pipeline.config import Settings
from layout_pipeline.core.modules import ModuleRegistry
from layout_pipeline.layout.builder import Builder
from layout_pipeline.layout.factory import LayoutFactory
from layout_pipeline.layout.renderer import Renderer


@pytest.fixture
def shop(make_module, loader_for):
    base = make_module("Acme_Base", {
        "page_view": """
            <layout>
              <container name="root" htmlTag="main">
                <container name="header" htmlTag="header">
                  <block name="logo" class="text" text="Acme"/>
                </container>
              </container>
            </layout>""",
        "default": '<layout><referenceContainer name="root"><block name="note" class="text" text="defaults"/></referenceContainer></layout>',
        "product_view": """
            <layout>
              <update handle="page_view"/>
              <referenceContainer name="root">
                <block name="product" template="Acme_Base::product.html"/>
              </referenceContainer>
            </layout>""",
    }, templates={"view/frontend/templates/product.html": "<p>{{ sku }} {{ label }}</p>"})
    cms = make_module("Acme_Cms", {
        "page_view": """
            <layout>
              <referenceContainer name="root">
                <container name="footer" htmlTag="footer">
                  <block name="copyright" class="text" text="(c) Acme"/>
                </container>
              </referenceContainer>
            </layout>""",
    }, depends=["Acme_Base"])
    return LayoutFactory(loader_for(cms, base))


# ── Rendu complet ────────────────────────────────────────────────────────────

def test_reference_from_second_module_extends_first(shop):
    root, builder = shop.build("page_view")
    assert [c.name for c in root.children] == ["header", "footer"]
    assert shop.render("page_view") == \
        "<main><header>Acme</header><footer>(c) Acme</footer></main>"


def test_update_and_template(shop):
    html = shop.render("product_view", {"sku": "A-1", "label": "Lampe"})
    assert html == "<main><header>Acme</header><footer>(c) Acme</footer><p>A-1 Lampe</p></main>"


def test_multiple_handles_merge_in_order(shop):
    root, builder = shop.build(["page_view", "default"])
    assert [c.name for c in root.children] == ["header", "footer", "note"]
    assert builder.get_block("note").parent is root


def test_unknown_handle_renders_empty(shop, caplog):
    assert shop.render("nothing_here") == ""
    assert "aucun bloc racine" in caplog.text


def test_render_block(shop):
    assert shop.render_block("page_view", "footer") == "<footer>(c) Acme</footer>"
    assert shop.render_block("page_view", "missing") == ""


def test_data_does_not_override_xml_values(shop):
    root, builder = shop.build("page_view", {"text": "injected", "extra": 1})
    logo = builder.get_block("logo")
    assert logo.get_data("text") == "Acme"
    assert logo.get_data("extra") == 1
    assert root.get_data("extra") == 1


def test_each_call_builds_fresh_trees(shop):
    first, _ = shop.build("page_view")
    second, _ = shop.build("page_view")
    assert first is not second
    assert shop.render("page_view") == shop.render("page_view")


def test_available_handles(shop):
    assert shop.get_available_handles() == ["default", "page_view", "product_view"]


# ── Renderer ─────────────────────────────────────────────────────────────────

def test_renderer_none_gives_empty_string():
    assert Renderer().render(None) == ""


def test_renderer_block_lookup():
    builder = Builder()
    builder.blocks["x"] = Text("x", text="X")
    assert Renderer().render_block(builder, "x") == "X"
    assert Renderer().render_block(builder, "y") == ""


# ── Configuration ────────────────────────────────────────────────────────────

def test_from_settings_discovers_modules(tmp_path):
    module_dir = tmp_path / "Acme" / "Theme"
    (module_dir / "etc").mkdir(parents=True)
    (module_dir / "etc" / "module.xml").write_text('<config><module name="Acme_Theme"/></config>')
    (module_dir / "view" / "frontend" / "layout").mkdir(parents=True)
    (module_dir / "view" / "frontend" / "layout" / "home.xml").write_text(
        '<layout><container name="root" htmlTag="body"/></layout>'
    )

    factory = LayoutFactory.from_settings(Settings(app_dir=tmp_path, layout_cache_enabled=True))

    assert factory.loader.cache is not None
    assert factory.get_available_handles() == ["home"]
    assert factory.render("home") == "<body></body>"


def test_from_settings_with_explicit_registry(make_module):
    theme = make_module("Acme_Theme", {"home": '<layout><container name="root"/></layout>'}, subdir="view/adminhtml/layout")
    factory = LayoutFactory.from_settings(Settings(area="adminhtml"), registry=ModuleRegistry([theme]))
    assert factory.loader.cache is None
    assert factory.render("home") == "<div></div>"
