"""Tests des endpoints HTTP — TestClient + factory injectée."""
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from layout_pipeline.api import app
from layout_pipeline.layout.factory import LayoutFactory
from layout_pipeline.router import get_layout_factory


@pytest.fixture
def client(make_module, loader_for):
    theme = make_module("Acme_Theme", {
        "home": """
            <layout>
              <container name="root" htmlTag="body">
                <block name="greeting" class="text" text="Bonjour"/>
              </container>
            </layout>""",
        "empty": "<layout/>",
    })
    factory = LayoutFactory(loader_for(theme))
    app.dependency_overrides[get_layout_factory] = lambda: factory
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_list_handles(client):
    r = client.get("/layout/handles")
    assert r.status_code == 200
    assert r.json() == {"handles": ["empty", "home"]}


def test_render_page(client):
    r = client.get("/layout/home")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert r.text == "<body>Bonjour</body>"


def test_render_block(client):
    r = client.get("/layout/home/blocks/greeting")
    assert r.status_code == 200
    assert r.text == "Bonjour"


@pytest.mark.parametrize("url", [
    "/layout/empty",
    "/layout/unknown",
    "/layout/home/blocks/missing",
])
def test_nothing_rendered_gives_404(client, url):
    assert client.get(url).status_code == 404


def test_route_passes_handle_to_factory():
    factory = MagicMock(spec=LayoutFactory)
    factory.render_block.return_value = "<nav/>"
    app.dependency_overrides[get_layout_factory] = lambda: factory
    try:
        r = TestClient(app).get("/layout/checkout_index/blocks/menu")
    finally:
        app.dependency_overrides.clear()
    assert r.text == "<nav/>"
    factory.render_block.assert_called_once_with("checkout_index", "menu")
