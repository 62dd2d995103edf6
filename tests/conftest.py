"""Fixtures partagées : modules de test écrits sur disque."""
from pathlib import Path
from typing import Dict, Iterable

import pytest

from layout_pipeline.core.modules import ModuleInfo, ModuleRegistry
from layout_pipeline.layout.loader import Loader, parse_layout_string
from layout_pipeline.view.template_resolver import clear_cache


def layout(inner: str):
    """Arbre de layout depuis un fragment XML (sans la racine <layout>)."""
    return parse_layout_string(f"<layout>{inner}</layout>")


def child_names(tree, node_id=None) -> list:
    return [c.name or c.kind for c in tree.children(node_id)]


def named(tree, name: str):
    matches = [n for n in tree.walk() if n.is_element and n.name == name]
    assert len(matches) == 1, f"{name} : {len(matches)} nœuds"
    return matches[0]


@pytest.fixture(autouse=True)
def _fresh_template_cache():
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def make_module(tmp_path):
    """make_module("Acme_Theme", {"default": "<layout>…</layout>"}, subdir=…, depends=[…])"""
    def _make(
        name: str,
        layouts: Dict[str, str] = None,
        subdir: str = "view/frontend/layout",
        depends: Iterable[str] = (),
        templates: Dict[str, str] = None,
    ) -> ModuleInfo:
        root = tmp_path / name.replace("_", "/")
        for handle, xml in (layouts or {}).items():
            path = root / subdir / f"{handle}.xml"
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(xml, encoding="utf-8")
        for rel_path, source in (templates or {}).items():
            path = root / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(source, encoding="utf-8")
        root.mkdir(parents=True, exist_ok=True)
        return ModuleInfo(name=name, path=root, depends=list(depends))
    return _make


@pytest.fixture
def loader_for():
    def _loader(*modules: ModuleInfo, **kwargs) -> Loader:
        return Loader(ModuleRegistry(modules), **kwargs)
    return _loader
