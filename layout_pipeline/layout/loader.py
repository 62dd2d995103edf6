"""
Layout Loader — localise et parse les fichiers <handle>.xml de chaque module.

Les modules sont parcourus dans l'ordre de dépendance ; pour chacun, le
premier répertoire candidat contenant le fichier l'emporte (un arbre au plus
par module et par handle). Un fichier mal formé est ignoré pour ce module
seulement.
"""
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from lxml import etree

from ..core.modules import ModuleRegistry
from ..core.tree import LayoutTree
from ..exceptions import LayoutSourceError
from .cache import LayoutSourceCache, cache_key

log = logging.getLogger(__name__)

LoadedLayouts = List[Tuple[str, LayoutTree]]


def _parser():
    return etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)


def parse_layout_file(path: Path) -> LayoutTree:
    try:
        root = etree.parse(str(path), _parser()).getroot()
    except (OSError, etree.XMLSyntaxError) as e:
        raise LayoutSourceError(path, str(e)) from e
    return LayoutTree.from_element(root)


def parse_layout_string(xml: str, source: str = "<string>") -> LayoutTree:
    try:
        root = etree.fromstring(xml.encode("utf-8"), _parser())
    except etree.XMLSyntaxError as e:
        raise LayoutSourceError(source, str(e)) from e
    return LayoutTree.from_element(root)


class Loader:
    def __init__(
        self,
        registry: ModuleRegistry,
        area: str = "frontend",
        cache: Optional[LayoutSourceCache] = None,
    ):
        self.registry = registry
        self.area = area
        self.cache = cache

    def load(self, handle: str) -> LoadedLayouts:
        """Renvoie [(module, arbre)] dans l'ordre des modules ; [] si handle inconnu."""
        if not handle or "/" in handle or "\\" in handle or handle.startswith("."):
            log.warning("Handle de layout refusé : %r", handle)
            return []

        key = None
        if self.cache is not None:
            key = cache_key(handle, self.registry.names())
            cached = self.cache.get(key)
            if cached is not None:
                return [(module, parse_layout_string(xml, module)) for module, xml in cached]

        layouts = self._load_from_files(handle)

        if self.cache is not None and layouts:
            self.cache.set(key, [(module, tree.to_xml()) for module, tree in layouts])
        return layouts

    def _load_from_files(self, handle: str) -> LoadedLayouts:
        layouts: LoadedLayouts = []
        for module in self.registry.list_modules_in_dependency_order():
            path = self._find_layout_file(module.path, handle)
            if path is None:
                continue
            try:
                layouts.append((module.name, parse_layout_file(path)))
            except LayoutSourceError as e:
                log.warning("Module %s ignoré pour le handle %s : %s", module.name, handle, e.reason)
        return layouts

    def _find_layout_file(self, module_path: Path, handle: str) -> Optional[Path]:
        for directory in self.layout_directories(module_path):
            candidate = directory / f"{handle}.xml"
            if candidate.is_file():
                return candidate
        return None

    def layout_directories(self, module_path: Path) -> List[Path]:
        """Répertoires candidats, du plus prioritaire au moins prioritaire."""
        base = Path(module_path)
        return [
            base / "view" / self.area / "layout",
            base / "view" / "base" / "layout",
            base / "view" / "layout",
            base / "etc" / "layout",
        ]

    def get_available_handles(self) -> List[str]:
        handles = set()
        for module in self.registry.list_modules_in_dependency_order():
            for directory in self.layout_directories(module.path):
                if directory.is_dir():
                    handles.update(p.stem for p in directory.glob("*.xml"))
        return sorted(handles)
