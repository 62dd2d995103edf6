"""
Layout Factory — pipeline complet pour un rendu.

  handles → Loader → Merger (+ <update>) → Processor → Builder → Renderer → HTML

Chaque appel construit ses propres arbres (Processor et Builder neufs) :
rien n'est partagé entre deux requêtes hormis les fichiers et le cache des
chemins de templates.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from ..blocks import AbstractBlock, ComponentFactory
from ..config import Settings, load_settings
from ..core.modules import ModuleRegistry, discover_modules
from ..view.template_resolver import TemplateResolver
from .builder import Builder
from .cache import LayoutSourceCache
from .loader import Loader
from .merger import Merger
from .processor import Processor
from .renderer import Renderer

log = logging.getLogger(__name__)

Handles = Union[str, Sequence[str]]


class LayoutFactory:
    def __init__(
        self,
        loader: Loader,
        merger: Optional[Merger] = None,
        renderer: Optional[Renderer] = None,
        component_factory: Optional[ComponentFactory] = None,
        template_resolver: Optional[TemplateResolver] = None,
    ):
        self.loader = loader
        self.merger = merger or Merger()
        self.renderer = renderer or Renderer()
        self.component_factory = component_factory or ComponentFactory()
        self.template_resolver = template_resolver or TemplateResolver(loader.registry, loader.area)

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        registry: Optional[ModuleRegistry] = None,
    ) -> "LayoutFactory":
        settings = settings or load_settings()
        registry = registry or discover_modules(settings.app_dir)
        cache = LayoutSourceCache(settings.layout_cache_ttl) if settings.layout_cache_enabled else None
        loader = Loader(registry, area=settings.area, cache=cache)
        return cls(loader, template_resolver=TemplateResolver(registry, settings.area))

    # ── API ──────────────────────────────────────────────────────────────────

    def build(self, handles: Handles, data: Optional[Dict[str, Any]] = None) -> Tuple[Optional[AbstractBlock], Builder]:
        """Exécute le pipeline jusqu'à l'arbre de blocs (données injectées)."""
        handle_list = _as_list(handles)
        tree = self.merger.merge_handles(handle_list, self.loader)
        Processor().process(tree)

        builder = Builder(self.component_factory, self.template_resolver)
        root = builder.build(tree, data)
        if root is None:
            log.warning("LayoutFactory : aucun bloc racine pour %s", handle_list)
        elif data:
            _inject_data(root, data)
        return root, builder

    def render(self, handles: Handles, data: Optional[Dict[str, Any]] = None) -> str:
        log.info("LayoutFactory : rendu %s", _as_list(handles))
        root, _ = self.build(handles, data)
        return self.renderer.render(root)

    def render_block(self, handles: Handles, name: str, data: Optional[Dict[str, Any]] = None) -> str:
        """Rendu partiel d'un bloc nommé (ex. rafraîchissement AJAX)."""
        log.info("LayoutFactory : rendu du bloc %s pour %s", name, _as_list(handles))
        _, builder = self.build(handles, data)
        return self.renderer.render_block(builder, name)

    def get_available_handles(self) -> List[str]:
        return self.loader.get_available_handles()


def _as_list(handles: Handles) -> List[str]:
    return [handles] if isinstance(handles, str) else list(handles)


def _inject_data(block: AbstractBlock, data: Dict[str, Any]) -> None:
    # les valeurs issues du XML restent prioritaires
    stack = [block]
    while stack:
        current = stack.pop()
        for key, value in data.items():
            if not current.has_data(key):
                current.set_data(key, value)
        stack.extend(current.children)
