"""
Layout Pipeline — rendu de pages à partir de fragments de layout XML par module.

Usage:
    >>> from layout_pipeline import LayoutFactory, ModuleRegistry, ModuleInfo, Loader
    >>> registry = ModuleRegistry([ModuleInfo(name="Acme_Theme", path="app/Acme/Theme")])
    >>> html = LayoutFactory(Loader(registry)).render("cms_page_view")

Étapes seules :
    >>> tree = Merger().merge(Loader(registry).load("cms_page_view"))
    >>> root = Builder().build(Processor().process(tree))
    >>> html = Renderer().render(root)
"""
from .exceptions import (
    LayoutError, LayoutSourceError, ComponentNotFound, InvalidTemplatePath, ModuleDependencyError,
)
from .config import Settings, load_settings
from .core import LayoutNode, LayoutTree, ModuleInfo, ModuleRegistry, discover_modules
from .blocks import AbstractBlock, Container, Text, Template, Css, Js, ComponentFactory
from .view import TemplateResolver
from .layout import (
    LayoutSourceCache, Loader, Merger, Processor, Builder, Renderer, LayoutFactory,
)

__version__ = "0.1.0"

__all__ = [
    # erreurs
    "LayoutError", "LayoutSourceError", "ComponentNotFound", "InvalidTemplatePath", "ModuleDependencyError",
    # configuration
    "Settings", "load_settings",
    # modèle
    "LayoutNode", "LayoutTree", "ModuleInfo", "ModuleRegistry", "discover_modules",
    # blocs
    "AbstractBlock", "Container", "Text", "Template", "Css", "Js", "ComponentFactory",
    "TemplateResolver",
    # pipeline
    "LayoutSourceCache", "Loader", "Merger", "Processor", "Builder", "Renderer", "LayoutFactory",
]
