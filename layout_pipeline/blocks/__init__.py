"""
Blocs — variantes rendables + factory.
"""
from .base import AbstractBlock
from .container import Container
from .text import Text
from .template import Template
from .css import Css
from .js import Js
from .factory import BLOCK_REGISTRY, ComponentFactory

__all__ = [
    "AbstractBlock", "Container", "Text", "Template", "Css", "Js",
    "BLOCK_REGISTRY", "ComponentFactory",
]
