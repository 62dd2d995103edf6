"""Pipeline de layout : Loader → Merger → Processor → Builder → Renderer."""
from .cache import LayoutSourceCache
from .loader import Loader, parse_layout_file, parse_layout_string
from .merger import Merger
from .processor import Processor
from .builder import Builder
from .renderer import Renderer
from .factory import LayoutFactory

__all__ = [
    "LayoutSourceCache",
    "Loader", "parse_layout_file", "parse_layout_string",
    "Merger",
    "Processor",
    "Builder",
    "Renderer",
    "LayoutFactory",
]
