"""Layout Renderer — arbre de blocs → HTML."""
from typing import Optional

from ..blocks import AbstractBlock
from .builder import Builder


class Renderer:
    def render(self, root: Optional[AbstractBlock]) -> str:
        return root.to_html() if root is not None else ""

    def render_block(self, builder: Builder, name: str) -> str:
        """HTML d'un bloc nommé seul (rendu partiel), "" s'il n'existe pas."""
        return self.render(builder.get_block(name))
