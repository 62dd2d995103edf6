"""
Bloc de base — nœud rendu de l'arbre de blocs.

Un bloc porte un nom optionnel, un sac de données (attributs XML et
arguments), une liste ordonnée d'enfants et une référence vers son parent.
`add_child` / `remove_child` maintiennent toujours la cohérence parent ↔ enfants.

Les sous-classes implémentent `render()` ; l'appelant utilise `to_html()`,
qui confine toute exception au bloc fautif (commentaire HTML de diagnostic).
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple, Union

from ..config import env_flag

log = logging.getLogger(__name__)


class AbstractBlock(ABC):
    def __init__(self, name: Optional[str] = None, data: Optional[Dict[str, Any]] = None):
        self.name = name
        self.parent: Optional["AbstractBlock"] = None
        self._data: Dict[str, Any] = dict(data or {})
        self._children: List["AbstractBlock"] = []
        self._aliases: Dict[str, "AbstractBlock"] = {}

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r} children={len(self._children)}>"

    # ── Données ──────────────────────────────────────────────────────────────

    def set_data(self, key: str, value: Any) -> "AbstractBlock":
        self._data[key] = value
        return self

    def get_data(self, key: Optional[str] = None, default: Any = None) -> Any:
        if key is None:
            return dict(self._data)
        return self._data.get(key, default)

    def has_data(self, key: str) -> bool:
        return key in self._data

    def get_flag(self, key: str, default: bool = False) -> bool:
        """Donnée booléenne : les attributs XML arrivent sous forme de texte."""
        value = self._data.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        return env_flag(str(value), default)

    # ── Arbre ────────────────────────────────────────────────────────────────

    @property
    def children(self) -> Tuple["AbstractBlock", ...]:
        return tuple(self._children)

    def add_child(self, block: "AbstractBlock", alias: Optional[str] = None) -> "AbstractBlock":
        if block.is_ancestor_of(self):
            raise ValueError(f"{block!r} ne peut pas devenir enfant de son descendant {self!r}")
        if block.parent is not None:
            block.parent.remove_child(block)
        self._children.append(block)
        block.parent = self
        if alias:
            self._aliases[alias] = block
        return self

    def remove_child(self, child: Union[str, "AbstractBlock"]) -> "AbstractBlock":
        block = self.get_child(child) if isinstance(child, str) else child
        if block is not None and block in self._children:
            self._children.remove(block)
            block.parent = None
            self._aliases = {k: v for k, v in self._aliases.items() if v is not block}
        return self

    def get_child(self, alias: str) -> Optional["AbstractBlock"]:
        if alias in self._aliases:
            return self._aliases[alias]
        for child in self._children:
            if child.name == alias:
                return child
        return None

    def is_ancestor_of(self, block: "AbstractBlock") -> bool:
        current: Optional[AbstractBlock] = block
        while current is not None:
            if current is self:
                return True
            current = current.parent
        return False

    # ── Rendu ────────────────────────────────────────────────────────────────

    def child_html(self, alias: str) -> str:
        child = self.get_child(alias)
        return child.to_html() if child is not None else ""

    def children_html(self) -> str:
        return "".join(child.to_html() for child in self._children)

    def to_html(self) -> str:
        try:
            return self.render()
        except Exception as e:
            label = self.name or type(self).__name__
            log.warning("Rendu du bloc %s en échec : %s", label, e)
            return f"<!-- Block error [{_comment_safe(label)}]: {_comment_safe(str(e))} -->"

    @abstractmethod
    def render(self) -> str:
        ...


def _comment_safe(text: str) -> str:
    return text.replace("--", "- -").replace(">", "&gt;")
