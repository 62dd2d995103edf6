"""
Layout Processor — applique les directives sur l'arbre fusionné.

Ordre fixe, à chaque tour :
  1. index des éléments nommés (doublons : la dernière déclaration l'emporte)
  2. <remove>      puis ré-indexation
  3. <move>        puis ré-indexation
  4. <reference*>  puis ré-indexation
Les tours se répètent tant qu'il reste des directives dans l'arbre (un
<reference*> peut injecter d'autres directives). Une cible introuvable n'est
jamais une erreur : la directive est simplement retirée.
"""
import logging
from typing import Dict, List, Optional, Sequence

from ..core.directives import MoveDirective, ReferenceDirective, RemoveDirective
from ..core.tree import LayoutNode, LayoutTree, REFERENCE_KINDS

log = logging.getLogger(__name__)


class Processor:
    def __init__(self):
        self.named: Dict[str, int] = {}
        self._tree: Optional[LayoutTree] = None

    def process(self, tree: LayoutTree) -> LayoutTree:
        """Résout toutes les directives en place et renvoie le même arbre."""
        self._tree = tree
        self._index()
        while self._directives(None):
            self._process_removes()
            self._process_moves()
            self._process_references()
            self._drop_leftovers()
        self._index()
        return tree

    def get_named_elements(self) -> Dict[str, LayoutNode]:
        if self._tree is None:
            return {}
        return {name: self._tree.node(node_id) for name, node_id in self.named.items()}

    # ── Index ────────────────────────────────────────────────────────────────

    def _index(self) -> None:
        tree = self._tree
        named: Dict[str, int] = {}
        for node in list(tree.walk()):
            if not node.is_element or not node.name or not tree.is_attached(node.id):
                continue
            previous = named.get(node.name)
            named[node.name] = node.id if previous is None else self._override(previous, node.id)
        self.named = named

    def _override(self, earlier: int, later: int) -> int:
        """Deux déclarations du même nom : une seule survit."""
        tree = self._tree
        if tree.is_ancestor(earlier, later):
            # déclaration imbriquée dans elle-même : on garde l'englobante
            tree.detach(later)
            return earlier
        for position, child_id in enumerate(list(tree.node(earlier).children)):
            tree.insert(later, child_id, position)
        tree.detach(earlier)
        log.debug("Processor : %s redéclaré, dernière déclaration conservée", tree.node(later).name)
        return later

    def _lookup(self, name: str) -> Optional[int]:
        node_id = self.named.get(name)
        if node_id is None or not self._tree.is_attached(node_id):
            return None
        return node_id

    def _directives(self, kinds: Optional[Sequence[str]]) -> List[LayoutNode]:
        if kinds is None:
            return [n for n in self._tree.walk() if n.is_directive]
        return [n for n in self._tree.walk() if n.kind in kinds]

    # ── remove ───────────────────────────────────────────────────────────────

    def _process_removes(self) -> None:
        tree = self._tree
        removes = self._directives(("remove",))
        while removes:
            for node in removes:
                if not tree.is_attached(node.id):
                    continue
                directive = RemoveDirective.from_node(node)
                target = self._lookup(directive.target) if directive else None
                if target is not None:
                    tree.detach(target)
                    log.debug("Processor : %s retiré", directive.target)
                tree.detach(node.id)
            removes = self._directives(("remove",))
        self._index()

    # ── move ─────────────────────────────────────────────────────────────────

    def _process_moves(self) -> None:
        tree = self._tree
        for node in self._directives(("move",)):
            if not tree.is_attached(node.id):
                continue
            tree.detach(node.id)
            directive = MoveDirective.from_node(node)
            if directive is not None:
                self._move(directive)
        self._index()

    def _move(self, directive: MoveDirective) -> None:
        element = self._lookup(directive.element)
        destination = self._lookup(directive.destination)
        if element is None or destination is None:
            log.debug("Processor : move %s → %s ignoré (cible absente)", directive.element, directive.destination)
            return
        if self._tree.is_ancestor(element, destination):
            log.warning("Processor : move %s dans son propre sous-arbre %s refusé", directive.element, directive.destination)
            return
        self._place(element, destination, directive.before, directive.after)

    def _place(self, node_id: int, parent_id: int, before: Optional[str], after: Optional[str]) -> None:
        """Rattache node_id sous parent_id : avant `before`, sinon après `after`, sinon en fin."""
        tree = self._tree
        tree.detach(node_id)
        if before:
            index = self._sibling_index(parent_id, before)
            if index is not None:
                tree.insert(parent_id, node_id, index)
                return
        if after:
            index = self._sibling_index(parent_id, after)
            if index is not None:
                tree.insert(parent_id, node_id, index + 1)
                return
        tree.insert(parent_id, node_id)

    def _sibling_index(self, parent_id: int, name: str) -> Optional[int]:
        for index, child in enumerate(self._tree.children(parent_id)):
            if child.is_element and child.name == name:
                return index
        return None

    # ── referenceBlock / referenceContainer ──────────────────────────────────

    def _process_references(self) -> None:
        tree = self._tree
        for node in self._directives(REFERENCE_KINDS):
            if not tree.is_attached(node.id):
                continue
            directive = ReferenceDirective.from_node(node)
            target = self._lookup(directive.target) if directive else None
            if target is not None and not tree.is_ancestor(node.id, target):
                for child in tree.children(node.id):
                    self._place(child.id, target, child.attributes.get("before"), child.attributes.get("after"))
            else:
                log.debug("Processor : %s %s sans cible, contenu ignoré", node.kind, node.attributes.get("name"))
            tree.detach(node.id)
        self._index()

    def _drop_leftovers(self) -> None:
        # <update> non résolus par le Merger
        for node in self._directives(("update",)):
            self._tree.detach(node.id)
