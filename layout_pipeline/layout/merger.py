"""
Layout Merger — fusionne les arbres de plusieurs modules en un seul.

Chaque enfant de premier niveau est copié en profondeur sous une racine
neuve, dans l'ordre reçu : aucun nœud du résultat n'est partagé avec les
arbres sources. Les directives <update handle="…"/> sont ensuite remplacées,
à leur position, par le layout fusionné du handle référencé.
"""
import logging
from typing import Iterable, List, Sequence, Tuple

from ..core.directives import UpdateDirective
from ..core.tree import LayoutTree
from .loader import Loader

log = logging.getLogger(__name__)


class Merger:
    def merge(self, layouts: Iterable[Tuple[str, LayoutTree]]) -> LayoutTree:
        """[(module, arbre)] → arbre unique, enfants de premier niveau dans l'ordre d'entrée."""
        merged = LayoutTree.empty()
        for module, tree in layouts:
            log.debug("Merger : fusion du layout du module %s", module)
            for child in tree.children():
                merged.append(merged.root, merged.import_subtree(tree, child.id))
        return merged

    def process_updates(
        self,
        tree: LayoutTree,
        loader: Loader,
        stack: Sequence[str] = (),
    ) -> LayoutTree:
        """
        Remplace chaque <update handle="h"/> par le layout de `h`.

        `stack` contient les handles en cours de résolution : un handle déjà
        présent est ignoré (inclusion circulaire), la directive est retirée.
        """
        for node in [n for n in tree.walk() if n.kind == "update"]:
            if not tree.is_attached(node.id):
                continue
            directive = UpdateDirective.from_node(node)
            if directive is None:
                tree.detach(node.id)
                continue
            if directive.handle in stack:
                log.debug("Merger : update %s déjà en cours de résolution, ignoré", directive.handle)
                tree.detach(node.id)
                continue

            included = self.merge(loader.load(directive.handle))
            self.process_updates(included, loader, tuple(stack) + (directive.handle,))
            new_ids = [tree.import_subtree(included, child.id) for child in included.children()]
            tree.replace(node.id, new_ids)
        return tree

    def merge_handles(self, handles: Sequence[str], loader: Loader) -> LayoutTree:
        """Charge les handles dans l'ordre, fusionne, puis résout les <update>."""
        layouts: List[Tuple[str, LayoutTree]] = []
        for handle in handles:
            layouts.extend(loader.load(handle))
        return self.process_updates(self.merge(layouts), loader, tuple(handles))
