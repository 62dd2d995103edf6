"""
Layout Builder — arbre XML résolu → arbre de blocs.

La racine est le premier container/block de premier niveau. Un type de bloc
introuvable est remplacé par un bloc Text inerte : une entrée de layout
défectueuse ne vide pas la page entière.
"""
import logging
from typing import Any, Dict, Optional

from ..blocks import AbstractBlock, ComponentFactory, Container, Template, Text
from ..config import env_flag
from ..core.tree import LayoutNode, LayoutTree
from ..exceptions import ComponentNotFound

log = logging.getLogger(__name__)

# before/after : positionnement déjà appliqué par le Processor
CONSUMED_ATTRIBUTES = ("class", "name", "template", "before", "after")


class Builder:
    def __init__(self, factory: Optional[ComponentFactory] = None, template_resolver=None):
        self.factory = factory or ComponentFactory()
        self.template_resolver = template_resolver
        self.blocks: Dict[str, AbstractBlock] = {}
        self._data: Dict[str, Any] = {}

    def build(self, tree: LayoutTree, data: Optional[Dict[str, Any]] = None) -> Optional[AbstractBlock]:
        """
        Construit l'arbre de blocs.

        Args:
            tree: arbre sans directive (sortie du Processor)
            data: données de layout, référencées par les arguments xsi:type="object"

        Returns:
            Bloc racine, ou None si aucun container/block de premier niveau
        """
        self.blocks = {}
        self._data = dict(data or {})
        for node in tree.children():
            if node.is_element:
                return self._build_node(tree, node)
        log.warning("Builder : aucun container/block racine dans le layout")
        return None

    def get_block(self, name: str) -> Optional[AbstractBlock]:
        return self.blocks.get(name)

    def get_all_blocks(self) -> Dict[str, AbstractBlock]:
        return dict(self.blocks)

    # ── Construction ─────────────────────────────────────────────────────────

    def _build_node(self, tree: LayoutTree, node: LayoutNode) -> AbstractBlock:
        block = self._create_block(node)
        if node.name:
            block.name = node.name
            self.blocks[node.name] = block

        if isinstance(block, Template):
            if block.resolver is None:
                block.resolver = self.template_resolver
            if node.attributes.get("template"):
                block.template = node.attributes["template"]

        for key, value in node.attributes.items():
            if key not in CONSUMED_ATTRIBUTES:
                block.set_data(key, value)

        for child in tree.children(node.id):
            if child.kind == "arguments":
                self._apply_arguments(tree, child, block)

        for child in tree.children(node.id):
            if child.is_element:
                block.add_child(self._build_node(tree, child))
        return block

    def _create_block(self, node: LayoutNode) -> AbstractBlock:
        if node.kind == "container":
            return Container()
        if node.type_ref:
            try:
                return self.factory.resolve(node.type_ref)
            except ComponentNotFound as e:
                log.warning("Builder : bloc %s remplacé par un bloc Text (%s)", node.name or "?", e)
                return Text()
        return Template() if node.attributes.get("template") else Text()

    # ── <arguments> ──────────────────────────────────────────────────────────

    def _apply_arguments(self, tree: LayoutTree, arguments: LayoutNode, block: AbstractBlock) -> None:
        for argument in tree.children(arguments.id):
            if argument.kind != "argument" or not argument.name:
                continue
            xsi_type = argument.attributes.get("xsi:type") or argument.attributes.get("type") or "string"
            try:
                value = self._argument_value(xsi_type, argument.text)
            except (ComponentNotFound, ValueError) as e:
                log.debug("Builder : argument %s ignoré (%s)", argument.name, e)
                continue

            if argument.name == "template" and isinstance(block, Template):
                block.template = value
            else:
                block.set_data(argument.name, value)

    def _argument_value(self, xsi_type: str, text: str) -> Any:
        if xsi_type == "boolean":
            return env_flag(text)
        if xsi_type in ("number", "int"):
            return int(text)
        if xsi_type == "object":
            if text in self._data:
                return self._data[text]
            return self.factory.create_object(text)
        return text
