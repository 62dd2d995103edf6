"""
Directives de layout — enregistrements éphémères lus depuis les nœuds.

  <remove name="x"/>
  <move element="x" destination="y" before="z"|after="z"/>
  <referenceBlock name="x"> … </referenceBlock> / <referenceContainer name="x"> … </referenceContainer>
  <update handle="h"/>

`from_node` renvoie None quand un attribut obligatoire manque : la directive
est alors simplement retirée de l'arbre.
"""
from typing import Literal, Optional, Union

from pydantic import BaseModel

from .tree import LayoutNode


class RemoveDirective(BaseModel):
    node_id: int
    target: str

    @classmethod
    def from_node(cls, node: LayoutNode) -> Optional["RemoveDirective"]:
        target = node.attributes.get("name")
        return cls(node_id=node.id, target=target) if target else None


class MoveDirective(BaseModel):
    node_id: int
    element: str
    destination: str
    before: Optional[str] = None
    after: Optional[str] = None

    @classmethod
    def from_node(cls, node: LayoutNode) -> Optional["MoveDirective"]:
        attrs = node.attributes
        if not attrs.get("element") or not attrs.get("destination"):
            return None
        return cls(
            node_id=node.id,
            element=attrs["element"],
            destination=attrs["destination"],
            before=attrs.get("before") or None,
            after=attrs.get("after") or None,
        )


class ReferenceDirective(BaseModel):
    node_id: int
    target: str
    kind: Literal["block", "container"]

    @classmethod
    def from_node(cls, node: LayoutNode) -> Optional["ReferenceDirective"]:
        target = node.attributes.get("name")
        if not target:
            return None
        kind = "block" if node.kind == "referenceBlock" else "container"
        return cls(node_id=node.id, target=target, kind=kind)


class UpdateDirective(BaseModel):
    node_id: int
    handle: str

    @classmethod
    def from_node(cls, node: LayoutNode) -> Optional["UpdateDirective"]:
        handle = node.attributes.get("handle")
        return cls(node_id=node.id, handle=handle) if handle else None


Directive = Union[RemoveDirective, MoveDirective, ReferenceDirective, UpdateDirective]

_BY_KIND = {
    "remove":             RemoveDirective,
    "move":               MoveDirective,
    "referenceBlock":     ReferenceDirective,
    "referenceContainer": ReferenceDirective,
    "update":             UpdateDirective,
}


def parse_directive(node: LayoutNode) -> Optional[Directive]:
    """Directive portée par le nœud, ou None (nœud non-directive ou incomplet)."""
    directive_cls = _BY_KIND.get(node.kind)
    return directive_cls.from_node(node) if directive_cls else None
