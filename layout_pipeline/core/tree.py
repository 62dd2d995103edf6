"""
Arbre de layout — arène de nœuds adressés par identifiant entier.

Chaque nœud connaît son parent et la liste ordonnée de ses enfants : détacher
puis rattacher un sous-arbre n'est qu'une opération sur des listes d'entiers,
sans alias de référence. Un nœud détaché reste dans l'arène mais n'est plus
atteignable depuis la racine.
"""
from typing import Dict, Iterator, List, Optional

from lxml import etree
from pydantic import BaseModel, Field

XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"

ROOT_KIND = "layout"
ELEMENT_KINDS = ("container", "block")
REFERENCE_KINDS = ("referenceBlock", "referenceContainer")
DIRECTIVE_KINDS = ("remove", "move", "update") + REFERENCE_KINDS


class LayoutNode(BaseModel):
    """Nœud générique : container, block, directive ou élément auxiliaire (arguments…)."""
    id: int
    kind: str
    attributes: Dict[str, str] = Field(default_factory=dict)
    children: List[int] = Field(default_factory=list)
    parent: Optional[int] = None
    text: str = ""

    @property
    def name(self) -> Optional[str]:
        return self.attributes.get("name") or None

    @property
    def type_ref(self) -> Optional[str]:
        return self.attributes.get("class") or None

    @property
    def is_element(self) -> bool:
        return self.kind in ELEMENT_KINDS

    @property
    def is_directive(self) -> bool:
        return self.kind in DIRECTIVE_KINDS


class LayoutTree(BaseModel):
    """Arène de LayoutNode. Le nœud `root` (kind "layout") n'a jamais de parent."""
    nodes: List[LayoutNode] = Field(default_factory=list)
    root: int = 0

    @classmethod
    def empty(cls) -> "LayoutTree":
        tree = cls()
        tree.root = tree.create(ROOT_KIND)
        return tree

    # ── Accès ────────────────────────────────────────────────────────────────

    def node(self, node_id: int) -> LayoutNode:
        return self.nodes[node_id]

    def children(self, node_id: Optional[int] = None) -> List[LayoutNode]:
        parent = self.nodes[self.root if node_id is None else node_id]
        return [self.nodes[c] for c in parent.children]

    def walk(self, start: Optional[int] = None) -> Iterator[LayoutNode]:
        """Parcours préfixe (ordre du document) des nœuds attachés sous `start`."""
        stack = [self.root if start is None else start]
        while stack:
            node = self.nodes[stack.pop()]
            yield node
            stack.extend(reversed(node.children))

    def find(self, kind: Optional[str] = None, name: Optional[str] = None) -> List[LayoutNode]:
        return [
            n for n in self.walk()
            if (kind is None or n.kind == kind) and (name is None or n.name == name)
        ]

    def is_attached(self, node_id: int) -> bool:
        current = node_id
        while current != self.root:
            parent = self.nodes[current].parent
            if parent is None:
                return False
            current = parent
        return True

    def is_ancestor(self, ancestor_id: int, node_id: int) -> bool:
        """Vrai si `ancestor_id` est `node_id` lui-même ou l'un de ses ancêtres."""
        current: Optional[int] = node_id
        while current is not None:
            if current == ancestor_id:
                return True
            current = self.nodes[current].parent
        return False

    # ── Mutations ────────────────────────────────────────────────────────────

    def create(self, kind: str, attributes: Optional[Dict[str, str]] = None, text: str = "") -> int:
        node_id = len(self.nodes)
        self.nodes.append(LayoutNode(id=node_id, kind=kind, attributes=dict(attributes or {}), text=text))
        return node_id

    def detach(self, node_id: int) -> None:
        node = self.nodes[node_id]
        if node.parent is not None:
            self.nodes[node.parent].children.remove(node_id)
            node.parent = None

    def insert(self, parent_id: int, child_id: int, index: Optional[int] = None) -> None:
        """Rattache `child_id` sous `parent_id` (en fin de liste si index est None)."""
        if self.is_ancestor(child_id, parent_id):
            raise ValueError(f"Nœud {child_id} ne peut pas devenir son propre descendant")
        self.detach(child_id)
        siblings = self.nodes[parent_id].children
        if index is None:
            siblings.append(child_id)
        else:
            siblings.insert(index, child_id)
        self.nodes[child_id].parent = parent_id

    def append(self, parent_id: int, child_id: int) -> None:
        self.insert(parent_id, child_id)

    def replace(self, node_id: int, replacement_ids: List[int]) -> None:
        """Remplace un nœud attaché par une suite de nœuds, à la même position."""
        parent_id = self.nodes[node_id].parent
        if parent_id is None:
            return
        position = self.nodes[parent_id].children.index(node_id)
        self.detach(node_id)
        for offset, new_id in enumerate(replacement_ids):
            self.insert(parent_id, new_id, position + offset)

    def import_subtree(self, source: "LayoutTree", source_id: int) -> int:
        """Copie profonde d'un sous-arbre de `source` dans cette arène (non rattachée)."""
        src = source.nodes[source_id]
        new_id = self.create(src.kind, src.attributes, src.text)
        for child_id in src.children:
            self.append(new_id, self.import_subtree(source, child_id))
        return new_id

    # ── Conversion XML ───────────────────────────────────────────────────────

    @classmethod
    def from_element(cls, element) -> "LayoutTree":
        """Construit un arbre depuis la racine lxml d'un fichier de layout."""
        tree = cls.empty()
        for child in element:
            if isinstance(child.tag, str):
                tree.append(tree.root, tree._build(child))
        return tree

    def _build(self, element) -> int:
        attributes = {_attribute_key(k): v for k, v in element.attrib.items()}
        element_children = [c for c in element if isinstance(c.tag, str)]
        text = "" if element_children else (element.text or "").strip()
        node_id = self.create(etree.QName(element).localname, attributes, text)
        for child in element_children:
            self.append(node_id, self._build(child))
        return node_id

    def to_element(self, node_id: Optional[int] = None):
        node = self.nodes[self.root if node_id is None else node_id]
        element = etree.Element(node.kind, nsmap={"xsi": XSI_NS} if _uses_xsi(node) else None)
        for key, value in node.attributes.items():
            element.set(_clark_key(key), value)
        if node.text:
            element.text = node.text
        for child_id in node.children:
            element.append(self.to_element(child_id))
        return element

    def to_xml(self, node_id: Optional[int] = None, pretty: bool = False) -> str:
        return etree.tostring(self.to_element(node_id), encoding="unicode", pretty_print=pretty)


def _attribute_key(key: str) -> str:
    # {xsi}type → "xsi:type" ; les autres espaces de noms restent en notation Clark
    if key.startswith("{" + XSI_NS + "}"):
        return "xsi:" + key.split("}", 1)[1]
    return key


def _clark_key(key: str) -> str:
    if key.startswith("xsi:"):
        return "{%s}%s" % (XSI_NS, key[4:])
    return key


def _uses_xsi(node: LayoutNode) -> bool:
    return any(k.startswith("xsi:") for k in node.attributes)
