"""Modèle de données : arbre de layout, directives, registre des modules."""
from .tree import LayoutNode, LayoutTree, ELEMENT_KINDS, DIRECTIVE_KINDS, REFERENCE_KINDS
from .directives import (
    RemoveDirective, MoveDirective, ReferenceDirective, UpdateDirective, parse_directive,
)
from .modules import ModuleInfo, ModuleRegistry, discover_modules

__all__ = [
    "LayoutNode", "LayoutTree", "ELEMENT_KINDS", "DIRECTIVE_KINDS", "REFERENCE_KINDS",
    "RemoveDirective", "MoveDirective", "ReferenceDirective", "UpdateDirective", "parse_directive",
    "ModuleInfo", "ModuleRegistry", "discover_modules",
]
