"""
Component factory — identifiant de type → instance de bloc.

Identifiants acceptés :
  - clé du registre ("container", "text", "template", "css", "js", ou enregistrée)
  - chemin d'import "package.module.ClassName" ou "package.module:ClassName"
Échec → ComponentNotFound (le Builder le rétrograde en bloc Text).
"""
import importlib
from typing import Any, Dict, Optional, Type

from ..exceptions import ComponentNotFound
from .base import AbstractBlock
from .container import Container
from .css import Css
from .js import Js
from .template import Template
from .text import Text

BLOCK_REGISTRY: Dict[str, Type[AbstractBlock]] = {
    "container": Container,
    "text":      Text,
    "template":  Template,
    "css":       Css,
    "js":        Js,
}


def import_type(type_ref: str) -> Any:
    if ":" in type_ref:
        module_path, _, attr = type_ref.partition(":")
    else:
        module_path, _, attr = type_ref.rpartition(".")
    if not module_path or not attr:
        raise ComponentNotFound(type_ref)
    try:
        module = importlib.import_module(module_path)
    except Exception as e:
        # import relatif sans paquet, module qui échoue à l'import…
        raise ComponentNotFound(type_ref, f"introuvable ({e})") from e
    try:
        return getattr(module, attr)
    except AttributeError as e:
        raise ComponentNotFound(type_ref, f"absent de {module_path}") from e


class ComponentFactory:
    def __init__(self, registry: Optional[Dict[str, Type[AbstractBlock]]] = None):
        self._registry: Dict[str, Type[AbstractBlock]] = dict(BLOCK_REGISTRY)
        for block_cls in BLOCK_REGISTRY.values():
            self._registry[block_cls.__name__] = block_cls
        self._registry.update(registry or {})

    def register(self, type_ref: str, block_cls: Type[AbstractBlock]) -> None:
        self._registry[type_ref] = block_cls

    def resolve(self, type_ref: str) -> AbstractBlock:
        block_cls = self._registry.get(type_ref) or import_type(type_ref)
        if not (isinstance(block_cls, type) and issubclass(block_cls, AbstractBlock)):
            raise ComponentNotFound(type_ref, "n'est pas un bloc")
        if getattr(block_cls, "__abstractmethods__", None):
            raise ComponentNotFound(type_ref, "est abstrait")
        try:
            return block_cls()
        except Exception as e:
            raise ComponentNotFound(type_ref, f"non instanciable ({e})") from e

    def create_object(self, type_ref: str) -> Any:
        """Instance d'une classe quelconque (arguments xsi:type="object")."""
        obj_cls = import_type(type_ref)
        try:
            return obj_cls()
        except Exception as e:
            raise ComponentNotFound(type_ref, f"non instanciable ({e})") from e
