"""
Registre des modules — ordre de dépendance stable.

Un module déclare son nom, son répertoire racine et les modules qu'il doit
suivre (`depends`). L'ordre topologique départage les ex-aequo par ordre de
déclaration, ce qui rend la fusion des layouts déterministe.
"""
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from lxml import etree
from pydantic import BaseModel, Field

from ..exceptions import ModuleDependencyError

log = logging.getLogger(__name__)


class ModuleInfo(BaseModel):
    name: str
    path: Path
    depends: List[str] = Field(default_factory=list)


class ModuleRegistry:
    """Modules déclarés, accessibles par nom et dans l'ordre de dépendance."""

    def __init__(self, modules: Iterable[ModuleInfo] = ()):
        self._modules: Dict[str, ModuleInfo] = {}
        for module in modules:
            self._modules[module.name] = module
        self._ordered: Optional[List[ModuleInfo]] = None

    def get(self, name: str) -> Optional[ModuleInfo]:
        return self._modules.get(name)

    def names(self) -> List[str]:
        return [m.name for m in self.list_modules_in_dependency_order()]

    def list_modules_in_dependency_order(self) -> List[ModuleInfo]:
        if self._ordered is None:
            self._ordered = self._sort()
        return list(self._ordered)

    def _sort(self) -> List[ModuleInfo]:
        declared = list(self._modules.values())
        for module in declared:
            for dep in module.depends:
                if dep not in self._modules:
                    raise ModuleDependencyError(f"Module {module.name} dépend de {dep}, inconnu")

        ordered: List[ModuleInfo] = []
        placed: set = set()
        # Kahn : à chaque tour, le premier module déclaré dont toutes les dépendances sont placées
        while len(ordered) < len(declared):
            for module in declared:
                if module.name not in placed and all(d in placed for d in module.depends):
                    ordered.append(module)
                    placed.add(module.name)
                    break
            else:
                pending = [m.name for m in declared if m.name not in placed]
                raise ModuleDependencyError(f"Cycle de dépendances entre modules : {pending}")
        return ordered


def discover_modules(app_dir: Path) -> ModuleRegistry:
    """
    Lit <app_dir>/<Vendor>/<Module>/etc/module.xml :

        <config>
          <module name="Vendor_Module">
            <sequence><module name="Vendor_Other"/></sequence>
          </module>
        </config>
    """
    modules = []
    for config_path in sorted(Path(app_dir).glob("*/*/etc/module.xml")):
        try:
            root = etree.parse(str(config_path)).getroot()
        except (OSError, etree.XMLSyntaxError) as e:
            log.warning("module.xml ignoré %s : %s", config_path, e)
            continue
        node = root.find("module")
        if node is None or not node.get("name"):
            log.warning("module.xml sans <module name=…> : %s", config_path)
            continue
        depends = [m.get("name") for m in node.findall("sequence/module") if m.get("name")]
        modules.append(ModuleInfo(name=node.get("name"), path=config_path.parent.parent, depends=depends))

    log.info("%d modules découverts dans %s", len(modules), app_dir)
    return ModuleRegistry(modules)
