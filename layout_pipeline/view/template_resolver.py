"""
Template resolver — "Vendor_Module::chemin/fichier.html" → chemin absolu.

Répertoires candidats du module, dans l'ordre :
  view/<area>/templates, view/base/templates, view/templates, templates

Les emplacements des templates ne changent pas pendant la vie du process :
les résolutions positives sont mémorisées dans un cache global.
"""
import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..core.modules import ModuleRegistry
from ..exceptions import InvalidTemplatePath

TEMPLATE_EXTENSIONS = (".html", ".jinja", ".j2")
_SAFE_PATH_RE = re.compile(r"^[a-zA-Z0-9/_.-]+$")

_TEMPLATE_CACHE: Dict[Tuple[str, str, str], Path] = {}


def clear_cache() -> None:
    _TEMPLATE_CACHE.clear()


def validate_template_path(file_path: str) -> None:
    """Refuse traversée, chemins absolus, caractères hors liste blanche, extension inconnue."""
    if not file_path.strip():
        raise InvalidTemplatePath("Chemin de template vide")
    if ".." in file_path or "\0" in file_path or "\\" in file_path:
        raise InvalidTemplatePath(f"Chemin de template refusé : {file_path!r}")
    if file_path.startswith("/"):
        raise InvalidTemplatePath(f"Chemin de template absolu refusé : {file_path!r}")
    if not file_path.endswith(TEMPLATE_EXTENSIONS):
        raise InvalidTemplatePath(f"Extension de template non autorisée : {file_path!r}")
    if not _SAFE_PATH_RE.match(file_path):
        raise InvalidTemplatePath(f"Caractères non autorisés : {file_path!r}")


class TemplateResolver:
    def __init__(self, registry: ModuleRegistry, area: str = "frontend"):
        self.registry = registry
        self.area = area

    def candidate_paths(self, module_path: Path, file_path: str) -> List[Path]:
        base = Path(module_path)
        return [
            base / "view" / self.area / "templates" / file_path,
            base / "view" / "base" / "templates" / file_path,
            base / "view" / "templates" / file_path,
            base / "templates" / file_path,
        ]

    def resolve(self, template_id: str) -> Optional[Path]:
        """Chemin du template, ou None s'il est introuvable. Lève InvalidTemplatePath."""
        if "::" not in template_id:
            return None
        module_name, file_path = template_id.split("::", 1)
        validate_template_path(file_path)

        module = self.registry.get(module_name)
        if module is None:
            return None

        key = (self.area, str(module.path), template_id)
        if key in _TEMPLATE_CACHE:
            return _TEMPLATE_CACHE[key]

        for path in self.candidate_paths(module.path, file_path):
            if path.is_file():
                _TEMPLATE_CACHE[key] = path
                return path
        return None
