"""
Exceptions du pipeline de layout.

Seules les erreurs de configuration (graphe de modules) remontent jusqu'à
l'appelant. Les autres sont contenues au plus petit périmètre possible :
module pour le chargement, bloc pour la construction et le rendu.
"""


class LayoutError(Exception):
    """Erreur de base du pipeline."""


class LayoutSourceError(LayoutError):
    """Fichier de layout XML illisible ou mal formé."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Layout invalide {path} : {reason}")


class ComponentNotFound(LayoutError, LookupError):
    """Type de bloc introuvable ou non instanciable."""

    def __init__(self, type_ref: str, reason: str = "introuvable"):
        self.type_ref = type_ref
        super().__init__(f"Composant {type_ref!r} {reason}")


class InvalidTemplatePath(LayoutError, ValueError):
    """Identifiant de template refusé (traversée de répertoire, extension…)."""


class ModuleDependencyError(LayoutError):
    """Dépendance inconnue ou cycle dans le graphe des modules."""
