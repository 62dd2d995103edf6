"""
Bloc Template — rend un template Jinja2 résolu par le TemplateResolver.

Contexte du template :
  block          le bloc lui-même
  child_html(n)  HTML d'un enfant nommé (non échappé)
  children_html  HTML de tous les enfants (non échappé)
  + toutes les données du bloc
Les enfants ne sont rendus que si le template les demande.
"""
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup, escape

from .base import AbstractBlock

_ENVIRONMENTS: Dict[str, Environment] = {}


def _environment(directory: Path) -> Environment:
    key = str(directory)
    if key not in _ENVIRONMENTS:
        _ENVIRONMENTS[key] = Environment(
            loader=FileSystemLoader(key),
            autoescape=select_autoescape(("html", "jinja", "j2")),
            keep_trailing_newline=True,
        )
    return _ENVIRONMENTS[key]


def render_template_file(path: Path, context: Dict[str, Any]) -> str:
    return _environment(path.parent).get_template(path.name).render(**context)


class Template(AbstractBlock):
    def __init__(self, name=None, data=None, template: Optional[str] = None, resolver=None):
        super().__init__(name, data)
        self.template = template
        self.resolver = resolver

    def template_context(self) -> Dict[str, Any]:
        context = self.get_data()
        context.update(
            block=self,
            child_html=lambda alias: Markup(self.child_html(alias)),
            children_html=lambda: Markup(self.children_html()),
        )
        return context

    def render(self) -> str:
        if not self.template:
            return ""
        path = self.resolver.resolve(self.template) if self.resolver is not None else None
        if path is None:
            return f"<!-- Template introuvable : {escape(self.template)} -->"
        return render_template_file(path, self.template_context())
