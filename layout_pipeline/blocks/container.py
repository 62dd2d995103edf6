"""Container — enveloppe les enfants dans une balise HTML (div par défaut)."""
import re

from markupsafe import escape

from .base import AbstractBlock

_TAG_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9-]*$")
_VOID_TAGS = {"br", "hr", "img", "input", "meta", "link"}


class Container(AbstractBlock):
    """
    Données reconnues :
      htmlTag    balise englobante (défaut "div" ; "" → enfants sans enveloppe)
      htmlId     attribut id
      htmlClass  attribut class
    """
    default_tag = "div"

    def render(self) -> str:
        tag = self.get_data("htmlTag", self.default_tag)
        children_html = self.children_html()
        if not tag:
            return children_html
        if not _TAG_RE.match(tag):
            raise ValueError(f"htmlTag invalide : {tag!r}")

        attrs = ""
        if self.get_data("htmlId"):
            attrs += f' id="{escape(self.get_data("htmlId"))}"'
        if self.get_data("htmlClass"):
            attrs += f' class="{escape(self.get_data("htmlClass"))}"'

        if tag in _VOID_TAGS:
            if self._children:
                raise ValueError(f"htmlTag {tag!r} ne peut pas contenir d'enfants")
            return f"<{tag}{attrs} />"
        return f"<{tag}{attrs}>{children_html}</{tag}>"
