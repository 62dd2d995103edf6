"""Bloc JS — balise <script src>, defer par défaut."""
from markupsafe import escape

from .base import AbstractBlock


class Js(AbstractBlock):
    def render(self) -> str:
        src = self.get_data("src")
        if not src:
            return ""
        attrs = f'src="{escape(src)}"'
        if self.get_flag("defer", True):
            attrs += " defer"
        if self.get_flag("async", False):
            attrs += " async"
        return f"<script {attrs}></script>"
