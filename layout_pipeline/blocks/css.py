"""Bloc CSS — balise <link> vers une feuille de style."""
from markupsafe import escape

from .base import AbstractBlock


class Css(AbstractBlock):
    def render(self) -> str:
        href = self.get_data("href")
        if not href:
            return ""
        media = self.get_data("media", "all")
        return f'<link rel="stylesheet" href="{escape(href)}" media="{escape(media)}">'
