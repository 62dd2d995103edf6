"""Bloc texte — sortie brute de la donnée `text`. Sert aussi de bloc de repli."""
from .base import AbstractBlock


class Text(AbstractBlock):
    def __init__(self, name=None, data=None, text: str = ""):
        super().__init__(name, data)
        self.text = text

    def render(self) -> str:
        value = self.get_data("text")
        return str(value) if value is not None else self.text
