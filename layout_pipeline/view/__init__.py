"""Résolution des templates."""
from .template_resolver import TemplateResolver, clear_cache, validate_template_path

__all__ = ["TemplateResolver", "clear_cache", "validate_template_path"]
