"""
Configuration — lue depuis l'environnement au démarrage.

  LAYOUT_APP_DIR        répertoire des modules (défaut ./app)
  LAYOUT_AREA           zone prioritaire : frontend | adminhtml (défaut frontend)
  LAYOUT_CACHE_ENABLED  cache des sources de layout (défaut false)
  LAYOUT_CACHE_TTL      durée de vie du cache en secondes (défaut 3600)
  LOG_LEVEL             niveau de log du point d'entrée HTTP (défaut INFO)
"""
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

_TRUTHY = {"1", "true", "yes", "on"}


def env_flag(value: Optional[str], default: bool = False) -> bool:
    """Interprète un flag texte ("1", "true", "on"…) ; None → défaut."""
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


class Settings(BaseModel):
    app_dir: Path = Field(default=Path("app"))
    area: str = "frontend"
    layout_cache_enabled: bool = False
    layout_cache_ttl: int = 3600
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Construit les Settings à partir des variables d'environnement."""
    return Settings(
        app_dir=Path(os.getenv("LAYOUT_APP_DIR", "app")),
        area=os.getenv("LAYOUT_AREA", "frontend"),
        layout_cache_enabled=env_flag(os.getenv("LAYOUT_CACHE_ENABLED")),
        layout_cache_ttl=int(os.getenv("LAYOUT_CACHE_TTL", "3600")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
