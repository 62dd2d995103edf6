"""
Router FastAPI — rendu des layouts.

GET /layout/handles              → liste des handles disponibles
GET /layout/{handle}             → HTML complet de la page
GET /layout/{handle}/blocks/{name} → HTML d'un seul bloc (rafraîchissement partiel)
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse, JSONResponse

from .layout.factory import LayoutFactory

log = logging.getLogger(__name__)
router = APIRouter(prefix="/layout", tags=["layout"])

_FACTORY: Optional[LayoutFactory] = None


def get_layout_factory() -> LayoutFactory:
    """Factory du process, construite au premier appel depuis l'environnement."""
    global _FACTORY
    if _FACTORY is None:
        _FACTORY = LayoutFactory.from_settings()
    return _FACTORY


@router.get("/handles", summary="Liste les handles de layout disponibles")
def handles(factory: LayoutFactory = Depends(get_layout_factory)) -> JSONResponse:
    return JSONResponse({"handles": factory.get_available_handles()})


@router.get("/{handle}", response_class=HTMLResponse, summary="Rend le layout d'un handle")
def render(handle: str, factory: LayoutFactory = Depends(get_layout_factory)) -> HTMLResponse:
    html = factory.render(handle)
    if not html:
        raise HTTPException(404, f"Aucun layout rendu pour {handle!r}")
    return HTMLResponse(content=html)


@router.get("/{handle}/blocks/{name}", response_class=HTMLResponse, summary="Rend un bloc nommé")
def render_block(handle: str, name: str, factory: LayoutFactory = Depends(get_layout_factory)) -> HTMLResponse:
    html = factory.render_block(handle, name)
    if not html:
        raise HTTPException(404, f"Bloc {name!r} absent du layout {handle!r}")
    return HTMLResponse(content=html)
