"""
Layout Pipeline — application FastAPI
Démarrer : uvicorn layout_pipeline.api:app --reload --port 8001
"""
import logging

from fastapi import FastAPI

from . import __version__
from .config import load_settings
from .router import router

logging.basicConfig(level=load_settings().log_level, format="%(asctime)s %(levelname)s — %(message)s")
log = logging.getLogger(__name__)

app = FastAPI(title="Layout Pipeline", version=__version__, docs_url="/docs")
app.include_router(router)


@app.get("/health")
def health():
    return {"status": "ok", "service": "layout_pipeline", "version": __version__}
