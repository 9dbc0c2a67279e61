from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import FastAPI

from artboard_core.config import load_config

from .adapters import editors as editors_adapter
from .routers import editors as editors_router

log = logging.getLogger("artboard.api")

app = FastAPI(title="Artboard API", version="0.1.0", description="Pointer-driven vector artboard editors")


def _configure_store() -> None:
    editors_adapter.store().config = load_config()
    log.debug("Editor store configured")


_configure_store()

app.include_router(editors_router.router)


@app.get("/")
async def index() -> Dict[str, Any]:
    return {
        "name": "artboard-api",
        "version": app.version,
        "routes": [
            {"path": "/editors", "methods": ["GET", "POST"]},
            {"path": "/editors/{id}", "methods": ["GET", "DELETE"]},
            {"path": "/editors/{id}/matrix", "methods": ["GET"]},
        ],
        "editor_count": len(editors_adapter.list_editors()),
    }
