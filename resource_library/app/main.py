# resource_library/app/main.py
from __future__ import annotations

import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from resource_library import __version__
from resource_library.app.config import settings
from resource_library.app.routers.admin_resources import router as admin_resources_router
from resource_library.app.routers.resources import router as resources_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

app = FastAPI(title="Resource Library API", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(resources_router)
app.include_router(admin_resources_router)


@app.get("/health")
def health():
    return {"ok": True}
