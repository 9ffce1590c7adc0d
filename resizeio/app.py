import os

from fastapi import FastAPI
from fastapi.logger import logger
from fastapi.staticfiles import StaticFiles

from . import api

STATIC_DIR = os.path.join(os.path.dirname(__file__), "static")


def create_app() -> FastAPI:
    app = FastAPI(
        title="ResizeIO",
        version="0.1.0",
    )
    app.include_router(api.router, prefix="/api")
    if os.path.exists(STATIC_DIR):
        app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    else:
        logger.error("ERROR:\tStatic directory not found.")
    return app
