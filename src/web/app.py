"""
FastAPI application factory for the Face Annotator preview.

Routes:
- / -> page showing the live annotated stream
- /api/* -> health, status, snapshot and MJPEG stream
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

import uvicorn
from fastapi import FastAPI

from .routes import api, pages
from .state import PreviewState


def create_app(state: Optional[PreviewState] = None) -> FastAPI:
    """Create the FastAPI app bound to a preview state."""
    app = FastAPI(
        title="Face Annotator",
        version="0.1.0",
        description="Live face annotation preview",
    )
    app.state.preview = state if state is not None else PreviewState()

    app.include_router(api.router, prefix="/api")
    app.include_router(pages.router)

    return app


def start_web_server(state: PreviewState, host: str = "0.0.0.0", port: int = 5000) -> threading.Thread:
    """Serve the preview app from a daemon thread."""

    def run_web_app():
        uvicorn.run(create_app(state), host=host, port=port, log_level="info")

    web_thread = threading.Thread(target=run_web_app, name="web-preview", daemon=True)
    web_thread.start()
    logging.info(f"Web preview started on http://{host}:{port}")
    return web_thread
