"""
Page routes for the Face Annotator web preview.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter()

_INDEX_HTML = """<!doctype html>
<html>
  <head><title>Face Annotator</title></head>
  <body>
    <img id="output" src="/api/camera/live.mjpg" alt="live preview">
  </body>
</html>
"""


@router.get("/", response_class=HTMLResponse)
def index():
    return _INDEX_HTML
