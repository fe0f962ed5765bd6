from __future__ import annotations

import time

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import Response, StreamingResponse

from ..api_models import HealthResponse, StatusResponse
from ..services.preview_service import PreviewService, health_status, last_frame_age
from ..state import PreviewState

router = APIRouter()


def _state(request: Request) -> PreviewState:
    return request.app.state.preview


@router.get("/health", response_model=HealthResponse)
def health(request: Request):
    age = last_frame_age(_state(request).get_system_stats_copy())
    return HealthResponse(status=health_status(age), last_frame_age_s=age)


@router.get("/status", response_model=StatusResponse)
def status(request: Request):
    state = _state(request)
    stats = state.get_system_stats_copy()
    now = time.time()
    return StatusResponse(
        running=stats.get("last_frame_ts") is not None,
        frame_count=int(stats.get("frame_count") or 0),
        faces=int(stats.get("faces") or 0),
        last_frame_age_s=last_frame_age(stats, now),
        last_iteration_s=stats.get("last_iteration_s"),
        uptime_seconds=int(now - stats.get("start_time", now)),
        warnings=PreviewService(state).warnings(),
    )


@router.get("/camera/snapshot.jpg")
def camera_snapshot(request: Request):
    jpeg_bytes = PreviewService(_state(request)).snapshot_jpeg()
    if jpeg_bytes is None:
        raise HTTPException(status_code=503, detail="No frame rendered yet")
    return Response(content=jpeg_bytes, media_type="image/jpeg", headers={"Cache-Control": "no-store"})


@router.get("/camera/live.mjpg")
def camera_live_stream(request: Request, fps: int = 5):
    """Stream MJPEG frames from the preview state (populated by the frame loop)."""
    service = PreviewService(_state(request))
    return StreamingResponse(
        service.mjpeg_stream(fps=fps),
        media_type="multipart/x-mixed-replace; boundary=frame",
    )
