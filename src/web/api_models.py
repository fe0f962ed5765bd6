from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = Field(..., description="ok|stale|waiting")
    last_frame_age_s: Optional[float] = None


class StatusResponse(BaseModel):
    """Compact status for dashboard polling."""
    running: bool = Field(..., description="True once at least one frame was rendered")
    frame_count: int = Field(0, description="Frames rendered since start")
    faces: int = Field(0, description="Faces found in the latest frame")
    last_frame_age_s: Optional[float] = Field(None, description="Seconds since last frame")
    last_iteration_s: Optional[float] = Field(None, description="Duration of the latest loop iteration")
    uptime_seconds: int = Field(0, description="Seconds since the preview state was created")
    warnings: List[str] = Field(default_factory=list, description="camera_stale or camera_waiting")
