from __future__ import annotations

import time
from typing import Callable, Iterator, List, Optional

import cv2

from ..state import PreviewState

# A frame older than this marks the preview as stale
STALE_AFTER_S = 5.0


def last_frame_age(stats: dict, now: Optional[float] = None) -> Optional[float]:
    ts = stats.get("last_frame_ts")
    if ts is None:
        return None
    return max(0.0, (now if now is not None else time.time()) - ts)


def health_status(age_s: Optional[float], stale_after_s: float = STALE_AFTER_S) -> str:
    if age_s is None:
        return "waiting"
    if age_s > stale_after_s:
        return "stale"
    return "ok"


def encode_jpeg(frame) -> Optional[bytes]:
    ok, buf = cv2.imencode(".jpg", frame)
    if not ok:
        return None
    return buf.tobytes()


def mjpeg_chunk(jpg: bytes) -> bytes:
    return b"--frame\r\nContent-Type: image/jpeg\r\n\r\n" + jpg + b"\r\n"


class PreviewService:
    def __init__(self, state: PreviewState, sleep: Callable[[float], None] = time.sleep):
        self._state = state
        self._sleep = sleep

    def snapshot_jpeg(self) -> Optional[bytes]:
        frame = self._state.get_frame()
        if frame is None:
            return None
        return encode_jpeg(frame)

    def mjpeg_stream(self, fps: int = 5, max_frames: Optional[int] = None) -> Iterator[bytes]:
        """Yield MJPEG multipart chunks of the latest rendered frame."""
        fps = max(1, min(30, int(fps)))
        delay = 1.0 / fps
        sent = 0
        while max_frames is None or sent < max_frames:
            jpg = self.snapshot_jpeg()
            if jpg is None:
                self._sleep(0.1)
                continue
            yield mjpeg_chunk(jpg)
            sent += 1
            self._sleep(delay)

    def warnings(self) -> List[str]:
        status = health_status(last_frame_age(self._state.get_system_stats_copy()))
        return [] if status == "ok" else [f"camera_{status}"]
