import threading
import time

import numpy as np


class PreviewState:
    """
    Shares the latest rendered frame and loop stats between the frame loop
    and the web server thread.
    """

    def __init__(self):
        self._frame = None
        self._frame_lock = threading.Lock()
        self._stats_lock = threading.Lock()
        self.system_stats = {
            "start_time": time.time(),
            "frame_count": 0,
            "faces": 0,
            "last_frame_ts": None,
            "last_iteration_s": None,
        }

    def set_frame(self, frame: np.ndarray):
        """Store a copy of the latest frame (BGR)."""
        with self._frame_lock:
            if frame is not None:
                self._frame = frame.copy()
        self.update_system_stats({"last_frame_ts": time.time()})

    def get_frame(self):
        """Get a copy of the latest frame, or None before the first one."""
        with self._frame_lock:
            if self._frame is None:
                return None
            return self._frame.copy()

    def update_system_stats(self, stats):
        with self._stats_lock:
            self.system_stats.update(stats)

    def get_system_stats_copy(self):
        """Return a shallow copy of current system stats."""
        with self._stats_lock:
            return dict(self.system_stats)
