"""
Frame loop for the face annotator.

Drives the continuous cadence: capture a frame into the loop-owned buffer,
run the processing step, hand the result to the sinks, then wait before the
next capture. Iterations never overlap, so the buffer and the inference
engines need no locking.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence

from models.config import LoopConfig
from models.frame import FrameData
from observation.base import FrameSource
from render.base import FrameSink

ProcessingStep = Callable[[FrameData], FrameData]

SCHEDULE_FIXED_DELAY = "fixed_delay"
SCHEDULE_FIXED_RATE = "fixed_rate"


class LoopState(str, Enum):
    IDLE = "idle"
    CAPTURING = "capturing"
    PROCESSING = "processing"
    RENDERING = "rendering"
    SCHEDULED = "scheduled"
    STOPPED = "stopped"


@dataclass
class LoopStats:
    """Runtime statistics for the frame loop."""
    frame_count: int = 0
    start_time: float = field(default_factory=time.time)
    last_iteration_s: Optional[float] = None


class FrameLoop:
    """
    Capture -> process -> render -> wait, until stopped.

    Frame source failures propagate to the caller; the source and sinks are
    closed on the way out.

    Example:
        loop = FrameLoop(source, annotator, [WindowSink()], LoopConfig(interval_s=1.0))
        loop.run()
    """

    def __init__(
        self,
        source: FrameSource,
        processing_step: ProcessingStep,
        sinks: Sequence[FrameSink],
        config: Optional[LoopConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        config = config if config is not None else LoopConfig()
        if config.schedule not in (SCHEDULE_FIXED_DELAY, SCHEDULE_FIXED_RATE):
            raise ValueError(f"Unknown schedule: {config.schedule}")
        self.source = source
        self._processing_step = processing_step
        self.sinks = list(sinks)
        self.config = config
        self.stats = LoopStats()
        self.state = LoopState.IDLE
        self._sleep = sleep
        self._clock = clock
        self._running = False
        self._buffer: Optional[FrameData] = None
        self._callbacks: List[Callable[[FrameData], None]] = []

    def add_callback(self, callback: Callable[[FrameData], None]) -> None:
        """
        Add a callback run after each frame is rendered.

        Args:
            callback: Function taking the processed FrameData. It must not keep
                the frame beyond the call.
        """
        self._callbacks.append(callback)

    def run(self) -> None:
        """
        Run the loop until stop(), a sink requests a stop, or
        config.max_iterations frames have been rendered.
        """
        self._running = True
        self.stats = LoopStats()

        try:
            self.source.open()
            self._buffer = self.source.allocate_buffer()
            logging.info(
                f"Frame loop started: source={self.source.source_id}, "
                f"interval={self.config.interval_s}s, schedule={self.config.schedule}"
            )

            while self._running:
                started = self._clock()
                self.run_once()

                if self._should_stop():
                    break

                self.state = LoopState.SCHEDULED
                self._sleep(self._next_delay(self._clock() - started))
        finally:
            self._cleanup()

    def run_once(self) -> FrameData:
        """Run a single capture/process/render pass and return the rendered frame."""
        if self._buffer is None:
            self._buffer = self.source.allocate_buffer()

        iteration_start = self._clock()

        self.state = LoopState.CAPTURING
        frame = self.source.read_into(self._buffer)

        self.state = LoopState.PROCESSING
        processed = self._processing_step(frame)

        self.state = LoopState.RENDERING
        for sink in self.sinks:
            sink.render(processed)

        self.stats.frame_count += 1
        self.stats.last_iteration_s = self._clock() - iteration_start

        for callback in self._callbacks:
            try:
                callback(processed)
            except Exception as e:
                logging.warning(f"Callback error: {e}")

        if self.stats.frame_count % 60 == 0:
            logging.info(
                f"Frame loop stats: frames={self.stats.frame_count}, "
                f"last_iteration={self.stats.last_iteration_s:.3f}s"
            )
        return processed

    def stop(self) -> None:
        """Signal the loop to stop after the current frame."""
        self._running = False

    def _should_stop(self) -> bool:
        if not self._running:
            return True
        if any(sink.stop_requested for sink in self.sinks):
            logging.info("Sink requested stop")
            return True
        max_iterations = self.config.max_iterations
        return max_iterations is not None and self.stats.frame_count >= max_iterations

    def _next_delay(self, elapsed: float) -> float:
        """
        Wait before the next capture.

        fixed_delay waits the full interval after each iteration, so slow
        inference lowers the frame rate. fixed_rate deducts the time already
        spent in the iteration.
        """
        if self.config.schedule == SCHEDULE_FIXED_RATE:
            return max(0.0, self.config.interval_s - elapsed)
        return self.config.interval_s

    def _cleanup(self) -> None:
        """Close the source and sinks."""
        self._running = False
        self.state = LoopState.STOPPED

        try:
            self.source.close()
        except Exception as e:
            logging.warning(f"Error closing source: {e}")

        for sink in self.sinks:
            try:
                sink.close()
            except Exception as e:
                logging.warning(f"Error closing sink: {e}")

        self._buffer = None
        logging.info(f"Frame loop stopped after {self.stats.frame_count} frames")
