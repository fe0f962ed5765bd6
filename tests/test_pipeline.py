"""
Tests for the frame loop.
"""

from unittest.mock import MagicMock

import numpy as np
import pytest

from models.config import LoopConfig
from models.frame import ColorSpace, FrameData
from observation.base import FrameSource, FrameSourceError, SourceConfig
from pipeline.engine import FrameLoop, LoopState
from render.base import FrameSink


class MockFrameSource(FrameSource):
    """Fills the buffer with the frame number; fails after `fail_after` reads."""

    def __init__(self, fail_after=None, events=None):
        super().__init__(SourceConfig(source_id="test", resolution=(64, 48)))
        self.fail_after = fail_after
        self.events = events if events is not None else []
        self.buffers = []
        self.closed = False

    def open(self) -> None:
        self._is_open = True
        self._frame_index = 0

    def read_into(self, buffer: FrameData) -> FrameData:
        if self.fail_after is not None and self._frame_index >= self.fail_after:
            raise FrameSourceError("camera unplugged")
        self._frame_index += 1
        buffer.frame[...] = self._frame_index
        buffer.frame_index = self._frame_index
        self.buffers.append(buffer)
        self.events.append(("capture", self._frame_index))
        return buffer

    def close(self) -> None:
        self._is_open = False
        self.closed = True


class RecordingSink(FrameSink):
    def __init__(self, events=None, stop_after=None):
        self.events = events if events is not None else []
        self.frames = []
        self.stop_after = stop_after
        self.closed = False

    @property
    def stop_requested(self) -> bool:
        return self.stop_after is not None and len(self.frames) >= self.stop_after

    def render(self, frame: FrameData) -> None:
        self.frames.append(frame.frame.copy())
        self.events.append(("render", frame.frame_index))

    def close(self) -> None:
        self.closed = True


def copy_step(frame: FrameData) -> FrameData:
    return FrameData(
        frame=frame.frame.copy(),
        width=frame.width,
        height=frame.height,
        color_space=frame.color_space,
        frame_index=frame.frame_index,
    )


class FakeClock:
    def __init__(self, step=0.1):
        self.now = 0.0
        self.step = step

    def __call__(self):
        self.now += self.step
        return self.now


def _loop(source, sinks, config, events=None, clock=None, step=copy_step):
    events = events if events is not None else []

    def sleep(seconds):
        events.append(("sleep", seconds))

    return FrameLoop(source, step, sinks, config, sleep=sleep, clock=clock or FakeClock())


class TestFrameLoop:
    def test_processes_until_max_iterations(self):
        events = []
        source = MockFrameSource(events=events)
        sink = RecordingSink(events=events)
        loop = _loop(source, [sink], LoopConfig(max_iterations=3), events)

        loop.run()

        assert loop.stats.frame_count == 3
        assert [f[0, 0, 0] for f in sink.frames] == [1, 2, 3]
        assert loop.state == LoopState.STOPPED

    def test_renders_before_first_wait(self):
        events = []
        source = MockFrameSource(events=events)
        loop = _loop(source, [RecordingSink(events=events)], LoopConfig(interval_s=1.0, max_iterations=2), events)

        loop.run()

        assert events == [
            ("capture", 1),
            ("render", 1),
            ("sleep", 1.0),
            ("capture", 2),
            ("render", 2),
        ]

    def test_buffer_reused_across_iterations(self):
        source = MockFrameSource()
        loop = _loop(source, [RecordingSink()], LoopConfig(max_iterations=3))

        loop.run()

        assert len(source.buffers) == 3
        assert all(b is source.buffers[0] for b in source.buffers)
        assert source.buffers[0].frame.shape == (48, 64, 4)
        assert source.buffers[0].color_space == ColorSpace.RGBA

    def test_fixed_delay_ignores_processing_time(self):
        events = []
        loop = _loop(MockFrameSource(), [RecordingSink()], LoopConfig(interval_s=1.0, max_iterations=3), events,
                     clock=FakeClock(step=0.4))

        loop.run()

        assert [e[1] for e in events if e[0] == "sleep"] == [1.0, 1.0]

    def test_fixed_rate_deducts_iteration_time(self):
        events = []
        config = LoopConfig(interval_s=1.0, schedule="fixed_rate", max_iterations=2)
        loop = _loop(MockFrameSource(), [RecordingSink()], config, events, clock=FakeClock(step=0.1))

        loop.run()

        # Four clock reads per iteration: 0.3s elapsed between first and last
        sleeps = [e[1] for e in events if e[0] == "sleep"]
        assert sleeps == [pytest.approx(0.7)]

    def test_fixed_rate_never_negative(self):
        events = []
        config = LoopConfig(interval_s=0.5, schedule="fixed_rate", max_iterations=2)
        loop = _loop(MockFrameSource(), [RecordingSink()], config, events, clock=FakeClock(step=1.0))

        loop.run()

        assert [e[1] for e in events if e[0] == "sleep"] == [0.0]

    def test_unknown_schedule_rejected(self):
        with pytest.raises(ValueError):
            FrameLoop(MockFrameSource(), copy_step, [], LoopConfig(schedule="whenever"))

    def test_source_failure_propagates_and_cleans_up(self):
        source = MockFrameSource(fail_after=2)
        sink = RecordingSink()
        loop = _loop(source, [sink], LoopConfig())

        with pytest.raises(FrameSourceError):
            loop.run()

        assert loop.stats.frame_count == 2
        assert source.closed
        assert sink.closed
        assert loop.state == LoopState.STOPPED

    def test_sink_can_request_stop(self):
        sink = RecordingSink(stop_after=2)
        loop = _loop(MockFrameSource(), [sink], LoopConfig())

        loop.run()

        assert len(sink.frames) == 2

    def test_stop_from_callback(self):
        loop = _loop(MockFrameSource(), [RecordingSink()], LoopConfig())
        loop.add_callback(lambda frame: loop.stop() if frame.frame_index == 4 else None)

        loop.run()

        assert loop.stats.frame_count == 4

    def test_callback_errors_do_not_stop_loop(self):
        loop = _loop(MockFrameSource(), [RecordingSink()], LoopConfig(max_iterations=2))
        loop.add_callback(MagicMock(side_effect=RuntimeError("callback broke")))

        loop.run()

        assert loop.stats.frame_count == 2

    def test_processing_step_gets_buffer(self):
        seen = []

        def step(frame):
            seen.append(frame)
            return copy_step(frame)

        source = MockFrameSource()
        loop = _loop(source, [RecordingSink()], LoopConfig(max_iterations=1), step=step)

        loop.run()

        assert seen[0] is source.buffers[0]

    def test_run_once_without_run(self):
        source = MockFrameSource()
        source.open()
        sink = RecordingSink()
        loop = _loop(source, [sink], LoopConfig())

        frame = loop.run_once()

        assert frame.frame_index == 1
        assert np.all(sink.frames[0] == 1)
        assert loop.stats.last_iteration_s == pytest.approx(0.1)
