"""
Tests for frame sinks.
"""

from unittest.mock import patch

from models.frame import ColorSpace, FrameData
from render.base import NullSink
from render.web import WebPreviewSink
from render.window import WindowSink
from web.state import PreviewState


def _rgba_frame(index=1):
    frame = FrameData.allocate(8, 6, ColorSpace.RGBA, source="test")
    frame.frame[:, :, 0] = 255
    frame.frame_index = index
    return frame


class TestWindowSink:
    def test_shows_bgr_and_quits_on_q(self):
        with patch("render.window.cv2") as cv2_mock:
            cv2_mock.waitKey.return_value = ord("q")
            sink = WindowSink("preview")

            sink.render(_rgba_frame())

            shown = cv2_mock.imshow.call_args[0][1]
            assert shown.shape == (6, 8, 3)
            assert shown[0, 0].tolist() == [0, 0, 255]
            assert sink.stop_requested

            sink.close()
            cv2_mock.destroyWindow.assert_called_once_with("preview")

    def test_other_keys_keep_running(self):
        with patch("render.window.cv2") as cv2_mock:
            cv2_mock.waitKey.return_value = -1
            sink = WindowSink()

            sink.render(_rgba_frame())

            assert not sink.stop_requested

    def test_close_without_render(self):
        with patch("render.window.cv2") as cv2_mock:
            WindowSink().close()

            cv2_mock.destroyWindow.assert_not_called()


class TestWebPreviewSink:
    def test_publishes_copy(self):
        state = PreviewState()
        sink = WebPreviewSink(state)
        frame = _rgba_frame(index=5)

        sink.render(frame)
        frame.frame[:] = 0

        published = state.get_frame()
        assert published.shape == (6, 8, 3)
        assert published[0, 0].tolist() == [0, 0, 255]
        assert state.get_system_stats_copy()["frame_count"] == 5


def test_null_sink_never_stops():
    sink = NullSink()
    sink.render(_rgba_frame())
    assert not sink.stop_requested
