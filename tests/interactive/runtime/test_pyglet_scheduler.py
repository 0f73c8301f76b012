import time

import pytest

pyglet = pytest.importorskip("pyglet")

from noisedrift.interactive.runtime.frame_clock import RealTimeClock  # noqa: E402
from noisedrift.interactive.runtime.pyglet_scheduler import PygletFrameScheduler  # noqa: E402


def test_interval_follows_fps():
    clock = RealTimeClock(start_time=time.perf_counter())
    assert PygletFrameScheduler(clock, fps=50.0).interval == pytest.approx(0.02)
    assert PygletFrameScheduler(clock, fps=0.0).interval == 0.0


def test_cancel_all_unschedules_pending_callbacks():
    clock = RealTimeClock(start_time=time.perf_counter())
    scheduler = PygletFrameScheduler(clock, fps=0.0)
    fired: list[float] = []

    scheduler.request_next_frame(fired.append)
    scheduler.cancel_all()
    pyglet.clock.tick()
    assert fired == []
