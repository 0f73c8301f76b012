"""AnimationLoop（start/stop 状態機械）のテスト群。"""

from __future__ import annotations

from noisedrift.core.gradient import AngularVelocityRange
from noisedrift.core.grid import GradientGrid
from noisedrift.core.random_source import default_random_source
from noisedrift.core.surface import RecordingSurface
from noisedrift.core.variants import ALPHA, RADIUS
from noisedrift.interactive.runtime.animation_loop import AnimationLoop, LoopState


class ManualScheduler:
    """要求されたコールバックを溜め、テストから 1 つずつ発火させるスケジューラ。"""

    def __init__(self) -> None:
        self.pending: list = []
        self.requests = 0

    def request_next_frame(self, callback) -> None:
        self.requests += 1
        self.pending.append(callback)

    def fire(self, timestamp_ms: float) -> None:
        callback = self.pending.pop(0)
        callback(timestamp_ms)


class CountingRenderer:
    def __init__(self) -> None:
        self.timestamps: list[float] = []

    def render_frame(self, grid: GradientGrid, timestamp_ms: float) -> None:
        self.timestamps.append(timestamp_ms)


def _grid() -> GradientGrid:
    return GradientGrid.random(
        (100, 100),
        cell_size=50,
        velocity_range=AngularVelocityRange(low=0.001, high=0.002),
        source=default_random_source(0),
    )


def test_start_requests_first_frame_only() -> None:
    scheduler = ManualScheduler()
    renderer = CountingRenderer()
    loop = AnimationLoop(renderer, _grid(), scheduler)
    assert loop.state is LoopState.STOPPED
    assert scheduler.requests == 0

    loop.start()
    assert loop.state is LoopState.RUNNING
    assert loop.is_running
    assert scheduler.requests == 1
    assert renderer.timestamps == []

    loop.start()
    assert scheduler.requests == 1


def test_each_frame_renders_then_requests_next() -> None:
    scheduler = ManualScheduler()
    renderer = CountingRenderer()
    loop = AnimationLoop(renderer, _grid(), scheduler)
    loop.start()

    for i in range(5):
        scheduler.fire(16.0 * (i + 1))
        assert len(scheduler.pending) == 1

    assert renderer.timestamps == [16.0, 32.0, 48.0, 64.0, 80.0]
    assert loop.frames_rendered == 5
    assert scheduler.requests == 6


def test_frame_loop_liveness_with_recording_surface() -> None:
    size = (200, 120)
    surface = RecordingSurface(size)
    grid = ALPHA.build_grid(size, default_random_source(1))
    evaluator = ALPHA.build_evaluator(surface, size)
    scheduler = ManualScheduler()
    loop = AnimationLoop(evaluator, grid, scheduler)

    n = 7
    loop.start()
    for i in range(n):
        scheduler.fire(1000.0 + 16.7 * i)

    assert surface.full_clears() == n
    assert surface.draw_calls_per_frame() == [ALPHA.lattice.count(size)] * n


def test_frame_loop_liveness_for_node_variant() -> None:
    size = (150, 100)
    surface = RecordingSurface(size)
    grid = RADIUS.build_grid(size, default_random_source(2))
    scheduler = ManualScheduler()
    loop = AnimationLoop(RADIUS.build_evaluator(surface, size), grid, scheduler)

    loop.start()
    for i in range(3):
        scheduler.fire(10.0 * i)

    assert surface.full_clears() == 3
    assert surface.draw_calls_per_frame() == [grid.rows * grid.cols] * 3


def test_stop_prevents_next_request_and_ignores_queued_callback() -> None:
    scheduler = ManualScheduler()
    renderer = CountingRenderer()
    loop = AnimationLoop(renderer, _grid(), scheduler)
    loop.start()
    scheduler.fire(1.0)
    assert len(scheduler.pending) == 1

    loop.stop()
    assert loop.state is LoopState.STOPPED

    # stop 前にホストへ積まれていたコールバックは発火しても描かない。
    scheduler.fire(2.0)
    assert renderer.timestamps == [1.0]
    assert scheduler.pending == []
    assert scheduler.requests == 2

    loop.stop()
    assert loop.state is LoopState.STOPPED


def test_stop_during_frame_lets_frame_complete() -> None:
    scheduler = ManualScheduler()
    grid = _grid()

    class StoppingRenderer:
        def __init__(self) -> None:
            self.completed = 0
            self.loop: AnimationLoop | None = None

        def render_frame(self, grid: GradientGrid, timestamp_ms: float) -> None:
            assert self.loop is not None
            self.loop.stop()
            self.completed += 1

    renderer = StoppingRenderer()
    loop = AnimationLoop(renderer, grid, scheduler)
    renderer.loop = loop
    loop.start()
    scheduler.fire(5.0)

    assert renderer.completed == 1
    assert loop.frames_rendered == 1
    assert scheduler.pending == []


def test_restart_ignores_callbacks_from_previous_run() -> None:
    scheduler = ManualScheduler()
    renderer = CountingRenderer()
    loop = AnimationLoop(renderer, _grid(), scheduler)

    loop.start()
    loop.stop()
    loop.start()
    assert len(scheduler.pending) == 2

    # 1 つ目は前回 run の要求なので無視され、次フレームも要求しない。
    scheduler.fire(10.0)
    assert renderer.timestamps == []
    assert len(scheduler.pending) == 1

    scheduler.fire(20.0)
    assert renderer.timestamps == [20.0]
    assert len(scheduler.pending) == 1
