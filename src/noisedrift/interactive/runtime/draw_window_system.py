# どこで: `src/noisedrift/interactive/runtime/draw_window_system.py`。
# 何を: バリアントのノイズ場を描画ウィンドウへ描き続けるサブシステムを提供する。
# なぜ: `src/noisedrift/api/runner.py` の `run()` を「配線」に寄せ、描画責務を独立させるため。

from __future__ import annotations

import logging
import time

import pyglet

from noisedrift.core.grid import GradientGrid
from noisedrift.core.random_source import RandomSource
from noisedrift.core.variants import Variant
from noisedrift.interactive.draw_window import create_draw_window
from noisedrift.interactive.pyglet_surface import PygletSurface
from noisedrift.interactive.render_settings import RenderSettings
from noisedrift.interactive.runtime.animation_loop import AnimationLoop
from noisedrift.interactive.runtime.frame_clock import RealTimeClock
from noisedrift.interactive.runtime.perf import PerfCollector
from noisedrift.interactive.runtime.pyglet_scheduler import PygletFrameScheduler

_logger = logging.getLogger(__name__)


class DrawWindowSystem:
    """描画（メインウィンドウ）のサブシステム。"""

    def __init__(
        self,
        variant: Variant,
        *,
        settings: RenderSettings,
        source: RandomSource,
        fps: float = 60.0,
    ) -> None:
        """描画用の window/surface/loop を初期化する。"""

        self._settings = settings
        self.variant = variant

        # グリッドは起動時に一度だけ生成し、以後は差し替えない。
        # ウィンドウを開く前に生成する。
        self.grid: GradientGrid = variant.build_grid(settings.canvas_size, source)

        # 描画用の pyglet window を作成し、その window に描く surface を作る。
        # window が作れない/コンテキストが取れない場合は SurfaceInitError で起動を止める。
        self.window = create_draw_window(settings)
        try:
            self._surface = PygletSurface(self.window, settings)
            self._evaluator = variant.build_evaluator(self._surface, settings.canvas_size)
        except Exception:
            self.window.close()
            raise
        self.window.push_handlers(on_draw=self._surface.present)

        # フレームコールバックに渡す t [ms] の基準時刻。
        self._clock = RealTimeClock(start_time=time.perf_counter())
        self._scheduler = PygletFrameScheduler(self._clock, fps=float(fps))
        self._perf = PerfCollector.from_env()
        self._last_timestamp_ms: float | None = None
        self.loop = AnimationLoop(self, self.grid, self._scheduler)

        _logger.info(
            "variant=%s grid=%dx%d cell=%.1fpx canvas=%dx%d",
            variant.name,
            self.grid.rows,
            self.grid.cols,
            self.grid.cell_size,
            settings.canvas_size[0],
            settings.canvas_size[1],
        )

    def render_frame(self, grid: GradientGrid, timestamp_ms: float) -> None:
        """1 フレーム分の描画を行い、ウィンドウへ反映する。"""

        perf = self._perf
        with perf.frame():
            with perf.section("render"):
                self._evaluator.render_frame(grid, timestamp_ms)

            last = self._last_timestamp_ms
            dt = 0.0 if last is None else max(0.0, (float(timestamp_ms) - last) / 1000.0)
            self._last_timestamp_ms = float(timestamp_ms)

            # 閉じられたウィンドウへ draw すると例外になり得るため、開いているときだけ描く。
            # Window.draw は switch_to / on_draw / flip をまとめて行う。
            if self.window in pyglet.app.windows:
                with perf.section("present"):
                    self.window.draw(dt)

    def start(self) -> None:
        self.loop.start()

    def stop(self) -> None:
        """ループを止め、未発火のフレーム要求を取り消す。"""

        self.loop.stop()
        self._scheduler.cancel_all()

    def close(self) -> None:
        """ループを止めて shape / window 資源を解放する。"""

        self.stop()
        try:
            self._surface.release()
        except Exception:
            _logger.exception("Failed to release surface shapes")
        self.window.close()
