# どこで: `src/noisedrift/interactive/runtime/animation_loop.py`。
# 何を: ホストのフレームコールバックを要求し続け、毎回 1 フレームを描かせるループを提供する。
# なぜ: 自己再スケジュールするループに明示的な start/stop を与え、決定的に停止できるようにするため。

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Protocol

from noisedrift.core.grid import GradientGrid

_logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class FrameScheduler(Protocol):
    """ホストの「次フレームで呼んでほしい」プリミティブ。

    Notes
    -----
    コールバックには単調非減少のタイムスタンプ [ms] が渡される前提。
    """

    def request_next_frame(self, callback: FrameCallback) -> None: ...


class FrameRenderer(Protocol):
    """1 フレームを描くもの（`FrameEvaluator` など）。"""

    def render_frame(self, grid: GradientGrid, timestamp_ms: float) -> None: ...


class LoopState(Enum):
    STOPPED = "stopped"
    RUNNING = "running"


class AnimationLoop:
    """フレームごとに `renderer.render_frame(grid, t)` を呼ぶ状態機械。

    - `start()` で STOPPED → RUNNING となり、最初のフレームを要求する。
    - コールバックごとに 1 フレーム描き、描き終えてから次フレームを要求する。
    - `stop()` 後は次フレームを要求しない。描画中のフレームは最後まで描く。
      ホスト側に既に積まれているコールバックは、発火しても何もしない。
    """

    def __init__(
        self,
        renderer: FrameRenderer,
        grid: GradientGrid,
        scheduler: FrameScheduler,
    ) -> None:
        self._renderer = renderer
        self._grid = grid
        self._scheduler = scheduler
        self._state = LoopState.STOPPED
        # start ごとに進める世代番号。古い世代のコールバックは無視する。
        self._generation = 0
        self.frames_rendered = 0

    @property
    def state(self) -> LoopState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is LoopState.RUNNING

    def start(self) -> None:
        """ループを開始する（実行中なら何もしない）。"""

        if self._state is LoopState.RUNNING:
            return
        self._state = LoopState.RUNNING
        self._generation += 1
        _logger.debug("animation loop started (generation=%d)", self._generation)
        self._request(self._generation)

    def stop(self) -> None:
        """ループを停止する（停止中なら何もしない）。"""

        if self._state is LoopState.STOPPED:
            return
        self._state = LoopState.STOPPED
        _logger.debug(
            "animation loop stopped (generation=%d, frames=%d)",
            self._generation,
            self.frames_rendered,
        )

    def _request(self, generation: int) -> None:
        def on_frame(timestamp_ms: float) -> None:
            self._on_frame(generation, timestamp_ms)

        self._scheduler.request_next_frame(on_frame)

    def _on_frame(self, generation: int, timestamp_ms: float) -> None:
        if self._state is not LoopState.RUNNING or generation != self._generation:
            return

        self._renderer.render_frame(self._grid, float(timestamp_ms))
        self.frames_rendered += 1

        # 描画中に stop() された場合は次フレームを要求しない。
        if self._state is LoopState.RUNNING and generation == self._generation:
            self._request(generation)


__all__ = ["AnimationLoop", "FrameCallback", "FrameRenderer", "FrameScheduler", "LoopState"]
