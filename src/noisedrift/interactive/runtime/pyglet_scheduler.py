# どこで: `src/noisedrift/interactive/runtime/pyglet_scheduler.py`。
# 何を: pyglet.clock を使って「次フレームで 1 回だけ呼ぶ」スケジューラを提供する。
# なぜ: AnimationLoop が要求する FrameScheduler を、pyglet の app loop 上で実現するため。

from __future__ import annotations

from typing import Any

import pyglet

from noisedrift.interactive.runtime.animation_loop import FrameCallback
from noisedrift.interactive.runtime.frame_clock import RealTimeClock


class PygletFrameScheduler:
    """`pyglet.clock.schedule_once` による FrameScheduler 実装。"""

    def __init__(self, clock: RealTimeClock, *, fps: float) -> None:
        """スケジューラを初期化する。

        Parameters
        ----------
        clock : RealTimeClock
            コールバックへ渡すタイムスタンプ [ms] の供給元。
        fps : float
            目標フレームレート。`<=0` の場合は待ち時間 0 で次フレームを要求する。
        """

        self._clock = clock
        self._fps = float(fps)
        self._pending: list[Any] = []

    @property
    def interval(self) -> float:
        """次フレームまでの待ち時間 [s]。"""

        if self._fps <= 0:
            return 0.0
        return 1.0 / self._fps

    def request_next_frame(self, callback: FrameCallback) -> None:
        clock = self._clock
        pending = self._pending

        def fire(_dt: float) -> None:
            if fire in pending:
                pending.remove(fire)
            callback(clock.now_ms())

        pending.append(fire)
        pyglet.clock.schedule_once(fire, self.interval)

    def cancel_all(self) -> None:
        """未発火のコールバックをすべて取り消す。"""

        for fire in self._pending:
            pyglet.clock.unschedule(fire)
        self._pending.clear()
