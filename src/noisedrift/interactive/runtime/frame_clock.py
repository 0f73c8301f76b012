# どこで: `src/noisedrift/interactive/runtime/frame_clock.py`。
# 何を: フレームコールバックへ渡すタイムスタンプ [ms] の生成規則を提供する。
# なぜ: 勾配ベクトルの角速度は rad/ms で定義されており、ホストの単調増加タイムスタンプを ms で揃えるため。

from __future__ import annotations

import time


class RealTimeClock:
    """実時間ベースのフレーム時計。

    Notes
    -----
    `now_ms()` は `perf_counter()` の差分（ミリ秒）。単調非減少。
    """

    def __init__(self, *, start_time: float) -> None:
        self._start_time = float(start_time)

    def t(self) -> float:
        """開始からの経過秒を返す。"""

        return float(time.perf_counter() - self._start_time)

    def now_ms(self) -> float:
        """開始からの経過ミリ秒を返す。"""

        return self.t() * 1000.0
