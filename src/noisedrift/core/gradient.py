# どこで: `src/noisedrift/core/gradient.py`。
# 何を: 時刻の関数として単位円上を回転する勾配ベクトルを定義する。
# なぜ: 乱数由来の状態（初期位相/角速度）を不変の値オブジェクトに閉じ込め、評価を純粋関数にするため。

from __future__ import annotations

import math
from dataclasses import dataclass

from noisedrift.core.random_source import RandomSource

TWO_PI = 2.0 * math.pi


@dataclass(frozen=True, slots=True)
class AngularVelocityRange:
    """勾配ベクトルの角速度 [rad/ms] を引く範囲。

    Notes
    -----
    `bidirectional=True` の場合、大きさを `[low, high)` から引いた後に符号を一様に選ぶ。
    """

    low: float
    high: float
    bidirectional: bool = False

    def __post_init__(self) -> None:
        if not (0.0 <= float(self.low) <= float(self.high)):
            raise ValueError(
                f"角速度範囲は 0 <= low <= high である必要がある: low={self.low}, high={self.high}"
            )

    def draw(self, source: RandomSource) -> float:
        """範囲から角速度を 1 つ引く。"""

        speed = source.uniform(float(self.low), float(self.high))
        if self.bidirectional and source.uniform(0.0, 1.0) < 0.5:
            return -speed
        return speed


@dataclass(frozen=True, slots=True)
class GradientVector:
    """時刻 t [ms] で `(cos(phase + w*t), sin(phase + w*t))` を返す回転ベクトル。"""

    initial_phase: float
    angular_velocity: float

    @classmethod
    def random(
        cls,
        source: RandomSource,
        velocity_range: AngularVelocityRange,
    ) -> GradientVector:
        """乱数源から初期位相と角速度を引いて生成する。"""

        phase = source.uniform(0.0, TWO_PI)
        velocity = velocity_range.draw(source)
        return cls(initial_phase=float(phase), angular_velocity=float(velocity))

    def angle(self, time_ms: float) -> float:
        """時刻 `time_ms` における角度 [rad] を返す。"""

        return float(self.initial_phase + self.angular_velocity * float(time_ms))

    def evaluate(self, time_ms: float) -> tuple[float, float]:
        """時刻 `time_ms` における単位ベクトルを返す。"""

        a = self.angle(time_ms)
        return math.cos(a), math.sin(a)


__all__ = ["AngularVelocityRange", "GradientVector", "TWO_PI"]
