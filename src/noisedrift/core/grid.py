# どこで: `src/noisedrift/core/grid.py`。
# 何を: 描画領域を覆う勾配ベクトルの 2D テーブルと、その時刻スナップショット（SampleFrame）を提供する。
# なぜ: フレームごとに全ベクトルを同一時刻で凍結し、サンプリングを純粋関数として扱えるようにするため。

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from noisedrift.core.gradient import AngularVelocityRange, GradientVector
from noisedrift.core.random_source import RandomSource


def grid_shape(surface_size: tuple[int, int], cell_size: float) -> tuple[int, int]:
    """描画領域サイズとセルサイズから `(rows, cols)` を返す。

    Notes
    -----
    最後のセル（端数セルを含む）にも右/下の勾配が存在するよう、
    `ceil(size / cell_size)` に 1 を足す（fence-post）。
    """

    width, height = surface_size
    _cell = float(cell_size)
    if _cell <= 0:
        raise ValueError(f"cell_size は正の値である必要がある: got={cell_size}")
    if int(width) <= 0 or int(height) <= 0:
        raise ValueError(f"surface_size は正の (width, height) である必要がある: got={surface_size}")
    rows = math.ceil(float(height) / _cell) + 1
    cols = math.ceil(float(width) / _cell) + 1
    return int(rows), int(cols)


@dataclass(frozen=True, slots=True)
class SampleFrame:
    """ある時刻で全勾配ベクトルを評価した結果。

    Attributes
    ----------
    directions : np.ndarray
        shape `(rows, cols, 2)` の float64 配列。`[row, col]` が `(x, y)` 方向。
    cell_size : float
        グリッド間隔 [px]。
    time_ms : float
        評価時刻 [ms]。
    """

    directions: np.ndarray
    cell_size: float
    time_ms: float

    @property
    def rows(self) -> int:
        return int(self.directions.shape[0])

    @property
    def cols(self) -> int:
        return int(self.directions.shape[1])

    def direction(self, row: int, col: int) -> tuple[float, float]:
        """`(row, col)` の方向ベクトルを返す。"""

        d = self.directions[int(row), int(col)]
        return float(d[0]), float(d[1])


class GradientGrid:
    """`rows x cols` の回転勾配ベクトル表。

    Notes
    -----
    生成後にベクトルを差し替える操作は持たない。時間変化は `evaluate(t)` の引数のみで表す。
    内部では位相/角速度を numpy 配列で保持し、1 フレーム分の評価をまとめて行う。
    """

    def __init__(
        self,
        phases: np.ndarray,
        velocities: np.ndarray,
        *,
        cell_size: float,
    ) -> None:
        _phases = np.array(phases, dtype=np.float64)
        _velocities = np.array(velocities, dtype=np.float64)
        if _phases.ndim != 2 or _phases.shape != _velocities.shape:
            raise ValueError(
                "phases と velocities は同じ shape の 2 次元配列である必要がある: "
                f"phases={_phases.shape}, velocities={_velocities.shape}"
            )
        if _phases.shape[0] < 2 or _phases.shape[1] < 2:
            raise ValueError(f"グリッドは 2x2 以上である必要がある: got={_phases.shape}")
        if float(cell_size) <= 0:
            raise ValueError(f"cell_size は正の値である必要がある: got={cell_size}")

        _phases.setflags(write=False)
        _velocities.setflags(write=False)
        self._phases = _phases
        self._velocities = _velocities
        self.cell_size = float(cell_size)

    @classmethod
    def random(
        cls,
        surface_size: tuple[int, int],
        *,
        cell_size: float,
        velocity_range: AngularVelocityRange,
        source: RandomSource,
    ) -> GradientGrid:
        """描画領域を覆うグリッドを乱数源から生成する。"""

        rows, cols = grid_shape(surface_size, cell_size)
        vectors = [
            [GradientVector.random(source, velocity_range) for _ in range(cols)]
            for _ in range(rows)
        ]
        return cls.from_vectors(vectors, cell_size=cell_size)

    @classmethod
    def from_vectors(
        cls,
        vectors: Sequence[Sequence[GradientVector]],
        *,
        cell_size: float,
    ) -> GradientGrid:
        """GradientVector の 2 次元列からグリッドを作る。"""

        phases = [[float(v.initial_phase) for v in row] for row in vectors]
        velocities = [[float(v.angular_velocity) for v in row] for row in vectors]
        return cls(np.asarray(phases), np.asarray(velocities), cell_size=cell_size)

    @property
    def shape(self) -> tuple[int, int]:
        return int(self._phases.shape[0]), int(self._phases.shape[1])

    @property
    def rows(self) -> int:
        return self.shape[0]

    @property
    def cols(self) -> int:
        return self.shape[1]

    def vector(self, row: int, col: int) -> GradientVector:
        """`(row, col)` の GradientVector を返す。"""

        return GradientVector(
            initial_phase=float(self._phases[int(row), int(col)]),
            angular_velocity=float(self._velocities[int(row), int(col)]),
        )

    def evaluate(self, time_ms: float) -> SampleFrame:
        """全ベクトルを時刻 `time_ms` で評価した SampleFrame を返す。"""

        angles = self._phases + self._velocities * float(time_ms)
        directions = np.empty((*angles.shape, 2), dtype=np.float64)
        directions[..., 0] = np.cos(angles)
        directions[..., 1] = np.sin(angles)
        directions.setflags(write=False)
        return SampleFrame(directions=directions, cell_size=self.cell_size, time_ms=float(time_ms))


__all__ = ["GradientGrid", "SampleFrame", "grid_shape"]
