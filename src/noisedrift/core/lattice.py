# どこで: `src/noisedrift/core/lattice.py`。
# 何を: 描画領域上のサンプリング格子（stride/原点オフセット/タイル寸法）を表す。
# なぜ: 問い合わせ点を描画領域内に限定し、グリッド外サンプリングを構築時点で起こさないため。

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class SamplingLattice:
    """固定 stride のサンプリング格子。

    Attributes
    ----------
    stride : float
        隣接サンプル点の間隔 [px]。
    origin : float
        最初のサンプル点の座標 [px]（x/y 共通）。`0 <= origin < stride`。
    tile_size : float
        1 サンプルあたりに塗る正方形の一辺 [px]。
    centered : bool
        True ならタイルをサンプル点の中心に置く。False なら左上に置く。
    """

    stride: float
    origin: float = 0.0
    tile_size: float = 5.0
    centered: bool = False

    def __post_init__(self) -> None:
        if float(self.stride) <= 0:
            raise ValueError(f"stride は正の値である必要がある: got={self.stride}")
        if not (0.0 <= float(self.origin) < float(self.stride)):
            raise ValueError(
                f"origin は 0 <= origin < stride である必要がある: origin={self.origin}, stride={self.stride}"
            )
        if float(self.tile_size) <= 0:
            raise ValueError(f"tile_size は正の値である必要がある: got={self.tile_size}")

    def axis(self, length: int) -> np.ndarray:
        """長さ `length` の軸上のサンプル座標（`< length`）を返す。"""

        return np.arange(float(self.origin), float(length), float(self.stride), dtype=np.float64)

    def points(self, surface_size: tuple[int, int]) -> tuple[np.ndarray, np.ndarray]:
        """行優先（y 外側, x 内側）のサンプル点 `(xs, ys)` を返す。"""

        width, height = surface_size
        xs_axis = self.axis(int(width))
        ys_axis = self.axis(int(height))
        ys, xs = np.meshgrid(ys_axis, xs_axis, indexing="ij")
        return xs.reshape(-1), ys.reshape(-1)

    def count(self, surface_size: tuple[int, int]) -> int:
        """サンプル点の総数を返す。"""

        width, height = surface_size
        return int(self.axis(int(width)).size * self.axis(int(height)).size)

    def tile_rect(self, x: float, y: float) -> tuple[float, float, float, float]:
        """サンプル点 `(x, y)` に対応する塗り矩形 `(x, y, w, h)` を返す。"""

        size = float(self.tile_size)
        if self.centered:
            half = size / 2.0
            return float(x) - half, float(y) - half, size, size
        return float(x), float(y), size, size


__all__ = ["SamplingLattice"]
