# どこで: `src/noisedrift/core/random_source.py`。
# 何を: 勾配ベクトルの初期位相/角速度を引く乱数源のインターフェースと numpy 実装を提供する。
# なぜ: 既定は非決定的なまま、テストでは seed 付きの乱数源を注入して再現できるようにするため。

from __future__ import annotations

from typing import Protocol

import numpy as np


class RandomSource(Protocol):
    """一様乱数を返す乱数源。"""

    def uniform(self, low: float, high: float) -> float:
        """`[low, high)` の一様乱数を 1 つ返す。"""
        ...


class NumpyRandomSource:
    """`numpy.random.Generator` を包む乱数源。"""

    def __init__(self, rng: np.random.Generator) -> None:
        self._rng = rng

    def uniform(self, low: float, high: float) -> float:
        return float(self._rng.uniform(float(low), float(high)))


def default_random_source(seed: int | None = None) -> NumpyRandomSource:
    """既定の乱数源を返す。

    Notes
    -----
    `seed=None` の場合は OS エントロピーから初期化され、実行ごとに異なる値になる。
    """

    return NumpyRandomSource(np.random.default_rng(seed))


__all__ = ["NumpyRandomSource", "RandomSource", "default_random_source"]
