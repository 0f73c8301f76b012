"""テスト共通のヘルパ。"""

from __future__ import annotations

from collections.abc import Sequence

import pytest


class ScriptedSource:
    """`[0, 1)` の値列を順に返し、`low + u * (high - low)` として使う乱数源。"""

    def __init__(self, fractions: Sequence[float]) -> None:
        self._fractions = list(fractions)
        self._index = 0

    def uniform(self, low: float, high: float) -> float:
        u = self._fractions[self._index % len(self._fractions)]
        self._index += 1
        return float(low) + float(u) * (float(high) - float(low))


@pytest.fixture
def scripted_source():
    return ScriptedSource
