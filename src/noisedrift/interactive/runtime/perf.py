"""
どこで: `src/noisedrift/interactive/runtime/perf.py`。
何を: 1 フレームを「render（サンプリング + 描画呼び出し）」と「present（pyglet への反映）」に分けて計測する。
なぜ: 格子点数の多いバリアントで、律速がノイズ計算側か GPU への転送側かを切り分けるため。
"""

from __future__ import annotations

import contextlib
import os
import time
from collections.abc import Iterator
from dataclasses import dataclass

_FALSY = {"", "0", "false", "no", "off"}


def _env_flag(name: str) -> bool:
    value = os.environ.get(name)
    return value is not None and value.strip().lower() not in _FALSY


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, default))
    except ValueError:
        return int(default)


@dataclass(slots=True)
class _Bucket:
    """区間名ごとの累積時間 [ns] / 呼び出し回数 / 最大値 [ns]。"""

    total_ns: int = 0
    calls: int = 0
    worst_ns: int = 0

    def add(self, dt_ns: int) -> None:
        self.total_ns += dt_ns
        self.calls += 1
        if dt_ns > self.worst_ns:
            self.worst_ns = dt_ns


class PerfCollector:
    """フレーム区間計測の集計器。

    Notes
    -----
    無効時は `frame()` / `section()` とも何もしない context manager を返す。
    有効時は `print_every` フレームごとに平均値を 1 行出力し、集計をリセットする。
    """

    def __init__(self, *, enabled: bool, print_every: int = 60) -> None:
        self.enabled = bool(enabled)
        self.print_every = int(print_every) if int(print_every) > 0 else 60
        self.last_report: str | None = None
        self._frames = 0
        self._buckets: dict[str, _Bucket] = {}

    @classmethod
    def from_env(cls) -> PerfCollector:
        """`NOISEDRIFT_PERF` / `NOISEDRIFT_PERF_EVERY` から作成する。"""

        return cls(
            enabled=_env_flag("NOISEDRIFT_PERF"),
            print_every=_env_int("NOISEDRIFT_PERF_EVERY", 60),
        )

    @contextlib.contextmanager
    def _timed(self, name: str) -> Iterator[None]:
        t0 = time.perf_counter_ns()
        try:
            yield
        finally:
            self._buckets.setdefault(name, _Bucket()).add(time.perf_counter_ns() - t0)

    def section(self, name: str) -> contextlib.AbstractContextManager[None]:
        """`with` で囲った区間の時間を `name` へ加算する。"""

        if not self.enabled:
            return contextlib.nullcontext()
        return self._timed(str(name))

    @contextlib.contextmanager
    def frame(self) -> Iterator[None]:
        """1 フレーム全体を計測し、周期的にレポートを出す。"""

        if not self.enabled:
            yield
            return
        with self._timed("frame"):
            yield
        self._frames += 1
        if self._frames >= self.print_every:
            self._report()

    def _report(self) -> None:
        frames = self._frames
        frame = self._buckets.pop("frame", _Bucket())
        parts = [
            f"frame={frame.total_ns / frames / 1e6:.3f}ms",
            f"worst={frame.worst_ns / 1e6:.3f}ms",
        ]
        for name in sorted(self._buckets):
            bucket = self._buckets[name]
            part = f"{name}={bucket.total_ns / frames / 1e6:.3f}ms"
            per_frame = bucket.calls / frames
            # 1 フレームに複数回入る区間は回数も併記する。
            if per_frame >= 1.5:
                part += f" ({per_frame:.1f}x)"
            parts.append(part)

        self.last_report = " ".join(parts)
        print("[noisedrift-perf]", self.last_report)
        self._frames = 0
        self._buckets.clear()


__all__ = ["PerfCollector"]
