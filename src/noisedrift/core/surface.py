# どこで: `src/noisedrift/core/surface.py`。
# 何を: 描画先（ラスタ面）のプロトコルと、呼び出しを記録するだけの実装を提供する。
# なぜ: フレーム評価をウィンドウ実装から切り離し、描画呼び出しを検証できるようにするため。

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

DRAW_CALLS = frozenset({"fill_rect", "fill"})


class RasterSurface(Protocol):
    """2D 描画面。座標は左上原点、y は下向き。"""

    def clear(self, x: float, y: float, width: float, height: float) -> None: ...

    def set_fill_style(self, style: str) -> None: ...

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None: ...

    def begin_path(self) -> None: ...

    def arc(
        self,
        cx: float,
        cy: float,
        radius: float,
        start_angle: float,
        end_angle: float,
    ) -> None: ...

    def fill(self) -> None: ...


@dataclass(frozen=True, slots=True)
class SurfaceCall:
    """記録された 1 回分の描画呼び出し。"""

    name: str
    args: tuple[object, ...]


class RecordingSurface:
    """描画呼び出しを順番に記録する RasterSurface 実装。"""

    def __init__(self, size: tuple[int, int]) -> None:
        self.size = (int(size[0]), int(size[1]))
        self.calls: list[SurfaceCall] = []

    def _record(self, name: str, *args: object) -> None:
        self.calls.append(SurfaceCall(name=name, args=tuple(args)))

    def clear(self, x: float, y: float, width: float, height: float) -> None:
        self._record("clear", x, y, width, height)

    def set_fill_style(self, style: str) -> None:
        self._record("set_fill_style", style)

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        self._record("fill_rect", x, y, width, height)

    def begin_path(self) -> None:
        self._record("begin_path")

    def arc(
        self,
        cx: float,
        cy: float,
        radius: float,
        start_angle: float,
        end_angle: float,
    ) -> None:
        self._record("arc", cx, cy, radius, start_angle, end_angle)

    def fill(self) -> None:
        self._record("fill")

    def count(self, name: str) -> int:
        """名前 `name` の呼び出し回数を返す。"""

        return sum(1 for call in self.calls if call.name == name)

    def full_clears(self) -> int:
        """描画面全体を覆う `clear` の回数を返す。"""

        w, h = self.size
        return sum(
            1
            for call in self.calls
            if call.name == "clear" and call.args[:2] == (0, 0) and tuple(call.args[2:]) == (w, h)
        )

    def draw_calls_per_frame(self) -> list[int]:
        """`clear` で区切ったフレームごとの描画呼び出し数を返す。"""

        out: list[int] = []
        for call in self.calls:
            if call.name == "clear":
                out.append(0)
            elif call.name in DRAW_CALLS and out:
                out[-1] += 1
        return out


__all__ = ["DRAW_CALLS", "RasterSurface", "RecordingSurface", "SurfaceCall"]
