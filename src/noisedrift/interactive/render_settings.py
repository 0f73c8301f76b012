# どこで: `src/noisedrift/interactive/render_settings.py`。
# 何を: interactive 描画設定の束を表すデータクラスを定義する。
# なぜ: `run` の引数を簡潔に保ちつつ、interactive 側の設定を一元管理するため。

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RenderSettings:
    """リアルタイム描画に用いる設定値の集合。"""

    canvas_size: tuple[int, int] = (1000, 1000)
    background_color: tuple[float, float, float] = (0.0, 0.0, 0.0)
    render_scale: float = 1.0
    caption: str = "noisedrift"

    def __post_init__(self) -> None:
        w, h = self.canvas_size
        if int(w) <= 0 or int(h) <= 0:
            raise ValueError(f"canvas_size は正の (width, height) である必要がある: got={self.canvas_size}")
        if float(self.render_scale) <= 0:
            raise ValueError(f"render_scale は正の値である必要がある: got={self.render_scale}")
