# どこで: `src/noisedrift/interactive/pyglet_surface.py`。
# 何を: RasterSurface を pyglet.shapes で実装し、pyglet ウィンドウへ描く。
# なぜ: フレーム評価は左上原点の 2D 描画 API を前提にしているため、pyglet（左下原点）との差をここで吸収する。

from __future__ import annotations

import math

import pyglet
from pyglet import shapes
from pyglet.window import Window

from noisedrift.core.colors import RGBA255, parse_fill_style, rgb01_to_rgb255
from noisedrift.interactive.render_settings import RenderSettings

# 部分円（扇形）を多角形で近似するときの 1 周あたりの分割数。
_ARC_SEGMENTS = 64


class PygletSurface:
    """pyglet ウィンドウへ描く RasterSurface 実装。

    Notes
    -----
    毎フレーム 1 万個規模の矩形を描くため、shape はプールして使い回す。
    `clear()` で全面クリアされたら使用数を 0 に戻し、`present()` で未使用分を非表示にしてから描く。
    """

    def __init__(self, window: Window, settings: RenderSettings) -> None:
        self._window = window
        self._canvas_w, self._canvas_h = settings.canvas_size
        self._scale = float(settings.render_scale)
        self._background = (*rgb01_to_rgb255(settings.background_color), 255)
        self._batch = pyglet.graphics.Batch()

        self._rects: list[shapes.Rectangle] = []
        self._circles: list[shapes.Circle] = []
        self._polygons: list[shapes.Polygon] = []
        self._rects_used = 0
        self._circles_used = 0

        self._fill: RGBA255 = (255, 255, 255, 255)
        self._fill_style = "white"
        self._path: list[tuple[float, float, float, float, float]] = []

    # --- RasterSurface ---

    def clear(self, x: float, y: float, width: float, height: float) -> None:
        if (
            float(x) <= 0
            and float(y) <= 0
            and float(x) + float(width) >= self._canvas_w
            and float(y) + float(height) >= self._canvas_h
        ):
            self._rects_used = 0
            self._circles_used = 0
            for poly in self._polygons:
                poly.delete()
            self._polygons.clear()
            return
        # 部分クリアは背景色の矩形で塗りつぶす。
        self._push_rect(x, y, width, height, self._background)

    def set_fill_style(self, style: str) -> None:
        if style == self._fill_style:
            return
        self._fill = parse_fill_style(style)
        self._fill_style = style

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        self._push_rect(x, y, width, height, self._fill)

    def begin_path(self) -> None:
        self._path = []

    def arc(
        self,
        cx: float,
        cy: float,
        radius: float,
        start_angle: float,
        end_angle: float,
    ) -> None:
        self._path.append((float(cx), float(cy), float(radius), float(start_angle), float(end_angle)))

    def fill(self) -> None:
        for cx, cy, radius, start, end in self._path:
            if abs(end - start) >= 2.0 * math.pi - 1e-9:
                self._push_circle(cx, cy, radius, self._fill)
            else:
                self._push_sector(cx, cy, radius, start, end, self._fill)
        self._path = []

    # --- pyglet への反映 ---

    def present(self) -> None:
        """背景色でクリアし、このフレームで使った shape を描く（`on_draw` から呼ぶ）。"""

        for rect in self._rects[self._rects_used :]:
            if rect.visible:
                rect.visible = False
        for circle in self._circles[self._circles_used :]:
            if circle.visible:
                circle.visible = False

        r, g, b, _a = self._background
        pyglet.gl.glClearColor(r / 255.0, g / 255.0, b / 255.0, 1.0)
        self._window.clear()
        self._batch.draw()

    def release(self) -> None:
        """保持している shape を破棄する。"""

        for shape in (*self._rects, *self._circles, *self._polygons):
            shape.delete()
        self._rects.clear()
        self._circles.clear()
        self._polygons.clear()
        self._rects_used = 0
        self._circles_used = 0

    # --- 内部 ---

    def _to_window(self, x: float, y: float) -> tuple[float, float]:
        # 左上原点（y 下向き）→ pyglet の左下原点（y 上向き）。
        s = self._scale
        return float(x) * s, (float(self._canvas_h) - float(y)) * s

    def _push_rect(self, x: float, y: float, width: float, height: float, color: RGBA255) -> None:
        s = self._scale
        wx, wy = self._to_window(x, float(y) + float(height))
        w = float(width) * s
        h = float(height) * s

        if self._rects_used < len(self._rects):
            rect = self._rects[self._rects_used]
            rect.position = (wx, wy)
            rect.width = w
            rect.height = h
            rect.color = color
            rect.visible = True
        else:
            rect = shapes.Rectangle(wx, wy, w, h, color=color, batch=self._batch)
            self._rects.append(rect)
        self._rects_used += 1

    def _push_circle(self, cx: float, cy: float, radius: float, color: RGBA255) -> None:
        wx, wy = self._to_window(cx, cy)
        r = max(0.0, float(radius) * self._scale)

        if self._circles_used < len(self._circles):
            circle = self._circles[self._circles_used]
            circle.position = (wx, wy)
            circle.radius = r
            circle.color = color
            circle.visible = True
        else:
            circle = shapes.Circle(wx, wy, r, color=color, batch=self._batch)
            self._circles.append(circle)
        self._circles_used += 1

    def _push_sector(
        self,
        cx: float,
        cy: float,
        radius: float,
        start: float,
        end: float,
        color: RGBA255,
    ) -> None:
        sweep = end - start
        steps = max(2, int(math.ceil(abs(sweep) / (2.0 * math.pi) * _ARC_SEGMENTS)))
        points = [self._to_window(cx, cy)]
        for i in range(steps + 1):
            a = start + sweep * (i / steps)
            points.append(self._to_window(cx + radius * math.cos(a), cy + radius * math.sin(a)))
        self._polygons.append(shapes.Polygon(*points, color=color, batch=self._batch))


__all__ = ["PygletSurface"]
