"""
どこで: `src/noisedrift/core/mapping.py`。
何を: ノイズ値（またはグリッド節点のベクトル）を描画コマンドへ写す値マッピングを提供する。
なぜ: アルゴリズム本体（ノイズ場）と見た目（alpha / hue / 半径）を差し替え可能に分離するため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Protocol

from noisedrift.core.colors import hsl_style, rgb_alpha_style
from noisedrift.core.lattice import SamplingLattice
from noisedrift.core.surface import RasterSurface


class MappingSource(Enum):
    """マッピングが入力として使うもの。"""

    # サンプリング格子上のノイズ値。
    FIELD = "field"
    # グリッド節点の勾配ベクトルそのもの（ノイズ場を通さない）。
    NODES = "nodes"


@dataclass(frozen=True, slots=True)
class RectCommand:
    """塗り矩形 1 つ分の描画コマンド。"""

    x: float
    y: float
    width: float
    height: float
    fill_style: str

    def issue(self, surface: RasterSurface) -> None:
        surface.fill_rect(self.x, self.y, self.width, self.height)


@dataclass(frozen=True, slots=True)
class CircleCommand:
    """塗り円 1 つ分の描画コマンド。"""

    cx: float
    cy: float
    radius: float
    fill_style: str

    def issue(self, surface: RasterSurface) -> None:
        surface.begin_path()
        surface.arc(self.cx, self.cy, self.radius, 0.0, 2.0 * math.pi)
        surface.fill()


DrawCommand = RectCommand | CircleCommand


def normalized_value(value: float) -> float:
    """[-1, 1] のノイズ値を [0, 1] 相当へ写す（クランプしない）。"""

    return (float(value) + 1.0) / 2.0


class FieldMapping(Protocol):
    """サンプリング格子上のノイズ値を描画コマンドへ写すマッピング。"""

    source: MappingSource

    def command(self, x: float, y: float, value: float, lattice: SamplingLattice) -> DrawCommand: ...


class NodeMapping(Protocol):
    """グリッド節点の方向ベクトルを描画コマンドへ写すマッピング。"""

    source: MappingSource

    def command(self, x: float, y: float, direction: tuple[float, float]) -> DrawCommand: ...


ValueMapping = FieldMapping | NodeMapping


@dataclass(frozen=True, slots=True)
class AlphaMapping:
    """ノイズ値を白タイルの不透明度 [%] に写す。"""

    rgb: tuple[int, int, int] = (255, 255, 255)
    source: ClassVar[MappingSource] = MappingSource.FIELD

    def style_for(self, value: float) -> str:
        return rgb_alpha_style(normalized_value(value) * 100.0, self.rgb)

    def command(self, x: float, y: float, value: float, lattice: SamplingLattice) -> RectCommand:
        rx, ry, rw, rh = lattice.tile_rect(x, y)
        return RectCommand(rx, ry, rw, rh, self.style_for(value))


@dataclass(frozen=True, slots=True)
class HueMapping:
    """ノイズ値を色相 [deg]（0..100）に写す。"""

    saturation: float = 50.0
    lightness: float = 50.0
    source: ClassVar[MappingSource] = MappingSource.FIELD

    def style_for(self, value: float) -> str:
        return hsl_style(normalized_value(value) * 100.0, self.saturation, self.lightness)

    def command(self, x: float, y: float, value: float, lattice: SamplingLattice) -> RectCommand:
        rx, ry, rw, rh = lattice.tile_rect(x, y)
        return RectCommand(rx, ry, rw, rh, self.style_for(value))


@dataclass(frozen=True, slots=True)
class RadiusMapping:
    """グリッド節点ごとに、方向ベクトルの x 成分から半径を決めた円を置く。

    Notes
    -----
    半径は `max_radius * (dx + 1) / 2`。ノイズ場の補間は通さない。
    """

    max_radius: float = 20.0
    color: str = "white"
    source: ClassVar[MappingSource] = MappingSource.NODES

    def __post_init__(self) -> None:
        if float(self.max_radius) <= 0:
            raise ValueError(f"max_radius は正の値である必要がある: got={self.max_radius}")

    def radius_for(self, direction: tuple[float, float]) -> float:
        return float(self.max_radius) * normalized_value(direction[0])

    def command(self, x: float, y: float, direction: tuple[float, float]) -> CircleCommand:
        return CircleCommand(float(x), float(y), self.radius_for(direction), self.color)


__all__ = [
    "AlphaMapping",
    "CircleCommand",
    "DrawCommand",
    "FieldMapping",
    "HueMapping",
    "MappingSource",
    "NodeMapping",
    "RadiusMapping",
    "RectCommand",
    "ValueMapping",
    "normalized_value",
]
