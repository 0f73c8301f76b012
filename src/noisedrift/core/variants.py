# どこで: `src/noisedrift/core/variants.py`。
# 何を: alpha / hue / radius の 3 バリアント（グリッド解像度・格子・正規化・マッピングの組）を定義する。
# なぜ: ノイズ場の計算は共通のまま、見た目に関わるパラメータだけを名前で切り替えられるようにするため。

from __future__ import annotations

from dataclasses import dataclass

from noisedrift.core.frame import FrameEvaluator
from noisedrift.core.gradient import AngularVelocityRange
from noisedrift.core.grid import GradientGrid
from noisedrift.core.lattice import SamplingLattice
from noisedrift.core.mapping import AlphaMapping, HueMapping, RadiusMapping, ValueMapping
from noisedrift.core.noise import OffsetPolicy
from noisedrift.core.random_source import RandomSource
from noisedrift.core.surface import RasterSurface


@dataclass(frozen=True, slots=True)
class Variant:
    """描画バリアントの構成。"""

    name: str
    cell_size: float
    velocity_range: AngularVelocityRange
    mapping: ValueMapping
    lattice: SamplingLattice | None
    offset_policy: OffsetPolicy
    background_color: tuple[float, float, float] = (0.0, 0.0, 0.0)

    def build_grid(self, surface_size: tuple[int, int], source: RandomSource) -> GradientGrid:
        """描画面を覆う勾配グリッドを生成する。"""

        return GradientGrid.random(
            surface_size,
            cell_size=self.cell_size,
            velocity_range=self.velocity_range,
            source=source,
        )

    def build_evaluator(
        self,
        surface: RasterSurface,
        surface_size: tuple[int, int],
    ) -> FrameEvaluator:
        """描画面に対する FrameEvaluator を生成する。"""

        return FrameEvaluator(
            surface,
            surface_size=surface_size,
            mapping=self.mapping,
            lattice=self.lattice,
            offset_policy=self.offset_policy,
        )


# 半透明の白タイル。100px グリッドを 10px 間隔・5px タイルで密にサンプルする。
ALPHA = Variant(
    name="alpha",
    cell_size=100.0,
    velocity_range=AngularVelocityRange(low=1.0 / 2000.0, high=10.0 / 2000.0),
    mapping=AlphaMapping(),
    lattice=SamplingLattice(stride=10.0, origin=0.0, tile_size=5.0),
    offset_policy=OffsetPolicy.RAW,
)

# 色相タイル。9px 間隔で半 stride ずらした中心にタイルを置く。
HUE = Variant(
    name="hue",
    cell_size=90.0,
    velocity_range=AngularVelocityRange(low=1.0 / 2000.0, high=5.0 / 2000.0, bidirectional=True),
    mapping=HueMapping(),
    lattice=SamplingLattice(stride=9.0, origin=4.5, tile_size=9.0, centered=True),
    offset_policy=OffsetPolicy.NORMALIZED,
)

# グリッド節点ごとの円。半径は節点ベクトルから直接決める。
RADIUS = Variant(
    name="radius",
    cell_size=50.0,
    velocity_range=AngularVelocityRange(low=1.0 / 2000.0, high=6.0 / 2000.0, bidirectional=True),
    mapping=RadiusMapping(max_radius=20.0, color="white"),
    lattice=None,
    offset_policy=OffsetPolicy.RAW,
)

VARIANTS: dict[str, Variant] = {v.name: v for v in (ALPHA, HUE, RADIUS)}


def get_variant(name: str | Variant) -> Variant:
    """名前からバリアントを返す。"""

    if isinstance(name, Variant):
        return name
    key = str(name).strip().lower()
    try:
        return VARIANTS[key]
    except KeyError as exc:
        choices = ", ".join(sorted(VARIANTS))
        raise ValueError(f"未知のバリアント: {name!r}（{choices} のいずれか）") from exc


__all__ = ["ALPHA", "HUE", "RADIUS", "VARIANTS", "Variant", "get_variant"]
