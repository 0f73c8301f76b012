# どこで: `src/noisedrift/core/frame.py`。
# 何を: 1 フレーム分の「クリア → グリッド凍結 → サンプリング → マッピング → 描画呼び出し」を行う。
# なぜ: ループ（いつ描くか）と描画内容（何を描くか）を分離し、描画呼び出しを決定的に検証できるようにするため。

from __future__ import annotations

import numpy as np

from noisedrift.core.grid import GradientGrid, SampleFrame
from noisedrift.core.lattice import SamplingLattice
from noisedrift.core.mapping import DrawCommand, MappingSource, ValueMapping
from noisedrift.core.noise import OffsetPolicy, sample_points
from noisedrift.core.surface import RasterSurface


class FrameEvaluator:
    """時刻ごとにノイズ場を描画面へ描き直す。"""

    def __init__(
        self,
        surface: RasterSurface,
        *,
        surface_size: tuple[int, int],
        mapping: ValueMapping,
        lattice: SamplingLattice | None = None,
        offset_policy: OffsetPolicy = OffsetPolicy.RAW,
    ) -> None:
        """評価器を初期化する。

        Parameters
        ----------
        surface : RasterSurface
            描画先。
        surface_size : tuple[int, int]
            描画面の `(width, height)` [px]。
        mapping : ValueMapping
            値 → 描画コマンドのマッピング。`MappingSource.FIELD` の場合は `lattice` が必須。
        lattice : SamplingLattice | None
            サンプリング格子。
        offset_policy : OffsetPolicy
            ノイズ計算時のオフセットベクトルの扱い。
        """

        width, height = surface_size
        if int(width) <= 0 or int(height) <= 0:
            raise ValueError(f"surface_size は正の (width, height) である必要がある: got={surface_size}")
        if mapping.source is MappingSource.FIELD and lattice is None:
            raise ValueError("ノイズ場を使うマッピングには lattice が必要")

        self._surface = surface
        self.surface_size = (int(width), int(height))
        self.mapping = mapping
        self.lattice = lattice
        self.offset_policy = OffsetPolicy.parse(offset_policy)
        self.last_draw_count = 0

        # 格子点は描画面サイズだけで決まるため、初期化時に一度だけ作る。
        if lattice is not None:
            xs, ys = lattice.points(self.surface_size)
        else:
            xs = ys = np.zeros((0,), dtype=np.float64)
        self._xs = xs
        self._ys = ys
        self._checked_grid: GradientGrid | None = None

    @property
    def point_count(self) -> int:
        """1 フレームあたりのサンプル点数（FIELD マッピング時）。"""

        return int(self._xs.size)

    def _check_domain(self, grid: GradientGrid) -> None:
        if self.mapping.source is not MappingSource.FIELD or self._xs.size == 0:
            return
        limit_x = (grid.cols - 1) * grid.cell_size
        limit_y = (grid.rows - 1) * grid.cell_size
        if float(self._xs.max()) >= limit_x or float(self._ys.max()) >= limit_y:
            raise ValueError(
                "サンプリング格子がグリッドの被覆範囲を超えている: "
                f"grid={grid.shape}, cell_size={grid.cell_size}, surface_size={self.surface_size}"
            )

    def commands(self, grid: GradientGrid, timestamp_ms: float) -> list[DrawCommand]:
        """時刻 `timestamp_ms` の描画コマンド列を返す（描画はしない）。"""

        if grid is not self._checked_grid:
            self._check_domain(grid)
            self._checked_grid = grid

        frame = grid.evaluate(float(timestamp_ms))
        if self.mapping.source is MappingSource.NODES:
            return self._node_commands(frame)
        return self._field_commands(frame)

    def _field_commands(self, frame: SampleFrame) -> list[DrawCommand]:
        lattice = self.lattice
        assert lattice is not None
        values = sample_points(frame, self._xs, self._ys, offset_policy=self.offset_policy)
        mapping = self.mapping
        return [
            mapping.command(float(x), float(y), float(v), lattice)  # type: ignore[call-arg]
            for x, y, v in zip(self._xs, self._ys, values)
        ]

    def _node_commands(self, frame: SampleFrame) -> list[DrawCommand]:
        c = float(frame.cell_size)
        mapping = self.mapping
        out: list[DrawCommand] = []
        for row in range(frame.rows):
            for col in range(frame.cols):
                out.append(
                    mapping.command(  # type: ignore[call-arg]
                        float(col) * c,
                        float(row) * c,
                        frame.direction(row, col),
                    )
                )
        return out

    def render_frame(self, grid: GradientGrid, timestamp_ms: float) -> None:
        """描画面をクリアし、時刻 `timestamp_ms` のフレームを描く。"""

        surface = self._surface
        width, height = self.surface_size
        surface.clear(0, 0, width, height)

        commands = self.commands(grid, timestamp_ms)
        last_style: str | None = None
        for cmd in commands:
            if cmd.fill_style != last_style:
                surface.set_fill_style(cmd.fill_style)
                last_style = cmd.fill_style
            cmd.issue(surface)
        self.last_draw_count = len(commands)


__all__ = ["FrameEvaluator"]
