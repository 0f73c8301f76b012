"""
どこで: `src/noisedrift/core/noise.py`。
何を: SampleFrame と問い合わせ点から、単一オクターブの勾配ノイズ値を計算する。
なぜ: セル境界で 1 階微分が 0 になる smoothstep 補間を、スカラー版と一括版で同一に保つため。

アルゴリズム
------------
1. 問い合わせ点 `(x, y)` をセル `(row, col)` とセル内オフセット `(fx, fy)` に分解する。
2. 4 隅それぞれについて、隅から点へのオフセットベクトルと勾配方向の内積を取る。
   - 左上 `(fx, fy)` / 右上 `(C-fx, fy)` / 左下 `(fx, C-fy)` / 右下 `(C-fx, C-fy)`
3. 上辺/下辺をそれぞれ重み `fx/C` で補間し、その結果を重み `fy/C` で補間する。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np
from numba import njit  # type: ignore[import-untyped]

from noisedrift.core.grid import SampleFrame


class OffsetPolicy(Enum):
    """隅→問い合わせ点オフセットベクトルの扱い。

    - RAW: 長さを保ったまま内積を取る。値は距離に比例して [-1, 1] を超えうる。
    - NORMALIZED: 単位ベクトルに正規化してから内積を取る。値は [-1, 1] に収まる。
    """

    RAW = "raw"
    NORMALIZED = "normalized"

    @classmethod
    def parse(cls, value: OffsetPolicy | str) -> OffsetPolicy:
        if isinstance(value, OffsetPolicy):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            choices = ", ".join(p.value for p in cls)
            raise ValueError(f"未知の offset policy: {value!r}（{choices} のいずれか）") from exc


@dataclass(frozen=True, slots=True)
class CellLocation:
    """問い合わせ点が属するセルと、セル内オフセット [px]。"""

    row: int
    col: int
    frac_x: float
    frac_y: float


def smoothstep(weight: float) -> float:
    """`[0, 1]` にクランプした smoothstep `w^2 (3 - 2w)` を返す。"""

    w = float(weight)
    if w <= 0.0:
        return 0.0
    if w >= 1.0:
        return 1.0
    return w * w * (3.0 - 2.0 * w)


def interpolate(a: float, b: float, weight: float) -> float:
    """`a` と `b` を smoothstep で補間する。

    Notes
    -----
    `weight <= 0` なら `a`、`weight >= 1` なら `b` をそのまま返す（外挿しない）。
    """

    w = float(weight)
    if w <= 0.0:
        return a
    if w >= 1.0:
        return b
    s = smoothstep(w)
    return a * (1.0 - s) + b * s


def locate(x: float, y: float, cell_size: float) -> CellLocation:
    """点 `(x, y)` をセル番号とセル内オフセットへ分解する。"""

    c = float(cell_size)
    col = int(math.floor(float(x) / c))
    row = int(math.floor(float(y) / c))
    return CellLocation(
        row=row,
        col=col,
        frac_x=float(x) - float(col) * c,
        frac_y=float(y) - float(row) * c,
    )


def _offset(ox: float, oy: float, normalize: bool) -> tuple[float, float]:
    if not normalize:
        return ox, oy
    length = math.hypot(ox, oy)
    if length == 0.0:
        return 0.0, 0.0
    return ox / length, oy / length


def sample(
    frame: SampleFrame,
    x: float,
    y: float,
    *,
    offset_policy: OffsetPolicy = OffsetPolicy.RAW,
) -> float:
    """SampleFrame 上の点 `(x, y)` におけるノイズ値を返す。

    Parameters
    ----------
    frame : SampleFrame
        同一時刻で凍結した勾配方向の表。
    x, y : float
        問い合わせ点 [px]。`0 <= x < (cols-1)*cell_size` の範囲にあること（呼び出し側の責務）。
    offset_policy : OffsetPolicy
        オフセットベクトルを正規化するかどうか。

    Returns
    -------
    float
        NORMALIZED では [-1, 1]。RAW では距離に比例して範囲を超えうる。
    """

    c = float(frame.cell_size)
    loc = locate(x, y, c)
    fx, fy = loc.frac_x, loc.frac_y
    normalize = offset_policy is OffsetPolicy.NORMALIZED

    tl = frame.direction(loc.row, loc.col)
    tr = frame.direction(loc.row, loc.col + 1)
    bl = frame.direction(loc.row + 1, loc.col)
    br = frame.direction(loc.row + 1, loc.col + 1)

    o_tl = _offset(fx, fy, normalize)
    o_tr = _offset(c - fx, fy, normalize)
    o_bl = _offset(fx, c - fy, normalize)
    o_br = _offset(c - fx, c - fy, normalize)

    d_tl = tl[0] * o_tl[0] + tl[1] * o_tl[1]
    d_tr = tr[0] * o_tr[0] + tr[1] * o_tr[1]
    d_bl = bl[0] * o_bl[0] + bl[1] * o_bl[1]
    d_br = br[0] * o_br[0] + br[1] * o_br[1]

    wx = fx / c
    top = interpolate(d_tl, d_tr, wx)
    bottom = interpolate(d_bl, d_br, wx)
    return float(interpolate(top, bottom, fy / c))


def sample_points(
    frame: SampleFrame,
    xs: np.ndarray,
    ys: np.ndarray,
    *,
    offset_policy: OffsetPolicy = OffsetPolicy.RAW,
) -> np.ndarray:
    """複数点のノイズ値をまとめて計算する。

    Notes
    -----
    計算内容は `sample()` と同一で、要素ごとに一致する。
    """

    _xs = np.ascontiguousarray(xs, dtype=np.float64).reshape(-1)
    _ys = np.ascontiguousarray(ys, dtype=np.float64).reshape(-1)
    if _xs.shape != _ys.shape:
        raise ValueError(f"xs と ys の長さが一致しない: xs={_xs.shape}, ys={_ys.shape}")
    if _xs.size == 0:
        return np.zeros((0,), dtype=np.float64)
    return _sample_points_njit(
        np.ascontiguousarray(frame.directions),
        float(frame.cell_size),
        _xs,
        _ys,
        offset_policy is OffsetPolicy.NORMALIZED,
    )


@njit(cache=True)
def _smoothstep_njit(w):
    """`smoothstep()` の Numba 版（`0 < w < 1` で呼ぶ）。"""
    return w * w * (3.0 - 2.0 * w)


@njit(cache=True)
def _interpolate_njit(a, b, weight):
    """`interpolate()` の Numba 版。"""
    if weight <= 0.0:
        return a
    if weight >= 1.0:
        return b
    s = _smoothstep_njit(weight)
    return a * (1.0 - s) + b * s


@njit(cache=True)
def _dot_offset_njit(gx, gy, ox, oy, normalize):
    if normalize:
        length = math.sqrt(ox * ox + oy * oy)
        if length == 0.0:
            return 0.0
        ox = ox / length
        oy = oy / length
    return gx * ox + gy * oy


@njit(cache=True)
def _sample_points_njit(directions, cell_size, xs, ys, normalize):
    """点列のノイズ値を計算する（Numba 版）。"""
    n = xs.shape[0]
    out = np.empty((n,), dtype=np.float64)
    c = cell_size
    for i in range(n):
        x = xs[i]
        y = ys[i]
        col = int(math.floor(x / c))
        row = int(math.floor(y / c))
        fx = x - col * c
        fy = y - row * c

        d_tl = _dot_offset_njit(
            directions[row, col, 0], directions[row, col, 1], fx, fy, normalize
        )
        d_tr = _dot_offset_njit(
            directions[row, col + 1, 0], directions[row, col + 1, 1], c - fx, fy, normalize
        )
        d_bl = _dot_offset_njit(
            directions[row + 1, col, 0], directions[row + 1, col, 1], fx, c - fy, normalize
        )
        d_br = _dot_offset_njit(
            directions[row + 1, col + 1, 0],
            directions[row + 1, col + 1, 1],
            c - fx,
            c - fy,
            normalize,
        )

        wx = fx / c
        top = _interpolate_njit(d_tl, d_tr, wx)
        bottom = _interpolate_njit(d_bl, d_br, wx)
        out[i] = _interpolate_njit(top, bottom, fy / c)
    return out


__all__ = [
    "CellLocation",
    "OffsetPolicy",
    "interpolate",
    "locate",
    "sample",
    "sample_points",
    "smoothstep",
]
