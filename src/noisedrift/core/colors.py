"""
どこで: `src/noisedrift/core/colors.py`。
何を: 塗りスタイル文字列（`rgb(... / P%)` / `hsl(Hdeg S% L%)` / 色名）の生成と解析を提供する。
なぜ: 値マッピングは文字列で色を表し、描画先（pyglet など）は RGBA を要求するため、その橋渡しを一箇所にまとめる。
"""

from __future__ import annotations

import colorsys
import re

RGBA255 = tuple[int, int, int, int]

NAMED_COLORS: dict[str, tuple[int, int, int]] = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "red": (255, 0, 0),
    "green": (0, 128, 0),
    "blue": (0, 0, 255),
    "yellow": (255, 255, 0),
    "cyan": (0, 255, 255),
    "magenta": (255, 0, 255),
    "orange": (255, 165, 0),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
}

_NUMBER = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
_ALPHA = rf"(?:\s*/\s*(?P<alpha>{_NUMBER})(?P<alpha_pct>%?))?"
_RGB_RE = re.compile(
    rf"^rgba?\(\s*(?P<r>{_NUMBER})[\s,]+(?P<g>{_NUMBER})[\s,]+(?P<b>{_NUMBER}){_ALPHA}\s*\)$"
)
_HSL_RE = re.compile(
    rf"^hsla?\(\s*(?P<h>{_NUMBER})(?:deg)?[\s,]+(?P<s>{_NUMBER})%[\s,]+(?P<l>{_NUMBER})%{_ALPHA}\s*\)$"
)
_HEX_RE = re.compile(r"^#(?P<hex>[0-9a-fA-F]{6})$")


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, float(value)))


def _format_number(value: float) -> str:
    return f"{float(value):.6g}"


def rgb_alpha_style(
    percent: float,
    rgb: tuple[int, int, int] = (255, 255, 255),
) -> str:
    """`rgb(R G B / P%)` 形式の塗りスタイルを返す。`percent` は [0, 100] にクランプする。"""

    r, g, b = rgb
    p = _clamp(percent, 0.0, 100.0)
    return f"rgb({int(r)} {int(g)} {int(b)} / {_format_number(p)}%)"


def hsl_style(hue_deg: float, saturation: float = 50.0, lightness: float = 50.0) -> str:
    """`hsl(Hdeg S% L%)` 形式の塗りスタイルを返す。`hue_deg` は [0, 100] にクランプする。"""

    h = _clamp(hue_deg, 0.0, 100.0)
    return f"hsl({_format_number(h)}deg {_format_number(saturation)}% {_format_number(lightness)}%)"


def _alpha255(match: re.Match[str]) -> int:
    raw = match.group("alpha")
    if raw is None:
        return 255
    a = float(raw)
    if match.group("alpha_pct"):
        a = a / 100.0
    return int(round(_clamp(a, 0.0, 1.0) * 255.0))


def parse_fill_style(style: str) -> RGBA255:
    """塗りスタイル文字列を `(r, g, b, a)`（各 0..255）へ変換する。

    Raises
    ------
    ValueError
        未対応の形式、または未知の色名の場合。
    """

    text = str(style).strip().lower()

    named = NAMED_COLORS.get(text)
    if named is not None:
        return (*named, 255)

    m = _HEX_RE.match(text)
    if m is not None:
        h = m.group("hex")
        return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16), 255

    m = _RGB_RE.match(text)
    if m is not None:
        r, g, b = (int(round(_clamp(float(m.group(k)), 0.0, 255.0))) for k in ("r", "g", "b"))
        return r, g, b, _alpha255(m)

    m = _HSL_RE.match(text)
    if m is not None:
        h = (float(m.group("h")) % 360.0) / 360.0
        s = _clamp(float(m.group("s")), 0.0, 100.0) / 100.0
        lum = _clamp(float(m.group("l")), 0.0, 100.0) / 100.0
        r01, g01, b01 = colorsys.hls_to_rgb(h, lum, s)
        return (
            int(round(r01 * 255.0)),
            int(round(g01 * 255.0)),
            int(round(b01 * 255.0)),
            _alpha255(m),
        )

    raise ValueError(f"未対応の塗りスタイル: {style!r}")


def rgb01_to_rgb255(rgb: tuple[float, float, float]) -> tuple[int, int, int]:
    """RGB（0..1）を RGB（0..255）へ変換する。"""

    r, g, b = (int(round(_clamp(c, 0.0, 1.0) * 255.0)) for c in rgb)
    return r, g, b


__all__ = [
    "NAMED_COLORS",
    "RGBA255",
    "hsl_style",
    "parse_fill_style",
    "rgb01_to_rgb255",
    "rgb_alpha_style",
]
