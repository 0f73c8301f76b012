"""
どこで: `src/noisedrift/api/runner.py`。公開 API のランナー実装。
何を: pyglet ウィンドウを開き、選んだバリアントのノイズ場をフレームごとに描き直し続ける。
なぜ: `main.py` を実行して実際にアニメーションをプレビューできる経路を用意するため。
"""

from __future__ import annotations

import logging
from pathlib import Path

import pyglet

from noisedrift.api.options import resolve_run_options
from noisedrift.core.random_source import RandomSource, default_random_source
from noisedrift.core.variants import Variant
from noisedrift.interactive.draw_window import SurfaceInitError
from noisedrift.interactive.render_settings import RenderSettings
from noisedrift.interactive.runtime.draw_window_system import DrawWindowSystem

_logger = logging.getLogger(__name__)


def run(
    variant: str | Variant | None = None,
    *,
    canvas_size: tuple[int, int] | None = None,
    background_color: tuple[float, float, float] | None = None,
    render_scale: float = 1.0,
    fps: float | None = None,
    seed: int | None = None,
    random_source: RandomSource | None = None,
    config_path: str | Path | None = None,
) -> None:
    """pyglet ウィンドウを生成し、ノイズ場をリアルタイム描画する。

    Parameters
    ----------
    variant : str | Variant | None
        `"alpha"` / `"hue"` / `"radius"` または Variant。None の場合は config の値。
    canvas_size : tuple[int, int] | None
        描画面の (width, height) [px]。None の場合は config の値。
    background_color : tuple[float, float, float] | None
        背景色 RGB（0..1）。None の場合は config、それも null ならバリアント既定。
    render_scale : float
        キャンバス寸法に掛けるピクセル倍率。
    fps : float | None
        目標フレームレート。`<=0` でスロットリング無し。None の場合は config の値。
    seed : int | None
        勾配グリッド生成用の seed。None の場合は config の値（null なら実行ごとに異なる）。
    random_source : RandomSource | None
        明示的な乱数源。指定時は `seed` より優先する。
    config_path : str | Path | None
        明示 config.yaml のパス。

    Returns
    -------
    None
        ウィンドウを閉じると制御を返す。

    Raises
    ------
    SurfaceInitError
        描画ウィンドウ/描画コンテキストを用意できない場合（起動を中止する）。
    """

    options = resolve_run_options(
        variant,
        canvas_size=canvas_size,
        background_color=background_color,
        fps=fps,
        seed=seed,
        config_path=config_path,
    )

    # pyglet の Window 作成前にオプションを設定する。
    # （vsync はウィンドウ作成時に参照される想定のため、ここで固定しておく）
    pyglet.options["vsync"] = True

    settings = RenderSettings(
        canvas_size=options.canvas_size,
        background_color=options.background_color,
        render_scale=render_scale,
        caption=options.caption,
    )
    source = random_source if random_source is not None else default_random_source(options.seed)

    try:
        draw_window = DrawWindowSystem(
            options.variant,
            settings=settings,
            source=source,
            fps=options.fps,
        )
    except SurfaceInitError as exc:
        _logger.error("起動を中止します（precondition=%s）: %s", exc.precondition, exc)
        raise
    draw_window.window.set_location(*options.window_pos)

    def request_exit(*_: object) -> None:
        # pyglet の on_close から呼ばれるコールバックは引数が来る場合があるため *args を受ける。
        draw_window.stop()
        pyglet.app.exit()

    draw_window.window.push_handlers(on_close=request_exit)

    draw_window.start()
    try:
        pyglet.app.run(interval=None)
    finally:
        # 例外でも確実に後始末する。
        draw_window.close()


__all__ = ["run"]
