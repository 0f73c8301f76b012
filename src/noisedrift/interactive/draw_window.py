# どこで: `src/noisedrift/interactive/draw_window.py`。
# 何を: ライブ描画用の pyglet ウィンドウ生成と、起動時の致命的な前提条件チェックを行う。
# なぜ: 描画面が得られない状態では続行できないため、どの前提が崩れたかを明示して起動を止める。

from __future__ import annotations

import pyglet
from pyglet.gl import Config
from pyglet.window import Window

from noisedrift.interactive.render_settings import RenderSettings


class SurfaceInitError(RuntimeError):
    """描画面の初期化に失敗したことを表す致命的エラー。

    Attributes
    ----------
    precondition : str
        失敗した前提条件。`"surface"`（ウィンドウを生成できない）または
        `"context"`（描画コンテキストを取得できない）。
    """

    def __init__(self, precondition: str, message: str) -> None:
        super().__init__(message)
        self.precondition = str(precondition)


def create_draw_window(settings: RenderSettings) -> Window:
    """設定に基づき描画ウィンドウを生成する。

    Raises
    ------
    SurfaceInitError
        ウィンドウ生成、または描画コンテキスト取得に失敗した場合。
    """

    config = Config(double_buffer=True)  # type: ignore[abstract]
    canvas_w, canvas_h = settings.canvas_size
    try:
        window = pyglet.window.Window(  # type: ignore[abstract]
            width=int(canvas_w * settings.render_scale),
            height=int(canvas_h * settings.render_scale),
            resizable=False,
            caption=str(settings.caption),
            config=config,
        )
    except Exception as exc:
        raise SurfaceInitError(
            "surface",
            f"描画ウィンドウを生成できません（ディスプレイ/OpenGL 設定を確認してください）: {exc}",
        ) from exc

    if getattr(window, "context", None) is None:
        window.close()
        raise SurfaceInitError("context", "描画ウィンドウの 2D 描画コンテキストを取得できません")
    return window
