# どこで: `src/noisedrift/api/options.py`。
# 何を: `run()` の引数と config.yaml を突き合わせ、実行に使う値を確定する。
# なぜ: 「引数 > config > バリアント既定」の優先順位を pyglet 非依存の場所でテストできるようにするため。

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from noisedrift.core.runtime_config import runtime_config, set_config_path
from noisedrift.core.variants import Variant, get_variant


@dataclass(frozen=True, slots=True)
class RunOptions:
    """`run()` が使う確定済みの設定。"""

    variant: Variant
    canvas_size: tuple[int, int]
    background_color: tuple[float, float, float]
    window_pos: tuple[int, int]
    caption: str
    fps: float
    seed: int | None


def resolve_run_options(
    variant: str | Variant | None = None,
    *,
    canvas_size: tuple[int, int] | None = None,
    background_color: tuple[float, float, float] | None = None,
    fps: float | None = None,
    seed: int | None = None,
    config_path: str | Path | None = None,
) -> RunOptions:
    """引数（None でないもの）> config.yaml > バリアント既定 の順で設定を確定する。"""

    if config_path is not None:
        set_config_path(config_path)
    cfg = runtime_config()

    _variant = get_variant(variant if variant is not None else cfg.variant)
    _canvas_size = canvas_size if canvas_size is not None else cfg.canvas_size
    w, h = _canvas_size
    if int(w) <= 0 or int(h) <= 0:
        raise ValueError(f"canvas_size は正の (width, height) である必要がある: got={_canvas_size}")

    if background_color is not None:
        _background = background_color
    elif cfg.background_color is not None:
        _background = cfg.background_color
    else:
        _background = _variant.background_color

    return RunOptions(
        variant=_variant,
        canvas_size=(int(w), int(h)),
        background_color=(float(_background[0]), float(_background[1]), float(_background[2])),
        window_pos=cfg.window_pos,
        caption=f"{cfg.window_caption} - {_variant.name}",
        fps=float(fps) if fps is not None else float(cfg.fps),
        seed=seed if seed is not None else cfg.seed,
    )


__all__ = ["RunOptions", "resolve_run_options"]
