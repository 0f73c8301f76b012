# どこで: `src/noisedrift/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・検証・キャッシュ）を提供する。
# なぜ: キャンバス寸法やバリアントを、コードを書き換えずにユーザーが指定できるようにするため。

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

_SUPPORTED_VERSION = 1
_PACKAGED_SOURCE = "noisedrift/resource/default_config.yaml"


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """noisedrift の実行時設定。

    `background_color` が None のときはバリアント既定の背景色を使う。
    `seed` が None のときは起動ごとに異なるグリッドになる。
    """

    config_path: Path | None
    canvas_size: tuple[int, int]
    background_color: tuple[float, float, float] | None
    window_pos: tuple[int, int]
    window_caption: str
    variant: str
    fps: float
    seed: int | None


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する（None で解除）。"""

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    _EXPLICIT_CONFIG_PATH = None if path is None else Path(str(path)).expanduser()
    _CONFIG_CACHE = None


def _discover_config_path() -> Path | None:
    """カレント直下 → ユーザー設定ディレクトリの順に config.yaml を探す。"""

    for candidate in (
        Path.cwd() / ".noisedrift" / "config.yaml",
        Path.home() / ".config" / "noisedrift" / "config.yaml",
    ):
        if candidate.is_file():
            return candidate
    return None


def _parse_yaml(text: str, *, source: str) -> dict[str, Any]:
    import yaml  # type: ignore[import-untyped]

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"config.yaml を YAML として読めません: source={source}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml のトップレベルは mapping である必要があります: source={source}")
    return data


def _packaged_defaults() -> dict[str, Any]:
    blob = resources.files("noisedrift").joinpath("resource", "default_config.yaml")
    return _parse_yaml(blob.read_text(encoding="utf-8"), source=_PACKAGED_SOURCE)


def _overlay(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """section（dict 値）同士は key 単位で上書きし、それ以外は丸ごと置き換える。"""

    out = dict(base)
    for key, value in override.items():
        prev = out.get(key)
        out[key] = {**prev, **value} if isinstance(prev, dict) and isinstance(value, dict) else value
    return out


class _Section:
    """config の 1 section を型付きで取り出す読み取り器。"""

    def __init__(self, payload: dict[str, Any], name: str) -> None:
        value = payload.get(name)
        if value is None:
            value = {}
        if not isinstance(value, dict):
            raise RuntimeError(f"{name} は mapping である必要があります: got={value!r}")
        self._name = name
        self._values = value

    def _key(self, key: str) -> str:
        return f"{self._name}.{key}"

    def required(self, key: str) -> Any:
        value = self._values.get(key)
        if value is None:
            raise RuntimeError(f"{self._key(key)} が未設定です（同梱 default_config.yaml を確認してください）")
        return value

    def int_pair(self, key: str) -> tuple[int, int]:
        value = self.required(key)
        if isinstance(value, (str, bytes)) or not hasattr(value, "__len__") or len(value) != 2:
            raise RuntimeError(f"{self._key(key)} は [a, b] の整数配列である必要があります: got={value!r}")
        try:
            return int(value[0]), int(value[1])
        except (TypeError, ValueError) as exc:
            raise RuntimeError(f"{self._key(key)} は [a, b] の整数配列である必要があります: got={value!r}") from exc

    def optional_rgb01(self, key: str) -> tuple[float, float, float] | None:
        value = self._values.get(key)
        if value is None:
            return None
        try:
            r, g, b = (float(v) for v in value)
        except (TypeError, ValueError) as exc:
            raise RuntimeError(f"{self._key(key)} は [r, g, b] の数値配列である必要があります: got={value!r}") from exc
        return r, g, b

    def number(self, key: str) -> float:
        value = self.required(key)
        if isinstance(value, bool):
            raise RuntimeError(f"{self._key(key)} は数値である必要があります: got={value!r}")
        try:
            return float(value)
        except (TypeError, ValueError) as exc:
            raise RuntimeError(f"{self._key(key)} は数値である必要があります: got={value!r}") from exc

    def optional_int(self, key: str) -> int | None:
        value = self._values.get(key)
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise RuntimeError(f"{self._key(key)} は整数である必要があります: got={value!r}")
        try:
            return int(value)
        except ValueError as exc:
            raise RuntimeError(f"{self._key(key)} は整数である必要があります: got={value!r}") from exc

    def text(self, key: str, default: str) -> str:
        value = self._values.get(key)
        return default if value is None or not str(value).strip() else str(value).strip()


def _build(payload: dict[str, Any], *, config_path: Path | None) -> RuntimeConfig:
    version = payload.get("version")
    if version != _SUPPORTED_VERSION:
        raise RuntimeError(f"未対応の config.yaml version です: got={version!r}, supported={_SUPPORTED_VERSION}")

    canvas = _Section(payload, "canvas")
    canvas_size = canvas.int_pair("size")
    if canvas_size[0] <= 0 or canvas_size[1] <= 0:
        raise ValueError(f"canvas.size は正の値である必要があります: got={canvas_size}")

    window = _Section(payload, "window")
    animation = _Section(payload, "animation")
    variant = str(animation.required("variant")).strip()
    if not variant:
        raise RuntimeError("animation.variant が空です")

    return RuntimeConfig(
        config_path=config_path,
        canvas_size=canvas_size,
        background_color=canvas.optional_rgb01("background_color"),
        window_pos=window.int_pair("position"),
        window_caption=window.text("caption", "noisedrift"),
        variant=variant,
        fps=animation.number("fps"),
        seed=animation.optional_int("seed"),
    )


def runtime_config() -> RuntimeConfig:
    """同梱デフォルト → 探索した config → 明示 config の順に重ねた設定を返す（キャッシュ）。"""

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit = _EXPLICIT_CONFIG_PATH
    if explicit is not None and not explicit.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit}")
    discovered = _discover_config_path()

    payload = _packaged_defaults()
    for path in (discovered, explicit):
        if path is not None:
            payload = _overlay(payload, _parse_yaml(path.read_text(encoding="utf-8"), source=str(path)))

    _CONFIG_CACHE = _build(payload, config_path=explicit or discovered)
    return _CONFIG_CACHE


__all__ = ["RuntimeConfig", "runtime_config", "set_config_path"]
