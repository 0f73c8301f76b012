from pathlib import Path

import pytest

from noisedrift.core.runtime_config import runtime_config, set_config_path


@pytest.fixture(autouse=True)
def _reset_runtime_config() -> None:
    set_config_path(None)
    yield
    set_config_path(None)


def _isolate_config_discovery(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


def test_packaged_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    cfg = runtime_config()
    assert cfg.config_path is None
    assert cfg.canvas_size == (1000, 1000)
    assert cfg.background_color is None
    assert cfg.window_pos == (25, 25)
    assert cfg.window_caption == "noisedrift"
    assert cfg.variant == "alpha"
    assert cfg.fps == 60.0
    assert cfg.seed is None


def test_discovered_config_overrides_packaged_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    discovered = tmp_path / ".noisedrift" / "config.yaml"
    discovered.parent.mkdir(parents=True, exist_ok=True)
    discovered.write_text(
        "animation:\n  variant: hue\n  seed: 7\ncanvas:\n  background_color: [0.1, 0.2, 0.3]\n",
        encoding="utf-8",
    )

    cfg = runtime_config()
    assert cfg.config_path == discovered
    assert cfg.variant == "hue"
    assert cfg.seed == 7
    # section 内で指定しなかった key は同梱デフォルトのまま。
    assert cfg.fps == 60.0
    assert cfg.canvas_size == (1000, 1000)
    assert cfg.background_color == (0.1, 0.2, 0.3)


def test_explicit_config_overrides_discovered_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    discovered = tmp_path / ".noisedrift" / "config.yaml"
    discovered.parent.mkdir(parents=True, exist_ok=True)
    discovered.write_text("animation:\n  variant: hue\n", encoding="utf-8")

    explicit = tmp_path / "explicit.yaml"
    explicit.write_text(
        "animation:\n  variant: radius\n  fps: 0\ncanvas:\n  size: [640, 480]\n",
        encoding="utf-8",
    )
    set_config_path(explicit)

    cfg = runtime_config()
    assert cfg.config_path == explicit
    assert cfg.variant == "radius"
    assert cfg.fps == 0.0
    assert cfg.canvas_size == (640, 480)


def test_config_is_cached_until_path_changes(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    assert runtime_config() is runtime_config()

    explicit = tmp_path / "explicit.yaml"
    explicit.write_text("animation:\n  variant: hue\n", encoding="utf-8")
    set_config_path(explicit)
    assert runtime_config().variant == "hue"


def test_explicit_config_path_missing_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    set_config_path(tmp_path / "missing.yaml")
    with pytest.raises(FileNotFoundError):
        runtime_config()


@pytest.mark.parametrize(
    "text",
    [
        "version: 2\n",
        "canvas:\n  size: [100]\n",
        "canvas:\n  size: [0, 100]\n",
        "animation:\n  fps: fast\n",
        "animation:\n  seed: true\n",
        "window: 3\n",
        "- not\n- a mapping\n",
    ],
)
def test_invalid_config_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, text: str):
    _isolate_config_discovery(tmp_path, monkeypatch)

    explicit = tmp_path / "bad.yaml"
    explicit.write_text(text, encoding="utf-8")
    set_config_path(explicit)
    with pytest.raises((RuntimeError, ValueError)):
        runtime_config()
