# どこで: `src/noisedrift/core/__init__.py`。
# 何を: ヘッドレスなノイズ場の計算（勾配グリッド/サンプリング/フレーム評価）をまとめるパッケージ定義。
# なぜ: ウィンドウや pyglet に依存せずにテストできる層を分離するため。

from __future__ import annotations

__all__ = []
