# どこで: `src/noisedrift/interactive/__init__.py`。
# 何を: pyglet ウィンドウ・フレームスケジューラ等、ホスト依存の実装をまとめるパッケージ定義。
# なぜ: pyglet 依存をこの層に閉じ込め、core をヘッドレスに保つため。

from __future__ import annotations

__all__ = []
