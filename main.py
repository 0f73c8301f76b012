"""
どこで: リポジトリ直下 `main.py`。
何を: 選んだバリアントのノイズ場アニメーションを run でプレビュー表示する。
なぜ: 動作確認用の最小エントリポイントとして利用するため。
"""

import logging

from noisedrift import run

CANVAS_WIDTH = 1000
CANVAS_HEIGHT = 1000


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run(
        "alpha",
        canvas_size=(CANVAS_WIDTH, CANVAS_HEIGHT),
        render_scale=1.0,
        fps=60.0,
    )
