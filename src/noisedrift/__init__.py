# どこで: `src/noisedrift/__init__.py`。
# 何を: ルート `noisedrift` パッケージを定義する。
# なぜ: import 起点を `noisedrift` に統一するため。

from __future__ import annotations

from noisedrift.api import run
from noisedrift.core.variants import VARIANTS, Variant, get_variant

__all__ = ["VARIANTS", "Variant", "get_variant", "run"]
