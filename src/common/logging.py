"""
プロジェクト向けの軽量ロギングユーティリティ。

要点:
- 各モジュールは `logging.getLogger(__name__)` でロガーを取得する。
- ランナー/CLI からのみ `setup_default_logging()` を呼び、最小構成を 1 度だけ適用する。
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_level(level: int | str) -> int:
    """レベル名/数値を `logging` の数値レベルへ変換する（不明な名前は INFO）。"""
    if isinstance(level, str):
        lvl = getattr(logging, level.strip().upper(), logging.INFO)
        return lvl if isinstance(lvl, int) else logging.INFO
    return int(level)


def setup_default_logging(level: int | str = "INFO") -> None:
    """最小限のロギング設定を 1 度だけ適用する。

    - ルートロガーにハンドラが既にあればレベルのみ更新する
    - 上位のランナー/CLI から呼び出す想定
    """
    lvl = resolve_level(level)
    root = logging.getLogger()
    if root.handlers:
        # アプリ側で設定済み
        root.setLevel(lvl)
        return
    logging.basicConfig(level=lvl, format=LOG_FORMAT)


__all__ = ["LOG_FORMAT", "resolve_level", "setup_default_logging"]
