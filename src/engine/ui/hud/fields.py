"""
どこで: `engine.ui.hud.fields`。
何を: HUD 表示に用いる標準フィールド名（ラベルキー）を定義する。
"""

from __future__ import annotations

# 表示キー（ラベルの左側に出るキー文字列）
FPS = "FPS"
CPU = "CPU"
RAM = "RAM"

__all__ = ["FPS", "CPU", "RAM"]
