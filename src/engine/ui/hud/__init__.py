"""
どこで: `engine.ui.hud` パッケージ。
何を: HUD 表示の設定と項目定義（フィールド名）を提供する。
"""

from __future__ import annotations

from .config import HUDConfig
from .fields import CPU, FPS, RAM

__all__ = [
    "HUDConfig",
    "FPS",
    "CPU",
    "RAM",
]
