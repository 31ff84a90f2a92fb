"""
どこで: `engine.core.events`。
何を: Scene が 1 tick ごとに受け取る入力イベントの値型を定義する。
なぜ: ウィンドウ層（pyglet）に依存せずに Scene の遷移規則を記述/テストするため。

座標はすべてフレームバッファ座標（左上原点、y は下向き）。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

# 主ボタン（pyglet.window.mouse.LEFT と同値）
PRIMARY_BUTTON = 1


@dataclass(frozen=True)
class PointerPressed:
    button: int
    x: float
    y: float


@dataclass(frozen=True)
class PointerHeld:
    """ボタンが押下されている間、毎 tick 配送される。"""

    button: int
    x: float
    y: float


@dataclass(frozen=True)
class PointerReleased:
    button: int


@dataclass(frozen=True)
class Resized:
    width: int
    height: int


@dataclass(frozen=True)
class KeyPressed:
    key: int


InputEvent = Union[PointerPressed, PointerHeld, PointerReleased, Resized, KeyPressed]


__all__ = [
    "PRIMARY_BUTTON",
    "PointerPressed",
    "PointerHeld",
    "PointerReleased",
    "Resized",
    "KeyPressed",
    "InputEvent",
]
