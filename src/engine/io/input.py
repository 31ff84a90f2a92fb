"""
どこで: `engine.io.input`。
何を: pyglet のマウス/キー/リサイズイベントを受け、1 tick ぶんの `InputEvent` 列へ変換する `InputCollector`。
なぜ: Scene を pyglet から独立させ、「押下中は毎 tick Held を配送する」入力契約をここで満たすため。

座標変換:
    pyglet は左下原点・y 上向き。フレームバッファは左上原点・y 下向き。
    ウィンドウ寸法とフレーム寸法が異なる場合（拡縮表示）は比率で写像する。
        x_fb = x * (frame_w / window_w)
        y_fb = (window_h - 1 - y) * (frame_h / window_h)
"""

from __future__ import annotations

import logging

from engine.core.events import (
    InputEvent,
    KeyPressed,
    PointerHeld,
    PointerPressed,
    PointerReleased,
    Resized,
)

logger = logging.getLogger(__name__)


class InputCollector:
    """ウィンドウイベントを溜め、`drain()` で tick 単位に払い出す。"""

    def __init__(self, frame_width: int, frame_height: int):
        self.frame_width = int(frame_width)
        self.frame_height = int(frame_height)
        self.window_width = int(frame_width)
        self.window_height = int(frame_height)
        self._queue: list[InputEvent] = []
        self._held: set[int] = set()
        self._cursor: tuple[float, float] | None = None

    def attach(self, window) -> None:
        """`window.push_handlers(self)` で pyglet のイベントスタックへ登録する。"""
        self.window_width, self.window_height = int(window.width), int(window.height)
        window.push_handlers(self)

    def to_frame_coords(self, x: float, y: float) -> tuple[float, float]:
        sx = self.frame_width / max(1, self.window_width)
        sy = self.frame_height / max(1, self.window_height)
        return float(x) * sx, (self.window_height - 1 - float(y)) * sy

    @property
    def held_buttons(self) -> frozenset[int]:
        return frozenset(self._held)

    # ---- pyglet handlers ----
    def on_mouse_press(self, x, y, button, modifiers):
        fx, fy = self.to_frame_coords(x, y)
        self._cursor = (fx, fy)
        self._held.add(int(button))
        self._queue.append(PointerPressed(int(button), fx, fy))

    def on_mouse_release(self, x, y, button, modifiers):
        self._cursor = self.to_frame_coords(x, y)
        self._held.discard(int(button))
        self._queue.append(PointerReleased(int(button)))

    def on_mouse_drag(self, x, y, dx, dy, buttons, modifiers):
        self._cursor = self.to_frame_coords(x, y)

    def on_mouse_motion(self, x, y, dx, dy):
        self._cursor = self.to_frame_coords(x, y)

    def on_key_press(self, symbol, modifiers):
        self._queue.append(KeyPressed(int(symbol)))

    def on_resize(self, width, height):
        self.window_width, self.window_height = int(width), int(height)
        self._queue.append(Resized(int(width), int(height)))
        logger.debug("window resized to %dx%d", width, height)

    # ---- tick ----
    def drain(self) -> list[InputEvent]:
        """溜まったイベントを到着順で返し、押下中のボタンごとに `PointerHeld` を末尾へ加える。"""
        events = self._queue
        self._queue = []
        if self._cursor is not None:
            cx, cy = self._cursor
            for button in sorted(self._held):
                events.append(PointerHeld(button, cx, cy))
        return events


__all__ = ["InputCollector"]
