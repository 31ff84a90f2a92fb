"""
どこで: `engine.core.frame_clock`。
何を: 1 tick 更新口 `Tickable` と、それらを登録順に呼ぶ `FrameClock`。
なぜ: FrameDriver（入力→更新→描画）→ MetricSampler（計測）→ OverlayHUD の順序を
      ループ側（pyglet.clock）の都合で崩さないため。
"""

from __future__ import annotations

import time
from typing import Protocol, Sequence, runtime_checkable


@runtime_checkable
class Tickable(Protocol):
    def tick(self, dt: float) -> None:
        """1 フレーム（経過 `dt` 秒）ぶん状態を進める。"""


class FrameClock:
    """登録された Tickable を固定順序で 1 回ずつ呼ぶ。

    `frames` は完了した tick 数、`elapsed` は渡された dt の累計（秒）。
    途中の Tickable が例外を送出した場合、その tick は数えない。
    """

    def __init__(self, tickables: Sequence[Tickable]):
        self._tickables = tuple(tickables)
        self._last_time = time.perf_counter()
        self.frames = 0
        self.elapsed = 0.0

    @property
    def tickables(self) -> tuple[Tickable, ...]:
        return self._tickables

    def tick(self, dt: float | None = None) -> None:
        # pyglet.clock は dt を渡す。None のときは前回呼び出しからの実測値
        now = time.perf_counter()
        if dt is None:
            dt = now - self._last_time
        self._last_time = now
        for t in self._tickables:
            t.tick(dt)
        self.frames += 1
        self.elapsed += dt


__all__ = ["Tickable", "FrameClock"]
