"""
どこで: `engine.core.scene`。
何を: 光源（ドラッグ可能）と遮蔽円（上下往復）の状態機械 `Scene` と、描画用の不変スナップショット。
なぜ: 入力→状態更新→描画の各段で、描画側が可変状態を直接読まない構成にするため。

遷移規則（1 tick ごとに固定順で評価）:
1) 主ボタン押下位置が光源から `light_radius` 以内（境界含む）なら `dragging = True`。
2) `dragging` かつ主ボタン保持中なら、光源中心を保持位置へそのまま移動。
3) 主ボタン解放で `dragging = False`（冪等）。
4) 無条件に `occluder_y += occluder_velocity_y`。範囲 `[r, height - r]` を外れたら速度の符号を反転する。
   位置はクランプしない（境界をまたいだ 1 ステップはそのまま確定する）。
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable

from .config import SceneConfig
from .events import PRIMARY_BUTTON, InputEvent, PointerHeld, PointerPressed, PointerReleased

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SceneSnapshot:
    """1 回の描画で参照する Scene の不変ビュー。"""

    light_x: float
    light_y: float
    occluder_y: float
    config: SceneConfig

    @property
    def light_position(self) -> tuple[float, float]:
        return self.light_x, self.light_y

    @property
    def occluder_position(self) -> tuple[float, float]:
        return self.config.occluder_x, self.occluder_y


class Scene:
    """光源と遮蔽円の状態を保持し、`update(events)` で 1 tick 進める。"""

    def __init__(self, config: SceneConfig | None = None):
        self.config = config or SceneConfig()
        self.light_position: tuple[float, float] = self.config.light_start
        self.dragging: bool = False
        self.occluder_y: float = self.config.occluder_start_y
        self.occluder_velocity_y: float = self.config.occluder_velocity_y

    # ---- queries ----
    @property
    def occluder_x(self) -> float:
        return self.config.occluder_x

    def hits_light(self, x: float, y: float) -> bool:
        """(x, y) が光源円の内側（境界含む）か。"""
        lx, ly = self.light_position
        return math.hypot(x - lx, y - ly) <= self.config.light_radius

    def snapshot(self) -> SceneSnapshot:
        lx, ly = self.light_position
        return SceneSnapshot(
            light_x=float(lx),
            light_y=float(ly),
            occluder_y=float(self.occluder_y),
            config=self.config,
        )

    # ---- transitions ----
    def update(self, events: Iterable[InputEvent] = ()) -> None:
        """入力イベント列を適用し、遮蔽円を 1 ステップ進める。

        主ボタン以外のポインタイベントとリサイズ/キーイベントは無視する。
        同一 tick に複数の押下/保持がある場合、押下は最初、保持は最後のものを用いる。
        """
        pressed: PointerPressed | None = None
        held: PointerHeld | None = None
        released = False
        for ev in events:
            if isinstance(ev, PointerPressed) and ev.button == PRIMARY_BUTTON:
                if pressed is None:
                    pressed = ev
            elif isinstance(ev, PointerHeld) and ev.button == PRIMARY_BUTTON:
                held = ev
            elif isinstance(ev, PointerReleased) and ev.button == PRIMARY_BUTTON:
                released = True

        # 1) 押下 → ドラッグ開始判定
        if pressed is not None and self.hits_light(pressed.x, pressed.y):
            if not self.dragging:
                logger.debug("drag start at (%.1f, %.1f)", pressed.x, pressed.y)
            self.dragging = True

        # 2) ドラッグ中は保持位置へ追従
        if self.dragging and held is not None:
            self.light_position = (float(held.x), float(held.y))

        # 3) 解放 → ドラッグ終了
        if released:
            if self.dragging:
                logger.debug("drag stop at (%.1f, %.1f)", *self.light_position)
            self.dragging = False

        # 4) 遮蔽円の往復
        self.step_occluder()

    def step_occluder(self) -> None:
        self.occluder_y += self.occluder_velocity_y
        lo, hi = self.config.occluder_y_bounds
        if self.occluder_y < lo or self.occluder_y > hi:
            self.occluder_velocity_y = -self.occluder_velocity_y
            logger.debug(
                "occluder bounce at y=%.2f, velocity now %.3f",
                self.occluder_y,
                self.occluder_velocity_y,
            )


__all__ = ["Scene", "SceneSnapshot"]
