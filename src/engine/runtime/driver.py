"""
どこで: `engine.runtime.driver`。
何を: 1 tick で「入力の取り出し → Scene.update → スナップショット → render → 表示へ通知」を行う FrameDriver。
なぜ: Scene の書き換えと描画を交互に 1 回ずつに限定し、描画中に Scene が変わらないことを保証するため。
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Sequence

import numpy as np

from engine.core.events import InputEvent
from engine.core.scene import Scene, SceneSnapshot

from ..core.frame_clock import Tickable
from .worker import RenderTaskError

if TYPE_CHECKING:
    from engine.render.renderer import ShadowRenderer

logger = logging.getLogger(__name__)


class FrameDriver(Tickable):
    """Scene と Renderer を結線し、フレーム番号（version）を管理する。"""

    def __init__(
        self,
        scene: Scene,
        renderer: "ShadowRenderer",
        frame: np.ndarray,
        *,
        poll_events: Callable[[], Sequence[InputEvent]] | None = None,
        on_frame: Callable[[np.ndarray], None] | None = None,
    ):
        """
        scene: 唯一の可変状態。この Driver だけが update する
        renderer: スナップショットからフレームを塗る
        frame: 毎フレーム再利用する RGBA8 バッファ
        poll_events: その tick の入力イベント列を返す関数（省略時は入力なし）
        on_frame: 描画完了後にフレームを受け取る関数（ウィンドウへの転送など）
        """
        self.scene = scene
        self.renderer = renderer
        self.frame = frame
        self._poll_events = poll_events
        self._on_frame = on_frame
        self._version = 0
        self._last_snapshot: SceneSnapshot | None = None

    def version(self) -> int:
        """描画済みフレーム数（MetricSampler の実効 FPS 算出に使用）。"""
        return self._version

    @property
    def last_snapshot(self) -> SceneSnapshot | None:
        return self._last_snapshot

    # -------- Tickable --------
    def tick(self, dt: float) -> None:
        events = self._poll_events() if self._poll_events is not None else ()
        self.scene.update(events)
        snapshot = self.scene.snapshot()
        try:
            self.renderer.render(snapshot, self.frame)
        except RenderTaskError:
            raise
        except Exception as e:
            raise RenderTaskError(self._version, e) from e
        self._last_snapshot = snapshot
        self._version += 1
        if self._on_frame is not None:
            self._on_frame(self.frame)


__all__ = ["FrameDriver"]
