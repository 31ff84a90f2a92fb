"""
どこで: `engine.ui.hud` の HUD 表示モジュール。
何を: MetricSampler のキー/値ペアを pyglet の Label（と横棒メータ）でフレームの上に重ねて描画する。
なぜ: 実行時メトリクスを描画ウィンドウ上で即座に確認するため。
"""

from __future__ import annotations

import pyglet
from pyglet.shapes import Rectangle

from ...core.frame_clock import Tickable
from .config import HUDConfig
from .fields import CPU, FPS, RAM
from .sampler import MetricSampler

_LINE_H = 18
_MARGIN = 10


class OverlayHUD(Tickable):
    """MetricSampler が溜めた文字列を pyglet Label で描画する。"""

    def __init__(self, sampler: MetricSampler, *, config: HUDConfig | None = None):
        self.sampler = sampler
        self._config = config or HUDConfig()
        self._labels: dict[str, pyglet.text.Label] = {}
        self._bars_bg: dict[str, Rectangle] = {}
        self._bars_fg: dict[str, Rectangle] = {}

    # -------- Tickable --------
    def tick(self, dt: float) -> None:
        # 順序は HUDConfig に従う。未知キーは末尾に追加
        desired = list(self._config.resolved_order())
        for k in self.sampler.data.keys():
            if k not in desired:
                desired.append(k)

        new_labels: dict[str, pyglet.text.Label] = {}
        row = 0
        for key in desired:
            if key not in self.sampler.data:
                continue
            y = _MARGIN + row * _LINE_H
            row += 1
            lab = self._labels.get(key)
            if lab is None:
                lab = pyglet.text.Label(
                    text="",
                    x=_MARGIN,
                    y=y,
                    anchor_x="left",
                    anchor_y="bottom",
                    font_name=self._config.font_name,
                    font_size=self._config.font_size,
                    color=tuple(self._config.text_color),
                )
            else:
                lab.y = y
            lab.text = f"{key} : {self.sampler.data[key]}"
            new_labels[key] = lab
            if self._config.show_meters:
                self._update_meter(key, y)
        # 不要になったラベルは破棄（pyglet 側のリソース管理は任せる）
        self._labels = new_labels

    def _update_meter(self, key: str, y: int) -> None:
        bar_w = int(self._config.meter_width_px)
        bar_h = int(self._config.meter_height_px)
        bar_x = _MARGIN + 200
        bar_y = int(y + (_LINE_H - bar_h) // 2)
        bg = self._bars_bg.get(key)
        fg = self._bars_fg.get(key)
        if bg is None:
            bg = Rectangle(bar_x, bar_y, bar_w, bar_h, color=(50, 50, 50, 120))
            self._bars_bg[key] = bg
        else:
            bg.y = bar_y
        if fg is None:
            fg = Rectangle(bar_x, bar_y, 0, bar_h, color=(0, 120, 220, 220))
            self._bars_fg[key] = fg
        else:
            fg.y = bar_y
        ratio = self.normalized_ratio(key)
        fg.width = 0 if ratio is None else int(round(bar_w * ratio))

    def normalized_ratio(self, key: str) -> float | None:
        """メータ用に 0..1 へ正規化した値（未知キー/未計測は None）。"""
        v = self.sampler.values.get(key)
        if v is None:
            return None
        if key in (CPU, RAM):
            return max(0.0, min(1.0, float(v) / 100.0))
        if key == FPS:
            denom = max(1e-6, self.sampler.target_fps())
            return max(0.0, min(1.0, float(v) / denom))
        return None

    # -------- draw --------
    def draw(self) -> None:
        if not self._config.enabled:
            return
        # メータ（バー）を先に描画して、その上にテキストを重ねる
        if self._config.show_meters:
            for key in self._labels:
                bg = self._bars_bg.get(key)
                fg = self._bars_fg.get(key)
                if bg is not None:
                    bg.draw()
                if fg is not None:
                    fg.draw()
        for lab in self._labels.values():
            lab.draw()


__all__ = ["OverlayHUD"]
