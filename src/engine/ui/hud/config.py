"""
どこで: `engine.ui.hud.config`。
何を: HUD 表示の設定（有効/無効や表示項目、順序、サンプリング周期、文字/メータの体裁）を定義する。
なぜ: HUD の表示を宣言的に制御し、不要な psutil 呼び出しを抑止できるようにするため。
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Sequence

from .fields import CPU, FPS, RAM


@dataclass(frozen=True)
class HUDConfig:
    """HUD の表示設定。

    Parameters
    ----------
    enabled : bool
        HUD 全体の有効/無効。
    show_fps : bool
        FPS 表示の有無。
    show_cpu_mem : bool
        CPU/RAM 表示の有無（未使用時は psutil 呼び出しを抑止）。
    order : list[str] | None
        表示順（None なら既定順）。
    sample_interval : float
        MetricSampler のサンプリング周期（秒）。
    font_name : str | None
        ラベルのフォント名（None で pyglet 既定）。
    font_size : int
        ラベルのフォントサイズ。
    text_color : tuple[int, int, int, int]
        ラベル色 RGBA(0–255)。
    show_meters : bool
        横棒メータの表示有無（テキストの右側に表示）。
    meter_width_px, meter_height_px : int
        メータの横幅/高さ（px）。
    target_fps : float
        FPS メータ正規化の基準値。
    """

    enabled: bool = True
    show_fps: bool = True
    show_cpu_mem: bool = True
    order: Sequence[str] | None = None
    sample_interval: float = 0.1
    font_name: str | None = None
    font_size: int = 10
    text_color: tuple[int, int, int, int] = (0, 0, 0, 200)
    show_meters: bool = True
    meter_width_px: int = 120
    meter_height_px: int = 6
    target_fps: float = 60.0

    def resolved_order(self) -> list[str]:
        """有効フラグに基づく既定順を返す（`order` 指定時はそれを優先）。"""
        if self.order is not None:
            return list(self.order)
        keys: list[str] = []
        if self.show_fps:
            keys.append(FPS)
        if self.show_cpu_mem:
            keys.extend([CPU, RAM])
        return keys

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "HUDConfig":
        """YAML の `hud:` セクションから構築する（未知のキーは無視）。"""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}
        if isinstance(kwargs.get("text_color"), list):
            kwargs["text_color"] = tuple(kwargs["text_color"])
        return cls(**kwargs)


__all__ = ["HUDConfig"]
