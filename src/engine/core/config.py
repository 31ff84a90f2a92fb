"""
どこで: `engine.core.config`。
何を: ウィンドウ寸法・光源/遮蔽円の半径と初期位置・初速・配色を保持する不変設定 `SceneConfig`。
なぜ: 寸法や半径をモジュール定数に埋め込まず、既定値以外でも Scene/Renderer を構築・検証できるようにするため。
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

from util.color import RGBA8, opaque

WHITE: RGBA8 = (255, 255, 255, 255)
BLACK: RGBA8 = (0, 0, 0, 255)
YELLOW: RGBA8 = (255, 255, 0, 255)

_COLOR_FIELDS = ("light_color", "occluder_color", "shadow_color", "background_color")
_PAIR_FIELDS = ("light_start",)


@dataclass(frozen=True)
class SceneConfig:
    """シーンの不変設定。

    Parameters
    ----------
    width, height : int
        フレームバッファの画素数。
    light_start : tuple[float, float]
        光源中心の初期位置（左上原点）。
    light_radius : float
        光源円の半径。この距離以内（境界含む）の押下でドラッグ開始。
    occluder_x : float
        遮蔽円の中心 x（固定）。
    occluder_start_y : float
        遮蔽円の中心 y の初期値。
    occluder_radius : float
        遮蔽円の半径。
    occluder_velocity_y : float
        遮蔽円の初期縦速度（画素/tick）。
    light_color, occluder_color, shadow_color, background_color : RGBA8
        各分類の出力色。Hex/0–1/0–255 を受理し、アルファは常に 255 に固定。
    """

    width: int = 1280
    height: int = 720
    light_start: tuple[float, float] = (200.0, 360.0)
    light_radius: float = 25.0
    occluder_x: float = 850.0
    occluder_start_y: float = 360.0
    occluder_radius: float = 150.0
    occluder_velocity_y: float = 0.2
    light_color: RGBA8 = WHITE
    occluder_color: RGBA8 = WHITE
    shadow_color: RGBA8 = BLACK
    background_color: RGBA8 = YELLOW

    def __post_init__(self) -> None:
        width, height = int(self.width), int(self.height)
        if width <= 0 or height <= 0:
            raise ValueError(f"frame size must be positive, got {self.width}x{self.height}")
        if float(self.light_radius) < 0.0:
            raise ValueError(f"light_radius must be >= 0, got {self.light_radius}")
        if float(self.occluder_radius) < 0.0:
            raise ValueError(f"occluder_radius must be >= 0, got {self.occluder_radius}")
        if height < 2.0 * float(self.occluder_radius):
            raise ValueError(
                f"height {height} cannot contain an occluder of radius {self.occluder_radius}"
            )
        try:
            lx, ly = self.light_start
        except (TypeError, ValueError) as e:
            raise ValueError(f"light_start must be an (x, y) pair, got {self.light_start!r}") from e

        # frozen のため正規化値は object.__setattr__ で格納する
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)
        object.__setattr__(self, "light_start", (float(lx), float(ly)))
        for name in ("light_radius", "occluder_x", "occluder_start_y", "occluder_radius"):
            object.__setattr__(self, name, float(getattr(self, name)))
        object.__setattr__(self, "occluder_velocity_y", float(self.occluder_velocity_y))
        for name in _COLOR_FIELDS:
            object.__setattr__(self, name, opaque(getattr(self, name)))

    @property
    def buffer_size(self) -> int:
        """RGBA8 フレームバッファのバイト数。"""
        return self.width * self.height * 4

    @property
    def occluder_y_bounds(self) -> tuple[float, float]:
        """遮蔽円中心 y の公称範囲 `[r, height - r]`。"""
        return self.occluder_radius, self.height - self.occluder_radius

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "SceneConfig":
        """YAML の `scene:` セクション等から構築する（未知のキーは無視）。"""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                continue
            if key in _PAIR_FIELDS and isinstance(value, list):
                value = tuple(value)
            kwargs[key] = value
        return cls(**kwargs)


__all__ = ["SceneConfig", "WHITE", "BLACK", "YELLOW"]
