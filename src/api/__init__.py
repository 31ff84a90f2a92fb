"""
どこで: `api` 入口（高レベル公開 API）。
何を: 実行ランナー `run`、部品の組み立て `build_app`、主要な型（Scene/SceneConfig/ShadowRenderer）を再輸出。
なぜ: 利用者が単一名前空間から設定→実行まで完結できるようにするため。

Usage:
    from api import SceneConfig, run

    run(scene_config=SceneConfig(width=800, height=600, occluder_radius=100.0))
"""

from engine.core.config import SceneConfig
from engine.core.geometry import is_occluded
from engine.core.scene import Scene, SceneSnapshot
from engine.render.renderer import ShadowRenderer

from .sketch import ShadowApp, build_app, run

__all__ = [
    "run",
    "build_app",
    "ShadowApp",
    "Scene",
    "SceneSnapshot",
    "SceneConfig",
    "ShadowRenderer",
    "is_occluded",
]
