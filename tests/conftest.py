"""共通フィクスチャ。

- 小さな SceneConfig（全画素テストを軽く保つ）
- 環境変数ベースの設定の退避/復元
"""

from __future__ import annotations

from typing import Iterator

import pytest

from common import settings
from engine.core.config import SceneConfig


@pytest.fixture()
def small_config() -> SceneConfig:
    """64x48 の小さなシーン。光源は左、遮蔽円は右寄りの中央。"""
    return SceneConfig(
        width=64,
        height=48,
        light_start=(10.0, 24.0),
        light_radius=3.0,
        occluder_x=40.0,
        occluder_start_y=24.0,
        occluder_radius=8.0,
        occluder_velocity_y=1.0,
    )


@pytest.fixture()
def default_config() -> SceneConfig:
    return SceneConfig()


@pytest.fixture()
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    """PXS_* を消した状態で設定を再読込し、テスト後に元へ戻す。"""
    for name in ("PXS_USE_NUMBA", "PXS_RENDER_THREADS", "PXS_FPS", "PXS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    settings.reload_from_env()
    yield monkeypatch
    monkeypatch.undo()
    settings.reload_from_env()
