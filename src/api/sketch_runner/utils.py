"""
どこで: `api.sketch_runner.utils`（純粋関数/小ヘルパ）。
何を: FPS・SceneConfig・HUDConfig・描画バックエンド設定の解決と、起動時のホスト情報取得を提供。
なぜ: `api.sketch` を薄く保ち、ウィンドウを作らずに設定解決をテストできるようにするため。

優先順位はいずれも「明示引数 > 環境変数（common.settings） > YAML（util.utils.load_config） > 既定」。
"""

from __future__ import annotations

import platform
from dataclasses import replace
from typing import Any, Mapping

from common.settings import get as _get_settings
from engine.core.config import SceneConfig
from engine.ui.hud.config import HUDConfig
from util.utils import config_section, load_config


def resolve_fps(
    requested_fps: int | None, *, cfg: Mapping[str, Any] | None = None, default: int = 60
) -> int:
    """FPS を解決して 1 以上の int を返す。

    - 明示指定があればそれを優先（数値化できない/<=0 は既定へ）。
    - 次に `PXS_FPS`、その次に YAML の `runner.fps`。
    """
    if requested_fps is not None:
        try:
            return max(1, int(requested_fps))
        except (TypeError, ValueError):
            return max(1, int(default))
    env_fps = _get_settings().FPS
    if env_fps is not None:
        return max(1, int(env_fps))
    runner = config_section(dict(cfg if cfg is not None else load_config()), "runner")
    try:
        return max(1, int(runner.get("fps", default)))
    except (TypeError, ValueError):
        return max(1, int(default))


def resolve_scene_config(
    scene_config: SceneConfig | None, *, cfg: Mapping[str, Any] | None = None
) -> SceneConfig:
    """明示指定があればそれを、なければ YAML の `scene:` セクションから構築する。"""
    if scene_config is not None:
        return scene_config
    data = cfg if cfg is not None else load_config()
    return SceneConfig.from_mapping(config_section(dict(data), "scene"))


def resolve_render_options(
    backend: str | None,
    threads: int | None,
    *,
    cfg: Mapping[str, Any] | None = None,
) -> tuple[str | None, int | None]:
    """`(backend, threads)` を解決する。

    明示引数が無い項目は、環境変数が未設定の場合に限り YAML の `render:` で補う。
    どちらも決まらなければ None を返し、ShadowRenderer 側の既定に委ねる。
    """
    settings = _get_settings()
    render = config_section(dict(cfg if cfg is not None else load_config()), "render")
    if backend is None and settings.USE_NUMBA:
        # PXS_USE_NUMBA=0 が明示されていない場合のみ YAML を参照
        yaml_backend = render.get("backend")
        backend = str(yaml_backend) if yaml_backend else None
    if threads is None and settings.RENDER_THREADS is None:
        yaml_threads = render.get("threads")
        threads = int(yaml_threads) if yaml_threads else None
    return backend, threads


def resolve_hud_config(
    hud_config: HUDConfig | None,
    show_hud: bool | None,
    *,
    cfg: Mapping[str, Any] | None = None,
) -> HUDConfig:
    """HUD 設定を解決する（優先: show_hud 明示 > hud_config > YAML `hud:` > 既定）。"""
    if hud_config is None:
        data = cfg if cfg is not None else load_config()
        hud_config = HUDConfig.from_mapping(config_section(dict(data), "hud"))
    if show_hud is not None:
        hud_config = replace(hud_config, enabled=bool(show_hud))
    return hud_config


def describe_cpu() -> str:
    """ホスト CPU の表示名（取得できなければアーキテクチャ名）。"""
    name = platform.processor().strip()
    if not name:
        try:
            with open("/proc/cpuinfo", encoding="utf-8") as f:
                for line in f:
                    if line.lower().startswith("model name"):
                        name = line.split(":", 1)[1].strip()
                        break
        except OSError:
            name = ""
    return name or platform.machine() or "unknown"


__all__ = [
    "resolve_fps",
    "resolve_scene_config",
    "resolve_render_options",
    "resolve_hud_config",
    "describe_cpu",
]
