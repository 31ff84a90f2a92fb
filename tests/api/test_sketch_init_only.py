from __future__ import annotations

import pytest

from api import SceneConfig, ShadowApp, run
from api.cli import build_parser, main
from common import settings
from engine.core.config import BLACK
from engine.core.events import PRIMARY_BUTTON


def test_run_init_only_builds_parts_without_window(small_config) -> None:
    app = run(
        scene_config=small_config,
        backend="numpy",
        threads=2,
        show_hud=False,
        init_only=True,
        log_level="WARNING",
    )
    assert isinstance(app, ShadowApp)
    try:
        assert app.config is small_config
        assert app.renderer.backend == "numpy"
        assert app.hud.enabled is False
        assert app.frame.shape == (48, 64, 4)

        # ウィンドウ座標で光源 (10, 24) を押してドラッグ
        app.input.on_mouse_press(10, 48 - 1 - 24, PRIMARY_BUTTON, 0)
        app.driver.tick(1 / app.fps)
        app.input.on_mouse_drag(20, 48 - 1 - 30, 10, -6, PRIMARY_BUTTON, 0)
        app.driver.tick(1 / app.fps)
        assert app.scene.light_position == (20.0, 30.0)
        assert app.driver.version() == 2
    finally:
        app.close()


def test_run_init_only_renders_reference_scene() -> None:
    app = run(scene_config=SceneConfig(), backend="numba", show_hud=False, init_only=True)
    assert app is not None
    try:
        app.driver.tick(0.0)
        assert tuple(app.frame[360, 1270]) == BLACK
    finally:
        app.close()


def test_cli_init_only_renders_one_frame(clean_settings) -> None:
    clean_settings.setenv("PXS_USE_NUMBA", "0")
    settings.reload_from_env()
    assert main(["--init-only", "--no-hud", "--threads", "2", "--log-level", "WARNING"]) == 0


def test_cli_rejects_bad_arguments() -> None:
    with pytest.raises(SystemExit):
        main(["--threads", "0", "--init-only"])
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--backend", "opengl"])
