"""
どこで: `api.sketch`（実行ランナー）。
何を: Scene/ShadowRenderer/FrameDriver を結線し、pyglet ウィンドウでの対話実行（ドラッグ・表示・HUD）を行う。
なぜ: 設定の解決からイベントループ終了時の後始末までを 1 関数にまとめ、CLI/スクリプトから同じ経路で起動するため。

実行フロー（概要）:
1) 設定解決: YAML（`configs/default.yaml` + `config.yaml`）と環境変数から FPS/SceneConfig/描画設定/HUD を確定。
2) 中核: `Scene` と `ShadowRenderer`、再利用する RGBA8 フレーム、`InputCollector` を生成。
3) 駆動: `FrameDriver`（入力→Scene.update→render→ウィンドウへ転送）を作る。
   `init_only=True` ならここで `ShadowApp` を返す（ウィンドウは作らない）。
4) ウィンドウ: `RenderWindow` を生成し、入力を接続。CPU 名と GL レンダラ名をログへ出す。
5) 監視/HUD: `MetricSampler` と `OverlayHUD` を FrameDriver の後段に登録。
6) フレーム駆動: `FrameClock` を `pyglet.clock.schedule_interval` で回す。
   `ESC`/クローズで終了し、ワーカ停止を行う。描画失敗はログへ出してウィンドウを閉じる。

スレッド安全性:
- Scene を書き換えるのは FrameDriver.tick だけで、同じ tick 内で描画が完了してから次の更新に進む。
- 描画の並列化は ShadowRenderer 内（numba スレッド or BandWorkerPool）に閉じる。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from common.logging import setup_default_logging
from common.settings import get as _get_settings
from engine.core.config import SceneConfig
from engine.core.scene import Scene
from engine.io.input import InputCollector
from engine.render.framebuffer import allocate_frame
from engine.render.renderer import ShadowRenderer
from engine.runtime.driver import FrameDriver
from engine.runtime.worker import RenderTaskError
from engine.ui.hud.config import HUDConfig
from util.utils import load_config

from .sketch_runner.utils import (
    describe_cpu,
    resolve_fps,
    resolve_hud_config,
    resolve_render_options,
    resolve_scene_config,
)

logger = logging.getLogger(__name__)


@dataclass
class ShadowApp:
    """ウィンドウ以外の実行部品一式。"""

    config: SceneConfig
    scene: Scene
    renderer: ShadowRenderer
    frame: np.ndarray
    input: InputCollector
    driver: FrameDriver
    fps: int
    hud: HUDConfig

    def close(self) -> None:
        self.renderer.close()


def build_app(
    *,
    scene_config: SceneConfig | None = None,
    fps: int | None = None,
    backend: str | None = None,
    threads: int | None = None,
    show_hud: bool | None = None,
    hud_config: HUDConfig | None = None,
) -> ShadowApp:
    """設定を解決し、ウィンドウ以外の部品を生成して結線する。"""
    cfg = load_config()
    fps = resolve_fps(fps, cfg=cfg)
    config = resolve_scene_config(scene_config, cfg=cfg)
    backend, threads = resolve_render_options(backend, threads, cfg=cfg)
    hud_conf = resolve_hud_config(hud_config, show_hud, cfg=cfg)

    scene = Scene(config)
    renderer = ShadowRenderer(config, backend=backend, threads=threads)
    frame = allocate_frame(config.width, config.height)
    collector = InputCollector(config.width, config.height)
    driver = FrameDriver(scene, renderer, frame, poll_events=collector.drain)
    return ShadowApp(
        config=config,
        scene=scene,
        renderer=renderer,
        frame=frame,
        input=collector,
        driver=driver,
        fps=fps,
        hud=hud_conf,
    )


def run(
    *,
    scene_config: SceneConfig | None = None,
    fps: int | None = None,
    backend: str | None = None,
    threads: int | None = None,
    show_hud: bool | None = None,
    hud_config: HUDConfig | None = None,
    init_only: bool = False,
    log_level: str | int | None = None,
) -> ShadowApp | None:
    """影デモを実行する。

    Parameters
    ----------
    scene_config : SceneConfig | None
        シーン設定。None で YAML の `scene:`（なければ既定 1280x720）を使う。
    fps : int | None
        更新レート。None で `PXS_FPS` → YAML `runner.fps` → 60。
    backend : {"numba", "numpy"} | None
        描画バックエンド。None で `PXS_USE_NUMBA` → YAML `render.backend` → numba。
    threads : int | None
        描画スレッド数。None で `PXS_RENDER_THREADS` → YAML `render.threads` → CPU 数。
    show_hud : bool | None
        HUD の有効/無効。None で `hud_config`/YAML を尊重。
    hud_config : HUDConfig | None
        HUD 表示設定。
    init_only : bool
        True でウィンドウを作らずに `ShadowApp` を返す。
    log_level : str | int | None
        ログレベル。None で `PXS_LOG_LEVEL`（既定 INFO）。

    Returns
    -------
    ShadowApp | None
        `init_only=True` のときのみ部品一式を返す。
    """
    setup_default_logging(log_level if log_level is not None else _get_settings().LOG_LEVEL)
    app = build_app(
        scene_config=scene_config,
        fps=fps,
        backend=backend,
        threads=threads,
        show_hud=show_hud,
        hud_config=hud_config,
    )
    if init_only:
        return app

    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import pyglet
    from pyglet.window import key

    from engine.core.frame_clock import FrameClock, Tickable
    from engine.core.render_window import RenderWindow
    from engine.ui.hud.overlay import OverlayHUD
    from engine.ui.hud.sampler import MetricSampler

    logger.info("CPU: %s", describe_cpu())
    window = RenderWindow(app.config.width, app.config.height)
    try:
        from pyglet.gl import gl_info

        logger.info("GPU: %s", gl_info.get_renderer())
    except Exception as e:  # GL 情報はログ用途のみ
        logger.debug("GL renderer query failed: %s", e)

    app.input.attach(window)
    window.present(app.frame)

    tickables: list[Tickable] = [app.driver]
    overlay: OverlayHUD | None = None
    if app.hud.enabled:
        sampler = MetricSampler(app.driver.version, config=app.hud)
        overlay = OverlayHUD(sampler, config=app.hud)
        tickables.extend([sampler, overlay])
        window.add_draw_callback(overlay.draw)
    frame_clock = FrameClock(tickables)

    closed = False

    def _shutdown() -> None:
        # 冪等なクリーンアップ
        nonlocal closed
        if closed:
            return
        closed = True
        pyglet.clock.unschedule(_tick)
        app.close()
        logger.info("closed after %d frames", app.driver.version())
        window.close()
        pyglet.app.exit()

    def _tick(dt: float) -> None:
        try:
            frame_clock.tick(dt)
        except RenderTaskError:
            logger.exception("render failed; closing window")
            _shutdown()
            return
        window.present(app.frame)

    pyglet.clock.schedule_interval(_tick, 1 / app.fps)

    @window.event
    def on_key_press(sym, mods):  # noqa: ANN001
        if sym == key.ESCAPE:
            _shutdown()
            return pyglet.event.EVENT_HANDLED

    @window.event
    def on_close():  # noqa: ANN001
        _shutdown()
        return pyglet.event.EVENT_HANDLED

    pyglet.app.run()
    return None


__all__ = ["ShadowApp", "build_app", "run"]
