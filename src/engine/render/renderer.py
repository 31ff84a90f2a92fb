"""
どこで: `engine.render` の画素分類レンダラ。
何を: SceneSnapshot を受け取り、フレームバッファの全画素を「光源/遮蔽円/影/背景」の 4 色に塗り分ける。
なぜ: 毎フレーム数十万画素の分類を並列カーネルに閉じ込め、呼び出し側は `render()` 1 回で済ませるため。

画素ごとの判定（先に一致したものを採用）:
1) 光源中心から `light_radius` 以内 → light_color（白）
2) 遮蔽円中心から `occluder_radius` 以内 → occluder_color（白）
3) `is_occluded(光源, 画素, 遮蔽円)` → shadow_color（黒）
4) それ以外 → background_color（黄）
アルファは常に 255。画素 (col, row) の出力はその座標とスナップショットだけで決まる。

バックエンド:
- `numba`（既定）: `prange` で行を numba のワーカスレッドへ分配する njit カーネル。画素ごとの確保なし。
- `numpy`: `BandWorkerPool` で互いに素な行帯をスレッドに割り当て、帯ごとにベクトル化して塗る。
どちらも同一バイト列を出力する（fastmath を使わず、演算順序を揃えている）。
"""

from __future__ import annotations

import logging
import os
from typing import Literal

import numba
import numpy as np
from numba import njit, prange  # type: ignore[attr-defined]

from common.settings import get as _get_settings
from engine.core.config import SceneConfig
from engine.core.geometry import (
    is_occluded,
    occluded_mask,
    within_radius,
    within_radius_mask,
)
from engine.core.scene import SceneSnapshot
from engine.runtime.task import BandTask
from engine.runtime.worker import BandWorkerPool, RenderTaskError

from .framebuffer import as_pixel_view

Backend = Literal["numba", "numpy"]
BACKENDS: tuple[str, ...] = ("numba", "numpy")

logger = logging.getLogger(__name__)


@njit(parallel=True, cache=True)
def _shade_kernel(
    out,
    light_x,
    light_y,
    light_radius,
    occluder_x,
    occluder_y,
    occluder_radius,
    light_rgba,
    occluder_rgba,
    shadow_rgba,
    background_rgba,
):
    height = out.shape[0]
    width = out.shape[1]
    for row in prange(height):
        py = float(row)
        for col in range(width):
            px = float(col)
            if within_radius(px, py, light_x, light_y, light_radius):
                color = light_rgba
            elif within_radius(px, py, occluder_x, occluder_y, occluder_radius):
                color = occluder_rgba
            elif is_occluded(light_x, light_y, px, py, occluder_x, occluder_y, occluder_radius):
                color = shadow_rgba
            else:
                color = background_rgba
            for k in range(4):
                out[row, col, k] = color[k]


def _shade_band(
    out: np.ndarray,
    task: BandTask,
    snapshot: SceneSnapshot,
    columns: np.ndarray,
    palette: tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray],
) -> None:
    """行 `[task.start, task.stop)` を numpy で塗る（他の行には触れない）。"""
    cfg = snapshot.config
    band = out[task.start : task.stop]
    py = np.arange(task.start, task.stop, dtype=np.float64)[:, None]
    px = columns[None, :]
    light_rgba, occluder_rgba, shadow_rgba, background_rgba = palette

    on_light = within_radius_mask(px, py, snapshot.light_x, snapshot.light_y, cfg.light_radius)
    on_occluder = within_radius_mask(
        px, py, cfg.occluder_x, snapshot.occluder_y, cfg.occluder_radius
    )
    shadowed = occluded_mask(
        snapshot.light_x,
        snapshot.light_y,
        px,
        py,
        cfg.occluder_x,
        snapshot.occluder_y,
        cfg.occluder_radius,
    )

    # 優先度の低い順に上書きする
    band[...] = background_rgba
    band[shadowed] = shadow_rgba
    band[on_occluder] = occluder_rgba
    band[on_light] = light_rgba


def resolve_backend(backend: str | None = None) -> str:
    """明示指定 > `PXS_USE_NUMBA` > 既定（numba）の順でバックエンド名を決める。"""
    if backend is None:
        return "numba" if _get_settings().USE_NUMBA else "numpy"
    name = str(backend).strip().lower()
    if name not in BACKENDS:
        raise ValueError(f"unknown render backend: {backend!r} (expected one of {BACKENDS})")
    return name


def resolve_threads(threads: int | None = None) -> int:
    """明示指定 > `PXS_RENDER_THREADS` > CPU 数の順でスレッド数を決める（1 以上）。"""
    if threads is None:
        threads = _get_settings().RENDER_THREADS
    if threads is None:
        threads = os.cpu_count() or 1
    return max(1, int(threads))


class ShadowRenderer:
    """固定設定 `SceneConfig` のフレームバッファを毎フレーム全画素塗り直すレンダラ。"""

    def __init__(
        self,
        config: SceneConfig,
        *,
        backend: str | None = None,
        threads: int | None = None,
    ):
        self.config = config
        self.backend = resolve_backend(backend)
        self.threads = resolve_threads(threads)
        self.frames = 0
        self._palette = (
            np.array(config.light_color, dtype=np.uint8),
            np.array(config.occluder_color, dtype=np.uint8),
            np.array(config.shadow_color, dtype=np.uint8),
            np.array(config.background_color, dtype=np.uint8),
        )
        self._pool: BandWorkerPool | None = None
        self._columns: np.ndarray | None = None
        if self.backend == "numba":
            # numba 側の上限（NUMBA_NUM_THREADS）を超えると set_num_threads が失敗する
            self.threads = min(self.threads, int(numba.config.NUMBA_NUM_THREADS))
        else:
            self._pool = BandWorkerPool(self.threads)
            self._columns = np.arange(config.width, dtype=np.float64)
        logger.info(
            "ShadowRenderer: %dx%d backend=%s threads=%d",
            config.width,
            config.height,
            self.backend,
            self.threads,
        )

    def render(self, snapshot: SceneSnapshot, frame_buffer: object) -> None:
        """`frame_buffer` の全画素を `snapshot` に基づいて塗り直す。

        Raises
        ------
        ValueError
            バッファのサイズ/型、またはスナップショットの寸法が設定と一致しない場合。
        RenderTaskError
            numpy 経路で帯の処理が失敗した場合（帯の範囲を保持）。
        """
        cfg = self.config
        if (snapshot.config.width, snapshot.config.height) != (cfg.width, cfg.height):
            raise ValueError(
                f"snapshot frame {snapshot.config.width}x{snapshot.config.height} "
                f"does not match renderer {cfg.width}x{cfg.height}"
            )
        out = as_pixel_view(frame_buffer, cfg.width, cfg.height)
        frame_id = self.frames
        if self.backend == "numba":
            self._render_numba(out, snapshot)
        else:
            self._render_numpy(out, snapshot, frame_id)
        self.frames += 1

    def _render_numba(self, out: np.ndarray, snapshot: SceneSnapshot) -> None:
        cfg = snapshot.config
        light_rgba, occluder_rgba, shadow_rgba, background_rgba = self._palette
        numba.set_num_threads(self.threads)
        _shade_kernel(
            out,
            float(snapshot.light_x),
            float(snapshot.light_y),
            float(cfg.light_radius),
            float(cfg.occluder_x),
            float(snapshot.occluder_y),
            float(cfg.occluder_radius),
            light_rgba,
            occluder_rgba,
            shadow_rgba,
            background_rgba,
        )

    def _render_numpy(self, out: np.ndarray, snapshot: SceneSnapshot, frame_id: int) -> None:
        if self._pool is None or self._columns is None:
            raise RuntimeError("ShadowRenderer is closed")
        columns = self._columns
        palette = self._palette
        self._pool.map_bands(
            lambda task: _shade_band(out, task, snapshot, columns, palette),
            out.shape[0],
            frame_id=frame_id,
        )

    def close(self) -> None:
        """バンドワーカを停止する（numba 経路では何もしない）。"""
        if self._pool is not None:
            self._pool.close()
            self._pool = None

    def __enter__(self) -> "ShadowRenderer":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


__all__ = ["ShadowRenderer", "RenderTaskError", "resolve_backend", "resolve_threads", "BACKENDS"]
