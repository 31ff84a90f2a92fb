"""
どこで: `engine.ui.hud` の計測サブモジュール。
何を: FrameDriver の描画フレーム数から実効 FPS を、psutil からシステムの CPU 使用率と RAM 使用量を
      一定間隔でサンプリングし、HUD 描画向けの文字列辞書として保持する。
なぜ: 計測を描画カーネルの外（FrameClock の後段）に置き、描画経路から psutil を呼ばないため。
"""

from __future__ import annotations

import time
from typing import Callable

import psutil

from ...core.frame_clock import Tickable
from .config import HUDConfig
from .fields import CPU, FPS, RAM

_GB = 1024.0**3


class MetricSampler(Tickable):
    """FPS・CPU・RAM を一定間隔でサンプリングし dict に保持する。

    - `data`: HUD のテキスト表示用にフォーマット済みの文字列を保持。
    - `values`: メータ正規化に使う生値（FPS[Hz], CPU[%], RAM[%]）。
    """

    def __init__(
        self,
        version: Callable[[], int],
        config: HUDConfig | None = None,
        *,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self._version = version
        self._config = config or HUDConfig()
        self._interval = float(self._config.sample_interval)
        self._clock = clock
        # 前回サンプリング時刻とバージョン（実効FPS算出に使用）
        self._last = 0.0
        self._last_ver = self._version()
        self.data: dict[str, str] = {}
        self.values: dict[str, float] = {}
        if self._config.show_cpu_mem:
            # 初回呼び出しは 0.0 を返すため、ここで基準点を取っておく
            psutil.cpu_percent(None)

    def target_fps(self) -> float:
        return float(self._config.target_fps)

    # -------- Tickable --------
    def tick(self, dt: float) -> None:
        now = self._clock()
        if now - self._last < self._interval:
            return
        elapsed = now - self._last if self._last > 0.0 else 0.0
        self._last = now

        # 実効FPS: FrameDriver.version() の増分 / 経過秒
        if self._config.show_fps:
            cur_ver = self._version()
            dv = cur_ver - self._last_ver
            self._last_ver = cur_ver
            fps = (dv / elapsed) if elapsed > 0.0 else 0.0
            self.data[FPS] = f"{fps:.1f}"
            self.values[FPS] = float(fps)
        else:
            self.data.pop(FPS, None)
            self.values.pop(FPS, None)

        if self._config.show_cpu_mem:
            cpu = float(psutil.cpu_percent(None))
            mem = psutil.virtual_memory()
            self.data[CPU] = f"{cpu:.1f}%"
            self.data[RAM] = f"{mem.used / _GB:.1f}GB ({mem.percent:.1f}%)"
            self.values[CPU] = cpu
            self.values[RAM] = float(mem.percent)
        else:
            for key in (CPU, RAM):
                self.data.pop(key, None)
                self.values.pop(key, None)

    def status_line(self) -> str:
        """`FPS: 60.0 | CPU: 12.0% | RAM: 3.2GB (40.0%)` 形式の 1 行要約。"""
        return " | ".join(f"{k}: {v}" for k, v in self.data.items())


__all__ = ["MetricSampler"]
