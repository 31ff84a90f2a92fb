"""
どこで: `api.cli`。
何を: `pyxishade` コマンド（argparse）。FPS/バックエンド/スレッド数/HUD/ログレベルを指定して `run()` を呼ぶ。
"""

from __future__ import annotations

import argparse
from typing import Sequence

from engine.render.renderer import BACKENDS

from .sketch import run


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pyxishade",
        description="Drag the light and watch the bouncing circle cast its shadow.",
    )
    p.add_argument("--fps", type=int, default=None, help="update rate (default: config or 60)")
    p.add_argument(
        "--backend",
        choices=BACKENDS,
        default=None,
        help="pixel kernel backend (default: numba unless PXS_USE_NUMBA=0)",
    )
    p.add_argument("--threads", type=int, default=None, help="render threads (default: CPU count)")
    p.add_argument("--no-hud", action="store_true", help="hide the FPS/CPU/RAM overlay")
    p.add_argument("--log-level", default=None, help="logging level name (default: INFO)")
    p.add_argument(
        "--init-only",
        action="store_true",
        help="build the scene and renderer, render one frame, then exit without a window",
    )
    return p


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.threads is not None and args.threads < 1:
        build_parser().error("--threads must be >= 1")
    app = run(
        fps=args.fps,
        backend=args.backend,
        threads=args.threads,
        show_hud=False if args.no_hud else None,
        init_only=bool(args.init_only),
        log_level=args.log_level,
    )
    if app is not None:
        # init_only: 1 フレームだけ回して終了
        try:
            app.driver.tick(0.0)
        finally:
            app.close()
    return 0


__all__ = ["build_parser", "main"]
