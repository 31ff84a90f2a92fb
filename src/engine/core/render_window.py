"""
どこで: `engine.core` の描画ウィンドウ薄ラッパ。
何を: Pyglet Window と RGBA8 フレームバッファの表示（ImageData への転送と blit）、描画コールバック登録を提供。
なぜ: シーン/レンダラ層から GUI 依存を切り離し、「バッファを渡せば表示される」最小インターフェイスにするため。

使用例:
    win = RenderWindow(1280, 720)
    win.present(frame)          # (h, w, 4) uint8, 上から下への行順
    win.add_draw_callback(hud.draw)
    pyglet.app.run()
"""

from __future__ import annotations

from typing import Callable

import numpy as np
import pyglet
from pyglet.gl import Config


class RenderWindow(pyglet.window.Window):
    def __init__(
        self,
        width: int,
        height: int,
        *,
        caption: str = "Pyxishade",
        resizable: bool = False,
        vsync: bool = True,
    ):
        """ウィンドウを生成する。

        引数:
            width: フレームバッファ幅（ピクセル）。ウィンドウの初期幅/最小幅にも使う。
            height: フレームバッファ高さ（ピクセル）。
            caption: タイトルバー文字列。
            resizable: ウィンドウのリサイズ可否。
            vsync: 垂直同期の有無。
        """
        config = Config(double_buffer=True, vsync=vsync)
        super().__init__(
            width=width, height=height, caption=caption, resizable=resizable, config=config
        )
        self.set_minimum_size(width, height)
        self._frame_width = int(width)
        self._frame_height = int(height)
        # 負の pitch で「先頭行 = 画面上端」の行順を指定する
        self._pitch = -self._frame_width * 4
        self._image = pyglet.image.ImageData(
            self._frame_width,
            self._frame_height,
            "RGBA",
            bytes(self._frame_width * self._frame_height * 4),
            pitch=self._pitch,
        )
        self._draw_callbacks: list[Callable[[], None]] = []

    @property
    def frame_size(self) -> tuple[int, int]:
        return self._frame_width, self._frame_height

    def present(self, frame: np.ndarray) -> None:
        """次回 `on_draw` で表示するフレームを設定する。"""
        self._image.set_data("RGBA", self._pitch, frame.tobytes())

    def add_draw_callback(self, func: Callable[[], None]) -> None:
        """
        `on_draw` 中、フレーム表示の後に呼び出す描画関数を登録する（HUD など）。

        - 関数は引数を取らず、副作用で描画を行うこと。
        - 登録順に呼び出される。
        """
        self._draw_callbacks.append(func)

    def on_draw(self):  # Pyglet 既定のイベント名
        """ウィンドウ描画イベントハンドラ。フレームを現在のウィンドウ寸法へ拡縮して描く。"""
        self.clear()
        self._image.blit(0, 0, width=self.width, height=self.height)
        for cb in self._draw_callbacks:
            cb()
