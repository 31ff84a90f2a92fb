"""
どこで: `engine.render.framebuffer`。
何を: RGBA8・行優先・上から下の行順のフレームバッファの確保と、外部バッファの画素ビュー化。
なぜ: 表示側が所有するバッファ（bytearray/ndarray）をコピーせず `(h, w, 4)` として塗るため。
"""

from __future__ import annotations

import numpy as np

CHANNELS = 4


def allocate_frame(width: int, height: int) -> np.ndarray:
    """ゼロ初期化した `(height, width, 4)` の uint8 フレームを返す。"""
    return np.zeros((int(height), int(width), CHANNELS), dtype=np.uint8)


def as_pixel_view(buffer: object, width: int, height: int) -> np.ndarray:
    """`buffer` を `(height, width, 4)` の書込可能な uint8 ビューとして返す（コピーしない）。

    受理:
    - C 連続な uint8 の ndarray（形状は任意、要素数が `width*height*4`）
    - 書込可能な bytes-like（bytearray / memoryview など、長さが `width*height*4`）

    Raises
    ------
    ValueError
        サイズ/型/連続性/書込可否のいずれかが不正な場合。
    """
    expected = int(width) * int(height) * CHANNELS
    if isinstance(buffer, np.ndarray):
        if buffer.dtype != np.uint8:
            raise ValueError(f"frame buffer dtype must be uint8, got {buffer.dtype}")
        if buffer.size != expected:
            raise ValueError(f"frame buffer must hold {expected} bytes, got {buffer.size}")
        if not buffer.flags.c_contiguous:
            raise ValueError("frame buffer must be C-contiguous")
        if not buffer.flags.writeable:
            raise ValueError("frame buffer is read-only")
        return buffer.reshape(int(height), int(width), CHANNELS)

    try:
        view = memoryview(buffer)  # type: ignore[arg-type]
    except TypeError as e:
        raise ValueError(f"unsupported frame buffer type: {type(buffer)!r}") from e
    if view.readonly:
        raise ValueError("frame buffer is read-only")
    if view.nbytes != expected:
        raise ValueError(f"frame buffer must hold {expected} bytes, got {view.nbytes}")
    arr = np.frombuffer(view.cast("B"), dtype=np.uint8)
    return arr.reshape(int(height), int(width), CHANNELS)


__all__ = ["CHANNELS", "allocate_frame", "as_pixel_view"]
