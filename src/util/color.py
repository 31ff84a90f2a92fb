"""
どこで: `util.color`。
何を: 色指定（Hex, RGBA 0–1, RGBA 0–255）を RGBA8 タプルへ正規化する。
なぜ: YAML 設定/コード引数のどちらからでも同一の受理仕様でパレットを組むため。
"""

from __future__ import annotations

from typing import Sequence

RGBA8 = tuple[int, int, int, int]


def _clamp_u8(x: int) -> int:
    return 0 if x < 0 else 255 if x > 255 else int(x)


def parse_hex_color_str(s: str) -> RGBA8:
    """Hex 文字列から RGBA(0–255) を返す。

    受理形式: "#RRGGBB", "#RRGGBBAA", "0xRRGGBB", "0xRRGGBBAA", "RRGGBB", "RRGGBBAA"。
    大文字/小文字は不問。
    """
    t = s.strip()
    if t.startswith("#"):
        t = t[1:]
    elif t.lower().startswith("0x"):
        t = t[2:]
    if len(t) not in (6, 8):
        raise ValueError(f"invalid hex color length: '{s}' (expected RRGGBB or RRGGBBAA)")
    try:
        r = int(t[0:2], 16)
        g = int(t[2:4], 16)
        b = int(t[4:6], 16)
        a = int(t[6:8], 16) if len(t) == 8 else 255
    except ValueError as e:
        raise ValueError(f"invalid hex color: '{s}'") from e
    return (r, g, b, a)


def _as_sequence(value: object) -> Sequence[float | int] | None:
    if isinstance(value, (list, tuple)):
        return value  # type: ignore[return-value]
    return None


def to_u8_rgba(value: object) -> RGBA8:
    """色を RGBA(0–255) へ変換する。

    - 受理: Hex 文字列, (r,g,b[,a])
    - 全要素が float かつ 0..1 の場合は 0–1 表記とみなしてスケールする。
      それ以外は 0–255 表記として丸め/クランプする。
    """
    if isinstance(value, str):
        return parse_hex_color_str(value)
    seq = _as_sequence(value)
    if seq is None:
        raise ValueError(f"unsupported color type: {type(value)!r}")
    if len(seq) not in (3, 4):
        raise ValueError("color tuple/list must be length 3 or 4")
    try:
        comps = [float(x) for x in seq]
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid color tuple/list: {value!r}") from e
    if len(comps) == 3:
        comps.append(1.0 if all(isinstance(x, float) for x in seq) else 255.0)
    # 0–1 表記は float 指定のときのみ（(1, 1, 0) の int は 0–255 扱い）
    if all(isinstance(x, float) for x in seq) and all(0.0 <= x <= 1.0 for x in comps):
        r, g, b, a = (int(round(x * 255)) for x in comps)
    else:
        r, g, b, a = (int(round(x)) for x in comps)
    return (_clamp_u8(r), _clamp_u8(g), _clamp_u8(b), _clamp_u8(a))


def opaque(value: object) -> RGBA8:
    """`to_u8_rgba` の結果のアルファを 255 に固定して返す。"""
    r, g, b, _ = to_u8_rgba(value)
    return (r, g, b, 255)


__all__ = [
    "RGBA8",
    "parse_hex_color_str",
    "to_u8_rgba",
    "opaque",
]
