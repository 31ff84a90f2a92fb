"""
どこで: `engine.core.geometry`。
何を: 光源→画素の線分と遮蔽円の交差判定（影テスト）と、円内判定を提供する純関数群。
なぜ: 並列カーネル（numba）とベクトル化経路（numpy）で同一の幾何判定を共有するため。

影テスト:
    線分 `P(t) = L + t (P - L)`, `t ∈ [0, 1]` と円 `|X - C| = r` の交差を
    二次方程式 `a t^2 + b t + c = 0` で解く。

        a = |P - L|^2
        b = 2 (L - C)·(P - L)
        c = |L - C|^2 - r^2

    判別式が負なら交差なし。非負なら 2 根のいずれかが閉区間 [0, 1] にあるとき遮蔽。

退化ケース（`a == 0`、画素と光源が一致）:
    明示的に False を返す。0 除算で得られる非有限値が区間判定に落ちるのと同じ結果を、
    浮動小数の NaN 伝播に頼らず固定する。

いずれの関数も状態を持たず、任意のスレッドから同期なしで呼び出してよい。
"""

from __future__ import annotations

import math

import numpy as np
from numba import njit  # type: ignore[attr-defined]


@njit(cache=True)
def is_occluded(
    light_x: float,
    light_y: float,
    pixel_x: float,
    pixel_y: float,
    occluder_x: float,
    occluder_y: float,
    occluder_radius: float,
) -> bool:
    """光源→画素の線分が遮蔽円と交わるなら True を返す。"""
    dx = pixel_x - light_x
    dy = pixel_y - light_y
    fx = light_x - occluder_x
    fy = light_y - occluder_y

    a = dx * dx + dy * dy
    if a == 0.0:
        return False
    b = 2.0 * (fx * dx + fy * dy)
    c = fx * fx + fy * fy - occluder_radius * occluder_radius

    disc = b * b - 4.0 * a * c
    if disc < 0.0:
        return False

    disc_sqrt = math.sqrt(disc)
    t1 = (-b - disc_sqrt) / (2.0 * a)
    t2 = (-b + disc_sqrt) / (2.0 * a)
    return (t1 >= 0.0 and t1 <= 1.0) or (t2 >= 0.0 and t2 <= 1.0)


@njit(cache=True)
def within_radius(x: float, y: float, cx: float, cy: float, radius: float) -> bool:
    """点 (x, y) が中心 (cx, cy) から `radius` 以内（境界含む）なら True。"""
    dx = x - cx
    dy = y - cy
    return math.sqrt(dx * dx + dy * dy) <= radius


def occluded_mask(
    light_x: float,
    light_y: float,
    pixel_x: np.ndarray,
    pixel_y: np.ndarray,
    occluder_x: float,
    occluder_y: float,
    occluder_radius: float,
) -> np.ndarray:
    """`is_occluded` のベクトル化版。`pixel_x`/`pixel_y` はブロードキャスト可能な配列。

    Returns
    -------
    np.ndarray
        bool 配列（形状は `pixel_x`/`pixel_y` のブロードキャスト結果）。
    """
    dx = pixel_x - light_x
    dy = pixel_y - light_y
    fx = light_x - occluder_x
    fy = light_y - occluder_y

    a = dx * dx + dy * dy
    b = 2.0 * (fx * dx + fy * dy)
    c = fx * fx + fy * fy - occluder_radius * occluder_radius

    disc = b * b - 4.0 * a * c
    hit = (disc >= 0.0) & (a != 0.0)
    # 非交差/退化要素は 0 除算を避けるためダミー値で埋めてから hit でマスクする
    disc_sqrt = np.sqrt(np.where(hit, disc, 0.0))
    denom = np.where(hit, 2.0 * a, 1.0)
    t1 = (-b - disc_sqrt) / denom
    t2 = (-b + disc_sqrt) / denom
    in1 = (t1 >= 0.0) & (t1 <= 1.0)
    in2 = (t2 >= 0.0) & (t2 <= 1.0)
    return hit & (in1 | in2)


def within_radius_mask(
    x: np.ndarray, y: np.ndarray, cx: float, cy: float, radius: float
) -> np.ndarray:
    """`within_radius` のベクトル化版。"""
    dx = x - cx
    dy = y - cy
    return np.sqrt(dx * dx + dy * dy) <= radius


__all__ = ["is_occluded", "within_radius", "occluded_mask", "within_radius_mask"]
