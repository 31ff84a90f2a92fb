"""
どこで: `engine.runtime` のタスク定義。
何を: ワーカへ渡す 1 帯（連続する行範囲）ぶんの `BandTask`。
なぜ: 各ワーカが書き込む範囲を値として固定し、帯どうしが重ならないことを型で明示するため。
"""

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class BandTask:
    """フレームの行 `[start, stop)` を塗るタスク。"""

    frame_id: int
    start: int
    stop: int

    @property
    def rows(self) -> int:
        return self.stop - self.start


def split_rows(height: int, parts: int) -> list[tuple[int, int]]:
    """行 `[0, height)` を互いに素な連続区間へ分割する。

    - 区間数は `min(parts, height)`（最低 1）。
    - 先頭側の区間ほど 1 行多くなるよう余りを配分する。
    """
    height = int(height)
    if height <= 0:
        return []
    n = max(1, min(int(parts), height))
    base, extra = divmod(height, n)
    bands: list[tuple[int, int]] = []
    start = 0
    for i in range(n):
        stop = start + base + (1 if i < extra else 0)
        bands.append((start, stop))
        start = stop
    return bands


__all__ = ["BandTask", "split_rows"]
