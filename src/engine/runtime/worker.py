"""
どこで: `engine.runtime` のワーカ実行層。
何を: 固定数のスレッドプールで、フレームを行帯（`BandTask`）に分けた塗りつぶし関数を並列実行する。
      帯の失敗は `RenderTaskError` でフレームID/帯の文脈付きに伝搬する。`close()` は安全に停止する。
なぜ: numpy 経路でも「ワーカごとに互いに素なバイト範囲だけを書く」データ並列を実現するため。

注意:
- numpy の配列演算は GIL を解放するため、スレッドで帯を分けるだけで複数コアを使える。
- `fn(task)` は自分の帯 `[task.start, task.stop)` 以外に書き込んではならない。
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable

from .task import BandTask, split_rows

logger = logging.getLogger(__name__)


class RenderTaskError(Exception):
    """描画中の例外をラップしてフレームID/帯などの文脈を付与。

    ピクル化/単一メッセージでの再構築にも耐えるよう、メッセージ単独でも初期化できる。
    """

    def __init__(
        self,
        frame_id: int | str | None = None,
        original: BaseException | None = None,
        *,
        band: tuple[int, int] | None = None,
        message: str | None = None,
    ) -> None:
        # Unpickle 経路（例外は message だけで復元されることがある）
        if message is None and isinstance(frame_id, str) and original is None:
            message = frame_id
            frame_id = None

        if message is None:
            where = f"frame_id={frame_id}"
            if band is not None:
                where += f", rows={band[0]}:{band[1]}"
            message = f"RenderTaskError({where}): {original!r}"
        super().__init__(message)
        self.frame_id = frame_id
        self.original = original
        self.band = band

    def __reduce__(self):
        return (RenderTaskError, (str(self),))


class BandWorkerPool:
    """行帯タスクの生成とスレッドプール管理のみを担当。"""

    def __init__(self, num_workers: int = 4):
        self.num_workers = max(1, int(num_workers))
        self._executor: ThreadPoolExecutor | None = ThreadPoolExecutor(
            max_workers=self.num_workers, thread_name_prefix="pxs-band"
        )
        logger.debug("BandWorkerPool started with %d workers", self.num_workers)

    @property
    def closed(self) -> bool:
        return self._executor is None

    def tasks_for(self, height: int, frame_id: int = 0) -> list[BandTask]:
        """ワーカ数ぶんの互いに素な `BandTask` を返す。"""
        return [BandTask(frame_id, s, e) for s, e in split_rows(height, self.num_workers)]

    def map_bands(
        self, fn: Callable[[BandTask], None], height: int, *, frame_id: int = 0
    ) -> None:
        """全帯に `fn` を適用し、すべての完了を待つ。

        いずれかの帯が失敗した場合、全帯の終了を待ってから最初の失敗を
        `RenderTaskError` として送出する。
        """
        if self._executor is None:
            raise RuntimeError("BandWorkerPool is closed")
        tasks = self.tasks_for(height, frame_id)
        futures = [self._executor.submit(fn, task) for task in tasks]
        wait(futures)
        for task, fut in zip(tasks, futures):
            err = fut.exception()
            if err is not None:
                raise RenderTaskError(
                    frame_id, err, band=(task.start, task.stop)
                ) from err

    def close(self) -> None:
        """プールを停止する（冪等）。"""
        if self._executor is None:
            return
        self._executor.shutdown(wait=True)
        self._executor = None
        logger.debug("BandWorkerPool closed")

    def __enter__(self) -> "BandWorkerPool":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


__all__ = ["BandWorkerPool", "RenderTaskError"]
