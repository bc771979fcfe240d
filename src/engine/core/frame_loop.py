"""
どこで: `engine.core.frame_loop`。
何を: 「次の再描画前に 1 回呼ぶ」スケジューラ上で自己再登録するフレームループと、その取消ハンドル。
なぜ: 表示リフレッシュ駆動の無限ループを明示的な抽象にし、ディスプレイ無しでも決定的に駆動/停止できるようにするため。

使用例:
    sched = ManualScheduler()
    handle = FrameLoop(frame_clock.tick, sched).start()
    sched.run(frames=10, step_ms=1000 / 60)
    handle.cancel()
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class FrameScheduler(Protocol):
    """ホストのフレーム要求プリミティブ（requestAnimationFrame 相当）。"""

    def request_frame(self, callback: FrameCallback) -> None:
        """次の再描画前に `callback(now_ms)` を 1 回呼ぶよう要求する。"""


class LoopHandle:
    """実行中ループの取消ハンドル。`cancel()` は冪等。"""

    __slots__ = ("_cancelled", "frames")

    def __init__(self) -> None:
        self._cancelled = False
        self.frames = 0

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class FrameLoop:
    """フレームごとに次フレームを先に要求し、その後 `tick(now_ms)` を呼ぶループ。

    引数:
        tick: 1 フレーム分の処理。
        scheduler: フレーム要求先。
        stop: 各 tick 後に評価する停止条件（None で無期限）。
    """

    def __init__(
        self,
        tick: FrameCallback,
        scheduler: FrameScheduler,
        *,
        stop: Callable[[], bool] | None = None,
    ) -> None:
        self._tick = tick
        self._scheduler = scheduler
        self._stop = stop
        self._handle: LoopHandle | None = None

    @property
    def handle(self) -> LoopHandle | None:
        return self._handle

    def start(self) -> LoopHandle:
        """ループを開始してハンドルを返す。二重開始は `RuntimeError`。"""
        if self._handle is not None and not self._handle.cancelled:
            raise RuntimeError("frame loop already running")
        handle = LoopHandle()
        self._handle = handle
        self._scheduler.request_frame(lambda now_ms: self._on_frame(handle, now_ms))
        return handle

    def _on_frame(self, handle: LoopHandle, now_ms: float) -> None:
        if handle.cancelled:
            return
        # 先に次フレームを要求しておく（tick 内で例外が出てもループ自体は維持）
        self._scheduler.request_frame(lambda t: self._on_frame(handle, t))
        handle.frames += 1
        self._tick(now_ms)
        if self._stop is not None and self._stop():
            logger.debug("frame loop stopped after %d frames", handle.frames)
            handle.cancel()


class ManualScheduler:
    """ヘッドレス用スケジューラ。`advance()` で保留中のコールバックを 1 世代ぶん実行する。"""

    def __init__(self) -> None:
        self._pending: deque[FrameCallback] = deque()
        self.now_ms = 0.0

    def request_frame(self, callback: FrameCallback) -> None:
        self._pending.append(callback)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def advance(self, now_ms: float | None = None) -> int:
        """時刻を `now_ms` に進め、現在保留中のコールバックを実行する。実行数を返す。"""
        if now_ms is not None:
            self.now_ms = float(now_ms)
        batch = list(self._pending)
        self._pending.clear()
        for cb in batch:
            cb(self.now_ms)
        return len(batch)

    def run(self, frames: int, step_ms: float, *, start_ms: float | None = None) -> None:
        """`step_ms` 間隔で `frames` 回 `advance()` する。保留が無くなれば早期終了。"""
        if start_ms is not None:
            self.now_ms = float(start_ms) - float(step_ms)
        for _ in range(max(0, int(frames))):
            if not self._pending:
                break
            self.advance(self.now_ms + float(step_ms))


__all__ = ["FrameScheduler", "FrameLoop", "LoopHandle", "ManualScheduler", "FrameCallback"]
