"""
どこで: `engine.core` の簡易フレームドライバ。
何を: `Tickable` の列を固定順序で呼び出す FrameClock と、ミリ秒のホスト時計。
なぜ: 1 フレーム内の更新順（時間更新 → サンプリング → 描画 → 表示）を一箇所で固定するため。
"""

from __future__ import annotations

import time
from typing import Sequence

from .tickable import Tickable


def host_clock_ms() -> float:
    """単調増加する高分解能時計 [ms]。"""
    return time.perf_counter() * 1000.0


class FrameClock:
    """登録された Tickable を固定順序で実行するだけの極小クラス。"""

    def __init__(self, tickables: Sequence[Tickable]):
        self._tickables = tuple(tickables)

    def tick(self, now_ms: float) -> None:
        for t in self._tickables:
            t.tick(now_ms)
