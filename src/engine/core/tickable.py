"""
どこで: `engine.core` の更新インターフェース。
何を: ホスト時計の時刻を受けて 1 フレーム進める `tick(now_ms)` を持つ `Tickable` Protocol。
なぜ: ドライバ/表示ラベルなどフレーム駆動のオブジェクトを FrameClock から一様に扱うため。
"""

from typing import Protocol


class Tickable(Protocol):
    """1 フレーム分の更新を行うインターフェース。"""

    def tick(self, now_ms: float) -> None:
        """ホスト時計の時刻 `now_ms` [ms] でフレームを 1 つ進める。"""
