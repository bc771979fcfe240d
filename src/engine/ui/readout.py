"""
どこで: `engine.ui` の時刻表示モジュール。
何を: 現在のシミュレーション時刻を小数 2 桁の文字列にし、pyglet の Label でキャンバス下に描画する。
なぜ: ドライバの時刻通知（on_time）とウィンドウ描画を疎結合にし、テキスト更新を必要時だけに抑えるため。
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

_CENTS = Decimal("0.01")


def format_time(t: float) -> str:
    """時刻を小数 2 桁で整形する（例: 0.125 → "0.13"、-0.4 → "-0.40"）。

    - float の厳密値で丸め、ちょうど中間なら 0 から遠い側へ。
    - 負のゼロは "0.00"。
    """
    v = float(t)
    if not math.isfinite(v):
        return f"{v:.2f}"
    if v == 0.0:
        v = 0.0
    return str(Decimal(v).quantize(_CENTS, rounding=ROUND_HALF_UP))


class TimeReadout:
    """`set_time()` で受けた値を次の `tick()` でラベルへ反映する。"""

    def __init__(
        self,
        window: Any,
        *,
        font_size: int = 10,
        color: tuple[int, int, int, int] = (180, 160, 120, 255),
        gap_px: int = 8,
    ):
        import pyglet  # 遅延 import（ヘッドレス環境での import 失敗を避ける）

        self.window = window
        self.text = format_time(0.0)
        self._pending: str | None = None
        self._gap = int(gap_px)
        self._label = pyglet.text.Label(
            text=self.text,
            x=0,
            y=0,
            anchor_x="left",
            anchor_y="top",
            font_size=font_size,
            color=color,
        )

    def set_time(self, t: float) -> None:
        self._pending = format_time(t)

    # -------- Tickable --------
    def tick(self, now_ms: float) -> None:
        if self._pending is not None and self._pending != self.text:
            self.text = self._pending
            self._label.text = self.text
        self._pending = None

    # -------- draw --------
    def draw(self) -> None:
        vp = self.window.viewport
        if vp.is_empty:
            return
        self._label.x = vp.offset_x
        self._label.y = vp.offset_y - self._gap
        self._label.draw()


__all__ = ["format_time", "TimeReadout"]
