"""
どこで: `engine.render.surface`。
何を: 2D ラスタ面の最小インターフェース（矩形塗り・パス構築・ストローク/塗り・描画スタイル）。
なぜ: レンダラを具体的な描画先（numpy バッファ/記録用スタブ）から切り離してテスト可能にするため。
"""

from __future__ import annotations

from typing import Literal, Protocol

LineCap = Literal["butt", "round", "square"]


class Surface(Protocol):
    """固定サイズの 2D ラスタ面。色は CSS/Hex/タプルを受理する。"""

    width: int
    height: int
    fill_style: object
    stroke_style: object
    line_width: float
    line_cap: LineCap

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None: ...

    def begin_path(self) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def close_path(self) -> None: ...

    def stroke(self) -> None: ...

    def fill(self) -> None: ...


__all__ = ["Surface", "LineCap"]
