"""
どこで: `engine.core` の描画ウィンドウ薄ラッパ。
何を: 論理サイズの RGBA バッファを、整数倍の表示サイズへ最近傍拡大して中央に描く Pyglet Window。
なぜ: ラスタ/レンダラ層から GUI 依存を切り離し、リサイズ時の表示倍率計算を一箇所に閉じ込めるため。

使用例:
    win = ScopeWindow(320, 240, frame_source=surface.to_bytes)
    win.add_draw_callback(readout.draw)
    pyglet.app.run()
"""

from __future__ import annotations

import logging
from typing import Callable

import pyglet
from pyglet import gl

from .viewport import Viewport, fit_viewport

logger = logging.getLogger(__name__)


class ScopeWindow(pyglet.window.Window):
    def __init__(
        self,
        logical_width: int,
        logical_height: int,
        *,
        frame_source: Callable[[], bytes],
        margin: tuple[int, int] = (80, 160),
        bg_color: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0),
        caption: str = "modscope",
    ):
        """ウィンドウを生成する。

        引数:
            logical_width, logical_height: バッキングバッファの寸法（ピクセル）。
            frame_source: 下から上の行順の RGBA バイト列を返す関数。
            margin: 表示倍率計算でクライアント寸法から差し引く余白 (x, y)。
            bg_color: キャンバス外の背景色 RGBA（0.0〜1.0）。
        """
        # 初期クライアントは 2 倍表示が収まる大きさ
        width = logical_width * 2 + margin[0] + 1
        height = logical_height * 2 + margin[1] + 1
        super().__init__(width=width, height=height, caption=caption, resizable=True)
        self._logical = (int(logical_width), int(logical_height))
        self._margin = (int(margin[0]), int(margin[1]))
        self._frame_source = frame_source
        self._bg_color = bg_color
        self._draw_callbacks: list[Callable[[], None]] = []
        self._texture = pyglet.image.Texture.create(
            self._logical[0],
            self._logical[1],
            min_filter=gl.GL_NEAREST,
            mag_filter=gl.GL_NEAREST,
        )
        self._viewport = fit_viewport(*self._logical, width, height, margin=self._margin)

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    def add_draw_callback(self, func: Callable[[], None]) -> None:
        """
        `on_draw` 中（キャンバス描画後）に呼び出す描画関数を登録する。登録順に呼び出される。
        """
        self._draw_callbacks.append(func)

    def on_resize(self, width, height):  # Pyglet 既定のイベント名
        super().on_resize(width, height)
        self.refit(width, height)

    def refit(self, width: int, height: int) -> Viewport:
        """クライアント寸法から表示倍率/配置を再計算して保持する。"""
        vp = fit_viewport(*self._logical, width, height, margin=self._margin)
        if vp != self._viewport:
            logger.debug(
                "viewport: client=%dx%d scale=%d display=%dx%d",
                width,
                height,
                vp.scale,
                vp.display_width,
                vp.display_height,
            )
        self._viewport = vp
        return vp

    def on_draw(self):  # Pyglet 既定のイベント名
        r, g, b, a = self._bg_color
        gl.glClearColor(r, g, b, a)
        self.clear()
        vp = self._viewport
        if not vp.is_empty:
            lw, lh = self._logical
            image = pyglet.image.ImageData(lw, lh, "RGBA", self._frame_source())
            self._texture.blit_into(image, 0, 0, 0)
            self._texture.blit(vp.offset_x, vp.offset_y, width=vp.display_width, height=vp.display_height)
        for cb in self._draw_callbacks:
            cb()
