"""
どこで: `engine.render` の高レベル描画。
何を: SceneState のサンプル列を画素座標へ写像し、点描（正方形ドット）または塗り付き曲線として Surface に描く。
なぜ: 描画スタイルの違いをここに閉じ込め、ドライバ側はスタイルを意識せず `draw(points)` を呼ぶだけにするため。
"""

from __future__ import annotations

import logging
from enum import Enum

import numpy as np

from util.color import normalize_color, with_alpha
from util.constants import BACKGROUND_COLOR, FOREGROUND_COLOR

from .surface import Surface

logger = logging.getLogger(__name__)


class RenderStyle(str, Enum):
    POINTS = "points"
    CURVE = "curve"


class WaveRenderer:
    """
    サンプル値 [-1, 1] を `y = h/2 + h/2 * v`（切り捨て）へ写像して描く。
    毎回背景色で全面を塗りつぶしてから描画する。
    """

    def __init__(
        self,
        surface: Surface,
        style: RenderStyle | str = RenderStyle.POINTS,
        *,
        background: object = BACKGROUND_COLOR,
        foreground: object = FOREGROUND_COLOR,
        fill_alpha: float = 0.25,
        dot_size: int = 5,
        line_width: float = 2.0,
    ):
        self.surface = surface
        self.style = RenderStyle(style)
        self._background = normalize_color(background)
        self._foreground = normalize_color(foreground)
        self._fill_color = with_alpha(self._foreground, fill_alpha)
        self._dot_size = max(1, int(dot_size))
        self._line_width = float(line_width)
        self.frames_drawn = 0

    @property
    def background(self) -> tuple[float, float, float, float]:
        return self._background

    @property
    def foreground(self) -> tuple[float, float, float, float]:
        return self._foreground

    # --------------------------------------------------------------------- #
    # Public drawing API                                                    #
    # --------------------------------------------------------------------- #
    def draw(self, points: np.ndarray) -> None:
        """背景で塗りつぶし、スタイルに応じてサンプル列を描く。"""
        s = self.surface
        s.fill_style = self._background
        s.fill_rect(0, 0, s.width, s.height)
        self.frames_drawn += 1
        if len(points) == 0:
            return
        ys = self.pixel_rows(points)
        if self.style is RenderStyle.POINTS:
            self._draw_points(ys)
        else:
            self._draw_curve(ys)

    def pixel_rows(self, points: np.ndarray) -> np.ndarray:
        """各サンプルの画素行（0 から切り捨て）。"""
        half = self.surface.height * 0.5
        return np.trunc(half + half * np.asarray(points, dtype=np.float64)).astype(np.int64)

    # --------------------------------------------------------------------- #
    # Internal helpers                                                      #
    # --------------------------------------------------------------------- #
    def _draw_points(self, ys: np.ndarray) -> None:
        s = self.surface
        s.fill_style = self._foreground
        size = self._dot_size
        off = size // 2
        for x, y in enumerate(ys.tolist()):
            s.fill_rect(x - off, y - off, size, size)

    def _draw_curve(self, ys: np.ndarray) -> None:
        s = self.surface
        s.stroke_style = self._foreground
        s.line_width = self._line_width
        s.line_cap = "round"
        s.begin_path()
        rows = ys.tolist()
        s.move_to(0, rows[0])
        for x, y in enumerate(rows[1:], start=1):
            s.line_to(x, y)
        s.stroke()
        # 同じ折れ線を下端の 2 隅まで延ばして閉じ、シルエットとして半透明で塗る
        s.line_to(s.width, s.height)
        s.line_to(0, s.height)
        s.close_path()
        s.fill_style = self._fill_color
        s.fill()


__all__ = ["WaveRenderer", "RenderStyle"]
