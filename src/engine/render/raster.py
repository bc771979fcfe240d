"""
どこで: `engine.render.raster`。
何を: Pillow の RGBA 画像上に実装した `Surface`（矩形塗り/ポリラインのストローク/偶奇規則の塗り）。
なぜ: GPU やウィンドウ無しで決定的にピクセルを生成し、表示側は完成バッファを転送するだけにするため。

描画手順:
- パスは `ImageDraw` で二値マスク（"L"/"1"）へ描き、前景色 × アルファのレイヤを `alpha_composite` で重ねる。
- 矩形は範囲ぶんの単色タイルをその位置へ直接合成する。
- 1 回の `stroke()`/`fill()` は 1 枚のマスクにまとめるため、重なった線分も 1 回だけ合成される。
- 行 0 が上端（キャンバスと同じ）。矩形はピクセル中心 (+0.5, +0.5) が内側のものを塗る。
"""

from __future__ import annotations

import math

import numpy as np
from PIL import Image, ImageChops, ImageDraw

from util.color import RGBA, normalize_color

from .surface import LineCap

_LINE_CAPS = ("butt", "round", "square")

Point = tuple[float, float]


class RasterSurface:
    """`width × height` の RGBA 画像を持つ描画面（初期値は全面透明）。"""

    def __init__(self, width: int, height: int) -> None:
        w, h = int(width), int(height)
        if w <= 0 or h <= 0:
            raise ValueError(f"surface size must be positive, got {(width, height)}")
        self.width = w
        self.height = h
        self.image = Image.new("RGBA", (w, h), (0, 0, 0, 0))
        self._fill: RGBA = (0.0, 0.0, 0.0, 1.0)
        self._stroke: RGBA = (0.0, 0.0, 0.0, 1.0)
        self._line_width = 1.0
        self._line_cap: LineCap = "butt"
        # サブパス列: (頂点列, 閉路か)
        self._subpaths: list[tuple[list[Point], bool]] = []

    # ---- スタイル ---------------------------------------------------------
    @property
    def fill_style(self) -> RGBA:
        return self._fill

    @fill_style.setter
    def fill_style(self, value: object) -> None:
        self._fill = normalize_color(value)

    @property
    def stroke_style(self) -> RGBA:
        return self._stroke

    @stroke_style.setter
    def stroke_style(self, value: object) -> None:
        self._stroke = normalize_color(value)

    @property
    def line_width(self) -> float:
        return self._line_width

    @line_width.setter
    def line_width(self, value: float) -> None:
        v = float(value)
        # キャンバス同様、非正/非有限は無視
        if v > 0.0 and math.isfinite(v):
            self._line_width = v

    @property
    def line_cap(self) -> LineCap:
        return self._line_cap

    @line_cap.setter
    def line_cap(self, value: str) -> None:
        if value not in _LINE_CAPS:
            raise ValueError(f"invalid line_cap: {value!r}; allowed={', '.join(_LINE_CAPS)}")
        self._line_cap = value  # type: ignore[assignment]

    # ---- 直接描画 ---------------------------------------------------------
    def fill_rect(self, x: float, y: float, w: float, h: float) -> None:
        """`fill_style` で矩形を塗る（中心が矩形内のピクセルが対象、範囲外は切り捨て）。"""
        if w < 0:
            x, w = x + w, -w
        if h < 0:
            y, h = y + h, -h
        x0 = max(0, int(math.ceil(x - 0.5)))
        y0 = max(0, int(math.ceil(y - 0.5)))
        x1 = min(self.width, int(math.ceil(x + w - 0.5)))
        y1 = min(self.height, int(math.ceil(y + h - 0.5)))
        if x0 >= x1 or y0 >= y1:
            return
        r, g, b, a = self._fill
        a8 = _u8(a)
        if a8 == 0:
            return
        tile = Image.new("RGBA", (x1 - x0, y1 - y0), (_u8(r), _u8(g), _u8(b), a8))
        self.image.alpha_composite(tile, dest=(x0, y0))

    # ---- パス -------------------------------------------------------------
    def begin_path(self) -> None:
        self._subpaths = []

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append(([(float(x), float(y))], False))

    def line_to(self, x: float, y: float) -> None:
        if not self._subpaths or self._subpaths[-1][1]:
            # サブパスが無い/閉じた直後は直前の始点（無ければ自身）から始める
            start = self._subpaths[-1][0][0] if self._subpaths else (float(x), float(y))
            self._subpaths.append(([start], False))
        self._subpaths[-1][0].append((float(x), float(y)))

    def close_path(self) -> None:
        if not self._subpaths:
            return
        pts, _closed = self._subpaths[-1]
        self._subpaths[-1] = (pts, True)

    def stroke(self) -> None:
        """現在のパスを `stroke_style` / `line_width` / `line_cap` でなぞる。"""
        mask = self._new_mask()
        draw = ImageDraw.Draw(mask)
        width = max(1, int(round(self._line_width)))
        half = self._line_width * 0.5
        painted = False
        for pts, closed in self._subpaths:
            if len(pts) < 2:
                continue
            if all(p == pts[0] for p in pts):
                painted |= self._stamp_dot(draw, pts[0], half)
                continue
            line = list(pts) + [pts[0]] if closed else list(pts)
            if self._line_cap == "square" and not closed:
                line = _extend_ends(line, half)
            draw.line(line, fill=255, width=width, joint="curve")
            if self._line_cap == "round" and not closed:
                self._stamp_dot(draw, line[0], half)
                self._stamp_dot(draw, line[-1], half)
            painted = True
        if painted:
            self._composite(mask, self._stroke)

    def fill(self) -> None:
        """現在のパスを偶奇規則で `fill_style` 塗りする（各サブパスは暗黙に閉じる）。"""
        mask: Image.Image | None = None
        for pts, _closed in self._subpaths:
            if len(pts) < 3:
                continue
            part = Image.new("1", (self.width, self.height), 0)
            ImageDraw.Draw(part).polygon(pts, fill=1)
            mask = part if mask is None else ImageChops.logical_xor(mask, part)
        if mask is not None:
            self._composite(mask.convert("L"), self._fill)

    # ---- 出力 -------------------------------------------------------------
    @property
    def buffer(self) -> np.ndarray:
        """`height × width × 4` の uint8 配列（コピー）。"""
        return np.array(self.image, dtype=np.uint8)

    def to_bytes(self, flip: bool = True) -> bytes:
        """RGBA バイト列を返す。`flip=True` で下から上の行順（pyglet 用）。"""
        img = self.image.transpose(Image.Transpose.FLIP_TOP_BOTTOM) if flip else self.image
        return img.tobytes()

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        r, g, b, a = self.image.getpixel((int(x), int(y)))
        return (int(r), int(g), int(b), int(a))

    # ---- 内部ヘルパ -------------------------------------------------------
    def _new_mask(self) -> Image.Image:
        return Image.new("L", (self.width, self.height), 0)

    def _stamp_dot(self, draw: ImageDraw.ImageDraw, p: Point, half: float) -> bool:
        """点 `p` に端点形状（round: 円、square: 正方形）を描く。butt では描かず False。"""
        x, y = p
        if self._line_cap == "round":
            draw.ellipse((x - half, y - half, x + half, y + half), fill=255)
        elif self._line_cap == "square":
            draw.rectangle((x - half, y - half, x + half, y + half), fill=255)
        else:
            return False
        return True

    def _composite(self, mask: Image.Image, color: RGBA) -> None:
        """マスク内を `color` で source-over 合成する。"""
        r, g, b, a = color
        a8 = _u8(a)
        if a8 == 0:
            return
        layer = Image.new("RGBA", self.image.size, (_u8(r), _u8(g), _u8(b), 0))
        layer.putalpha(mask.point(lambda v: a8 if v else 0))
        self.image.alpha_composite(layer)


def _extend_ends(line: list[Point], amount: float) -> list[Point]:
    """開いた折れ線の両端を線分方向へ `amount` 延ばす（square キャップ）。"""
    out = list(line)
    for end, nxt in ((0, 1), (-1, -2)):
        (ex, ey), (nx, ny) = out[end], out[nxt]
        dx, dy = ex - nx, ey - ny
        length = math.hypot(dx, dy)
        if length > 0.0:
            out[end] = (ex + dx / length * amount, ey + dy / length * amount)
    return out


def _u8(v: float) -> int:
    return int(round(max(0.0, min(1.0, v)) * 255.0))


__all__ = ["RasterSurface"]
