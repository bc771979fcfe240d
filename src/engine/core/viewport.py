"""
どこで: `engine.core.viewport`。
何を: 固定の論理キャンバス寸法を、利用可能なクライアント領域に収まる最大の整数倍へ拡大する寸法計算。
なぜ: バッキングバッファは論理サイズのまま、表示サイズだけを整数倍（最近傍拡大）にして画素感を保つため。
"""

from __future__ import annotations

from dataclasses import dataclass

from util.constants import VIEWPORT_MARGIN_X, VIEWPORT_MARGIN_Y


def fit_scale(width: int, height: int, container_width: float, container_height: float) -> int:
    """`k*width < container_width` かつ `k*height < container_height` を満たす最大の k を返す。

    - 倍数を足し上げて判定する（境界は strict less-than）。
    - 1 倍も収まらなければ 0 を返す（表示は 0x0 に潰れる）。
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"logical size must be positive, got {(width, height)}")
    k = 0
    w = 0
    h = 0
    while True:
        next_w = w + width
        next_h = h + height
        if next_w < container_width and next_h < container_height:
            w = next_w
            h = next_h
            k += 1
            continue
        break
    return k


@dataclass(frozen=True)
class Viewport:
    """表示サイズ（CSS 相当）とクライアント内の配置。"""

    scale: int
    display_width: int
    display_height: int
    offset_x: int = 0
    offset_y: int = 0

    @property
    def is_empty(self) -> bool:
        return self.scale <= 0


def fit_viewport(
    width: int,
    height: int,
    client_width: int,
    client_height: int,
    *,
    margin: tuple[int, int] = (VIEWPORT_MARGIN_X, VIEWPORT_MARGIN_Y),
) -> Viewport:
    """クライアント寸法から余白を引いた領域に収まる Viewport を返す（中央配置）。"""
    k = fit_scale(width, height, client_width - margin[0], client_height - margin[1])
    dw = k * width
    dh = k * height
    return Viewport(
        scale=k,
        display_width=dw,
        display_height=dh,
        offset_x=max(0, (int(client_width) - dw) // 2),
        offset_y=max(0, (int(client_height) - dh) // 2),
    )


def fit_display_size(
    width: int,
    height: int,
    client_width: int,
    client_height: int,
    *,
    margin: tuple[int, int] = (VIEWPORT_MARGIN_X, VIEWPORT_MARGIN_Y),
) -> tuple[int, int]:
    """表示サイズ `(k*width, k*height)` のみを返す簡易版。"""
    vp = fit_viewport(width, height, client_width, client_height, margin=margin)
    return vp.display_width, vp.display_height


__all__ = ["fit_scale", "fit_viewport", "fit_display_size", "Viewport"]
