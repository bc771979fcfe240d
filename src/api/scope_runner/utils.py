"""
どこで: `api.scope_runner.utils`（純粋関数/小ヘルパ）。
何を: 目標 FPS・キャンバス寸法・色・余白・表示フォントの解決（引数 > 環境変数 > 設定ファイル > 定数）。
なぜ: `api.runner` を薄く保ち、設定解決の優先順位を単体で検証できるようにするため。
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from common.settings import get as _get_settings
from util.color import normalize_color, to_u8_rgba
from util.constants import (
    BACKGROUND_COLOR,
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    FOREGROUND_COLOR,
    READOUT_COLOR,
    REFRESH_RATE,
    TARGET_FPS,
    VIEWPORT_MARGIN_X,
    VIEWPORT_MARGIN_Y,
)
from util.utils import config_section

logger = logging.getLogger(__name__)

Config = Mapping[str, Any]


def _positive_float(value: Any) -> float | None:
    try:
        v = float(value)
    except (TypeError, ValueError):
        return None
    return v if v > 0.0 else None


def resolve_target_fps(requested: float | None, cfg: Config) -> float:
    """snapshot の目標 FPS を解決して正の float を返す。

    - 明示指定（正の値）を最優先。0 以下は `ValueError`。
    - 次に `MODSCOPE_TARGET_FPS`、`scope.target_fps`、最後に既定値。
    """
    if requested is not None:
        v = _positive_float(requested)
        if v is None:
            raise ValueError(f"target_fps must be > 0, got {requested}")
        return v
    env_fps = _get_settings().TARGET_FPS
    if env_fps is not None:
        return float(env_fps)
    v = _positive_float(config_section(dict(cfg), "scope").get("target_fps"))
    return v if v is not None else float(TARGET_FPS)


def resolve_refresh_rate(cfg: Config) -> float:
    v = _positive_float(config_section(dict(cfg), "scope").get("refresh_rate"))
    return v if v is not None else float(REFRESH_RATE)


def resolve_canvas_size(width: int | None, height: int | None, cfg: Config) -> tuple[int, int]:
    """論理キャンバス寸法 [px] を解決する（正の整数でなければ `ValueError`）。"""
    canvas = config_section(dict(cfg), "canvas")
    w = width if width is not None else canvas.get("width", CANVAS_WIDTH)
    h = height if height is not None else canvas.get("height", CANVAS_HEIGHT)
    try:
        wi, hi = int(w), int(h)
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid canvas size: {(w, h)}") from e
    if wi <= 0 or hi <= 0:
        raise ValueError(f"canvas size must be positive, got: {(wi, hi)}")
    return wi, hi


def resolve_colors(
    background: object | None, foreground: object | None, cfg: Config
) -> tuple[tuple[float, float, float, float], tuple[float, float, float, float]]:
    """背景/前景色を RGBA(0–1) で返す。設定値が不正なら警告して既定色へ戻す。"""
    canvas = config_section(dict(cfg), "canvas")

    def _pick(explicit: object | None, key: str, default: str) -> tuple[float, float, float, float]:
        if explicit is not None:
            return normalize_color(explicit)
        raw = canvas.get(key)
        if raw is None:
            return normalize_color(default)
        try:
            return normalize_color(raw)
        except ValueError as e:
            logger.warning("invalid canvas.%s in config (%s); using default", key, e)
            return normalize_color(default)

    return (
        _pick(background, "background_color", BACKGROUND_COLOR),
        _pick(foreground, "foreground_color", FOREGROUND_COLOR),
    )


def resolve_margin(cfg: Config) -> tuple[int, int]:
    vp = config_section(dict(cfg), "viewport")
    try:
        return int(vp.get("margin_x", VIEWPORT_MARGIN_X)), int(vp.get("margin_y", VIEWPORT_MARGIN_Y))
    except (TypeError, ValueError):
        return VIEWPORT_MARGIN_X, VIEWPORT_MARGIN_Y


def resolve_readout_style(cfg: Config) -> tuple[int, tuple[int, int, int, int]]:
    """時刻表示のフォントサイズと RGBA(0–255) を返す。"""
    ro = config_section(dict(cfg), "readout")
    try:
        size = max(1, int(ro.get("font_size", 10)))
    except (TypeError, ValueError):
        size = 10
    try:
        color = to_u8_rgba(ro.get("color", READOUT_COLOR))
    except ValueError:
        color = to_u8_rgba(READOUT_COLOR)
    return size, color


__all__ = [
    "resolve_target_fps",
    "resolve_refresh_rate",
    "resolve_canvas_size",
    "resolve_colors",
    "resolve_margin",
    "resolve_readout_style",
]
