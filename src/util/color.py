"""
どこで: `util.color`。
何を: 色指定の正規化/変換（CSS `rgb()`/`rgba()`, Hex, RGBA 0–1, RGBA 0–255）を一元化。
なぜ: 設定ファイル・ラスタ面・ラベルで同一の受理仕様とエラーメッセージを提供するため。
"""

from __future__ import annotations

import re
from typing import Sequence

RGBA = tuple[float, float, float, float]

_CSS_FUNC = re.compile(r"^(rgba?)\(\s*([^)]*)\)$", re.IGNORECASE)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else 1.0 if x > 1.0 else float(x)


def parse_hex_color_str(s: str) -> RGBA:
    """Hex 文字列から RGBA(0–1) を返す。

    受理形式: "#RRGGBB", "#RRGGBBAA", "0xRRGGBB", "0xRRGGBBAA", "RRGGBB", "RRGGBBAA"。
    """
    t = s.strip()
    if t.startswith("#"):
        t = t[1:]
    elif t.lower().startswith("0x"):
        t = t[2:]
    if len(t) not in (6, 8):
        raise ValueError(f"invalid hex color length: '{s}' (expected RRGGBB or RRGGBBAA)")
    try:
        r = int(t[0:2], 16)
        g = int(t[2:4], 16)
        b = int(t[4:6], 16)
        a = int(t[6:8], 16) if len(t) == 8 else 255
    except ValueError as e:
        raise ValueError(f"invalid hex color: '{s}'") from e
    return (r / 255.0, g / 255.0, b / 255.0, a / 255.0)


def parse_css_color_str(s: str) -> RGBA:
    """CSS 関数表記 `rgb(r, g, b)` / `rgba(r, g, b, a)` を RGBA(0–1) へ変換する。

    r/g/b は 0–255、a は 0–1（CSS と同じ）。範囲外はクランプ。
    """
    m = _CSS_FUNC.match(s.strip())
    if m is None:
        raise ValueError(f"invalid css color: '{s}'")
    func = m.group(1).lower()
    parts = [p.strip() for p in m.group(2).split(",")]
    expected = 4 if func == "rgba" else 3
    if len(parts) != expected:
        raise ValueError(f"{func}() expects {expected} components: '{s}'")
    try:
        r, g, b = (float(p) for p in parts[:3])
        a = float(parts[3]) if expected == 4 else 1.0
    except ValueError as e:
        raise ValueError(f"invalid css color: '{s}'") from e
    return (_clamp01(r / 255.0), _clamp01(g / 255.0), _clamp01(b / 255.0), _clamp01(a))


def normalize_color(value: object) -> RGBA:
    """色を RGBA(0–1) へ正規化する。

    - 受理: CSS `rgb()`/`rgba()`, Hex 文字列, (r,g,b[,a]) （0–1 または 0–255）
    """
    if isinstance(value, str):
        if _CSS_FUNC.match(value.strip()):
            return parse_css_color_str(value)
        return parse_hex_color_str(value)
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"unsupported color type: {type(value)!r}")
    seq: Sequence[float] = value
    if len(seq) not in (3, 4):
        raise ValueError("color tuple/list must be length 3 or 4")
    try:
        comps = [float(x) for x in seq]
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid color tuple/list: {value!r}") from e
    if len(comps) == 3:
        comps.append(1.0)
    # 全要素が 0..1 ならそのまま、そうでなければ 0–255 とみなす
    if all(0.0 <= x <= 1.0 for x in comps):
        r, g, b, a = comps
        return (r, g, b, a)
    r, g, b, a = (max(0, min(255, int(round(x)))) / 255.0 for x in comps)
    return (r, g, b, a)


def to_u8_rgba(value: object) -> tuple[int, int, int, int]:
    """色を RGBA(0–255) へ変換する。"""
    r, g, b, a = normalize_color(value)
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)), int(round(a * 255)))


def with_alpha(value: object, alpha: float) -> RGBA:
    """色のアルファを `alpha` 倍した RGBA(0–1) を返す。"""
    r, g, b, a = normalize_color(value)
    return (r, g, b, _clamp01(a * float(alpha)))


__all__ = [
    "RGBA",
    "parse_hex_color_str",
    "parse_css_color_str",
    "normalize_color",
    "to_u8_rgba",
    "with_alpha",
]
