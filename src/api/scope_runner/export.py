"""
どこで: `api.scope_runner.export`。
何を: 論理サイズのラスタバッファを PNG として保存する（表示倍率/時刻表示は含まない）。
なぜ: ワンアクション（P キー/ヘッドレス実行）でフレームを保存できるようにするため。
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from engine.render.raster import RasterSurface
from util.paths import ensure_screenshots_dir, unique_path

logger = logging.getLogger(__name__)


def default_png_path(surface: RasterSurface) -> Path:
    """`data/screenshot/<timestamp>_<w>x<h>.png`（重複時は連番）を返す。"""
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    return unique_path(ensure_screenshots_dir() / f"{ts}_{surface.width}x{surface.height}.png")


def save_png(surface: RasterSurface, path: Path | str | None = None) -> Path:
    """`surface` の現在内容を PNG として保存し、保存先を返す。

    Raises
    ------
    OSError
        書き込みに失敗した場合。
    """
    out = Path(path) if path is not None else default_png_path(surface)
    out.parent.mkdir(parents=True, exist_ok=True)
    surface.image.save(out, format="PNG")
    logger.info("saved PNG: %s", out)
    return out


__all__ = ["save_png", "default_png_path"]
