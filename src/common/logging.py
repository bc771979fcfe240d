"""
modscope 向けの軽量ロギングユーティリティ。

要点:
- 各モジュールは `logging.getLogger(__name__)` でロガーを取得する。
- CLI/ランナーから 1 度だけ最小構成を適用する。レベル未指定時は
  `MODSCOPE_LOG_LEVEL`（`common.settings`）を参照する。
"""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_level(level: int | str | None) -> int:
    """レベル指定（int/名前/None）を `logging` の数値レベルへ解決する。"""
    if level is None:
        from .settings import get as _get_settings

        level = _get_settings().LOG_LEVEL
    if isinstance(level, str):
        lvl = logging.getLevelName(level.strip().upper())
        return lvl if isinstance(lvl, int) else logging.INFO
    return int(level)


def setup_default_logging(level: int | str | None = None) -> None:
    """最小限のロギング設定を 1 度だけ適用する。

    - ルートロガーにハンドラが既にあれば何もしない（no-op）
    """
    root = logging.getLogger()
    if root.handlers:
        # Assume the app has configured logging
        return
    logging.basicConfig(level=resolve_level(level), format=_FORMAT)


__all__ = ["setup_default_logging", "resolve_level"]
