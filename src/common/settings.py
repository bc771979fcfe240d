"""
どこで: `common.settings`
何を: modscope の環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を避け、既定値/型の一貫性とテスト容易性を保つため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_float, env_str


@dataclass
class _Settings:
    # Logging
    LOG_LEVEL: str = "INFO"

    # Driver
    TARGET_FPS: float | None = None
    DEBUG_FRAMES: bool = False


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - `MODSCOPE_TARGET_FPS` は 0 以下を未指定（None）として扱う。
    """
    _settings.LOG_LEVEL = (env_str("MODSCOPE_LOG_LEVEL", "INFO") or "INFO").upper()

    fps = env_float("MODSCOPE_TARGET_FPS", None)
    _settings.TARGET_FPS = fps if fps is not None and fps > 0.0 else None
    _settings.DEBUG_FRAMES = env_bool("MODSCOPE_DEBUG_FRAMES", False)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
