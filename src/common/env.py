"""
どこで: `common.env`
何を: 環境変数の軽量パースヘルパ（int/float/bool/str）を提供。
なぜ: `os.getenv` + 例外/境界ガードを一箇所にまとめ、設定の読み込みを単純化するため。
"""

from __future__ import annotations

import os
from typing import Optional


def env_int(
    name: str, default: Optional[int] = None, *, min_value: Optional[int] = None
) -> Optional[int]:
    """整数環境変数を取得（存在しない/不正値は既定値）。

    Parameters
    ----------
    name : str
        環境変数名。
    default : Optional[int]
        既定値（`None` を渡すと `None` を許容）。
    min_value : Optional[int]
        下限（指定時、結果が下回れば下限に丸める）。
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        val = int(raw.strip())
    except ValueError:
        return default
    if min_value is not None and val < min_value:
        val = min_value
    return val


def env_float(
    name: str, default: Optional[float] = None, *, min_value: Optional[float] = None
) -> Optional[float]:
    """実数環境変数を取得。`env_int` と同じ規約（不正値は既定値、下限丸め）。"""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        val = float(raw.strip())
    except ValueError:
        return default
    if min_value is not None and val < min_value:
        val = min_value
    return val


def env_bool(name: str, default: bool = False) -> bool:
    """真偽環境変数を取得（0/1, true/false, yes/no, on/off を許容）。"""
    raw = os.getenv(name)
    if raw is None:
        return bool(default)
    s = raw.strip().lower()
    try:
        # 数値優先
        return int(s) != 0
    except ValueError:
        pass
    if s in {"true", "t", "yes", "y", "on"}:
        return True
    if s in {"false", "f", "no", "n", "off"}:
        return False
    return bool(default)


def env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    """文字列環境変数を取得（空文字/空白のみは未設定扱い）。"""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


__all__ = ["env_int", "env_float", "env_bool", "env_str"]
