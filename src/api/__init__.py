"""
どこで: `api` 入口（高レベル公開 API）。
何を: モジュレータ生成 `modulator`・表示モード・実行関数 `run_scope` などを再輸出。
なぜ: 利用者が単一名前空間からモジュレータ木の構築→実行まで完結できるようにするため。

Usage:
    from api import modulator, run_scope

    m = modulator("sine", 0.5, 0.8, am=modulator("sine", 0.4, 0.5))
    m.sample(0.5)

    run_scope("continuous")
"""

from modulators import Modulator, ModulatorType, modulator, preset

from .modes import CONTINUOUS, SNAPSHOT, ScopeMode, resolve_mode
from .runner import ScopeSession, build_session, run_scope
from .runner import run_scope as run

__all__ = [
    # メインAPI
    "modulator",  # モジュレータファクトリ
    "preset",  # プリセット木
    "run_scope",  # 実行（詳細指定）
    "run",  # 実行（エイリアス、簡易）
    "build_session",  # 結線のみ（ヘッドレス/テスト）
    # クラス（高度な使用）
    "Modulator",
    "ModulatorType",
    "ScopeMode",
    "ScopeSession",
    "SNAPSHOT",
    "CONTINUOUS",
    "resolve_mode",
]

# バージョン情報
__version__ = "0.1.0"
