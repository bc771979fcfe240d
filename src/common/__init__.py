"""
どこで: `common` パッケージ。
何を: 環境変数パース・型付き設定・ロギング初期化などの最内層ユーティリティ。
なぜ: engine/modulators/api から依存の向きを単純に保ったまま再利用するため。
"""

from .logging import setup_default_logging

__all__ = [
    "setup_default_logging",
]
