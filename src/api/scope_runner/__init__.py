"""
内部ヘルパ群（API 非公開）。

どこで: `api.scope_runner`
何を: `api.runner` の補助（設定解決の純粋関数/ウィンドウ結線/PNG 保存）を分離した内部モジュール群。
なぜ: `run_scope` 本体を薄く保ち、pyglet 依存をウィンドウ経路だけに閉じ込めるため。
"""

from __future__ import annotations

__all__: list[str] = []
