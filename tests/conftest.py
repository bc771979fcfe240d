"""共通フィクスチャ。

- MODSCOPE_* 環境変数を除去して設定を再読込
- 代表的なモジュレータ/SceneState 試料
"""

from __future__ import annotations

from typing import Iterator

import pytest

from common import settings
from engine.core.scene import SceneState
from modulators import Modulator, modulator


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """テスト中は MODSCOPE_* を未設定として扱う。"""
    for name in ("MODSCOPE_LOG_LEVEL", "MODSCOPE_TARGET_FPS", "MODSCOPE_DEBUG_FRAMES"):
        monkeypatch.delenv(name, raising=False)
    settings.reload_from_env()
    yield
    settings.reload_from_env()


@pytest.fixture()
def sine_half() -> Modulator:
    """sine(freq=0.5, amp=0.8)、子なし。"""
    return modulator("sine", 0.5, 0.8)


@pytest.fixture()
def snapshot_root() -> Modulator:
    return modulator(
        "sine",
        0.5,
        0.8,
        am=modulator("sine", 0.4, 0.5),
        fm=modulator("sine", 0.2, 0.5),
    )


@pytest.fixture()
def small_state(snapshot_root: Modulator) -> SceneState:
    return SceneState.create(16, [snapshot_root])
