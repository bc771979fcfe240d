"""
どこで: `engine.io.pointer`。
何を: ポインタクリック（ボタン番号 + Shift 修飾）を SceneState の時間方向/速度トグルへ変換する。
なぜ: ウィンドウのイベント定数から独立させ、入力の意味をヘッドレスで検証できるようにするため。
"""

from __future__ import annotations

import logging

from ..core.scene import SceneState

logger = logging.getLogger(__name__)

PRIMARY_BUTTON = 0
FAST_SPEED = 4


def apply_click(state: SceneState, button: int, *, shift: bool = False) -> bool:
    """クリックを状態へ反映し、変化があれば True を返す。

    - 主ボタン以外は無視。
    - Shift+主ボタン: `time_speed` を 1 ⇄ 4 で切り替え。
    - 主ボタン: `time_direction` を反転。
    """
    if int(button) != PRIMARY_BUTTON:
        return False
    if shift:
        state.time_speed = 1 if state.time_speed == FAST_SPEED else FAST_SPEED
        logger.debug("time speed -> %dx", state.time_speed)
    else:
        state.time_direction = -1 if state.time_direction > 0 else 1
        logger.debug("time direction -> %+d", state.time_direction)
    return True


__all__ = ["apply_click", "PRIMARY_BUTTON", "FAST_SPEED"]
