"""
どこで: `util.constants`。
何を: 論理キャンバス寸法・既定色・ドライバ既定値など、全層で共有する定数。
なぜ: 値の散在を防ぎ、設定ファイル未指定時のフォールバックを一箇所に集めるため。
"""

from __future__ import annotations

# 論理キャンバス（バッキングバッファのピクセル数）
CANVAS_WIDTH = 320
CANVAS_HEIGHT = 240

# 表示領域の余白（クライアント寸法から差し引く px）
VIEWPORT_MARGIN_X = 80
VIEWPORT_MARGIN_Y = 160

# フレーム駆動
TARGET_FPS = 15.0
REFRESH_RATE = 60.0

# 振幅クランプ（各点の合成値）
POINT_LIMIT = 0.9

# 色
BACKGROUND_COLOR = "rgb(17, 18, 18)"
FOREGROUND_COLOR = "rgb(180, 160, 120)"
READOUT_COLOR = "rgb(180, 160, 120)"

__all__ = [
    "CANVAS_WIDTH",
    "CANVAS_HEIGHT",
    "VIEWPORT_MARGIN_X",
    "VIEWPORT_MARGIN_Y",
    "TARGET_FPS",
    "REFRESH_RATE",
    "POINT_LIMIT",
    "BACKGROUND_COLOR",
    "FOREGROUND_COLOR",
    "READOUT_COLOR",
]
