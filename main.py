from __future__ import annotations

from api import run
from common import setup_default_logging

# "snapshot": 15fps の点描 / "continuous": 塗り曲線（クリックで逆再生、Shift+クリックで 4 倍速）
MODE = "continuous"


if __name__ == "__main__":
    setup_default_logging()
    run(MODE)
