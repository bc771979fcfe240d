"""
どこで: `engine.core.scene`。
何を: シミュレーション時刻・固定長サンプルバッファ・ルート信号源列を保持する SceneState と、
      1 フレーム分の再サンプリング `sample_scene`。
なぜ: ドライバ/レンダラ/入力ハンドラが共有する可変状態を、グローバルではなく明示的に受け渡すため。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Sequence

import numpy as np

from util.constants import POINT_LIMIT


class SignalSource(Protocol):
    """時刻配列を評価して同形の値配列を返すもの（モジュレータ木のルート）。"""

    def sample_many(self, times: np.ndarray) -> np.ndarray: ...


@dataclass(eq=False)
class SceneState:
    """描画対象の可変状態。

    - `points` は生成時に `width` 長で確保し、以後は in-place で上書きのみ（長さ不変）。
    - `timebase` は直近更新時のホスト時刻 [ms]。0.0 は未設定を表す。
    - `phase` はスロットル用の生フレームコールバック数。
    """

    width: int
    modulators: tuple[SignalSource, ...] = ()
    time: float = 0.0
    timebase: float = 0.0
    phase: int = 0
    time_direction: int = 1
    time_speed: int = 1
    points: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        w = int(self.width)
        if w <= 0:
            raise ValueError(f"width must be > 0, got {self.width}")
        self.width = w
        self.modulators = tuple(self.modulators)
        self.points = np.zeros(w, dtype=np.float64)
        # 列ごとの位相オフセット i / width（width 固定なので一度だけ計算）
        self._offsets = (1.0 / float(w)) * np.arange(w, dtype=np.float64)

    @classmethod
    def create(cls, width: int, modulators: Sequence[SignalSource]) -> "SceneState":
        return cls(width=width, modulators=tuple(modulators))

    @property
    def offsets(self) -> np.ndarray:
        return self._offsets


def sample_scene(state: SceneState, *, limit: float = POINT_LIMIT) -> np.ndarray:
    """`state.time` における全列の値を再計算し `state.points` へ書き込んで返す。

    各列 i は `clip(Σ root.sample(time + i/width), -limit, limit)`。ルートが無ければ 0。
    """
    times = state.time + state.offsets
    acc = np.zeros(state.width, dtype=np.float64)
    for root in state.modulators:
        acc += root.sample_many(times)
    np.clip(acc, -limit, limit, out=state.points)
    return state.points


__all__ = ["SceneState", "SignalSource", "sample_scene"]
