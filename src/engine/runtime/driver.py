"""
どこで: `engine.runtime.driver`。
何を: フレームコールバックごとに「時間更新 → 再サンプリング → 描画 → 時刻通知」を行う 2 種のドライバ。
      - SnapshotDriver: 生コールバック数で間引き、起点からの経過時間をそのまま時刻にする（目標レート固定）。
      - ContinuousDriver: 毎コールバック、実経過時間 × 方向 × 速度で時刻を積分する。
なぜ: 2 つの表示モードの違いを時間の進め方だけに局所化し、サンプリング/描画は共通にするため。
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol

import numpy as np

from common.settings import get as _get_settings

from ..core.scene import SceneState, sample_scene

logger = logging.getLogger(__name__)

TimeListener = Callable[[float], None]


class PointsRenderer(Protocol):
    def draw(self, points: np.ndarray) -> None: ...


def advance_time(state: SceneState, elapsed_s: float) -> float:
    """`state.time` を `elapsed_s * time_direction * time_speed` だけ進めて返す。"""
    state.time += float(elapsed_s) * state.time_direction * state.time_speed
    return state.time


def render_scene(state: SceneState, renderer: PointsRenderer) -> None:
    """現在時刻で再サンプリングしてから描画する（順序固定）。"""
    sample_scene(state)
    renderer.draw(state.points)


class _DriverBase:
    def __init__(
        self,
        state: SceneState,
        renderer: PointsRenderer,
        *,
        on_time: TimeListener | None = None,
    ) -> None:
        self.state = state
        self.renderer = renderer
        self.on_time = on_time
        self._debug_frames = bool(_get_settings().DEBUG_FRAMES)
        self.renders = 0

    # Tickable
    def tick(self, now_ms: float) -> None:
        self(now_ms)

    def __call__(self, now_ms: float) -> None:  # pragma: no cover - 抽象
        raise NotImplementedError

    def _render(self) -> None:
        render_scene(self.state, self.renderer)
        self.renders += 1
        if self._debug_frames:
            logger.debug("frame %d: time=%.4f", self.renders, self.state.time)
        if self.on_time is not None:
            self.on_time(self.state.time)


class SnapshotDriver(_DriverBase):
    """`refresh_rate / target_fps` 回に 1 回だけ再描画するスロットル付きドライバ。

    最初のコールバックで `timebase` を記録して戻る。以後、`phase` がしきい値以上なら
    `phase = 0`、`time = (now - timebase) * 0.001` として描画し、毎回 `phase` を 1 進める。
    """

    def __init__(
        self,
        state: SceneState,
        renderer: PointsRenderer,
        *,
        target_fps: float = 15.0,
        refresh_rate: float = 60.0,
        on_time: TimeListener | None = None,
    ) -> None:
        if float(target_fps) <= 0.0:
            raise ValueError(f"target_fps must be > 0, got {target_fps}")
        if float(refresh_rate) <= 0.0:
            raise ValueError(f"refresh_rate must be > 0, got {refresh_rate}")
        super().__init__(state, renderer, on_time=on_time)
        self.threshold = float(refresh_rate) / float(target_fps)

    def __call__(self, now_ms: float) -> None:
        st = self.state
        if st.timebase == 0.0:
            st.timebase = float(now_ms)
            return
        if st.phase >= self.threshold:
            st.phase = 0
            st.time = (float(now_ms) - st.timebase) * 0.001
            self._render()
        st.phase += 1


class ContinuousDriver(_DriverBase):
    """毎コールバック再描画し、実経過時間を方向/速度倍率付きで積分するドライバ。"""

    def __call__(self, now_ms: float) -> None:
        st = self.state
        now = float(now_ms)
        if st.timebase == 0.0:
            st.timebase = now
            return
        elapsed = (now - st.timebase) * 0.001
        st.timebase = now
        advance_time(st, elapsed)
        self._render()


def make_driver(
    kind: str,
    state: SceneState,
    renderer: PointsRenderer,
    *,
    target_fps: float = 15.0,
    refresh_rate: float = 60.0,
    on_time: TimeListener | None = None,
) -> SnapshotDriver | ContinuousDriver:
    """ドライバ種別名（"snapshot"/"continuous"）からドライバを構築する。"""
    logger.debug("driver: %s (target_fps=%s)", kind, target_fps)
    if kind == "snapshot":
        return SnapshotDriver(
            state, renderer, target_fps=target_fps, refresh_rate=refresh_rate, on_time=on_time
        )
    if kind == "continuous":
        return ContinuousDriver(state, renderer, on_time=on_time)
    raise ValueError(f"unknown driver: {kind!r}; allowed=continuous, snapshot")


__all__ = [
    "advance_time",
    "render_scene",
    "SnapshotDriver",
    "ContinuousDriver",
    "make_driver",
    "PointsRenderer",
]
