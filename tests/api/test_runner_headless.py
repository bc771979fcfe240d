from __future__ import annotations

import numpy as np
import pytest

from api import CONTINUOUS, build_session, run_scope
from api.runner import HEADLESS_START_MS, HEADLESS_STEP_MS
from engine.runtime.driver import ContinuousDriver, SnapshotDriver
from modulators import preset
from util.color import to_u8_rgba


@pytest.mark.smoke
def test_init_only_wires_and_draws_once() -> None:
    session = run_scope(init_only=True)
    assert session.mode.name == "snapshot"
    assert isinstance(session.driver, SnapshotDriver)
    assert session.handle is None
    assert session.renderer.frames_drawn == 1
    assert session.state.points.shape == (320,)
    assert session.surface.buffer.shape == (240, 320, 4)
    assert session.state.modulators == preset("snapshot")


def test_init_only_custom_canvas_and_colors() -> None:
    session = run_scope(
        "continuous",
        width=64,
        height=48,
        background="#000000",
        foreground="#FFFFFF",
        init_only=True,
    )
    assert isinstance(session.driver, ContinuousDriver)
    assert session.state.width == 64
    assert session.surface.buffer.shape == (48, 64, 4)
    # 左上隅は背景
    assert session.surface.pixel(0, 0) == (0, 0, 0, 255)


def test_default_colors_come_from_config() -> None:
    session = build_session("snapshot", config={})
    assert to_u8_rgba(session.renderer.background) == (17, 18, 18, 255)
    assert to_u8_rgba(session.renderer.foreground) == (180, 160, 120, 255)


def test_snapshot_headless_frames_throttle() -> None:
    session = run_scope("snapshot", frames=9)
    assert session.handle is not None
    assert session.handle.frames == 9
    assert session.handle.cancelled
    assert session.driver.renders == 1
    # 6 回目のコールバック（起点から 5 ステップ）で描画
    expected = 5 * HEADLESS_STEP_MS * 0.001
    assert session.state.time == pytest.approx(expected)
    assert session.last_time_text == f"{expected:.2f}"
    assert session.state.timebase == pytest.approx(HEADLESS_START_MS)


def test_continuous_headless_integrates_every_frame() -> None:
    session = run_scope(CONTINUOUS, frames=4)
    assert session.driver.renders == 3
    assert session.state.time == pytest.approx(3 * HEADLESS_STEP_MS * 0.001)
    assert session.last_time_text == "0.05"
    assert np.all(np.abs(session.state.points) <= 0.9)


def test_zero_frames_keeps_initial_state() -> None:
    session = run_scope("continuous", frames=0)
    assert session.handle is not None and session.handle.frames == 0
    assert session.state.time == 0.0
    assert session.last_time_text is None


def test_negative_frames_raises() -> None:
    with pytest.raises(ValueError):
        run_scope(frames=-1)


def test_explicit_fps_sets_throttle() -> None:
    session = build_session("snapshot", target_fps=30, config={})
    assert isinstance(session.driver, SnapshotDriver)
    assert session.driver.threshold == 2.0
    with pytest.raises(ValueError):
        build_session("snapshot", target_fps=0, config={})


def test_env_fps_used_when_not_explicit(monkeypatch: pytest.MonkeyPatch) -> None:
    from common import settings

    monkeypatch.setenv("MODSCOPE_TARGET_FPS", "20")
    settings.reload_from_env()
    session = build_session("snapshot", config={"scope": {"target_fps": 60}})
    assert session.driver.threshold == pytest.approx(3.0)


def test_invalid_mode_raises() -> None:
    with pytest.raises(ValueError):
        run_scope("bars", init_only=True)
