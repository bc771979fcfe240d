"""pyglet 結線（スケジューラ/入力イベント/リサイズ）のディスプレイ不要テスト。

ウィンドウは生成せず、pyglet の `Clock` を手動時刻で回し、イベントハンドラはスタブへ登録させて直接呼ぶ。
"""

from __future__ import annotations

import importlib
from types import SimpleNamespace

import pytest

pyglet = pytest.importorskip("pyglet")
try:
    window_mod = importlib.import_module("api.scope_runner.window")
    render_window = importlib.import_module("engine.core.render_window")
    from pyglet.window import key, mouse
except Exception as e:  # X11/GL ライブラリ不在の環境
    pytest.skip(f"pyglet window unavailable: {e}", allow_module_level=True)

from engine.core.frame_loop import FrameLoop, LoopHandle
from engine.core.scene import SceneState
from engine.io.pointer import FAST_SPEED
from engine.render.raster import RasterSurface
from engine.runtime.driver import SnapshotDriver
from modulators import modulator
from tests._utils.dummies import RecordingRenderer

STEP_S = 0.001


class _ManualTime:
    def __init__(self, start: float = 1.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now


def _pump(clk, t: _ManualTime, seconds: float) -> None:
    """`pyglet.app` と同じ update_time → call_scheduled_functions を 1ms 刻みで回す。"""
    for _ in range(int(round(seconds / STEP_S))):
        t.now += STEP_S
        dt = clk.update_time()
        clk.call_scheduled_functions(dt)


def _scheduler(refresh_rate: float = 60.0):
    t = _ManualTime()
    clk = pyglet.clock.Clock(time_function=t)
    sched = window_mod.PygletScheduler(refresh_rate, clock=lambda: t.now * 1000.0, pyglet_clock=clk)
    return sched, clk, t


# ---- PygletScheduler -----------------------------------------------------
def test_scheduler_fires_once_per_refresh_interval() -> None:
    sched, clk, t = _scheduler(60.0)
    ticks: list[float] = []
    handle = FrameLoop(ticks.append, sched).start()
    _pump(clk, t, 1.0)
    handle.cancel()
    assert 55 <= len(ticks) <= 61
    gaps = [b - a for a, b in zip(ticks, ticks[1:])]
    assert min(gaps) >= 1000.0 / 60.0 - 1e-6


def test_scheduler_does_not_fire_without_time_passing() -> None:
    sched, clk, t = _scheduler(60.0)
    calls: list[float] = []
    sched.request_frame(calls.append)
    for _ in range(100):
        clk.call_scheduled_functions(clk.update_time())
    assert calls == []
    _pump(clk, t, 0.02)
    assert len(calls) == 1


def test_snapshot_mode_renders_at_target_fps_on_pyglet_clock() -> None:
    sched, clk, t = _scheduler(60.0)
    st = SceneState.create(8, [modulator("sine", 0.5, 0.8)])
    rec = RecordingRenderer(st)
    drv = SnapshotDriver(st, rec, target_fps=15, refresh_rate=60)
    handle = FrameLoop(drv, sched).start()
    _pump(clk, t, 1.0)
    handle.cancel()
    assert 12 <= len(rec.frames) <= 16


def test_scheduler_rejects_non_positive_refresh_rate() -> None:
    with pytest.raises(ValueError):
        window_mod.PygletScheduler(0.0)


# ---- bind_events ---------------------------------------------------------
class _StubWindow:
    """`@window.event` で登録されたハンドラを名前で保持する。"""

    def __init__(self) -> None:
        self.handlers: dict[str, object] = {}
        self.closed = False

    def event(self, func):
        self.handlers[func.__name__] = func
        return func

    def close(self) -> None:
        self.closed = True


def _bind(interactive: bool = True, handle: LoopHandle | None = None):
    win = _StubWindow()
    st = SceneState(width=4)
    surface = RasterSurface(4, 4)
    window_mod.bind_events(
        win, state=st, surface=surface, handle_ref=lambda: handle, interactive=interactive
    )
    return win, st, surface


def test_left_click_flips_direction_shift_click_toggles_speed() -> None:
    win, st, _ = _bind()
    press = win.handlers["on_mouse_press"]
    press(0, 0, mouse.LEFT, 0)
    assert (st.time_direction, st.time_speed) == (-1, 1)
    press(0, 0, mouse.LEFT, key.MOD_SHIFT)
    assert (st.time_direction, st.time_speed) == (-1, FAST_SPEED)
    press(0, 0, mouse.LEFT, key.MOD_SHIFT | key.MOD_CTRL)
    assert st.time_speed == 1


def test_non_primary_buttons_are_ignored() -> None:
    win, st, _ = _bind()
    win.handlers["on_mouse_press"](0, 0, mouse.RIGHT, key.MOD_SHIFT)
    win.handlers["on_mouse_press"](0, 0, mouse.MIDDLE, 0)
    assert (st.time_direction, st.time_speed) == (1, 1)


def test_snapshot_mode_has_no_click_handler() -> None:
    win, _, _ = _bind(interactive=False)
    assert "on_mouse_press" not in win.handlers


def test_escape_closes_and_p_saves(monkeypatch: pytest.MonkeyPatch) -> None:
    saved: list[RasterSurface] = []
    monkeypatch.setattr(window_mod, "save_png", lambda s: saved.append(s))
    win, _, surface = _bind()
    assert win.handlers["on_key_press"](key.ESCAPE, 0) == pyglet.event.EVENT_HANDLED
    assert win.closed
    win.handlers["on_key_press"](key.P, 0)
    assert saved == [surface]


def test_save_failure_is_logged(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    def _fail(_s):
        raise OSError("disk full")

    monkeypatch.setattr(window_mod, "save_png", _fail)
    win, _, _ = _bind()
    with caplog.at_level("ERROR", logger=window_mod.__name__):
        win.handlers["on_key_press"](key.P, 0)
    assert "disk full" in caplog.text


def test_close_cancels_loop_and_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    exits: list[bool] = []
    monkeypatch.setattr(pyglet.app, "exit", lambda: exits.append(True))
    handle = LoopHandle()
    win, _, _ = _bind(handle=handle)
    win.handlers["on_close"]()
    assert handle.cancelled
    assert exits == [True]


# ---- ScopeWindow.refit ---------------------------------------------------
def test_refit_recomputes_viewport_on_resize() -> None:
    stub = SimpleNamespace(_logical=(320, 240), _margin=(80, 160), _viewport=None)
    vp = render_window.ScopeWindow.refit(stub, 1200, 900)
    assert (vp.scale, vp.display_width, vp.display_height) == (3, 960, 720)
    assert stub._viewport == vp
    small = render_window.ScopeWindow.refit(stub, 300, 200)
    assert small.is_empty
    assert stub._viewport == small
