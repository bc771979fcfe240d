"""
どこで: `api.scope_runner.window`
何を: ScopeWindow/TimeReadout の生成、pyglet クロック上のフレームスケジューラ、マウス/キー入力の結線。
なぜ: `api.runner` から pyglet 依存を分離し、ヘッドレス経路では一切 import しないようにするため。
"""

from __future__ import annotations

import logging
from typing import Callable

import pyglet
from pyglet.window import key, mouse

from engine.core.frame_clock import host_clock_ms
from engine.core.frame_loop import FrameCallback, LoopHandle
from engine.core.render_window import ScopeWindow
from engine.core.scene import SceneState
from engine.io.pointer import apply_click
from engine.render.raster import RasterSurface
from engine.ui.readout import TimeReadout
from util.constants import REFRESH_RATE

from .export import save_png

logger = logging.getLogger(__name__)

# pyglet のボタン定数 → 主ボタン=0 の番号
_BUTTON_INDEX = {mouse.LEFT: 0, mouse.MIDDLE: 1, mouse.RIGHT: 2}


class PygletScheduler:
    """pyglet クロック上で、要求から 1 リフレッシュ間隔（`1 / refresh_rate` 秒）後にコールバックを 1 回実行する。

    `pyglet.app.run(interval=1 / refresh_rate)` の再描画と同じ周期でフレームが進む。
    遅延は常に 1 リフレッシュ間隔で、0（イベントループ毎周回）にはしない。
    """

    def __init__(
        self,
        refresh_rate: float = float(REFRESH_RATE),
        *,
        clock: Callable[[], float] = host_clock_ms,
        pyglet_clock: pyglet.clock.Clock | None = None,
    ) -> None:
        if not refresh_rate > 0:
            raise ValueError(f"refresh_rate must be > 0, got {refresh_rate}")
        self.interval = 1.0 / float(refresh_rate)
        self._clock = clock
        self._pyglet_clock = pyglet_clock if pyglet_clock is not None else pyglet.clock.get_default()

    def request_frame(self, callback: FrameCallback) -> None:
        self._pyglet_clock.schedule_once(lambda _dt: callback(self._clock()), self.interval)


def create_window_and_readout(
    surface: RasterSurface,
    *,
    margin: tuple[int, int],
    background: tuple[float, float, float, float],
    readout_font_size: int,
    readout_color: tuple[int, int, int, int],
) -> tuple[ScopeWindow, TimeReadout]:
    """ウィンドウと時刻表示を生成して結線済みで返す。"""
    window = ScopeWindow(
        surface.width,
        surface.height,
        frame_source=surface.to_bytes,
        margin=margin,
        bg_color=background,
    )
    readout = TimeReadout(window, font_size=readout_font_size, color=readout_color)
    window.add_draw_callback(readout.draw)
    return window, readout


def bind_events(
    window: ScopeWindow,
    *,
    state: SceneState,
    surface: RasterSurface,
    handle_ref: Callable[[], LoopHandle | None],
    interactive: bool,
) -> None:
    """キー（ESC/P）、クリック（interactive 時のみ）、クローズの各イベントを登録する。"""

    @window.event
    def on_key_press(sym, mods):  # noqa: ANN001
        if sym == key.ESCAPE:
            window.close()
            return pyglet.event.EVENT_HANDLED
        if sym == key.P:
            try:
                save_png(surface)
            except OSError as e:
                logger.error("failed to save PNG: %s", e)
        return None

    if interactive:

        @window.event
        def on_mouse_press(x, y, button, modifiers):  # noqa: ANN001
            idx = _BUTTON_INDEX.get(button)
            if idx is None:
                return
            apply_click(state, idx, shift=bool(modifiers & key.MOD_SHIFT))

    @window.event
    def on_close():  # noqa: ANN001
        handle = handle_ref()
        if handle is not None:
            handle.cancel()
        pyglet.app.exit()


__all__ = ["PygletScheduler", "create_window_and_readout", "bind_events"]
