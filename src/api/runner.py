"""
どこで: `api.runner`（実行ランナー）。
何を: モード（snapshot/continuous）に応じてモジュレータ木・SceneState・ラスタ面・レンダラ・ドライバを結線し、
      pyglet ウィンドウまたはヘッドレスのスケジューラでフレームループを駆動する。
なぜ: 1 関数呼び出しで可視化を起動でき、同じ結線をディスプレイ無しでも再現/検証できるようにするため。

実行フロー（概要）:
1) 設定解決: 引数 > 環境変数（`common.settings`）> `configs/default.yaml`/`config.yaml` > 定数。
2) 状態構築: モード名のプリセット木から `SceneState`、論理サイズの `RasterSurface`、`WaveRenderer`。
3) ドライバ: snapshot は目標 FPS へ間引き、continuous は実経過時間を方向/速度付きで積分。
4) 初回描画: time=0 で 1 回サンプリング/描画してからループを開始する。
5) 駆動:
   - `init_only=True`: ここで返す（pyglet を import しない）。
   - `frames=N`: `ManualScheduler` で 60Hz 相当の N フレームを回し、任意で PNG 保存。
   - それ以外: `ScopeWindow` を開き、`PygletScheduler` で `FrameLoop` を回す。ESC で終了。

例:
    from api import run_scope

    run_scope("continuous")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from engine.core.frame_clock import FrameClock
from engine.core.frame_loop import FrameLoop, LoopHandle, ManualScheduler
from engine.core.scene import SceneState
from engine.core.tickable import Tickable
from engine.render.raster import RasterSurface
from engine.render.renderer import WaveRenderer
from engine.runtime.driver import ContinuousDriver, SnapshotDriver, make_driver, render_scene
from engine.ui.readout import format_time
from modulators import describe_preset, preset
from util.utils import load_config

from .modes import ScopeMode, resolve_mode
from .scope_runner.utils import (
    resolve_canvas_size,
    resolve_colors,
    resolve_margin,
    resolve_readout_style,
    resolve_refresh_rate,
    resolve_target_fps,
)

logger = logging.getLogger(__name__)

# ヘッドレス駆動の既定（60Hz 相当、timebase=0 を避けるため 1 秒から開始）
HEADLESS_STEP_MS = 1000.0 / 60.0
HEADLESS_START_MS = 1000.0


@dataclass
class ScopeSession:
    """結線済みの構成要素一式（テスト/ヘッドレス利用向け）。"""

    mode: ScopeMode
    state: SceneState
    surface: RasterSurface
    renderer: WaveRenderer
    driver: SnapshotDriver | ContinuousDriver
    handle: LoopHandle | None = None
    last_time_text: str | None = None
    output: Path | None = None

    def record_time(self, t: float) -> None:
        self.last_time_text = format_time(t)


def build_session(
    mode: ScopeMode | str = "snapshot",
    *,
    width: int | None = None,
    height: int | None = None,
    target_fps: float | None = None,
    background: object | None = None,
    foreground: object | None = None,
    config: Mapping[str, Any] | None = None,
) -> ScopeSession:
    """設定を解決して ScopeSession を構築し、time=0 で初回描画まで行う。"""
    m = resolve_mode(mode)
    cfg = load_config() if config is None else config
    w, h = resolve_canvas_size(width, height, cfg)
    fps = resolve_target_fps(target_fps if target_fps is not None else m.target_fps, cfg)
    bg, fg = resolve_colors(background, foreground, cfg)

    state = SceneState.create(w, preset(m.name))
    surface = RasterSurface(w, h)
    renderer = WaveRenderer(surface, m.style, background=bg, foreground=fg)
    driver = make_driver(
        m.driver,
        state,
        renderer,
        target_fps=fps,
        refresh_rate=resolve_refresh_rate(cfg),
    )
    session = ScopeSession(mode=m, state=state, surface=surface, renderer=renderer, driver=driver)
    driver.on_time = session.record_time
    render_scene(state, renderer)
    logger.debug("session: mode=%s canvas=%dx%d fps=%s", m.name, w, h, fps)
    logger.debug("preset %s", describe_preset(m.name))
    return session


def run_scope(
    mode: ScopeMode | str = "snapshot",
    *,
    width: int | None = None,
    height: int | None = None,
    target_fps: float | None = None,
    background: object | None = None,
    foreground: object | None = None,
    init_only: bool = False,
    frames: int | None = None,
    output: Path | str | None = None,
) -> ScopeSession:
    """可視化を実行する。

    Parameters
    ----------
    mode : ScopeMode | str, default "snapshot"
        "snapshot"（点描・間引き）または "continuous"（塗り曲線・クリック操作）。
    width, height : int | None
        論理キャンバス [px]。None で設定/既定（320x240）。
    target_fps : float | None
        snapshot の目標レート。None で環境変数/設定/既定（15）。
    background, foreground : 色指定 | None
        CSS `rgb()`/Hex/タプル。None で設定/既定。
    init_only : bool, default False
        True で結線と初回描画のみ行い、ループを開始せずに返す。
    frames : int | None
        指定時はウィンドウを開かず、ヘッドレスで `frames` フレームだけ駆動する。
    output : Path | str | None
        ヘッドレス実行後に最終フレームを PNG 保存する先。

    Returns
    -------
    ScopeSession
        結線済みの構成要素（ループ終了後の状態を含む）。
    """
    cfg = load_config()
    session = build_session(
        mode,
        width=width,
        height=height,
        target_fps=target_fps,
        background=background,
        foreground=foreground,
        config=cfg,
    )
    if init_only:
        return session

    if frames is not None:
        if int(frames) < 0:
            raise ValueError(f"frames must be >= 0, got {frames}")
        return _run_headless(session, int(frames), output)

    _run_window(session, cfg)
    return session


def _run_headless(session: ScopeSession, frames: int, output: Path | str | None) -> ScopeSession:
    scheduler = ManualScheduler()
    loop = FrameLoop(session.driver.tick, scheduler)
    session.handle = loop.start()
    scheduler.run(frames, HEADLESS_STEP_MS, start_ms=HEADLESS_START_MS)
    session.handle.cancel()
    logger.debug("headless run: %d frames, time=%.3f", session.handle.frames, session.state.time)
    if output is not None:
        from .scope_runner.export import save_png

        session.output = save_png(session.surface, output)
    return session


def _run_window(session: ScopeSession, cfg: Mapping[str, Any]) -> None:
    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import pyglet

    from .scope_runner.window import PygletScheduler, bind_events, create_window_and_readout

    font_size, readout_color = resolve_readout_style(cfg)
    window, readout = create_window_and_readout(
        session.surface,
        margin=resolve_margin(cfg),
        background=session.renderer.background,
        readout_font_size=font_size,
        readout_color=readout_color,
    )
    # 時刻の通知先をラベルへ差し替え（表示更新は readout.tick で行う）
    session.driver.on_time = readout.set_time

    tickables: list[Tickable] = [session.driver, readout]
    frame_clock = FrameClock(tickables)
    refresh_rate = resolve_refresh_rate(cfg)
    loop = FrameLoop(frame_clock.tick, PygletScheduler(refresh_rate))

    bind_events(
        window,
        state=session.state,
        surface=session.surface,
        handle_ref=lambda: session.handle,
        interactive=session.mode.interactive,
    )
    readout.set_time(session.state.time)
    session.handle = loop.start()
    pyglet.app.run(interval=1.0 / refresh_rate)


__all__ = ["run_scope", "build_session", "ScopeSession"]
