from __future__ import annotations

import logging

import pytest

from api.scope_runner.utils import (
    resolve_canvas_size,
    resolve_colors,
    resolve_margin,
    resolve_readout_style,
    resolve_refresh_rate,
    resolve_target_fps,
)
from util.color import normalize_color


def test_target_fps_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    from common import settings

    cfg = {"scope": {"target_fps": 24}}
    assert resolve_target_fps(None, {}) == 15.0
    assert resolve_target_fps(None, cfg) == 24.0
    assert resolve_target_fps(10, cfg) == 10.0
    monkeypatch.setenv("MODSCOPE_TARGET_FPS", "50")
    settings.reload_from_env()
    assert resolve_target_fps(None, cfg) == 50.0
    assert resolve_target_fps(10, cfg) == 10.0


@pytest.mark.parametrize("bad", [0, -5, "x"])
def test_target_fps_invalid_explicit(bad: object) -> None:
    with pytest.raises(ValueError):
        resolve_target_fps(bad, {})  # type: ignore[arg-type]


def test_target_fps_invalid_config_falls_back() -> None:
    assert resolve_target_fps(None, {"scope": {"target_fps": -1}}) == 15.0
    assert resolve_target_fps(None, {"scope": "oops"}) == 15.0


def test_refresh_rate() -> None:
    assert resolve_refresh_rate({}) == 60.0
    assert resolve_refresh_rate({"scope": {"refresh_rate": 144}}) == 144.0


def test_canvas_size() -> None:
    assert resolve_canvas_size(None, None, {}) == (320, 240)
    assert resolve_canvas_size(None, None, {"canvas": {"width": 100, "height": 50}}) == (100, 50)
    assert resolve_canvas_size(64, None, {"canvas": {"width": 100, "height": 50}}) == (64, 50)
    with pytest.raises(ValueError):
        resolve_canvas_size(0, 10, {})
    with pytest.raises(ValueError):
        resolve_canvas_size("wide", 10, {})  # type: ignore[arg-type]


def test_colors_explicit_config_and_invalid(caplog: pytest.LogCaptureFixture) -> None:
    bg, fg = resolve_colors("#000000", None, {"canvas": {"foreground_color": "#FFFFFF"}})
    assert bg == (0.0, 0.0, 0.0, 1.0)
    assert fg == (1.0, 1.0, 1.0, 1.0)
    with caplog.at_level(logging.WARNING):
        bg2, _ = resolve_colors(None, None, {"canvas": {"background_color": "nope"}})
    assert bg2 == normalize_color("rgb(17, 18, 18)")
    assert any("background_color" in r.getMessage() for r in caplog.records)


def test_colors_explicit_invalid_raises() -> None:
    with pytest.raises(ValueError):
        resolve_colors("nope", None, {})


def test_margin_and_readout() -> None:
    assert resolve_margin({}) == (80, 160)
    assert resolve_margin({"viewport": {"margin_x": 10, "margin_y": 20}}) == (10, 20)
    assert resolve_margin({"viewport": {"margin_x": "a"}}) == (80, 160)
    size, color = resolve_readout_style({"readout": {"font_size": 14, "color": "#FFFFFF"}})
    assert (size, color) == (14, (255, 255, 255, 255))
    assert resolve_readout_style({"readout": {"font_size": "big", "color": "bad"}}) == (
        10,
        (180, 160, 120, 255),
    )
