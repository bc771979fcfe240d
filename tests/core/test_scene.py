from __future__ import annotations

import numpy as np
import pytest

from engine.core.scene import SceneState, sample_scene
from modulators import Modulator, modulator
from tests._utils.dummies import Constant


def test_state_defaults_and_buffer_length() -> None:
    st = SceneState(width=320)
    assert st.points.shape == (320,)
    assert st.points.dtype == np.float64
    assert (st.time, st.timebase, st.phase) == (0.0, 0.0, 0)
    assert (st.time_direction, st.time_speed) == (1, 1)


@pytest.mark.parametrize("width", [0, -3])
def test_non_positive_width_raises(width: int) -> None:
    with pytest.raises(ValueError):
        SceneState(width=width)


def test_offsets_are_column_fractions() -> None:
    st = SceneState(width=4)
    assert np.allclose(st.offsets, [0.0, 0.25, 0.5, 0.75])


def test_sample_scene_writes_in_place(small_state: SceneState, snapshot_root: Modulator) -> None:
    buf = small_state.points
    small_state.time = 0.3
    out = sample_scene(small_state)
    assert out is buf
    assert small_state.points is buf
    assert small_state.points.shape == (16,)
    expected = [snapshot_root.sample(0.3 + i / 16) for i in range(16)]
    assert np.allclose(out, expected, atol=1e-12)


def test_sample_scene_sums_roots() -> None:
    a = modulator("sine", 0.5, 0.3)
    b = modulator("sine", 0.25, 0.2)
    st = SceneState.create(8, [a, b])
    st.time = 1.1
    out = sample_scene(st)
    expected = [a.sample(1.1 + i / 8) + b.sample(1.1 + i / 8) for i in range(8)]
    assert np.allclose(out, expected, atol=1e-12)


def test_sample_scene_clamps_sum() -> None:
    st = SceneState.create(5, [Constant(0.7), Constant(0.7)])
    assert np.allclose(sample_scene(st), 0.9)
    st2 = SceneState.create(5, [Constant(-2.0)])
    assert np.allclose(sample_scene(st2), -0.9)


def test_sample_scene_custom_limit() -> None:
    st = SceneState.create(3, [Constant(0.8)])
    assert np.allclose(sample_scene(st, limit=0.5), 0.5)


def test_no_roots_gives_flat_zero_line() -> None:
    st = SceneState(width=6)
    st.points[:] = 1.0
    assert np.all(sample_scene(st) == 0.0)


def test_repeated_sampling_keeps_length(small_state: SceneState) -> None:
    for k in range(10):
        small_state.time = k * 0.37
        sample_scene(small_state)
        assert small_state.points.shape == (16,)
        assert np.all(np.abs(small_state.points) <= 0.9)
