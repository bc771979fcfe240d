"""
どこで: `modulators.modulator`
何を: 時刻 t を入力として有界なスカラー値を返すモジュレータ（発振ノード）と、その木構造評価。
なぜ: 周波数/振幅を別のモジュレータで変調する合成モデルを、描画系から独立した純粋ロジックとして扱うため。

設計方針:
- 純粋・決定的。副作用なし。ノードは生成後に変更不可（frozen）。
- 子ノードは生成時にのみ渡す。既存ノードしか子にできないため閉路は構築できない。
- 位相は `fmod(t * f, 1.0)`（切り捨て剰余）。負の時刻では負の位相になるがそのまま sin へ渡す。
- 波形: sine のみ値を持つ。sawtooth/square は宣言のみで寄与 0（例外にはしない）。
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

logger = logging.getLogger(__name__)

_TWO_PI = 2.0 * math.pi


class ModulatorType(str, Enum):
    """波形種別（閉じた列挙）。"""

    SINE = "sine"
    SAWTOOTH = "sawtooth"
    SQUARE = "square"

    @classmethod
    def parse(cls, value: "ModulatorType | str") -> "ModulatorType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            raise ValueError(f"unknown modulator type: {value!r}; allowed={allowed}") from None


# 値を生成する分岐を持つ波形
IMPLEMENTED_TYPES = frozenset({ModulatorType.SINE})


@dataclass(frozen=True)
class Modulator:
    """モジュレータ（木のノード）。`sample(t)` で瞬時値 × 振幅を返す。

    引数:
        type: 波形種別。
        frequency: 基本周波数 [周期/単位時間]。
        amplitude: 基本振幅（既定 0.8、範囲制約なし）。
        frequency_modulator: 出力で周波数を乗算変調する子ノード。
        amplitude_modulator: 出力で振幅を乗算変調する子ノード。
    """

    type: ModulatorType
    frequency: float
    amplitude: float = 0.8
    frequency_modulator: Optional["Modulator"] = None
    amplitude_modulator: Optional["Modulator"] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", ModulatorType.parse(self.type))
        object.__setattr__(self, "frequency", float(self.frequency))
        object.__setattr__(self, "amplitude", float(self.amplitude))

    # ---- 評価 -----------------------------------------------------------
    def sample(self, time: float) -> float:
        """時刻 `time` を評価して瞬時値を返す（子へは同じ時刻を渡す）。"""
        t = float(time)
        frequency = self.frequency
        amplitude = self.amplitude

        if self.frequency_modulator is not None:
            frequency = frequency * self.frequency_modulator.sample(t)
        if self.amplitude_modulator is not None:
            amplitude = amplitude * self.amplitude_modulator.sample(t)

        phase = math.fmod(t * frequency, 1.0)

        value = 0.0
        if self.type is ModulatorType.SINE:
            value = math.sin(_TWO_PI * phase)

        return value * amplitude

    def sample_many(self, times: np.ndarray) -> np.ndarray:
        """`sample` のベクトル版。各要素について `sample` と同じ値を返す。"""
        t = np.asarray(times, dtype=np.float64)
        frequency: float | np.ndarray = self.frequency
        amplitude: float | np.ndarray = self.amplitude

        if self.frequency_modulator is not None:
            frequency = frequency * self.frequency_modulator.sample_many(t)
        if self.amplitude_modulator is not None:
            amplitude = amplitude * self.amplitude_modulator.sample_many(t)

        phase = np.fmod(t * frequency, 1.0)

        if self.type is ModulatorType.SINE:
            value = np.sin(_TWO_PI * phase)
        else:
            value = np.zeros_like(t)

        return value * amplitude

    def __call__(self, time: float) -> float:
        return self.sample(time)

    # ---- 構造 -----------------------------------------------------------
    @property
    def depth(self) -> int:
        """木の深さ（葉 = 1）。"""
        children = [c.depth for c in (self.frequency_modulator, self.amplitude_modulator) if c]
        return 1 + max(children, default=0)

    def walk(self):
        """自身と全子孫を前順で列挙する（frequency → amplitude の順）。"""
        yield self
        if self.frequency_modulator is not None:
            yield from self.frequency_modulator.walk()
        if self.amplitude_modulator is not None:
            yield from self.amplitude_modulator.walk()


_warned_types: set[ModulatorType] = set()


def modulator(
    type: ModulatorType | str,
    frequency: float,
    amplitude: float = 0.8,
    *,
    fm: Modulator | None = None,
    am: Modulator | None = None,
) -> Modulator:
    """Modulator を構成して返すファクトリ。

    引数:
        type: 波形（"sine"/"sawtooth"/"square"）。
        frequency: 基本周波数。
        amplitude: 基本振幅。
        fm: 周波数変調の子ノード。
        am: 振幅変調の子ノード。

    返り値:
        Modulator: `sample(t: float) -> float` を持つ不変ノード。
    """
    kind = ModulatorType.parse(type)
    if kind not in IMPLEMENTED_TYPES and kind not in _warned_types:
        _warned_types.add(kind)
        logger.warning("modulator type '%s' has no waveform; it contributes 0", kind.value)
    return Modulator(
        type=kind,
        frequency=frequency,
        amplitude=amplitude,
        frequency_modulator=fm,
        amplitude_modulator=am,
    )


__all__ = ["Modulator", "ModulatorType", "IMPLEMENTED_TYPES", "modulator"]
