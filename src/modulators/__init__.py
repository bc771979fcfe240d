"""
どこで: `modulators` パッケージ。
何を: モジュレータ木（周波数/振幅変調のチェーン）とプリセット木を提供。
なぜ: 波形生成の唯一のドメインロジックを、エンジン（描画/駆動）から独立させるため。
"""

from .modulator import IMPLEMENTED_TYPES, Modulator, ModulatorType, modulator
from .presets import continuous_tree, describe_preset, preset, preset_names, snapshot_tree

__all__ = [
    "Modulator",
    "ModulatorType",
    "IMPLEMENTED_TYPES",
    "modulator",
    "preset",
    "preset_names",
    "describe_preset",
    "snapshot_tree",
    "continuous_tree",
]
