"""
どこで: `modulators.presets`
何を: 各表示モードに対応する固定のモジュレータ木（ルート列）を構築する。
なぜ: 木の形はセッション中不変なので、生成を一箇所に集めてランナー/テストから同じ形を参照するため。
"""

from __future__ import annotations

from typing import Callable

from .modulator import Modulator, modulator


def snapshot_tree() -> tuple[Modulator, ...]:
    """点描モード用: 振幅/周波数をそれぞれ低速 sine で変調した単一ルート。"""
    root = modulator(
        "sine",
        0.5,
        0.8,
        am=modulator("sine", 0.4, 0.5),
        fm=modulator("sine", 0.2, 0.5),
    )
    return (root,)


def continuous_tree() -> tuple[Modulator, ...]:
    """曲線モード用: 2 ルートの和。ピークでは ±0.9 のクランプに達する。"""
    carrier = modulator(
        "sine",
        0.8,
        0.6,
        fm=modulator("sine", 0.05, 0.5, am=modulator("sine", 0.01, 0.8)),
    )
    swell = modulator(
        "sine",
        0.3,
        0.5,
        am=modulator("sine", 0.1, 0.8),
    )
    return (carrier, swell)


_PRESETS: dict[str, Callable[[], tuple[Modulator, ...]]] = {
    "snapshot": snapshot_tree,
    "continuous": continuous_tree,
}


def preset(name: str) -> tuple[Modulator, ...]:
    """名前（モード名）からプリセット木を新規構築して返す。"""
    key = str(name).strip().lower()
    try:
        factory = _PRESETS[key]
    except KeyError:
        allowed = ", ".join(sorted(_PRESETS))
        raise ValueError(f"unknown preset: {name!r}; allowed={allowed}") from None
    return factory()


def preset_names() -> list[str]:
    return sorted(_PRESETS)


def describe_preset(name: str) -> str:
    """プリセット木の要約（例: "snapshot: 1 root, 3 nodes, depth 2"）。"""
    roots = preset(name)
    nodes = sum(1 for r in roots for _ in r.walk())
    depth = max(r.depth for r in roots)
    plural = "root" if len(roots) == 1 else "roots"
    return f"{str(name).strip().lower()}: {len(roots)} {plural}, {nodes} nodes, depth {depth}"


__all__ = ["snapshot_tree", "continuous_tree", "preset", "preset_names", "describe_preset"]
