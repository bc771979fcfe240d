"""
どこで: `api.modes`
何を: 表示モード（ドライバ種別・描画スタイル・入力有無・目標レート）の宣言的な組み合わせ。
なぜ: 2 つの表示バリアントを 1 つのエンジンのパラメータとして扱い、ロジックの重複を避けるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from engine.render.renderer import RenderStyle


@dataclass(frozen=True)
class ScopeMode:
    """表示モード。

    Parameters
    ----------
    name : str
        モード名（プリセット木の名前も兼ねる）。
    driver : str
        "snapshot"（間引き・経過時間スナップショット）または "continuous"（毎フレーム積分）。
    style : RenderStyle
        点描 or 塗り付き曲線。
    interactive : bool
        クリックで時間方向/速度を切り替えるか。
    target_fps : float | None
        snapshot の目標レート（None で設定から解決）。
    """

    name: str
    driver: str
    style: RenderStyle
    interactive: bool = False
    target_fps: float | None = None


SNAPSHOT = ScopeMode(name="snapshot", driver="snapshot", style=RenderStyle.POINTS)
CONTINUOUS = ScopeMode(
    name="continuous", driver="continuous", style=RenderStyle.CURVE, interactive=True
)

_MODES = {m.name: m for m in (SNAPSHOT, CONTINUOUS)}


def resolve_mode(mode: ScopeMode | str) -> ScopeMode:
    """モード名（大文字小文字は無視）または ScopeMode を ScopeMode に解決する。"""
    if isinstance(mode, ScopeMode):
        return mode
    key = str(mode).strip().lower()
    if key not in _MODES:
        allowed = ", ".join(sorted(_MODES))
        raise ValueError(f"invalid mode: {mode}; allowed={allowed}")
    return _MODES[key]


def mode_names() -> list[str]:
    return sorted(_MODES)


__all__ = ["ScopeMode", "SNAPSHOT", "CONTINUOUS", "resolve_mode", "mode_names"]
