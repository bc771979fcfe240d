"""
どこで: `util.paths`。
何を: スクリーンショット保存先ディレクトリの生成と、重複しない出力パスの解決。
なぜ: ランタイムから簡潔に保存先を扱え、連続保存でも上書きしないようにするため。
"""

from __future__ import annotations

from pathlib import Path

from .utils import _find_project_root


def ensure_screenshots_dir() -> Path:
    """スクリーンショット出力先 `data/screenshot/` を作成して返す。

    - プロジェクトルート直下に作成する（既存ならそのまま返す）。
    """
    root = _find_project_root(Path(__file__).parent)
    out = root / "data" / "screenshot"
    out.mkdir(parents=True, exist_ok=True)
    return out


def unique_path(path: Path) -> Path:
    """`path` が存在すれば `-1`, `-2`, ... を付けて未使用のパスを返す。"""
    if not path.exists():
        return path
    i = 1
    while True:
        cand = path.with_name(f"{path.stem}-{i}{path.suffix}")
        if not cand.exists():
            return cand
        i += 1


__all__ = ["ensure_screenshots_dir", "unique_path"]
