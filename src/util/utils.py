"""
どこで: `util.utils`。
何を: YAML 設定の読み込み（既定 → ルート上書き）、プロジェクトルート推定、設定セクションの取り出し。
なぜ: 設定ファイルの欠落/破損で起動を止めず、各層が同じ辞書から値を引けるようにするため。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Sequence

import yaml

logger = logging.getLogger(__name__)

# ルート判定に使う目印
_ROOT_MARKERS = (".git", "pyproject.toml", "configs")

# 読み込み順（後勝ち、トップレベル単位）
CONFIG_FILES: tuple[Path, ...] = (Path("configs") / "default.yaml", Path("config.yaml"))


def _safe_load_yaml(path: Path) -> Dict[str, Any]:
    """YAML をトップレベル辞書として読む。読めない/辞書でない場合は空辞書。"""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.debug("config unreadable: %s (%s)", path, e)
        return {}
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        logger.warning("config ignored (invalid YAML): %s (%s)", path, e)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning(
            "config ignored (top level is %s, not a mapping): %s", type(data).__name__, path
        )
        return {}
    return data


def _find_project_root(start: Path) -> Path:
    """`start` から上へ辿り、目印（.git / pyproject.toml / configs）を持つ最初のディレクトリを返す。

    見つからなければ `start` の 2 つ上（`<repo>/src/util` → `<repo>`）。
    """
    cur = start.resolve()
    for parent in (cur, *cur.parents):
        if any((parent / m).exists() for m in _ROOT_MARKERS):
            return parent
    return cur.parent.parent


def load_config(root: Path | None = None, files: Sequence[Path] = CONFIG_FILES) -> Dict[str, Any]:
    """設定を読み込んで辞書で返す（フェイルソフト）。

    - `files` を順に読み、トップレベルのキー単位で後勝ち上書き（ネストはマージしない）。
    - 存在しない/不正なファイルは飛ばす。すべて無ければ空辞書。
    """
    project_root = root if root is not None else _find_project_root(Path(__file__).parent)
    merged: Dict[str, Any] = {}
    for rel in files:
        path = project_root / rel
        if path.is_file():
            merged.update(_safe_load_yaml(path))
    return merged


def config_section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    """`cfg[name]` が辞書ならそれを、そうでなければ空辞書を返す。"""
    sec = cfg.get(name, {}) if isinstance(cfg, dict) else {}
    return sec if isinstance(sec, dict) else {}


__all__ = ["CONFIG_FILES", "load_config", "config_section"]
