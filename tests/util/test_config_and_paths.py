from __future__ import annotations

from pathlib import Path

from util.utils import _find_project_root, config_section, load_config
from util.paths import unique_path


def test_load_config_missing_files_returns_empty(tmp_path: Path) -> None:
    assert load_config(root=tmp_path) == {}


def test_load_config_root_overrides_default_top_level(tmp_path: Path) -> None:
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text(
        "canvas:\n  width: 320\n  height: 240\nscope:\n  target_fps: 15\n", encoding="utf-8"
    )
    (tmp_path / "config.yaml").write_text("scope:\n  refresh_rate: 120\n", encoding="utf-8")
    cfg = load_config(root=tmp_path)
    assert cfg["canvas"] == {"width": 320, "height": 240}
    # トップレベルのみ上書き（scope はまるごと置換）
    assert cfg["scope"] == {"refresh_rate": 120}


def test_load_config_broken_yaml_is_fail_soft(tmp_path: Path) -> None:
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("canvas: [unclosed\n", encoding="utf-8")
    assert load_config(root=tmp_path) == {}


def test_load_config_non_mapping_is_ignored(tmp_path: Path) -> None:
    (tmp_path / "config.yaml").write_text("- 1\n- 2\n", encoding="utf-8")
    assert load_config(root=tmp_path) == {}


def test_config_section_tolerates_bad_shapes() -> None:
    assert config_section({"scope": {"a": 1}}, "scope") == {"a": 1}
    assert config_section({"scope": 3}, "scope") == {}
    assert config_section({}, "scope") == {}


def test_find_project_root_prefers_marker(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("", encoding="utf-8")
    nested = tmp_path / "src" / "util"
    nested.mkdir(parents=True)
    assert _find_project_root(nested) == tmp_path.resolve()


def test_unique_path_appends_counter(tmp_path: Path) -> None:
    p = tmp_path / "frame.png"
    assert unique_path(p) == p
    p.write_bytes(b"")
    assert unique_path(p) == tmp_path / "frame-1.png"
    (tmp_path / "frame-1.png").write_bytes(b"")
    assert unique_path(p) == tmp_path / "frame-2.png"
