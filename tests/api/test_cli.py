from __future__ import annotations

import pytest

from api.cli import build_parser, main


def test_parser_defaults() -> None:
    args = build_parser().parse_args([])
    assert args.mode == "snapshot"
    assert args.fps is None and args.frames is None and args.output is None


@pytest.mark.smoke
@pytest.mark.parametrize("mode", ["snapshot", "continuous"])
def test_headless_run_returns_zero(mode: str) -> None:
    assert main(["--mode", mode, "--frames", "5"]) == 0


@pytest.mark.parametrize(
    "argv",
    [
        ["--mode", "bars"],
        ["--fps", "0"],
        ["--fps", "-2"],
        ["--frames", "-1"],
        ["--output", "out.png"],
    ],
)
def test_invalid_arguments_exit_with_usage_error(argv: list[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 2


def test_help_lists_presets(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--help"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "snapshot: 1 root, 3 nodes, depth 2" in out
    assert "continuous: 2 roots, 5 nodes, depth 3" in out
