"""
どこで: `api.cli`（`modscope` コンソールスクリプト）。
何を: argparse でモード/目標 FPS/ヘッドレス駆動/出力先/ログレベルを受け取り `run_scope` を呼ぶ。
なぜ: インストール後に 1 コマンドで可視化/オフライン描画を実行できるようにするため。
"""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

from common.logging import setup_default_logging
from modulators import describe_preset, preset_names

from .modes import mode_names

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="modscope",
        description="Animated waveform driven by a tree of frequency/amplitude modulators.",
        epilog="presets:\n" + "\n".join(f"  {describe_preset(n)}" for n in preset_names()),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--mode", choices=mode_names(), default="snapshot", help="表示モード")
    p.add_argument("--fps", type=float, default=None, help="snapshot の目標 FPS（>0）")
    p.add_argument(
        "--frames",
        type=int,
        default=None,
        help="ウィンドウを開かずに N フレームだけ駆動する（ヘッドレス）",
    )
    p.add_argument("--output", default=None, help="ヘッドレス実行後の PNG 保存先")
    p.add_argument("--log-level", default=None, help="DEBUG/INFO/WARNING/ERROR")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.fps is not None and args.fps <= 0:
        parser.error("--fps must be > 0")
    if args.frames is not None and args.frames < 0:
        parser.error("--frames must be >= 0")
    if args.output is not None and args.frames is None:
        parser.error("--output requires --frames")

    setup_default_logging(args.log_level)

    from .runner import run_scope

    session = run_scope(
        args.mode,
        target_fps=args.fps,
        frames=args.frames,
        output=args.output,
    )
    if args.frames is not None:
        logger.info(
            "%s: %d frames, time=%s",
            session.mode.name,
            session.handle.frames if session.handle is not None else 0,
            session.last_time_text or "0.00",
        )
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
