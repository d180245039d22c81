"""
どこで: `api.cli`（コンソールスクリプト `noise-gallery`）。
何を: 引数を解析してロギングを設定し、スケッチ一覧の表示またはスケッチ起動を行う。
なぜ: ギャラリーをコマンド 1 つで起動/確認できるようにするため。

使用例:
    noise-gallery --list
    noise-gallery --sketch cross_grid --size 600x600
    noise-gallery --sketch terrain_wave --fps 30 --log-level DEBUG
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence, TextIO

from common.logging import setup_default_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="noise-gallery",
        description="ノイズ地形と生成パターンのスケッチギャラリー",
    )
    parser.add_argument("--sketch", default=None, help="起動するスケッチ名（既定は設定ファイル）")
    parser.add_argument("--list", action="store_true", help="スケッチ一覧をグループ別に表示して終了")
    parser.add_argument("--fps", type=int, default=None, help="更新レート（既定は設定ファイル）")
    parser.add_argument("--size", default=None, metavar="WxH", help="ウィンドウサイズ（例: 800x600）")
    parser.add_argument("--log-level", default=None, help="ログレベル（DEBUG/INFO/WARNING/...）")
    parser.add_argument(
        "--init-only", action="store_true", help="設定とスケッチの解決だけ行い、ウィンドウを開かない"
    )
    return parser


def print_sketch_list(out: TextIO | None = None) -> None:
    """登録済みスケッチをグループごとに `name  label` 形式で出力する（既定は標準出力）。"""
    import sketches  # noqa: F401  (登録のための import)
    from sketches.registry import grouped_sketches

    out = out if out is not None else sys.stdout
    for group, infos in grouped_sketches().items():
        out.write(f"[{group}]\n")
        width = max(len(i.name) for i in infos)
        for info in infos:
            out.write(f"  {info.name.ljust(width)}  {info.label}\n")


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_default_logging(args.log_level)

    if args.list:
        print_sketch_list()
        return 0

    from .sketch import run_sketch

    try:
        run_sketch(args.sketch, fps=args.fps, size=args.size, init_only=args.init_only)
    except ValueError as e:
        logger.error("%s", e)
        return 2
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
