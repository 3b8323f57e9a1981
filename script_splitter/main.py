"""インラインスクリプト分離ツール メインモジュール"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from .config import get_config, reload_config
from .modules.splitter.pipeline import InlineScriptSplitter
from .output.file_writer import SplitFileWriter, relative_script_path
from .output.logger import setup_logger

logger = logging.getLogger(__name__)


def _str_to_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("true", "yes", "1", "on"):
        return True
    if lowered in ("false", "no", "0", "off"):
        return False
    raise argparse.ArgumentTypeError(f"true/false を指定してください: {value!r}")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """コマンドライン引数をパース"""
    parser = argparse.ArgumentParser(
        description="HTML内のインラインスクリプトを外部JSファイルに分離",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用例:
  python -m script_splitter.main --source index.html --html out/index.html
  python -m script_splitter.main -s index.html --html out/index.html --js out/app.js
  python -m script_splitter.main -s index.html --html out/index.html --script-in-head false
        """,
    )

    parser.add_argument(
        "--source", "-s",
        type=str,
        required=True,
        help="入力HTMLファイル",
    )

    parser.add_argument(
        "--html",
        type=str,
        required=True,
        help="出力HTMLファイル",
    )

    parser.add_argument(
        "--js",
        type=str,
        default=None,
        help="出力JSファイル（デフォルト: --htmlの拡張子を.jsにしたもの）",
    )

    parser.add_argument(
        "--script-in-head",
        type=_str_to_bool,
        default=None,
        metavar="{true,false}",
        help="<head>先頭にdefer付きで挿入する（false: <body>末尾、デフォルト: true）",
    )

    parser.add_argument(
        "--only-split",
        action="store_true",
        help="外部スクリプト参照を挿入せず、分離だけ行う",
    )

    parser.add_argument(
        "--always-write-script",
        action="store_true",
        help="インラインスクリプトがなくても外部スクリプト参照を挿入する",
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="設定ファイルパス",
    )

    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        help="ログファイルの出力ディレクトリ（指定時のみファイルにも出力）",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="詳細ログを出力",
    )

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    """メイン関数"""
    args = parse_args(argv)

    config = reload_config(args.config) if args.config else get_config()

    # ロガーをセットアップ
    log_level = "DEBUG" if args.verbose else config.output.log_level
    setup_logger(
        log_level=log_level,
        log_dir=args.log_dir,
        file_output=args.log_dir is not None,
    )

    html_path = Path(args.html)
    js_path = Path(args.js) if args.js else html_path.with_suffix(".js")

    # コマンドライン引数で設定を上書き
    split_config = replace(
        config.split,
        js_file_name=relative_script_path(html_path, js_path),
    )
    if args.script_in_head is not None:
        split_config = replace(split_config, script_in_head=args.script_in_head)
    if args.only_split:
        split_config = replace(split_config, only_split=True)
    if args.always_write_script:
        split_config = replace(split_config, always_write_script=True)

    try:
        source = Path(args.source).read_text(encoding=config.output.html_encoding)
        result = InlineScriptSplitter(split_config).split(source)
        SplitFileWriter().write(result, html_path, js_path)
    except (OSError, ValueError) as e:
        logger.error(f"分離に失敗しました: {e}")
        return 1

    return 0


def run():
    """エントリーポイント"""
    sys.exit(main())


if __name__ == "__main__":
    run()
