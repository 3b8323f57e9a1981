"""ログ出力モジュール"""
from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..config import get_config


def setup_logger(
    name: str = "script_splitter",
    log_dir: Optional[str | Path] = None,
    log_level: Optional[str] = None,
    console_output: bool = True,
    file_output: bool = False,
) -> logging.Logger:
    """ロガーをセットアップする

    Args:
        name: ロガー名
        log_dir: ログ出力ディレクトリ（file_output時のみ使用）
        log_level: ログレベル（DEBUG, INFO, WARNING, ERROR）
        console_output: コンソール出力を有効にするか
        file_output: ファイル出力を有効にするか

    Returns:
        設定済みのロガー
    """
    if log_level is None:
        log_level = get_config().output.log_level
    level = getattr(logging, log_level.upper(), logging.INFO)

    # ルートロガーも設定（子ロガーに継承）
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # 名前付きロガーを取得
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # 既存のハンドラをクリア
    root_logger.handlers.clear()
    logger.handlers.clear()

    # フォーマッター
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # コンソールハンドラ（ルートロガーに追加）
    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(level)
        root_logger.addHandler(console_handler)

    # ファイルハンドラ（ルートロガーに追加）
    if file_output:
        if log_dir is None:
            base_dir = Path(__file__).parent.parent.parent
            log_dir = base_dir / "output" / "logs"
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d")
        log_file = log_dir / f"split_{timestamp}.log"

        file_handler = logging.FileHandler(
            log_file,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)

    return logger
