"""分離結果のファイル出力モジュール"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from ..config import get_config
from ..models.result import SplitResult

logger = logging.getLogger(__name__)


def relative_script_path(html_path: str | Path, js_path: str | Path) -> str:
    """HTMLの置き場所から見たJSの相対パス（/区切り）"""
    html_dir = Path(html_path).resolve().parent
    relative = os.path.relpath(Path(js_path).resolve(), html_dir)
    return Path(relative).as_posix()


class SplitFileWriter:
    """HTMLとJSをファイルに書き出す"""

    def __init__(
        self,
        html_encoding: Optional[str] = None,
        js_encoding: Optional[str] = None,
    ):
        config = get_config()
        self.html_encoding = html_encoding or config.output.html_encoding
        self.js_encoding = js_encoding or config.output.js_encoding

    def write(
        self,
        result: SplitResult,
        html_path: str | Path,
        js_path: str | Path,
    ) -> tuple[Path, Path]:
        """HTMLとJSを書き出す（JSは空でも書き出す）

        Args:
            result: 分離結果
            html_path: HTML出力先
            js_path: JS出力先

        Returns:
            (HTMLパス, JSパス)
        """
        html_path = Path(html_path)
        js_path = Path(js_path)

        for path in (html_path, js_path):
            path.parent.mkdir(parents=True, exist_ok=True)

        with open(html_path, "w", encoding=self.html_encoding, newline="") as f:
            f.write(result.html)
        logger.info(f"HTML出力: {html_path}")

        with open(js_path, "w", encoding=self.js_encoding, newline="") as f:
            f.write(result.js)
        logger.info(f"JS出力: {js_path}")

        return html_path, js_path
