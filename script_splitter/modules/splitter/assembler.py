"""出力（HTML/JS）の組み立て"""
from __future__ import annotations

import logging
from typing import Optional

from bs4 import BeautifulSoup

from ...models.result import SplitResult
from ..sourcemap.decoder import format_source_map_comment

logger = logging.getLogger(__name__)


class Assembler:
    """断片テキストと統合マップからJSを、書き換え後の文書からHTMLを作る"""

    def build_js(self, contents: list[str], base64_map: Optional[str] = None) -> str:
        """断片を改行で連結し、マップがあれば末尾にコメントで付ける"""
        parts = list(contents)
        if base64_map:
            parts.append(format_source_map_comment(base64_map))
        return "\n".join(parts)

    def assemble(
        self,
        soup: BeautifulSoup,
        contents: list[str],
        base64_map: Optional[str] = None,
    ) -> SplitResult:
        """SplitResultを生成"""
        js = self.build_js(contents, base64_map)
        html = str(soup)
        logger.debug(f"出力を組み立て: HTML {len(html)}文字, JS {len(js)}文字")
        return SplitResult(html=html, js=js)
