"""スクリプト断片の正規化と出力行オフセットの管理"""
from __future__ import annotations

import logging
import re
from typing import Optional

from ...models.fragment import Fragment
from ...models.sourcemap import DecodedMap
from ..sourcemap.decoder import EmbeddedMapDecoder

logger = logging.getLogger(__name__)

# 最終行がこれに当たればセミコロンを補わない
#   行コメントを含む / ; で終わる / */ で終わる
NO_SEMICOLON_INSERTION_RE = re.compile(r"//|;\s*$|\*/\s*$")

_LEADING_WHITESPACE_RE = re.compile(r"^\s*")


def measure_leading_blank_lines(text: str) -> tuple[int, int]:
    """先頭の空行数と、最初の非空行のインデント幅を返す"""
    leading_blank_lines = 0
    first_line_column_offset = 0
    for line in text.split("\n"):
        if not line.strip():
            leading_blank_lines += 1
            continue
        first_line_column_offset = len(_LEADING_WHITESPACE_RE.match(line).group(0))
        break
    return leading_blank_lines, first_line_column_offset


def needs_semicolon(text: str) -> bool:
    """最終行に文末のセミコロン補完が必要か

    最終行だけを見る簡易判定。複数行のテンプレート文字列などでは誤判定しうる。
    """
    last_line = text.split("\n")[-1]
    return NO_SEMICOLON_INSERTION_RE.search(last_line) is None


class OffsetTracker:
    """連結後のJSで何行目まで出力したかを保持する"""

    def __init__(self):
        self.cumulative_output_line = 0

    def advance(self, line_count: int) -> None:
        """断片の行数分進める"""
        self.cumulative_output_line += line_count


class FragmentNormalizer:
    """<script>のテキストを出力用の断片に整える"""

    def __init__(self, decoder: Optional[EmbeddedMapDecoder] = None):
        self.decoder = decoder or EmbeddedMapDecoder()

    def normalize(self, raw_text: str, start_line: Optional[int] = None) -> Fragment:
        """テキストを断片に変換

        Args:
            raw_text: <script>の生テキスト
            start_line: 開始タグの行番号

        Returns:
            Fragment

        Raises:
            SourceMapError: 埋め込みソースマップが不正な場合
        """
        leading_blank_lines, first_line_column_offset = measure_leading_blank_lines(raw_text)

        decoded = self.decoder.decode(raw_text)
        embedded_map: Optional[DecodedMap] = decoded.source_map
        trimmed_text = decoded.text.strip()

        final_text = trimmed_text
        if needs_semicolon(trimmed_text):
            final_text += ";"

        fragment = Fragment(
            raw_text=raw_text,
            trimmed_text=trimmed_text,
            final_text=final_text,
            line_count=len(trimmed_text.split("\n")),
            leading_blank_lines=leading_blank_lines,
            first_line_column_offset=first_line_column_offset,
            start_line=start_line,
            embedded_map=embedded_map,
        )

        logger.debug(
            f"断片を正規化: {fragment.line_count}行 "
            f"(先頭空行 {leading_blank_lines}, インデント {first_line_column_offset}, "
            f"マップ {'あり' if fragment.has_map else 'なし'})"
        )
        return fragment
