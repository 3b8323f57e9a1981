"""スクリプト断片のデータモデル"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .sourcemap import DecodedMap


@dataclass
class Fragment:
    """1つのインラインスクリプトから得た断片

    Attributes:
        raw_text: <script>のテキストそのまま
        trimmed_text: マップコメント除去・前後空白除去後のテキスト
        final_text: 文末セミコロン補完後のテキスト（JSに出力される）
        line_count: trimmed_textの行数
        leading_blank_lines: 先頭の空行数
        first_line_column_offset: 最初の非空行のインデント幅
        start_line: 開始タグの行番号（1始まり、不明ならNone）
        embedded_map: 埋め込みソースマップ
    """
    raw_text: str
    trimmed_text: str
    final_text: str
    line_count: int
    leading_blank_lines: int = 0
    first_line_column_offset: int = 0
    start_line: Optional[int] = None
    embedded_map: Optional[DecodedMap] = None

    @property
    def has_map(self) -> bool:
        """埋め込みソースマップを持つかどうか"""
        return self.embedded_map is not None
