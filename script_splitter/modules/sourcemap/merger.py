"""断片ごとのソースマップを1つにまとめるモジュール"""
from __future__ import annotations

import logging
from typing import Optional

from ...models.sourcemap import DecodedMap, MappingRecord
from .codec import SourceMapBuilder

logger = logging.getLogger(__name__)


def reproject_mapping(
    mapping: MappingRecord,
    cumulative_output_line: int,
    start_line: int,
    leading_blank_lines: int,
    first_line_column_offset: int,
) -> MappingRecord:
    """断片内のマッピングを連結後のJSの座標に移す

    Args:
        mapping: 埋め込みマップのマッピング（行はHTML上の行）
        cumulative_output_line: この断片より前に出力した行数
        start_line: <script>開始タグの行番号
        leading_blank_lines: 断片先頭の空行数
        first_line_column_offset: 最初の非空行のインデント幅

    Returns:
        連結後の座標に変換したマッピング
    """
    line_in_fragment = mapping.generated_line - start_line
    column = mapping.generated_column
    # インデントを落とすのは最初の行だけ
    if line_in_fragment == 1:
        column -= first_line_column_offset

    return MappingRecord(
        generated_line=cumulative_output_line - leading_blank_lines + line_in_fragment + 1,
        generated_column=column,
        source=mapping.source,
        original_line=mapping.original_line if mapping.has_original else None,
        original_column=mapping.original_column if mapping.has_original else None,
        name=mapping.name or None,
    )


class SourceMapMerger:
    """再投影したマッピングを出現順に積み上げる"""

    def __init__(self, builder: Optional[SourceMapBuilder] = None):
        self.builder = builder or SourceMapBuilder()
        self.has_any_mapping = False

    @property
    def mappings(self) -> list[MappingRecord]:
        return self.builder.mappings

    def merge(
        self,
        source_map: DecodedMap,
        cumulative_output_line: int,
        start_line: int,
        leading_blank_lines: int,
        first_line_column_offset: int,
    ) -> int:
        """1断片分のマッピングを追加

        Returns:
            追加したマッピング数
        """
        count = 0
        for mapping in source_map:
            self.builder.add_mapping(reproject_mapping(
                mapping,
                cumulative_output_line=cumulative_output_line,
                start_line=start_line,
                leading_blank_lines=leading_blank_lines,
                first_line_column_offset=first_line_column_offset,
            ))
            self.has_any_mapping = True
            count += 1

        for source, content in source_map.sources_content.items():
            self.builder.set_source_content(source, content)

        logger.debug(f"マッピングを統合: {count}件 (出力行オフセット {cumulative_output_line})")
        return count

    def encode(self) -> Optional[str]:
        """統合マップをbase64で返す（マッピングがなければNone）"""
        if not self.has_any_mapping:
            return None
        return self.builder.to_base64()
