"""ソースマップのデータモデル"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class MappingRecord:
    """1件のマッピング

    Attributes:
        generated_line: 生成側の行（1始まり）
        generated_column: 生成側の列（0始まり）
        source: 元ファイル名
        original_line: 元の行（1始まり）
        original_column: 元の列（0始まり）
        name: シンボル名
    """
    generated_line: int
    generated_column: int
    source: Optional[str] = None
    original_line: Optional[int] = None
    original_column: Optional[int] = None
    name: Optional[str] = None

    def __post_init__(self):
        # 元の位置は行・列のペアでのみ持つ
        if (self.original_line is None) != (self.original_column is None):
            raise ValueError(
                "original_line と original_column は両方指定するか両方省略してください"
            )

    @property
    def has_original(self) -> bool:
        """元の位置を持つかどうか"""
        return self.original_line is not None


@dataclass
class DecodedMap:
    """デコード済みソースマップ

    Attributes:
        mappings: 生成位置順のマッピング
        sources_content: ソース名 → ソース本文
    """
    mappings: list[MappingRecord] = field(default_factory=list)
    sources_content: dict[str, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.mappings)

    def __iter__(self):
        return iter(self.mappings)
