"""ソースマップv3の読み込み・生成モジュール"""
from __future__ import annotations

import base64
import json
import logging
from typing import Any, Optional

from ...models.sourcemap import DecodedMap, MappingRecord
from .errors import SourceMapError
from .vlq import decode_vlq, encode_segment

logger = logging.getLogger(__name__)

SOURCE_MAP_VERSION = 3


def _join_source_root(source_root: Optional[str], source: Optional[str]) -> str:
    """sourceRootとソース名を連結"""
    if source is None:
        source = ""
    if not source_root:
        return source
    if source_root.endswith("/"):
        return source_root + source
    return f"{source_root}/{source}"


def _load_json(data: str | bytes | dict) -> dict[str, Any]:
    """JSONテキストまたは辞書をソースマップ辞書として返す"""
    if isinstance(data, dict):
        return data
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SourceMapError(f"ソースマップがUTF-8ではありません: {e}") from e
    # XSSI対策のプレフィックス
    if data.startswith(")]}'"):
        data = data.split("\n", 1)[1] if "\n" in data else ""
    try:
        parsed = json.loads(data)
    except json.JSONDecodeError as e:
        raise SourceMapError(f"ソースマップのJSONが不正です: {e}") from e
    if not isinstance(parsed, dict):
        raise SourceMapError("ソースマップのJSONがオブジェクトではありません")
    return parsed


def parse_source_map(data: str | bytes | dict) -> DecodedMap:
    """ソースマップv3をデコード

    Args:
        data: ソースマップのJSONテキスト / バイト列 / 辞書

    Returns:
        生成位置順に並んだマッピング（行は1始まり、列は0始まり）

    Raises:
        SourceMapError: フォーマットが不正な場合
    """
    smap = _load_json(data)

    if "sections" in smap:
        raise SourceMapError("インデックス形式のソースマップには対応していません")

    version = smap.get("version")
    if version != SOURCE_MAP_VERSION:
        raise SourceMapError(f"未対応のソースマップバージョン: {version}")

    source_root = smap.get("sourceRoot")
    sources = [_join_source_root(source_root, s) for s in smap.get("sources", [])]
    names = smap.get("names", [])
    mappings = smap.get("mappings", "")
    if not isinstance(mappings, str):
        raise SourceMapError("mappings が文字列ではありません")

    sources_content: dict[str, str] = {}
    for source, content in zip(sources, smap.get("sourcesContent") or []):
        if content is not None:
            sources_content[source] = content

    records: list[MappingRecord] = []
    src_id, src_line, src_col, name_id = 0, 0, 0, 0
    for dst_line, line in enumerate(mappings.split(";")):
        dst_col = 0
        for segment in line.split(","):
            if not segment:
                continue
            parsed = decode_vlq(segment)
            if len(parsed) == 2:
                raise SourceMapError("ソースはあるが行・列がないセグメントです")
            if len(parsed) == 3:
                raise SourceMapError("ソースと行はあるが列がないセグメントです")

            dst_col += parsed[0]

            source = None
            original_line = None
            original_column = None
            name = None
            if len(parsed) > 1:
                src_id += parsed[1]
                src_line += parsed[2]
                src_col += parsed[3]
                try:
                    source = sources[src_id]
                except IndexError:
                    raise SourceMapError(f"存在しないソース番号です: {src_id}") from None
                original_line = src_line + 1
                original_column = src_col

                if len(parsed) > 4:
                    name_id += parsed[4]
                    try:
                        name = names[name_id]
                    except IndexError:
                        raise SourceMapError(f"存在しない名前番号です: {name_id}") from None

            records.append(MappingRecord(
                generated_line=dst_line + 1,
                generated_column=dst_col,
                source=source,
                original_line=original_line,
                original_column=original_column,
                name=name,
            ))

    # 同一行内の列順を保証（安定ソート）
    records.sort(key=lambda r: (r.generated_line, r.generated_column))

    logger.debug(f"ソースマップをデコード: {len(records)}件のマッピング")
    return DecodedMap(mappings=records, sources_content=sources_content)


class SourceMapBuilder:
    """マッピングを積み上げてソースマップv3を生成する

    セグメントは生成行ごとにまとめるが、同じ行の中では追加順を保つ。
    """

    def __init__(self, file: Optional[str] = None):
        self.file = file
        self._mappings: list[MappingRecord] = []
        self._sources: list[str] = []
        self._source_index: dict[str, int] = {}
        self._names: list[str] = []
        self._name_index: dict[str, int] = {}
        self._sources_content: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._mappings)

    @property
    def mappings(self) -> list[MappingRecord]:
        return list(self._mappings)

    def add_mapping(self, mapping: MappingRecord) -> None:
        """マッピングを追加

        Raises:
            SourceMapError: 生成位置が不正、または元位置にソースがない場合
        """
        if mapping.generated_line < 1 or mapping.generated_column < 0:
            raise SourceMapError(
                f"不正な生成位置です: line={mapping.generated_line}, "
                f"column={mapping.generated_column}"
            )
        if mapping.has_original:
            if mapping.source is None:
                raise SourceMapError("元位置を持つマッピングにソースがありません")
            if mapping.original_line < 1 or mapping.original_column < 0:
                raise SourceMapError(
                    f"不正な元位置です: line={mapping.original_line}, "
                    f"column={mapping.original_column}"
                )
            self._register(mapping.source, self._sources, self._source_index)
            if mapping.name:
                self._register(mapping.name, self._names, self._name_index)
        self._mappings.append(mapping)

    def set_source_content(self, source: str, content: Optional[str]) -> None:
        """ソース本文を設定（Noneで削除）"""
        if content is None:
            self._sources_content.pop(source, None)
        else:
            self._sources_content[source] = content

    @staticmethod
    def _register(value: str, values: list[str], index: dict[str, int]) -> None:
        if value not in index:
            index[value] = len(values)
            values.append(value)

    def _serialize_mappings(self) -> str:
        """mappings文字列を生成"""
        by_line: dict[int, list[MappingRecord]] = {}
        for mapping in self._mappings:
            by_line.setdefault(mapping.generated_line, []).append(mapping)

        last_line = max(by_line) if by_line else 0
        prev_source, prev_line, prev_col, prev_name = 0, 0, 0, 0
        lines: list[str] = []
        for line_no in range(1, last_line + 1):
            segments: list[str] = []
            prev_dst_col = 0
            for mapping in by_line.get(line_no, []):
                values = [mapping.generated_column - prev_dst_col]
                prev_dst_col = mapping.generated_column

                if mapping.has_original:
                    source_id = self._source_index[mapping.source]
                    values.append(source_id - prev_source)
                    prev_source = source_id
                    values.append(mapping.original_line - 1 - prev_line)
                    prev_line = mapping.original_line - 1
                    values.append(mapping.original_column - prev_col)
                    prev_col = mapping.original_column

                    if mapping.name:
                        name_id = self._name_index[mapping.name]
                        values.append(name_id - prev_name)
                        prev_name = name_id

                segments.append(encode_segment(values))
            lines.append(",".join(segments))
        return ";".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """ソースマップ辞書に変換"""
        smap: dict[str, Any] = {
            "version": SOURCE_MAP_VERSION,
            "sources": list(self._sources),
            "names": list(self._names),
            "mappings": self._serialize_mappings(),
        }
        if self.file:
            smap["file"] = self.file
        if self._sources_content:
            smap["sourcesContent"] = [
                self._sources_content.get(source) for source in self._sources
            ]
        return smap

    def to_json(self) -> str:
        """JSONテキストに変換"""
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))

    def to_base64(self) -> str:
        """JSONテキストをbase64に変換"""
        return base64.b64encode(self.to_json().encode("utf-8")).decode("ascii")
