"""埋め込みソースマップ（base64データURLコメント）の検出・デコード"""
from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from typing import Optional

from ...models.sourcemap import DecodedMap
from .codec import parse_source_map
from .errors import SourceMapError

logger = logging.getLogger(__name__)

SOURCE_MAP_URL_PREFIX = "//# sourceMappingURL=data:application/json;charset=utf8;base64,"

# テキスト末尾に固定されたマップコメント
SOURCE_MAP_COMMENT_RE = re.compile(
    r"\n" + re.escape(SOURCE_MAP_URL_PREFIX) + r"([a-zA-Z0-9+/=]+)\n\Z"
)


def format_source_map_comment(base64_map: str) -> str:
    """base64化したマップを埋め込みコメントに整形"""
    return f"\n{SOURCE_MAP_URL_PREFIX}{base64_map}\n"


@dataclass
class DecodeResult:
    """デコード結果

    Attributes:
        text: マップコメントを取り除いたテキスト（マップがなければ元のまま）
        source_map: デコードしたソースマップ（なければNone）
    """
    text: str
    source_map: Optional[DecodedMap] = None


class EmbeddedMapDecoder:
    """スクリプト末尾の埋め込みソースマップを取り出す"""

    def find(self, text: str) -> Optional[re.Match]:
        """マップコメントを探す"""
        return SOURCE_MAP_COMMENT_RE.search(text)

    def decode(self, text: str) -> DecodeResult:
        """マップコメントを検出してデコードし、テキストから取り除く

        Args:
            text: <script>の生テキスト

        Returns:
            DecodeResult

        Raises:
            SourceMapError: base64/JSONが不正な場合
        """
        match = self.find(text)
        if match is None:
            return DecodeResult(text=text)

        try:
            payload = base64.b64decode(match.group(1), validate=True)
        except (binascii.Error, ValueError) as e:
            raise SourceMapError(f"埋め込みソースマップのbase64が不正です: {e}") from e

        source_map = parse_source_map(payload)
        stripped = text[:match.start()] + text[match.end():]

        logger.debug(f"埋め込みソースマップを検出: {len(source_map)}件のマッピング")
        return DecodeResult(text=stripped, source_map=source_map)
