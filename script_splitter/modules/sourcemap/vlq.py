"""Base64 VLQ エンコード/デコード

ソースマップv3の `mappings` で使われる可変長整数表現。
1文字6ビットのうち下位5ビットが値、上位1ビットが継続フラグ。
最初の5ビットの最下位ビットが符号。
"""
from __future__ import annotations

from .errors import SourceMapError

BASE64_CHARS = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
)

# base64文字 → 整数値
_B64 = {c: i for i, c in enumerate(BASE64_CHARS)}

_VLQ_SHIFT = 5
_VLQ_CONTINUATION = 1 << _VLQ_SHIFT
_VLQ_MASK = _VLQ_CONTINUATION - 1


def decode_vlq(segment: str) -> list[int]:
    """VLQ文字列を整数リストにデコード

    Args:
        segment: 1セグメント分のVLQ文字列

    Returns:
        デコードした整数のリスト

    Raises:
        SourceMapError: 不正な文字、または途中で終わっている場合
    """
    values: list[int] = []

    cur, shift = 0, 0
    continuation = False
    for c in segment:
        try:
            val = _B64[c]
        except KeyError:
            raise SourceMapError(f"VLQに不正な文字があります: {c!r}") from None
        continuation = bool(val & _VLQ_CONTINUATION)
        cur += (val & _VLQ_MASK) << shift
        shift += _VLQ_SHIFT

        if not continuation:
            cur, sign = cur >> 1, cur & 1
            values.append(-cur if sign else cur)
            cur, shift = 0, 0

    if continuation:
        raise SourceMapError(f"VLQが途中で終わっています: {segment!r}")

    return values


def encode_vlq(value: int) -> str:
    """整数を1つVLQ文字列にエンコード"""
    vlq = (-value << 1) | 1 if value < 0 else value << 1

    encoded = []
    while True:
        digit = vlq & _VLQ_MASK
        vlq >>= _VLQ_SHIFT
        if vlq:
            digit |= _VLQ_CONTINUATION
        encoded.append(BASE64_CHARS[digit])
        if not vlq:
            break
    return "".join(encoded)


def encode_segment(values: list[int]) -> str:
    """整数リストを1セグメントのVLQ文字列にエンコード"""
    return "".join(encode_vlq(v) for v in values)
