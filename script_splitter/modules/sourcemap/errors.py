"""ソースマップ関連の例外"""


class SourceMapError(ValueError):
    """ソースマップの読み込み・生成に失敗した"""
