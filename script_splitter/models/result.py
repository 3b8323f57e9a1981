"""結果データモデル"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SplitResult:
    """分離結果

    Attributes:
        html: インラインスクリプトを取り除いたHTML
        js: 連結したJavaScript（ソースマップコメントを含む場合あり）
    """
    html: str
    js: str

    def to_dict(self) -> dict:
        """辞書に変換"""
        return {
            "html": self.html,
            "js": self.js,
        }

