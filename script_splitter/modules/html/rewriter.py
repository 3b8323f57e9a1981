"""HTML文書の書き換え（インラインスクリプト除去・外部スクリプト参照の挿入）"""
from __future__ import annotations

import logging
from typing import Optional

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from ...config import SplitConfig

logger = logging.getLogger(__name__)


class MissingElementError(ValueError):
    """挿入先の<head>/<body>が文書にない"""


def get_text_content(node: Tag) -> str:
    """ノード直下のテキストを連結して返す"""
    return "".join(
        str(child) for child in node.contents
        if isinstance(child, NavigableString)
    )


def is_whitespace_text(node) -> bool:
    """空白だけのテキストノードかどうか（コメント等は除く）"""
    return (
        isinstance(node, NavigableString)
        and not isinstance(node, PreformattedString)
        and not node.strip()
    )


class DocumentRewriter:
    """文書をその場で書き換える"""

    def __init__(self, soup: BeautifulSoup, config: SplitConfig):
        self.soup = soup
        self.config = config

    def will_insert(self, candidate_count: int) -> bool:
        """外部スクリプト参照を挿入するかどうか（only_splitが優先）"""
        if self.config.only_split:
            return False
        return candidate_count > 0 or self.config.always_write_script

    def insertion_target(self) -> Tag:
        """挿入先の要素を返す

        Raises:
            MissingElementError: 挿入先の要素がない場合
        """
        tag_name = "head" if self.config.script_in_head else "body"
        target: Optional[Tag] = self.soup.find(tag_name)
        if target is None:
            raise MissingElementError(
                f"<{tag_name}>がないため外部スクリプト参照を挿入できません"
            )
        return target

    def check_insertion_target(self, candidate_count: int) -> None:
        """挿入が必要なら挿入先の存在を先に確認する（文書を変更する前に呼ぶ）"""
        if self.will_insert(candidate_count):
            self.insertion_target()

    def remove(self, node: Tag) -> None:
        """ノードと直後の空白テキストを取り除く"""
        following = node.next_sibling
        node.extract()
        # 抜けた跡に空行が溜まらないようにする
        if following is not None and is_whitespace_text(following):
            following.extract()

    def insert_reference(self) -> Tag:
        """外部スクリプト参照の<script>を挿入（srcは設定値）

        Returns:
            挿入した<script>タグ
        """
        js_file_name = self.config.js_file_name
        target = self.insertion_target()
        script = self.soup.new_tag("script")
        script["src"] = js_file_name

        if self.config.script_in_head:
            script["defer"] = ""
            target.insert(0, script)
        else:
            target.append(script)

        logger.info(f"外部スクリプト参照を挿入: <{target.name}> src={js_file_name!r}")
        return script

    def finish(self, fragment_count: int) -> Optional[Tag]:
        """全候補の処理後、必要なら参照を挿入"""
        if not self.will_insert(fragment_count):
            return None
        return self.insert_reference()
