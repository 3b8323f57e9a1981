"""インラインJavaScriptの<script>を探すモジュール"""
from __future__ import annotations

import logging
from typing import Callable, Iterator

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

Predicate = Callable[[Tag], bool]

# JavaScriptとして扱うtype属性値
JAVASCRIPT_TYPES = (
    "text/ecmascript-6",
    "application/javascript",
    "text/javascript",
)


def has_tag_name(name: str) -> Predicate:
    return lambda node: node.name == name


def has_attr(attr: str) -> Predicate:
    return lambda node: node.has_attr(attr)


def has_attr_value(attr: str, value: str) -> Predicate:
    return lambda node: node.get(attr) == value


def AND(*predicates: Predicate) -> Predicate:
    return lambda node: all(p(node) for p in predicates)


def OR(*predicates: Predicate) -> Predicate:
    return lambda node: any(p(node) for p in predicates)


def NOT(predicate: Predicate) -> Predicate:
    return lambda node: not predicate(node)


# type属性なし or JavaScriptのtype、かつsrc属性なし
is_inline_script: Predicate = AND(
    has_tag_name("script"),
    OR(
        NOT(has_attr("type")),
        *(has_attr_value("type", t) for t in JAVASCRIPT_TYPES),
    ),
    NOT(has_attr("src")),
)


class ScriptLocator:
    """分離対象のインラインスクリプトを文書順に列挙する"""

    def __init__(self, predicate: Predicate = is_inline_script):
        self.predicate = predicate

    def iter_candidates(self, soup: BeautifulSoup) -> Iterator[Tag]:
        """候補ノードを文書順（深さ優先・前順）に返す"""
        for node in soup.find_all(True):
            if self.predicate(node):
                yield node

    def locate(self, soup: BeautifulSoup) -> list[Tag]:
        """候補ノードのリストを返す

        Args:
            soup: 解析済みHTML

        Returns:
            候補の<script>タグ（文書順）
        """
        candidates = list(self.iter_candidates(soup))
        logger.debug(f"インラインスクリプト候補: {len(candidates)}件")
        return candidates
