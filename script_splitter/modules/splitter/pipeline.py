"""インラインスクリプト分離パイプライン"""
from __future__ import annotations

import logging
from typing import Optional

from bs4 import BeautifulSoup

from ...config import SplitConfig, get_config
from ...models.result import SplitResult
from ..html.locator import ScriptLocator
from ..html.rewriter import DocumentRewriter, get_text_content
from ..sourcemap.errors import SourceMapError
from ..sourcemap.merger import SourceMapMerger
from .assembler import Assembler
from .normalizer import FragmentNormalizer, OffsetTracker

logger = logging.getLogger(__name__)


class InlineScriptSplitter:
    """HTML内のインラインスクリプトを1つの外部JSにまとめる

    処理の流れ:
    1. 候補の<script>を文書順に列挙
    2. 各候補を文書から取り除き、テキストを断片に正規化
    3. 埋め込みソースマップがあれば連結後の座標に移して統合
    4. 外部スクリプト参照を挿入
    5. HTMLとJSを組み立てる

    文書は呼び出しごとにその場で書き換えられる。
    """

    def __init__(
        self,
        config: Optional[SplitConfig] = None,
        locator: Optional[ScriptLocator] = None,
        normalizer: Optional[FragmentNormalizer] = None,
        assembler: Optional[Assembler] = None,
    ):
        if config is None:
            config = get_config().split
        self.config = config
        self.locator = locator or ScriptLocator()
        self.normalizer = normalizer or FragmentNormalizer()
        self.assembler = assembler or Assembler()

    def parse(self, source: str) -> BeautifulSoup:
        """HTMLを解析（改行はLFに揃える）"""
        source = source.replace("\r\n", "\n").replace("\r", "\n")
        return BeautifulSoup(source, self.config.parser)

    def split(self, source: str = "") -> SplitResult:
        """HTMLテキストを分離

        Args:
            source: HTMLテキスト

        Returns:
            SplitResult

        Raises:
            SourceMapError: 埋め込みソースマップが不正な場合
            MissingElementError: 挿入先の<head>/<body>がない場合
        """
        return self.split_document(self.parse(source or ""))

    def split_document(self, soup: BeautifulSoup) -> SplitResult:
        """解析済みの文書を分離（文書はその場で書き換わる）"""
        candidates = self.locator.locate(soup)
        logger.info(f"インラインスクリプト: {len(candidates)}件")

        rewriter = DocumentRewriter(soup, self.config)
        # 文書を変更する前に挿入先を確認
        rewriter.check_insertion_target(len(candidates))

        tracker = OffsetTracker()
        merger = SourceMapMerger()
        contents: list[str] = []

        for node in candidates:
            raw_text = get_text_content(node)
            start_line = node.sourceline
            rewriter.remove(node)

            fragment = self.normalizer.normalize(raw_text, start_line=start_line)

            if fragment.embedded_map is not None:
                if start_line is None:
                    raise SourceMapError(
                        f"パーサ {self.config.parser!r} は行番号を記録しないため"
                        "ソースマップを再計算できません"
                    )
                merger.merge(
                    fragment.embedded_map,
                    cumulative_output_line=tracker.cumulative_output_line,
                    start_line=start_line,
                    leading_blank_lines=fragment.leading_blank_lines,
                    first_line_column_offset=fragment.first_line_column_offset,
                )

            tracker.advance(fragment.line_count)
            contents.append(fragment.final_text)

        rewriter.finish(len(contents))

        base64_map = merger.encode()
        if base64_map:
            logger.info(f"統合ソースマップを生成: {len(merger.mappings)}件のマッピング")

        return self.assembler.assemble(soup, contents, base64_map)


def split_html(
    source: str = "",
    js_file_name: str = "",
    script_in_head: bool = True,
    only_split: bool = False,
    always_write_script: bool = False,
    parser: str = "html.parser",
) -> SplitResult:
    """HTMLテキストからインラインスクリプトを分離する

    Args:
        source: HTMLテキスト
        js_file_name: 挿入する<script>のsrc属性値
        script_in_head: <head>先頭にdefer付きで挿入するか（Falseなら<body>末尾）
        only_split: 外部スクリプト参照を挿入しない
        always_write_script: インラインスクリプトがなくても参照を挿入する
        parser: BeautifulSoupのパーサ名

    Returns:
        SplitResult: 書き換え後のHTMLと連結したJS
    """
    config = SplitConfig(
        js_file_name=js_file_name,
        script_in_head=script_in_head,
        only_split=only_split,
        always_write_script=always_write_script,
        parser=parser,
    )
    return InlineScriptSplitter(config).split(source)
