"""InlineScriptSplitter ユニットテスト"""
import pytest
from bs4 import BeautifulSoup

from script_splitter import (
    InlineScriptSplitter,
    MissingElementError,
    SourceMapError,
    SplitConfig,
    split_html,
)
from script_splitter.modules.sourcemap.codec import parse_source_map

SOURCE_MAP_MARKER = "//# sourceMappingURL="


def _scripts(html, parent):
    soup = BeautifulSoup(html, "html.parser")
    return getattr(soup, parent).find_all("script")


class TestSplitHtml:
    """基本シナリオ"""

    def test_single_script(self, simple_html):
        """1つのスクリプトを<head>の外部参照に置き換える"""
        result = split_html(simple_html, js_file_name="out.js")

        assert result.js == "var a=1;"
        head_scripts = _scripts(result.html, "head")
        assert len(head_scripts) == 1
        assert head_scripts[0]["src"] == "out.js"
        assert head_scripts[0].has_attr("defer")
        assert _scripts(result.html, "body") == []

    def test_two_scripts(self, two_scripts_html):
        """文書順に改行で連結し、参照は1つだけ"""
        result = split_html(two_scripts_html, js_file_name="out.js")

        assert result.js == "var a=1;\nvar b=2;"
        assert len(BeautifulSoup(result.html, "html.parser").find_all("script")) == 1

    def test_only_split(self, simple_html):
        """only_splitでは参照を挿入しない"""
        result = split_html(simple_html, js_file_name="out.js", only_split=True)

        assert result.js == "var a=1;"
        assert BeautifulSoup(result.html, "html.parser").find_all("script") == []

    def test_external_script_untouched(self):
        """src付きのスクリプトは対象外"""
        html = '<html><head></head><body><script src="foo.js"></script></body></html>'
        result = split_html(html, js_file_name="out.js")

        assert result.js == ""
        assert result.html == html

    def test_no_scripts(self):
        """スクリプトがなければ空のJS・参照なし"""
        html = "<html><head></head><body><p>x</p></body></html>"
        result = split_html(html, js_file_name="out.js")

        assert result.js == ""
        assert result.html == html

    def test_always_write_script(self):
        """always_write_scriptなら候補がなくても参照を挿入"""
        html = "<html><head></head><body><p>x</p></body></html>"
        result = split_html(html, js_file_name="out.js", always_write_script=True)

        assert result.js == ""
        assert _scripts(result.html, "head")[0]["src"] == "out.js"

    def test_only_split_wins_over_always_write(self):
        """only_splitとalways_write_scriptではonly_splitが優先"""
        html = "<html><head></head><body><p>x</p></body></html>"
        result = split_html(
            html, js_file_name="out.js", only_split=True, always_write_script=True,
        )

        assert BeautifulSoup(result.html, "html.parser").find_all("script") == []

    def test_script_in_body(self, simple_html):
        """script_in_head=Falseなら<body>末尾、deferなし"""
        result = split_html(simple_html, js_file_name="out.js", script_in_head=False)

        body_scripts = _scripts(result.html, "body")
        assert len(body_scripts) == 1
        assert body_scripts[0]["src"] == "out.js"
        assert not body_scripts[0].has_attr("defer")
        assert _scripts(result.html, "head") == []

    def test_non_javascript_types_kept(self):
        """JavaScript以外のtypeは残す"""
        html = (
            "<html><head></head><body>"
            '<script type="text/template"><p>t</p></script>'
            "<script>go()</script>"
            "</body></html>"
        )
        result = split_html(html, js_file_name="out.js")

        assert result.js == "go();"
        body_scripts = _scripts(result.html, "body")
        assert [s.get("type") for s in body_scripts] == ["text/template"]

    def test_whitespace_after_script_removed(self):
        """スクリプト直後の空白テキストも消える"""
        html = "<html><head></head><body><script>a()</script>\n    <p>x</p></body></html>"
        result = split_html(html, only_split=True)

        assert "<body><p>x</p></body>" in result.html

    def test_line_count_matches_output(self):
        """断片の行数合計と出力JSの行数が一致"""
        html = (
            "<html><head></head><body>\n"
            "<script>\n  var a = 1;\n  if (a) {\n    a++;\n  }\n</script>\n"
            "<script>\n\n\n  b()\n</script>\n"
            "<script></script>\n"
            "</body></html>"
        )
        result = split_html(html, js_file_name="out.js")

        assert result.js == "var a = 1;\n  if (a) {\n    a++;\n  };\nb();\n;"
        assert len(result.js.split("\n")) == 4 + 1 + 1


class TestSourceMapMerge:
    """埋め込みソースマップの統合"""

    def test_single_fragment(self, mapped_html, read_output_map):
        """HTML上の位置から連結後のJSの位置に移す"""
        result = split_html(mapped_html, js_file_name="out.js")

        code, _, comment = result.js.partition("\n\n")
        assert code == "var a = 1;\n  var b = 2;"
        assert comment.startswith(SOURCE_MAP_MARKER)
        assert result.js.endswith("\n")
        assert read_output_map(result.js) == {
            "version": 3,
            "sources": ["src/a.js"],
            "names": [],
            "mappings": "AAAA;EACA",
        }

    def test_crlf_document(self, mapped_html, read_output_map):
        """CRLFの文書でもマップを統合し、出力はLFになる"""
        result = split_html(mapped_html.replace("\n", "\r\n"), js_file_name="out.js")

        assert "\r" not in result.js
        assert "\r" not in result.html
        assert result.js.startswith("var a = 1;\n  var b = 2;\n\n")
        assert read_output_map(result.js)["mappings"] == "AAAA;EACA"

    def test_lone_cr_document(self, mapped_html, read_output_map):
        """CRだけの改行もLFとして扱う"""
        result = split_html(mapped_html.replace("\n", "\r"), js_file_name="out.js")

        assert read_output_map(result.js)["mappings"] == "AAAA;EACA"

    def test_after_plain_fragment(self, make_map_comment, read_output_map):
        """前の断片の行数分だけ後ろにずれる"""
        smap = {
            "version": 3,
            "sources": ["src/a.js"],
            "names": [],
            "mappings": ";;;;;;EAAA;EACA",
        }
        html = (
            "<html><head></head><body>\n"
            "<script>\n"
            "  first()\n"
            "  second()\n"
            "</script>\n"
            "<script>\n"
            "  var a = 1;\n"
            "  var b = 2;" + make_map_comment(smap) +
            "</script>\n"
            "</body></html>\n"
        )
        result = split_html(html, js_file_name="out.js")

        assert result.js.startswith("first()\n  second();\nvar a = 1;\n  var b = 2;\n\n")
        decoded = parse_source_map(read_output_map(result.js))
        assert [(m.generated_line, m.generated_column) for m in decoded] == [(3, 0), (4, 2)]
        assert [(m.original_line, m.original_column) for m in decoded] == [(1, 0), (2, 0)]

    def test_no_map_no_comment(self, two_scripts_html):
        """マップがなければコメントを付けない"""
        result = split_html(two_scripts_html, js_file_name="out.js")
        assert SOURCE_MAP_MARKER not in result.js

    def test_invalid_map_is_fatal(self):
        """壊れたマップは処理全体を失敗させる"""
        html = (
            "<html><head></head><body><script>a()\n"
            "//# sourceMappingURL=data:application/json;charset=utf8;base64,bm90IGpzb24=\n"
            "</script></body></html>"
        )
        with pytest.raises(SourceMapError):
            split_html(html, js_file_name="out.js")


class TestInlineScriptSplitter:
    """InlineScriptSplitterのテストクラス"""

    def test_default_config(self, simple_html):
        """設定を省略すると設定ファイルの値を使う"""
        splitter = InlineScriptSplitter()
        assert splitter.config.parser == "html.parser"
        assert splitter.split(simple_html).js == "var a=1;"

    def test_mutates_document_in_place(self, simple_html):
        """渡した文書をその場で書き換える"""
        soup = BeautifulSoup(simple_html, "html.parser")
        result = InlineScriptSplitter(SplitConfig(js_file_name="out.js")).split_document(soup)

        assert soup.head.script["src"] == "out.js"
        assert result.html == str(soup)

    def test_missing_head_fails_before_mutation(self):
        """<head>がなければ文書を変更する前に失敗する"""
        soup = BeautifulSoup("<body><script>a()</script></body>", "html.parser")
        splitter = InlineScriptSplitter(SplitConfig(js_file_name="out.js"))

        with pytest.raises(MissingElementError):
            splitter.split_document(soup)
        assert soup.script is not None

    def test_missing_head_allowed_with_only_split(self):
        """挿入しないなら<head>がなくてもよい"""
        splitter = InlineScriptSplitter(SplitConfig(only_split=True))
        result = splitter.split("<body><script>a()</script></body>")

        assert result.js == "a();"
        assert result.html == "<body></body>"

    def test_empty_source(self):
        """空のHTML"""
        result = InlineScriptSplitter(SplitConfig()).split("")
        assert result.to_dict() == {"html": "", "js": ""}
