"""pytest 共通設定・フィクスチャ"""
import base64
import json
import sys
from pathlib import Path

import pytest

# リポジトリルートをパスに追加
root_path = Path(__file__).parent.parent
sys.path.insert(0, str(root_path))

from script_splitter import config as config_module  # noqa: E402

SOURCE_MAP_URL_PREFIX = "//# sourceMappingURL=data:application/json;charset=utf8;base64,"


def encode_map(smap: dict) -> str:
    """ソースマップ辞書をbase64化"""
    return base64.b64encode(json.dumps(smap).encode("utf-8")).decode("ascii")


def map_comment(smap: dict) -> str:
    """<script>末尾に付ける埋め込みマップコメント"""
    return f"\n{SOURCE_MAP_URL_PREFIX}{encode_map(smap)}\n"


def decode_output_map(js: str) -> dict:
    """出力JS末尾のマップコメントから辞書を取り出す"""
    last_line = js.rstrip("\n").split("\n")[-1]
    assert last_line.startswith(SOURCE_MAP_URL_PREFIX)
    payload = last_line[len(SOURCE_MAP_URL_PREFIX):]
    return json.loads(base64.b64decode(payload))


@pytest.fixture(autouse=True)
def reset_config():
    """テストごとに設定シングルトンを破棄"""
    config_module._config = None
    yield
    config_module._config = None


@pytest.fixture
def simple_html():
    """インラインスクリプト1つのHTML"""
    return "<html><head></head><body><script>var a=1</script></body></html>"


@pytest.fixture
def two_scripts_html():
    """インラインスクリプト2つのHTML"""
    return (
        "<html><head></head><body>"
        "<script>var a=1</script>"
        "<script>var b=2</script>"
        "</body></html>"
    )


@pytest.fixture
def sample_map():
    """HTML上の3行目・4行目（インデント2）を指すソースマップ"""
    return {
        "version": 3,
        "sources": ["src/a.js"],
        "names": [],
        "mappings": ";;EAAA;EACA",
    }


@pytest.fixture
def mapped_html(sample_map):
    """埋め込みソースマップ付きのインラインスクリプトを持つHTML

    1行目: <html><head></head><body>
    2行目: <script>
    3行目:   var a = 1;
    4行目:   var b = 2;
    5行目: //# sourceMappingURL=...
    6行目: </script>
    """
    return (
        "<html><head></head><body>\n"
        "<script>\n"
        "  var a = 1;\n"
        "  var b = 2;"
        + map_comment(sample_map)
        + "</script>\n"
        "</body></html>\n"
    )


@pytest.fixture
def make_map_comment():
    """埋め込みマップコメント生成関数"""
    return map_comment


@pytest.fixture
def read_output_map():
    """出力JSのマップ読み取り関数"""
    return decode_output_map


@pytest.fixture
def make_map_payload():
    """ソースマップのbase64化関数"""
    return encode_map
