"""HTML内のインラインスクリプトを1つの外部JSに分離するツール"""
from .config import Config, SplitConfig
from .models.result import SplitResult
from .modules.html.rewriter import MissingElementError
from .modules.sourcemap.errors import SourceMapError
from .modules.splitter.pipeline import InlineScriptSplitter, split_html

__version__ = "0.1.0"

__all__ = [
    "Config",
    "SplitConfig",
    "SplitResult",
    "MissingElementError",
    "SourceMapError",
    "InlineScriptSplitter",
    "split_html",
]
