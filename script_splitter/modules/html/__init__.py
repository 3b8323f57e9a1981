from .locator import ScriptLocator, is_inline_script
from .rewriter import DocumentRewriter, MissingElementError, get_text_content

__all__ = [
    "ScriptLocator",
    "is_inline_script",
    "DocumentRewriter",
    "MissingElementError",
    "get_text_content",
]
