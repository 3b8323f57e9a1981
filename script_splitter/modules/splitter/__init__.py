from .assembler import Assembler
from .normalizer import FragmentNormalizer, OffsetTracker
from .pipeline import InlineScriptSplitter, split_html

__all__ = [
    "Assembler",
    "FragmentNormalizer",
    "OffsetTracker",
    "InlineScriptSplitter",
    "split_html",
]
