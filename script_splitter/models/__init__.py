from .fragment import Fragment
from .result import SplitResult
from .sourcemap import DecodedMap, MappingRecord

__all__ = [
    "Fragment",
    "SplitResult",
    "DecodedMap",
    "MappingRecord",
]
