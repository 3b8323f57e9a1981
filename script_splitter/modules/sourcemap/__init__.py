from .codec import SourceMapBuilder, parse_source_map
from .decoder import EmbeddedMapDecoder, format_source_map_comment
from .errors import SourceMapError
from .merger import SourceMapMerger, reproject_mapping

__all__ = [
    "SourceMapBuilder",
    "parse_source_map",
    "EmbeddedMapDecoder",
    "format_source_map_comment",
    "SourceMapError",
    "SourceMapMerger",
    "reproject_mapping",
]
