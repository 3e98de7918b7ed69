"""Schema layer for parsing, validating and saving map files."""

from .errors import MapLoadError, MapValidationError
from .models import (
    MAP_FORMAT_VERSION,
    ConnectionRecord,
    MapDocument,
    NodeRecord,
    NodeType,
)
from .loader import (
    dump_map,
    load_map,
    load_raw,
    parse_map,
    parse_map_from_string,
    save_map,
)

__all__ = [
    "MapLoadError",
    "MapValidationError",
    "MAP_FORMAT_VERSION",
    "ConnectionRecord",
    "MapDocument",
    "NodeRecord",
    "NodeType",
    "dump_map",
    "load_map",
    "load_raw",
    "parse_map",
    "parse_map_from_string",
    "save_map",
]
