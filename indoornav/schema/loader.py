"""JSON/YAML loading and saving for indoor maps."""

import json
from pathlib import Path
from typing import TYPE_CHECKING, Literal

import yaml
from pydantic import ValidationError

from .errors import MapLoadError, MapValidationError
from .models import MAP_FORMAT_VERSION, MapDocument

if TYPE_CHECKING:
    from ..graph.floor_graph import FloorGraph

MapFormat = Literal["json", "yaml"]


def _format_for(path: Path) -> MapFormat:
    if path.suffix.lower() in (".yaml", ".yml"):
        return "yaml"
    return "json"


def _decode(text: str, fmt: MapFormat, path: str | None = None) -> dict:
    """Decode map text into a raw mapping.

    Raises:
        MapLoadError: If the text cannot be parsed or is not a mapping.
    """
    try:
        if fmt == "yaml":
            data = yaml.safe_load(text)
        else:
            data = json.loads(text) if text.strip() else None
    except yaml.YAMLError as e:
        raise MapLoadError(f"Invalid YAML: {e}", path) from e
    except json.JSONDecodeError as e:
        raise MapLoadError(f"Invalid JSON: {e}", path) from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise MapLoadError(
            f"Expected mapping at root, got {type(data).__name__}", path
        )

    return data


def load_raw(path: str | Path) -> dict:
    """Load a map file and return the raw data.

    The format is picked from the file suffix: ``.yaml``/``.yml`` are read
    as YAML, everything else as JSON.

    Args:
        path: Path to the map file.

    Returns:
        The decoded data as a dictionary.

    Raises:
        MapLoadError: If the file cannot be read or parsed.
    """
    path = Path(path)

    if not path.exists():
        raise MapLoadError(f"File not found: {path}", str(path))

    if not path.is_file():
        raise MapLoadError(f"Not a file: {path}", str(path))

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise MapLoadError(f"Cannot read file: {e}", str(path)) from e

    return _decode(text, _format_for(path), str(path))


def parse_map(path: str | Path) -> MapDocument:
    """Load and parse a map file into a MapDocument.

    Raises:
        MapLoadError: If the file cannot be read or parsed.
        MapValidationError: If the data fails validation.
    """
    data = load_raw(path)
    return _parse_map_data(data)


def parse_map_from_string(text: str, fmt: MapFormat = "json") -> MapDocument:
    """Parse map text into a MapDocument.

    Args:
        text: The map content.
        fmt: ``"json"`` or ``"yaml"``.

    Raises:
        MapLoadError: If the text cannot be parsed.
        MapValidationError: If the data fails validation.
    """
    return _parse_map_data(_decode(text, fmt))


def _parse_map_data(data: dict) -> MapDocument:
    """Validate raw data into a MapDocument.

    Raises:
        MapValidationError: If the data fails validation.
    """
    try:
        return MapDocument.model_validate(data)
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(x) for x in err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        raise MapValidationError(
            f"Map validation failed with {len(errors)} error(s)", errors
        ) from e


def load_map(path: str | Path) -> "FloorGraph":
    """Load a map file straight into a FloorGraph."""
    from ..graph.builder import build_graph

    return build_graph(parse_map(path))


def dump_map(graph: "FloorGraph", normalize_stairs: bool = True) -> dict:
    """Serialize a graph into the persisted map layout.

    Single-record stairs are migrated to the two-record form on a copy of
    the graph first unless ``normalize_stairs`` is False; the graph passed
    in is never modified.
    """
    if normalize_stairs:
        from ..graph.stairs import normalize_stairs as _normalize

        graph = graph.copy()
        _normalize(graph)

    data: dict = {
        "version": MAP_FORMAT_VERSION,
        "floors": graph.floors,
        "nodes": [[node.id, node.to_record()] for node in graph.nodes()],
        "connections": [conn.to_record() for conn in graph.connections()],
    }
    if graph.pixels_per_meter is not None:
        data["pixelsPerMeter"] = graph.pixels_per_meter
    return data


def save_map(
    graph: "FloorGraph",
    path: str | Path,
    normalize_stairs: bool = True,
) -> Path:
    """Write a graph to disk as JSON or YAML (picked from the suffix).

    Raises:
        MapLoadError: If the file cannot be written.
    """
    path = Path(path)
    data = dump_map(graph, normalize_stairs=normalize_stairs)

    if _format_for(path) == "yaml":
        text = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    else:
        text = json.dumps(data, indent=2, ensure_ascii=False)

    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise MapLoadError(f"Cannot write file: {e}", str(path)) from e

    return path
