"""
Module for reading PyxelEdit documents (.pyxel)
Supports documents written by PyxelEdit 0.4.8

=============================================================================
WHAT IS A .PYXEL FILE?
=============================================================================

PyxelEdit is a pixel-art and tileset editor. Its native document is a
zip archive with a JSON description plus PNG images:

    doc.pyxel (zip)
    ├── docData.json      Document metadata (palette, canvas, tileset, ...)
    ├── layer0.png        Pixels of canvas layer 0
    ├── layer1.png        Pixels of canvas layer 1
    ├── ...
    ├── tile0.png         Pixels of tileset tile 0
    └── tile1.png         Pixels of tileset tile 1

This module covers the JSON side: it turns docData.json into a tree of
typed, immutable objects. Reading the zip and attaching the PNG members
is done by the pyxel_archive package, which builds on this module.

=============================================================================
DOCDATA.JSON STRUCTURE
=============================================================================

    {
        "name": "my_doc",
        "version": "0.4.8",
        "palette": {
            "colors": {"0": "ffbe3535", "1": "fff99b97", ...},
            "width": 8, "height": 4, "numColors": 15
        },
        "canvas": {
            "width": 256, "height": 128,
            "tileWidth": 32, "tileHeight": 16,
            "numLayers": 2,
            "layers": {
                "0": {"name": "Layer 1", "alpha": 255, "blendMode": "normal",
                      "hidden": false, "muted": false, "soloed": false,
                      "tileRefs": {"5": {"index": 0, "rot": 1, "flipX": false}}},
                "1": {...}
            }
        },
        "tileset": {"tileWidth": 32, "tileHeight": 16, "tilesWide": 8,
                    "numTiles": 4, "fixedWidth": false},
        "animations": {
            "0": {"name": "Walk", "baseTile": 0, "length": 4,
                  "frameDuration": 150,
                  "frameDurationMultipliers": [100, 200, 300, 400]}
        }
    }

=============================================================================
ENCODINGS THAT NEED TRANSCODING
=============================================================================

Several fields are not stored the way they are used:

- Colors:      "AARRGGBB" hex strings (alpha FIRST, not last)
- Rotation:    quadrant code 0-3, meaning 0/90/180/270 degrees
- Durations:   integer milliseconds
- Multipliers: percentages (100 = 1.0x)
- Arrays:      JSON objects keyed "0", "1", "2", ... instead of JSON arrays

The transcoder functions below handle each of these. Each schema class
binds its fields to them explicitly in from_json().

=============================================================================
SPARSE INDEX MAPS
=============================================================================

Palette colors, canvas layers and animations are written as objects keyed
by decimal index. They are read as tuples with these rules:

- Keys must be canonical non-negative decimals: "0", "12" (not "-1", "01")
- Keys must be below MAX_SPARSE_INDEX
- Duplicate keys are rejected (anywhere in the JSON document)
- Layers and animations: keys must be exactly 0..N-1, gaps are errors
- Palette colors: gaps are filled with None (empty palette slot)

Tile references (layer "tileRefs") are genuinely sparse - only painted
cells are listed - so they stay a dict keyed by grid cell index.

=============================================================================
"""

import json
import re
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import semver


# Name of the JSON member inside the archive
DOC_DATA_MEMBER = "docData.json"

# Upper bound (exclusive) for keys of index-keyed maps
MAX_SPARSE_INDEX = 1 << 16

_CANONICAL_INDEX = re.compile(r"0|[1-9][0-9]*")

# Marker for "no fill value" in map_as_sequence (None is a valid fill)
_STRICT = object()


# =============================================================================
# ERRORS
# =============================================================================

class PyxelError(Exception):
    """
    Base class for every error raised while loading a PyxelEdit document.

    A load is all-or-nothing: whatever the subclass, no document is
    returned. The original exception, when there is one, is chained as
    __cause__.
    """


class PyxelIOError(PyxelError):
    """The document file or stream could not be read."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ArchiveError(PyxelError):
    """The input is not a valid zip archive, or a member is unreadable."""

    def __init__(self, message: str, member: Optional[str] = None):
        super().__init__(message)
        self.member = member


class MissingMemberError(ArchiveError):
    """A required archive member (docData.json, layerN.png, tileN.png) is absent."""

    def __init__(self, member: str):
        super().__init__(f"archive member '{member}' not found", member=member)


class DeserializationError(PyxelError):
    """
    docData.json could not be turned into a document.

    Attributes:
    -----------
    path : str
        Dotted JSON path of the offending value ("canvas.layers.3.alpha")
    entity : str, optional
        Schema class being decoded ("Layer")
    field : str, optional
        External field name ("blendMode")
    """

    def __init__(self, message: str, path: str = "",
                 entity: Optional[str] = None, field: Optional[str] = None):
        if path:
            message = f"{path}: {message}"
        super().__init__(message)
        self.path = path
        self.entity = entity
        self.field = field


class MissingFieldError(DeserializationError):
    """A required field is absent from a JSON object."""

    def __init__(self, entity: str, field: str, path: str):
        super().__init__(f"missing field '{field}' in {entity}",
                         path=path, entity=entity, field=field)


class UnknownBlendModeError(DeserializationError):
    """A layer names a blend mode outside the 11 known tags."""

    def __init__(self, value: Any, path: str):
        known = ", ".join(mode.value for mode in BlendMode)
        super().__init__(f"unknown blend mode {value!r} (expected one of: {known})",
                         path=path, entity="Layer", field="blendMode")
        self.value = value


class LayerCountMismatchError(DeserializationError):
    """canvas.numLayers disagrees with the number of entries in canvas.layers."""

    def __init__(self, declared: int, actual: int):
        super().__init__(
            f"numLayers is {declared} but {actual} layers are defined",
            path="canvas.numLayers", entity="Canvas", field="numLayers")
        self.declared = declared
        self.actual = actual


class ImageDecodeError(PyxelError):
    """A PNG member could not be decoded by the image collaborator."""

    def __init__(self, message: str, member: str):
        super().__init__(f"{member}: {message}")
        self.member = member


# =============================================================================
# SCALAR READERS
# =============================================================================
# JSON gives us Python bool/int/float/str/list/dict. These helpers check
# the type (and integer width) the schema expects. Note that bool is a
# subclass of int in Python, so it has to be excluded explicitly.

def _join(path: str, key: Union[str, int]) -> str:
    return f"{path}.{key}" if path else str(key)


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def read_uint(value: Any, path: str, bits: Optional[int] = None) -> int:
    """
    Read a non-negative JSON integer.

    Parameters:
    -----------
    value : Any
        Raw JSON value
    path : str
        JSON path, for error messages
    bits : int, optional
        Width of the field (8, 16, ...). None means unbounded.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise DeserializationError(
            f"expected a non-negative integer, got {_type_name(value)}", path=path)
    if value < 0:
        raise DeserializationError(
            f"expected a non-negative integer, got {value}", path=path)
    if bits is not None and value >= 1 << bits:
        raise DeserializationError(
            f"{value} does not fit in an unsigned {bits}-bit integer", path=path)
    return value


def read_int32(value: Any, path: str) -> int:
    """Read a signed 32-bit JSON integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise DeserializationError(
            f"expected an integer, got {_type_name(value)}", path=path)
    if not -(1 << 31) <= value < 1 << 31:
        raise DeserializationError(
            f"{value} does not fit in a signed 32-bit integer", path=path)
    return value


def read_bool(value: Any, path: str) -> bool:
    if not isinstance(value, bool):
        raise DeserializationError(
            f"expected a boolean, got {_type_name(value)}", path=path)
    return value


def read_str(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise DeserializationError(
            f"expected a string, got {_type_name(value)}", path=path)
    return value


def read_object(value: Any, path: str, entity: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise DeserializationError(
            f"expected an object for {entity}, got {_type_name(value)}",
            path=path, entity=entity)
    return value


def require(data: Dict[str, Any], key: str, entity: str, path: str) -> Any:
    """
    Fetch a required field from a JSON object.

    Raises MissingFieldError naming both the field and the entity.
    Unknown extra fields in 'data' are simply never looked at.
    """
    try:
        return data[key]
    except KeyError:
        raise MissingFieldError(entity, key, _join(path, key)) from None


# =============================================================================
# FIELD TRANSCODERS
# =============================================================================

def as_degrees(value: Any, path: str = "") -> float:
    """
    Convert a rotation quadrant code to degrees.

        0 -> 0.0,  1 -> 90.0,  2 -> 180.0,  3 -> 270.0

    Any non-negative integer is accepted; the result is always 90 * q.
    """
    return read_uint(value, path) * 90.0


def as_milliseconds(value: Any, path: str = "") -> timedelta:
    """Convert an integer count of milliseconds to a timedelta (exact)."""
    return timedelta(milliseconds=read_uint(value, path))


def as_multipliers(value: Any, path: str = "") -> Tuple[float, ...]:
    """
    Convert frame duration percentages to multipliers.

        [100, 200, 50] -> (1.0, 2.0, 0.5)
    """
    if not isinstance(value, list):
        raise DeserializationError(
            f"expected an array, got {_type_name(value)}", path=path)
    return tuple(read_uint(item, _join(path, i)) / 100.0
                 for i, item in enumerate(value))


def as_color(value: Any, path: str = "") -> 'Color':
    """Decode an AARRGGBB hex string into a Color."""
    return Color.from_hex(read_str(value, path), path)


def _index_items(value: Any, path: str) -> List[Tuple[int, Any]]:
    """
    Validate the keys of an index-keyed JSON object.

    Returns (index, raw value) pairs sorted by index.
    """
    if not isinstance(value, dict):
        raise DeserializationError(
            f"expected an object keyed by index, got {_type_name(value)}",
            path=path)

    items = []
    for key, item in value.items():
        if not _CANONICAL_INDEX.fullmatch(key):
            raise DeserializationError(
                f"key {key!r} is not a non-negative decimal index", path=path)
        index = int(key)
        if index >= MAX_SPARSE_INDEX:
            raise DeserializationError(
                f"index {index} exceeds the maximum of {MAX_SPARSE_INDEX - 1}",
                path=path)
        items.append((index, item))

    # Canonical keys are unique per index; repeated raw keys are already
    # rejected by the JSON parser hook
    items.sort(key=lambda pair: pair[0])
    return items


def map_as_sequence(value: Any, decode: Callable[[Any, str], Any],
                    path: str = "", fill: Any = _STRICT) -> tuple:
    """
    Convert an index-keyed JSON object into a tuple.

    Parameters:
    -----------
    value : Any
        Raw JSON object, e.g. {"0": a, "1": b, "2": c}
    decode : callable
        decode(raw_value, path) -> item, applied in ascending key order
    path : str
        JSON path of the object
    fill : Any, optional
        If given, gaps below the highest key are filled with this value.
        If omitted, keys must be exactly 0..N-1.

    Returns:
    --------
    tuple : items placed at the position given by their key
    """
    items = _index_items(value, path)

    if fill is _STRICT:
        for position, (index, _) in enumerate(items):
            if index != position:
                raise DeserializationError(
                    f"index {position} is missing (keys must run from 0 to "
                    f"{len(items) - 1} without gaps)", path=path)
        return tuple(decode(item, _join(path, index)) for index, item in items)

    size = items[-1][0] + 1 if items else 0
    result = [fill] * size
    for index, item in items:
        result[index] = decode(item, _join(path, index))
    return tuple(result)


def map_as_index_dict(value: Any, decode: Callable[[Any, str], Any],
                      path: str = "") -> Dict[int, Any]:
    """Convert a sparse index-keyed JSON object into a dict sorted by index."""
    return {index: decode(item, _join(path, index))
            for index, item in _index_items(value, path)}


def _optional(decode: Callable[[Any, str], Any]) -> Callable[[Any, str], Any]:
    """Wrap a decoder so that JSON null decodes to None."""
    def decode_optional(value: Any, path: str) -> Any:
        if value is None:
            return None
        return decode(value, path)
    return decode_optional


def _reject_duplicate_keys(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    """object_pairs_hook for json.loads: refuse repeated keys in one object."""
    result = {}
    for key, value in pairs:
        if key in result:
            siblings = ", ".join(repr(k) for k, _ in pairs)
            raise DeserializationError(
                f"duplicate key {key!r} in JSON object with keys {siblings}",
                field=key)
        result[key] = value
    return result


# =============================================================================
# COLOR CLASS
# =============================================================================

@dataclass(frozen=True)
class Color:
    """
    RGBA color, 0-255 per channel.

    ==========================================================================
    BYTE ORDER
    ==========================================================================

    PyxelEdit writes colors as AARRGGBB - alpha comes FIRST:

        "ffaabbcc"
         ^^          alpha = 0xff = 255
           ^^        red   = 0xaa = 170
             ^^      green = 0xbb = 187
               ^^    blue  = 0xcc = 204

    This is not the RRGGBBAA order used by CSS and most tools.

    ==========================================================================
    """
    r: int
    g: int
    b: int
    a: int

    @classmethod
    def from_hex(cls, text: str, path: str = "") -> 'Color':
        """
        Decode an 8 character AARRGGBB hex string.

        Raises DeserializationError on wrong length or non-hex characters.
        """
        if len(text) != 8:
            raise DeserializationError(
                f"color {text!r} must be exactly 8 hex digits (AARRGGBB)",
                path=path, entity="Color")
        try:
            a, r, g, b = bytes.fromhex(text)
        except ValueError:
            raise DeserializationError(
                f"color {text!r} contains non-hex characters",
                path=path, entity="Color") from None
        return cls(r=r, g=g, b=b, a=a)

    def to_hex(self) -> str:
        """Format back to the AARRGGBB form used in docData.json."""
        return f"{self.a:02x}{self.r:02x}{self.g:02x}{self.b:02x}"

    def as_rgba(self) -> Tuple[int, int, int, int]:
        """(r, g, b, a) tuple, the pixel order Pillow uses for RGBA images."""
        return (self.r, self.g, self.b, self.a)


# =============================================================================
# PALETTE CLASS
# =============================================================================

@dataclass(frozen=True)
class Palette:
    """
    Document color palette.

    'colors' may contain None for empty slots. 'width' and 'height' are the
    palette grid shown in the PyxelEdit UI. 'num_colors' is copied from the
    file as-is; it is not checked against len(colors).
    """
    colors: Tuple[Optional[Color], ...]
    width: int
    height: int
    num_colors: int

    @classmethod
    def from_json(cls, data: Any, path: str = "palette") -> 'Palette':
        data = read_object(data, path, "Palette")
        return cls(
            colors=map_as_sequence(require(data, "colors", "Palette", path),
                                   _optional(as_color),
                                   _join(path, "colors"), fill=None),
            width=read_uint(require(data, "width", "Palette", path),
                            _join(path, "width"), bits=8),
            height=read_uint(require(data, "height", "Palette", path),
                             _join(path, "height"), bits=8),
            num_colors=read_uint(require(data, "numColors", "Palette", path),
                                 _join(path, "numColors")),
        )


# =============================================================================
# TILE REFERENCE CLASS
# =============================================================================

@dataclass(frozen=True)
class TileRef:
    """
    Placement of a tileset tile in one canvas grid cell.

    index:  Tile number in the tileset
    rot:    Rotation in degrees (0, 90, 180 or 270)
    flip_x: Tile is mirrored horizontally
    """
    index: int
    rot: float
    flip_x: bool

    @classmethod
    def from_json(cls, data: Any, path: str = "") -> 'TileRef':
        data = read_object(data, path, "TileRef")
        return cls(
            index=read_uint(require(data, "index", "TileRef", path),
                            _join(path, "index")),
            rot=as_degrees(require(data, "rot", "TileRef", path),
                           _join(path, "rot")),
            flip_x=read_bool(require(data, "flipX", "TileRef", path),
                             _join(path, "flipX")),
        )


# =============================================================================
# BLEND MODE ENUM
# =============================================================================

class BlendMode(Enum):
    """
    Layer compositing operation. Values are the tags used in docData.json.
    """
    NORMAL = "normal"
    MULTIPLY = "multiply"
    ADD = "add"
    DIFFERENCE = "difference"
    DARKEN = "darken"
    LIGHTEN = "lighten"
    HARDLIGHT = "hardlight"
    INVERT = "invert"
    OVERLAY = "overlay"
    SCREEN = "screen"
    SUBTRACT = "subtract"

    @classmethod
    def from_json(cls, value: Any, path: str = "") -> 'BlendMode':
        """Look up a blend mode tag; anything unknown is an error, never NORMAL."""
        try:
            return cls(value)
        except ValueError:
            raise UnknownBlendModeError(value, path) from None


# =============================================================================
# LAYER CLASS
# =============================================================================

@dataclass(frozen=True)
class Layer:
    """
    Canvas layer.

    ==========================================================================
    TILE REFERENCES
    ==========================================================================

    'tile_refs' maps a grid cell index to the tile drawn there. Cells are
    numbered row-major over the canvas tile grid:

        index = row * canvas.columns + column

    Only cells with a tile placed are present.

    ==========================================================================
    IMAGE
    ==========================================================================

    'image' holds the layer pixels from layer{i}.png. Right after JSON
    parsing it is None; the archive loader fills it with either the raw PNG
    bytes or a decoded Pillow image, depending on its configuration.

    ==========================================================================
    """
    alpha: int
    blend_mode: BlendMode
    hidden: bool
    muted: bool
    soloed: bool
    name: str
    tile_refs: Dict[int, TileRef] = field(default_factory=dict)
    image: Any = field(default=None, repr=False, compare=False)

    @classmethod
    def from_json(cls, data: Any, path: str = "") -> 'Layer':
        data = read_object(data, path, "Layer")
        return cls(
            alpha=read_uint(require(data, "alpha", "Layer", path),
                            _join(path, "alpha"), bits=8),
            blend_mode=BlendMode.from_json(require(data, "blendMode", "Layer", path),
                                           _join(path, "blendMode")),
            hidden=read_bool(require(data, "hidden", "Layer", path),
                             _join(path, "hidden")),
            muted=read_bool(require(data, "muted", "Layer", path),
                            _join(path, "muted")),
            soloed=read_bool(require(data, "soloed", "Layer", path),
                             _join(path, "soloed")),
            name=read_str(require(data, "name", "Layer", path),
                          _join(path, "name")),
            tile_refs=map_as_index_dict(require(data, "tileRefs", "Layer", path),
                                        TileRef.from_json,
                                        _join(path, "tileRefs")),
        )


# =============================================================================
# CANVAS CLASS
# =============================================================================

@dataclass(frozen=True)
class Canvas:
    """
    The drawing surface: layer stack plus pixel and tile dimensions.

    'num_layers' is the count declared in the file. The archive loader
    compares it with len(layers) before fetching layer images.
    """
    layers: Tuple[Layer, ...]
    width: int
    height: int
    tile_width: int
    tile_height: int
    num_layers: int

    @classmethod
    def from_json(cls, data: Any, path: str = "canvas") -> 'Canvas':
        data = read_object(data, path, "Canvas")
        return cls(
            layers=map_as_sequence(require(data, "layers", "Canvas", path),
                                   Layer.from_json, _join(path, "layers")),
            width=read_int32(require(data, "width", "Canvas", path),
                             _join(path, "width")),
            height=read_int32(require(data, "height", "Canvas", path),
                              _join(path, "height")),
            tile_width=read_uint(require(data, "tileWidth", "Canvas", path),
                                 _join(path, "tileWidth"), bits=16),
            tile_height=read_uint(require(data, "tileHeight", "Canvas", path),
                                  _join(path, "tileHeight"), bits=16),
            num_layers=read_uint(require(data, "numLayers", "Canvas", path),
                                 _join(path, "numLayers")),
        )

    @property
    def columns(self) -> int:
        """Number of tile columns (0 if the tile width is 0)."""
        return max(self.width, 0) // self.tile_width if self.tile_width else 0

    @property
    def rows(self) -> int:
        """Number of tile rows (0 if the tile height is 0)."""
        return max(self.height, 0) // self.tile_height if self.tile_height else 0


# =============================================================================
# TILESET CLASS
# =============================================================================

@dataclass(frozen=True)
class Tileset:
    """
    Tileset metadata plus one image per tile.

    'images' is index-aligned with tile numbers: images[3] is tile3.png.
    It is empty until the archive loader attaches the tile members.
    """
    fixed_width: bool
    num_tiles: int
    tile_width: int
    tile_height: int
    tiles_wide: int
    images: Tuple[Any, ...] = field(default=(), repr=False, compare=False)

    @classmethod
    def from_json(cls, data: Any, path: str = "tileset") -> 'Tileset':
        data = read_object(data, path, "Tileset")
        return cls(
            fixed_width=read_bool(require(data, "fixedWidth", "Tileset", path),
                                  _join(path, "fixedWidth")),
            num_tiles=read_uint(require(data, "numTiles", "Tileset", path),
                                _join(path, "numTiles")),
            tile_width=read_uint(require(data, "tileWidth", "Tileset", path),
                                 _join(path, "tileWidth"), bits=16),
            tile_height=read_uint(require(data, "tileHeight", "Tileset", path),
                                  _join(path, "tileHeight"), bits=16),
            tiles_wide=read_uint(require(data, "tilesWide", "Tileset", path),
                                 _join(path, "tilesWide"), bits=8),
        )


# =============================================================================
# ANIMATION CLASS
# =============================================================================

@dataclass(frozen=True)
class Animation:
    """
    Tile animation.

    ==========================================================================
    TIMING
    ==========================================================================

    An animation plays 'length' consecutive tiles starting at 'base_tile'.
    Each frame lasts frame_duration * multiplier:

        frame_duration = 150 ms
        multipliers    = (1.0, 2.0, 3.0, 4.0)
        frames         = 150 ms, 300 ms, 450 ms, 600 ms

    ==========================================================================
    """
    base_tile: int
    frame_duration: timedelta
    frame_duration_multipliers: Tuple[float, ...]
    length: int
    name: str

    @classmethod
    def from_json(cls, data: Any, path: str = "") -> 'Animation':
        data = read_object(data, path, "Animation")
        return cls(
            base_tile=read_uint(require(data, "baseTile", "Animation", path),
                                _join(path, "baseTile")),
            frame_duration=as_milliseconds(
                require(data, "frameDuration", "Animation", path),
                _join(path, "frameDuration")),
            frame_duration_multipliers=as_multipliers(
                require(data, "frameDurationMultipliers", "Animation", path),
                _join(path, "frameDurationMultipliers")),
            length=read_uint(require(data, "length", "Animation", path),
                             _join(path, "length")),
            name=read_str(require(data, "name", "Animation", path),
                          _join(path, "name")),
        )

    def frame_durations(self) -> List[timedelta]:
        """
        Duration of each of the 'length' frames.

        Frames past the end of the multiplier list play at 1.0x.
        """
        durations = []
        for frame in range(self.length):
            if frame < len(self.frame_duration_multipliers):
                multiplier = self.frame_duration_multipliers[frame]
            else:
                multiplier = 1.0
            durations.append(self.frame_duration * multiplier)
        return durations

    def total_duration(self) -> timedelta:
        """Time for one full pass through the animation."""
        return sum(self.frame_durations(), timedelta())


# =============================================================================
# PYXEL DOCUMENT CLASS (Main Entry Point)
# =============================================================================

@dataclass(frozen=True)
class PyxelDocument:
    """
    Complete PyxelEdit document - the root of the tree.

    ==========================================================================
    USAGE
    ==========================================================================

    Parsing docData.json only (no images):
        doc = PyxelDocument.parse(json_bytes)
        print(doc.canvas.width, doc.canvas.height)

    Loading a full .pyxel archive (with images):
        from pyxel_archive import open_document
        doc = open_document("sprites.pyxel")
        first_layer_png = doc.canvas.layers[0].image

    ==========================================================================
    """
    name: str
    version: semver.Version
    palette: Palette
    canvas: Canvas
    tileset: Tileset
    animations: Tuple[Animation, ...] = ()

    @classmethod
    def from_json(cls, data: Any) -> 'PyxelDocument':
        """
        Build a document from already-decoded JSON data.

        Parameters:
        -----------
        data : dict
            The decoded docData.json object

        Raises:
        -------
        DeserializationError : on any missing, mistyped or invalid field
        """
        data = read_object(data, "", "PyxelDocument")

        version_text = read_str(require(data, "version", "PyxelDocument", ""),
                                "version")
        try:
            version = semver.Version.parse(version_text)
        except ValueError as e:
            raise DeserializationError(
                f"{version_text!r} is not a semantic version",
                path="version", entity="PyxelDocument", field="version") from e

        return cls(
            name=read_str(require(data, "name", "PyxelDocument", ""), "name"),
            version=version,
            palette=Palette.from_json(require(data, "palette", "PyxelDocument", "")),
            canvas=Canvas.from_json(require(data, "canvas", "PyxelDocument", "")),
            tileset=Tileset.from_json(require(data, "tileset", "PyxelDocument", "")),
            animations=map_as_sequence(
                require(data, "animations", "PyxelDocument", ""),
                Animation.from_json, "animations"),
        )

    @classmethod
    def parse(cls, text: Union[str, bytes, bytearray]) -> 'PyxelDocument':
        """
        Parse the contents of docData.json.

        Raises:
        -------
        DeserializationError : if the JSON is malformed or does not match
                               the document schema
        """
        try:
            data = json.loads(text, object_pairs_hook=_reject_duplicate_keys)
        except json.JSONDecodeError as e:
            raise DeserializationError(f"malformed JSON: {e}") from e
        except RecursionError as e:
            raise DeserializationError("malformed JSON: nesting too deep") from e
        except UnicodeDecodeError as e:
            raise DeserializationError(f"docData.json is not valid UTF-8: {e}") from e
        return cls.from_json(data)
