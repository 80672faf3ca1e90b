"""Shared fixtures: an in-memory copy of the PyxelEdit 0.4.8 test document."""

import copy
import json
import zipfile
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

PALETTE_HEX = [
    "ffbe3535", "fff99b97", "ff915f33", "ffd17f30", "fff7ee59",
    "ff59cd36", "ff83f0dc", "ff75a1ec", "ff4137cd", "ffcc59c6",
    "ffffffff", "ffcacaca", "ff8e8e8e", "ff5b5b5b", "ff000000",
]

# (blendMode, hidden, muted, soloed, name), in canvas order
LAYERS = [
    ("subtract", False, False, False, "Layer 10"),
    ("screen", False, False, True, "Layer 9"),
    ("overlay", False, True, False, "Layer 8"),
    ("invert", True, False, False, "Layer 7"),
    ("hardlight", False, False, False, "Layer 6"),
    ("lighten", False, False, False, "Layer 5"),
    ("darken", False, False, False, "Layer 4"),
    ("difference", False, False, False, "Layer 3"),
    ("add", False, False, False, "Layer 2"),
    ("multiply", False, False, False, "Layer 1"),
    ("normal", False, False, False, "Layer 0"),
]


def _layer_json(blend_mode, hidden, muted, soloed, name, tile_refs):
    return {
        "alpha": 255,
        "blendMode": blend_mode,
        "hidden": hidden,
        "muted": muted,
        "soloed": soloed,
        "name": name,
        "tileRefs": tile_refs,
        # Present in real files, not part of the model
        "type": "tileLayer",
    }


def canonical_doc_data() -> dict:
    """docData.json of the 0.4.8 test document."""
    layers = {}
    for i, (blend_mode, hidden, muted, soloed, name) in enumerate(LAYERS):
        if i == 0:
            tile_refs = {str(cell): {"index": cell, "rot": 0, "flipX": False}
                         for cell in range(4)}
        elif i == 1:
            # Every rotation, unflipped then flipped, on the bottom row
            tile_refs = {str(56 + n): {"index": 0, "rot": n % 4, "flipX": n >= 4}
                         for n in range(8)}
        else:
            tile_refs = {}
        layers[str(i)] = _layer_json(blend_mode, hidden, muted, soloed, name, tile_refs)

    return {
        "name": "test_v0.4.8",
        "version": "0.4.8",
        "settings": {"paintTool": "pen"},
        "palette": {
            "colors": {str(i): hex_color for i, hex_color in enumerate(PALETTE_HEX)},
            "height": 4,
            "numColors": 15,
            "width": 8,
        },
        "canvas": {
            "layers": layers,
            "height": 128,
            "numLayers": 11,
            "tileHeight": 16,
            "tileWidth": 32,
            "width": 256,
            "currentLayerIndex": 10,
        },
        "tileset": {
            "fixedWidth": False,
            "numTiles": 4,
            "tileHeight": 16,
            "tileWidth": 32,
            "tilesWide": 8,
        },
        "animations": {
            "0": {"baseTile": 0, "frameDuration": 150,
                  "frameDurationMultipliers": [100, 200, 300, 400],
                  "length": 4, "name": "Animation 1"},
            "1": {"baseTile": 4, "frameDuration": 100,
                  "frameDurationMultipliers": [100, 100],
                  "length": 2, "name": "Animation 2"},
            "2": {"baseTile": 6, "frameDuration": 1000,
                  "frameDurationMultipliers": [100, 100],
                  "length": 2, "name": "Animation 3"},
        },
    }


def png_bytes(size, color) -> bytes:
    buf = BytesIO()
    Image.new("RGBA", size, color).save(buf, "PNG")
    return buf.getvalue()


def build_archive(doc_data, num_layers=None, num_tiles=None, skip=(), extra=None) -> bytes:
    """
    Zip a docData dict together with generated layer and tile PNGs.

    num_layers / num_tiles default to the counts in doc_data; 'skip' lists
    member names to leave out; 'extra' maps member names to raw bytes that
    replace or add members.
    """
    if num_layers is None:
        num_layers = len(doc_data["canvas"]["layers"]) if doc_data else 0
    if num_tiles is None:
        num_tiles = doc_data["tileset"]["numTiles"] if doc_data else 0

    members = {}
    if doc_data is not None:
        members["docData.json"] = json.dumps(doc_data).encode("utf-8")
    for i in range(num_layers):
        members[f"layer{i}.png"] = png_bytes((256, 128), (i * 20, 0, 0, 255))
    for i in range(num_tiles):
        members[f"tile{i}.png"] = png_bytes((32, 16), (0, i * 60, 0, 255))
    members.update(extra or {})

    buf = BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, data in members.items():
            if name not in skip:
                zf.writestr(name, data)
    return buf.getvalue()


@pytest.fixture
def doc_data():
    """A fresh, mutable copy of the canonical docData.json contents."""
    return copy.deepcopy(canonical_doc_data())


@pytest.fixture
def make_archive():
    """Factory building .pyxel bytes; see build_archive for the arguments."""
    return build_archive


@pytest.fixture
def canonical_archive() -> bytes:
    return build_archive(canonical_doc_data())


@pytest.fixture
def canonical_path(tmp_path: Path, canonical_archive: bytes) -> Path:
    path = tmp_path / "test_v0.4.8.pyxel"
    path.write_bytes(canonical_archive)
    return path


def json_with_deep_field(doc_data, depth) -> str:
    """docData.json text with an unknown field nested 'depth' arrays deep."""
    text = json.dumps(doc_data)
    return text[:-1] + ', "deep": ' + "[" * depth + "]" * depth + "}"
