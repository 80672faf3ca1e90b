"""
PyxelEdit archive loader

Requirements:
    pip install pillow numpy semver
"""

import logging

from pyxel_manager import (
    PyxelError, PyxelIOError, ArchiveError, MissingMemberError,
    DeserializationError, MissingFieldError, UnknownBlendModeError,
    LayerCountMismatchError, ImageDecodeError, PyxelDocument,
)
from .options import ImageMode, LoaderOptions
from .images import ImageLoader, RawImageLoader, PillowImageLoader, make_image_loader
from .loader import ArchiveLoader, load, load_from_memory, open_document
from .tile_grid import TileGrid, stack_layers

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
__all__ = [
    "ArchiveLoader",
    "load",
    "load_from_memory",
    "open_document",
    "ImageMode",
    "LoaderOptions",
    "ImageLoader",
    "RawImageLoader",
    "PillowImageLoader",
    "make_image_loader",
    "TileGrid",
    "stack_layers",
    "PyxelDocument",
    "PyxelError",
    "PyxelIOError",
    "ArchiveError",
    "MissingMemberError",
    "DeserializationError",
    "MissingFieldError",
    "UnknownBlendModeError",
    "LayerCountMismatchError",
    "ImageDecodeError",
]
