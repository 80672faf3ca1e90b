"""
Loader configuration

=============================================================================
IMAGE MODES
=============================================================================

The PNG members of a .pyxel archive can be handed back two ways:

- RAW:     the PNG bytes exactly as stored in the zip
- DECODED: a Pillow Image, optionally converted to a pixel mode (RGBA)

The mode is chosen when the loader is built. The document classes do not
change: Layer.image / Tileset.images simply hold whichever payload the
configured image loader produced.

=============================================================================
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, TYPE_CHECKING

# TYPE_CHECKING block: imports only used for type hints, not at runtime.
if TYPE_CHECKING:
    from .images import ImageLoader


class ImageMode(Enum):
    """How image members are attached to the document."""
    RAW = "raw"          # PNG bytes, untouched
    DECODED = "decoded"  # PIL.Image.Image


@dataclass(frozen=True)
class LoaderOptions:
    """
    Options for ArchiveLoader.

    Attributes:
    -----------
    image_mode : ImageMode
        RAW (default) or DECODED
    image_convert_mode : str, optional
        Pillow mode decoded images are converted to. None keeps the mode
        stored in the PNG. Ignored in RAW mode.
    strict_counts : bool
        If True (default) a canvas whose numLayers differs from the number
        of layers defined is rejected. If False the mismatch is logged and
        the defined layers are used.
    image_loader : ImageLoader, optional
        Explicit image loader; overrides image_mode when given
    """
    image_mode: ImageMode = ImageMode.RAW
    image_convert_mode: Optional[str] = "RGBA"
    strict_counts: bool = True
    image_loader: Optional['ImageLoader'] = None


DEFAULT_OPTIONS = LoaderOptions()
