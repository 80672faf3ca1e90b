"""
Image payloads for layer and tile PNG members

=============================================================================
ONE INTERFACE, TWO IMPLEMENTATIONS
=============================================================================

The archive loader reads each PNG member into memory and passes the bytes
to an ImageLoader. What comes back is stored on the document as-is:

    RawImageLoader       bytes  -> bytes             (no decoding at all)
    PillowImageLoader    bytes  -> PIL.Image.Image   (decoded, RGBA by default)

Callers that only copy images around (exporters, asset pipelines) should
use the raw loader and skip the decode cost. Callers that need pixels use
the Pillow loader.

=============================================================================
"""

import logging
from io import BytesIO
from typing import Any, Optional

from PIL import Image, UnidentifiedImageError

from pyxel_manager import ImageDecodeError
from .options import ImageMode, LoaderOptions

log = logging.getLogger(__name__)


class ImageLoader:
    """
    Base class for image payload strategies.

    Subclasses implement load(member_name, data) and return the value that
    will be attached to the document.
    """

    def load(self, member_name: str, data: bytes) -> Any:
        raise NotImplementedError


class RawImageLoader(ImageLoader):
    """Returns the PNG bytes unchanged."""

    def load(self, member_name: str, data: bytes) -> bytes:
        return bytes(data)


class PillowImageLoader(ImageLoader):
    """
    Decodes PNG members with Pillow.

    Parameters:
    -----------
    mode : str, optional
        Pillow mode to convert to ("RGBA" by default, for transparency).
        None keeps the mode stored in the file.
    """

    def __init__(self, mode: Optional[str] = "RGBA"):
        self.mode = mode

    def load(self, member_name: str, data: bytes) -> Image.Image:
        try:
            image = Image.open(BytesIO(data), formats=["PNG"])
            # Image.open is lazy; force the decode while the buffer is alive
            image.load()
            if self.mode and image.mode != self.mode:
                image = image.convert(self.mode)
        except (UnidentifiedImageError, Image.DecompressionBombError,
                OSError, ValueError) as e:
            raise ImageDecodeError(str(e), member_name) from e

        log.debug("Decoded %s: %dx%d %s", member_name, image.width, image.height, image.mode)
        return image


def make_image_loader(options: LoaderOptions) -> ImageLoader:
    """Pick the image loader described by 'options'."""
    if options.image_loader is not None:
        return options.image_loader
    if options.image_mode is ImageMode.DECODED:
        return PillowImageLoader(options.image_convert_mode)
    return RawImageLoader()
