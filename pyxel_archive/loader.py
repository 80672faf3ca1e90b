"""
Archive loader for .pyxel documents

=============================================================================
LOAD SEQUENCE
=============================================================================

    stream ──► zipfile.ZipFile
                  │
                  ├─ docData.json ──► PyxelDocument.parse()
                  │
                  ├─ layer0.png ... layer{N-1}.png ──► canvas.layers[i].image
                  │
                  └─ tile0.png  ... tile{M-1}.png  ──► tileset.images[i]

N is the number of layers defined in canvas.layers (checked against the
declared canvas.numLayers), M is tileset.numTiles.

The parsed tree is frozen; images are attached by building new Layer,
Canvas, Tileset and PyxelDocument objects with dataclasses.replace().

=============================================================================
ERRORS
=============================================================================

Everything that goes wrong is raised as a PyxelError subclass:

    not a zip / corrupt member      ArchiveError
    missing member                  MissingMemberError
    bad JSON / schema mismatch      DeserializationError (and subclasses)
    PNG cannot be decoded           ImageDecodeError
    file cannot be opened or read   PyxelIOError

There is no partial result: the first error aborts the load.

=============================================================================
"""

import logging
import os
import zipfile
import zlib
from dataclasses import replace
from io import BytesIO
from typing import BinaryIO, Optional, Union

from pyxel_manager import (
    DOC_DATA_MEMBER, ArchiveError, LayerCountMismatchError, MissingMemberError,
    PyxelDocument, PyxelIOError,
)
from .images import make_image_loader
from .options import DEFAULT_OPTIONS, LoaderOptions

log = logging.getLogger(__name__)


def layer_member_name(index: int) -> str:
    """Archive member holding the pixels of canvas layer 'index'."""
    return f"layer{index}.png"


def tile_member_name(index: int) -> str:
    """Archive member holding the pixels of tileset tile 'index'."""
    return f"tile{index}.png"


class ArchiveLoader:
    """
    Loads PyxelEdit documents from zip archives.

    ==========================================================================
    USAGE EXAMPLE
    ==========================================================================

    ```python
    loader = ArchiveLoader(LoaderOptions(image_mode=ImageMode.DECODED))

    with open("sprites.pyxel", "rb") as f:
        doc = loader.load(f)

    for layer in doc.canvas.layers:
        print(layer.name, layer.image.size)
    ```

    A loader holds no per-load state and can be reused, but each call needs
    its own stream: two loads must not share one file object.

    ==========================================================================
    """

    def __init__(self, options: Optional[LoaderOptions] = None):
        self.options = options or DEFAULT_OPTIONS
        self.image_loader = make_image_loader(self.options)

    def load(self, stream: BinaryIO) -> PyxelDocument:
        """
        Load a document from a seekable binary stream.

        Parameters:
        -----------
        stream : binary file-like object
            Must support read() and seek()

        Returns:
        --------
        PyxelDocument : fully populated document, images attached
        """
        try:
            archive = zipfile.ZipFile(stream)
        except zipfile.BadZipFile as e:
            raise ArchiveError(f"not a valid zip archive: {e}") from e
        except OSError as e:
            raise PyxelIOError(f"could not read archive: {e}") from e

        with archive:
            doc = PyxelDocument.parse(self._read_member(archive, DOC_DATA_MEMBER))
            canvas = self._attach_layer_images(archive, doc)
            tileset = self._attach_tile_images(archive, doc)

        log.info("Loaded document '%s' (PyxelEdit %s): %d layers, %d tiles, %d animations",
                 doc.name, doc.version, len(canvas.layers), len(tileset.images),
                 len(doc.animations))
        return replace(doc, canvas=canvas, tileset=tileset)

    # -------------------------------------------------------------------------
    # MEMBER ACCESS
    # -------------------------------------------------------------------------

    @staticmethod
    def _read_member(archive: zipfile.ZipFile, name: str) -> bytes:
        """Read one member fully, mapping zipfile failures to PyxelErrors."""
        try:
            info = archive.getinfo(name)
        except KeyError:
            raise MissingMemberError(name) from None

        try:
            with archive.open(info) as member:
                data = member.read()
        except (zipfile.BadZipFile, zlib.error, EOFError) as e:
            raise ArchiveError(f"corrupt archive member '{name}': {e}", member=name) from e
        except (NotImplementedError, RuntimeError) as e:
            # Unsupported compression method, or encrypted without a password
            raise ArchiveError(f"cannot read archive member '{name}': {e}", member=name) from e
        except OSError as e:
            raise PyxelIOError(f"could not read archive member '{name}': {e}") from e

        log.debug("Read %s (%d bytes)", name, len(data))
        return data

    def _load_image(self, archive: zipfile.ZipFile, name: str):
        return self.image_loader.load(name, self._read_member(archive, name))

    # -------------------------------------------------------------------------
    # IMAGE ATTACHMENT
    # -------------------------------------------------------------------------

    def _attach_layer_images(self, archive: zipfile.ZipFile, doc: PyxelDocument):
        """
        Return a copy of doc.canvas with every layer image attached.

        The layer tuple is authoritative. A different numLayers is an error
        in strict mode and a warning otherwise.
        """
        canvas = doc.canvas
        declared = canvas.num_layers
        actual = len(canvas.layers)

        if declared != actual:
            if self.options.strict_counts:
                raise LayerCountMismatchError(declared, actual)
            log.warning("numLayers is %d but %d layers are defined; loading %d layer images",
                        declared, actual, actual)

        layers = tuple(
            replace(layer, image=self._load_image(archive, layer_member_name(i)))
            for i, layer in enumerate(canvas.layers)
        )
        return replace(canvas, layers=layers)

    def _attach_tile_images(self, archive: zipfile.ZipFile, doc: PyxelDocument):
        """Return a copy of doc.tileset with tile0.png .. tile{numTiles-1}.png attached."""
        tileset = doc.tileset
        images = tuple(
            self._load_image(archive, tile_member_name(i))
            for i in range(tileset.num_tiles)
        )
        return replace(tileset, images=images)


# =============================================================================
# LOAD ENTRY POINTS
# =============================================================================

def load(stream: BinaryIO, options: Optional[LoaderOptions] = None) -> PyxelDocument:
    """
    Load a document from a seekable binary stream.

    The stream is not closed.
    """
    return ArchiveLoader(options).load(stream)


def load_from_memory(buf: Union[bytes, bytearray, memoryview],
                     options: Optional[LoaderOptions] = None) -> PyxelDocument:
    """Load a document from an in-memory copy of a .pyxel file."""
    return ArchiveLoader(options).load(BytesIO(buf))


def open_document(path: Union[str, os.PathLike],
                  options: Optional[LoaderOptions] = None) -> PyxelDocument:
    """
    Open the .pyxel file at 'path'.

    Raises:
    -------
    PyxelIOError : if the file cannot be opened
    PyxelError   : any other load failure (see module docstring)
    """
    try:
        f = open(path, "rb")
    except OSError as e:
        raise PyxelIOError(f"could not open {os.fspath(path)}: {e.strerror or e}",
                           path=os.fspath(path)) from e

    with f:
        return ArchiveLoader(options).load(f)
