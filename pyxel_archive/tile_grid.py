"""
Grid views of layer tile references

=============================================================================
GRID CELL INDICES
=============================================================================

Layer.tile_refs is keyed by grid cell index. Cells are numbered row-major
over the canvas tile grid:

    canvas 256x128 px, tiles 32x16 px  →  8 columns x 8 rows

    +----+----+----+----+----+----+----+----+
    |  0 |  1 |  2 |  3 |  4 |  5 |  6 |  7 |
    +----+----+----+----+----+----+----+----+
    |  8 |  9 | 10 | ...
    +----+----+----+
    ...
    +----+----+----+----+----+----+----+----+
    | 56 | 57 | 58 | 59 | 60 | 61 | 62 | 63 |
    +----+----+----+----+----+----+----+----+

    index = y * columns + x

=============================================================================
DATA STRUCTURE: NUMPY ARRAYS
=============================================================================

TileGrid stores three parallel arrays of shape (rows, columns):

    indices[y, x]    tileset tile number, -1 for an empty cell
    rotations[y, x]  rotation in degrees (0.0 for empty cells)
    flip_x[y, x]     horizontal flip flag

stack_layers() stacks the 'indices' array of every layer into one
(num_layers, rows, columns) array, in canvas layer order.

=============================================================================
"""

import logging
from typing import Optional

import numpy as np

from pyxel_manager import Canvas, Layer, TileRef

log = logging.getLogger(__name__)

EMPTY_TILE = -1

# Largest tile index the int64 grid can hold
MAX_GRID_TILE_INDEX = int(np.iinfo(np.int64).max)


class TileGrid:
    """
    Tile references of one layer laid out on the canvas grid.

    References whose cell index falls outside the grid, or whose tile index
    does not fit in int64, are skipped and logged.
    """

    def __init__(self, rows: int, columns: int):
        self.rows = rows
        self.columns = columns
        self.indices = np.full((rows, columns), EMPTY_TILE, dtype=np.int64)
        self.rotations = np.zeros((rows, columns), dtype=np.float64)
        self.flip_x = np.zeros((rows, columns), dtype=bool)

    @classmethod
    def from_layer(cls, layer: Layer, canvas: Canvas) -> 'TileGrid':
        """
        Build the grid for 'layer' using the dimensions of 'canvas'.

        Parameters:
        -----------
        layer : Layer
            Layer whose tile_refs are placed
        canvas : Canvas
            Canvas providing columns and rows
        """
        grid = cls(canvas.rows, canvas.columns)
        cells = grid.rows * grid.columns

        skipped = 0
        oversized = 0
        for cell, ref in layer.tile_refs.items():
            if cell >= cells:
                skipped += 1
                continue
            if ref.index > MAX_GRID_TILE_INDEX:
                oversized += 1
                continue
            y, x = divmod(cell, grid.columns)
            grid.indices[y, x] = ref.index
            grid.rotations[y, x] = ref.rot
            grid.flip_x[y, x] = ref.flip_x

        if skipped:
            log.warning("Layer '%s': %d tile references lie outside the %dx%d grid",
                        layer.name, skipped, grid.columns, grid.rows)
        if oversized:
            log.warning("Layer '%s': %d tile references have a tile index above %d",
                        layer.name, oversized, MAX_GRID_TILE_INDEX)
        return grid

    def get_tile_ref(self, x: int, y: int) -> Optional[TileRef]:
        """
        Tile reference at column x, row y.

        Returns None for empty cells and for coordinates outside the grid.
        """
        if not (0 <= x < self.columns and 0 <= y < self.rows):
            return None
        index = int(self.indices[y, x])
        if index == EMPTY_TILE:
            return None
        return TileRef(index=index,
                       rot=float(self.rotations[y, x]),
                       flip_x=bool(self.flip_x[y, x]))

    def occupied(self) -> int:
        """Number of cells holding a tile."""
        return int(np.count_nonzero(self.indices != EMPTY_TILE))


def stack_layers(canvas: Canvas) -> np.ndarray:
    """
    Tile indices of every layer as a (num_layers, rows, columns) array.

    Layer order follows canvas.layers.
    """
    stacked = np.full((len(canvas.layers), canvas.rows, canvas.columns),
                      EMPTY_TILE, dtype=np.int64)
    for n, layer in enumerate(canvas.layers):
        stacked[n] = TileGrid.from_layer(layer, canvas).indices
    return stacked
