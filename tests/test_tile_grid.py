"""Tests for the numpy tile grid views."""

import json
import logging

import numpy as np

from pyxel_archive import TileGrid, stack_layers
from pyxel_archive.tile_grid import EMPTY_TILE
from pyxel_manager import Canvas, Layer, PyxelDocument, TileRef


def _canvas(doc_data):
    return PyxelDocument.parse(json.dumps(doc_data)).canvas


def test_grid_dimensions(doc_data):
    canvas = _canvas(doc_data)
    assert (canvas.columns, canvas.rows) == (8, 8)

    grid = TileGrid.from_layer(canvas.layers[2], canvas)
    assert grid.indices.shape == (8, 8)
    assert (grid.indices == EMPTY_TILE).all()
    assert grid.occupied() == 0


def test_bottom_row_rotations_and_flips(doc_data):
    canvas = _canvas(doc_data)
    grid = TileGrid.from_layer(canvas.layers[1], canvas)

    assert grid.occupied() == 8
    assert grid.indices[7].tolist() == [0] * 8
    assert grid.rotations[7].tolist() == [0.0, 90.0, 180.0, 270.0] * 2
    assert grid.flip_x[7].tolist() == [False] * 4 + [True] * 4
    assert (grid.indices[:7] == EMPTY_TILE).all()


def test_get_tile_ref(doc_data):
    canvas = _canvas(doc_data)
    grid = TileGrid.from_layer(canvas.layers[1], canvas)

    assert grid.get_tile_ref(5, 7) == TileRef(index=0, rot=90.0, flip_x=True)
    assert grid.get_tile_ref(0, 0) is None
    assert grid.get_tile_ref(8, 7) is None
    assert grid.get_tile_ref(-1, 0) is None


def test_off_grid_references_are_skipped(caplog):
    canvas = Canvas(layers=(), width=64, height=32, tile_width=32, tile_height=16,
                    num_layers=0)
    layer = Layer(alpha=255, blend_mode=None, hidden=False, muted=False, soloed=False,
                  name="wide", tile_refs={1: TileRef(2, 0.0, False),
                                          4: TileRef(3, 0.0, False)})

    with caplog.at_level(logging.WARNING, logger="pyxel_archive.tile_grid"):
        grid = TileGrid.from_layer(layer, canvas)

    assert grid.indices.tolist() == [[EMPTY_TILE, 2], [EMPTY_TILE, EMPTY_TILE]]
    assert "1 tile references lie outside" in caplog.text


def test_stack_layers(doc_data):
    canvas = _canvas(doc_data)
    stacked = stack_layers(canvas)

    assert stacked.shape == (11, 8, 8)
    assert stacked[0, 0, :4].tolist() == [0, 1, 2, 3]
    assert np.count_nonzero(stacked != EMPTY_TILE) == 12


def test_tile_index_beyond_int64_is_skipped(caplog):
    canvas = Canvas(layers=(), width=64, height=32, tile_width=32, tile_height=16,
                    num_layers=0)
    layer = Layer(alpha=255, blend_mode=None, hidden=False, muted=False, soloed=False,
                  name="huge", tile_refs={0: TileRef(2 ** 63, 0.0, False),
                                          1: TileRef(7, 90.0, True)})

    with caplog.at_level(logging.WARNING, logger="pyxel_archive.tile_grid"):
        grid = TileGrid.from_layer(layer, canvas)

    assert grid.indices.tolist() == [[EMPTY_TILE, 7], [EMPTY_TILE, EMPTY_TILE]]
    assert grid.get_tile_ref(1, 0) == TileRef(index=7, rot=90.0, flip_x=True)
    assert "tile index above" in caplog.text
