"""
Purpose: Build a HexGrid from rows of tile symbols (tests, demos, quick scenarios).
Dependencies: core/hex/grid.py, client/map/tile.py.
Ext Hooks: Owner / river markup in the same text.

Row index is r, column index is q. Symbols:
    .  grass            h  grass hills     M  mountain
    f  forest           j  jungle          m  marsh
    p  floodplains      s  snow            S  snow hills
    ~  ocean            #  impassable      v  volcano
    W  natural wonder   i  ice
"""

from client.map.tile import Tile
from core.hex.grid import HexGrid

SYMBOLS = {
    '.': dict(terrain='grass'),
    'h': dict(terrain='grass', relief='hills'),
    'M': dict(terrain='grass', relief='mountain'),
    'f': dict(terrain='grass', feature='forest'),
    'j': dict(terrain='grass', feature='jungle'),
    'm': dict(terrain='grass', feature='marsh'),
    'p': dict(terrain='desert', feature='floodplains'),
    's': dict(terrain='snow'),
    'S': dict(terrain='snow', relief='hills'),
    '~': dict(terrain='ocean'),
    '#': dict(terrain='grass', impassable=True),
    'v': dict(terrain='grass', relief='mountain', feature='volcano'),
    'W': dict(terrain='grass', natural_wonder=True),
    'i': dict(terrain='tundra', feature='ice'),
}


def _symbols(row):
    return row.split() if ' ' in row.strip() else list(row.strip())


def grid_from_rows(rows, hex_size=None):
    """rows: list of strings, all the same length once spaces are dropped."""
    cells = [_symbols(row) for row in rows if row.strip()]
    if not cells:
        raise ValueError("Empty map layout")
    width = len(cells[0])
    if any(len(row) != width for row in cells):
        raise ValueError("Map layout rows differ in length")
    kwargs = {} if hex_size is None else {'hex_size': hex_size}
    grid = HexGrid(width, len(cells), **kwargs)
    for r, row in enumerate(cells):
        for q, symbol in enumerate(row):
            if symbol not in SYMBOLS:
                raise ValueError(f"Unknown map symbol {symbol!r} at {(q, r)}")
            grid.set_tile((q, r), Tile(**SYMBOLS[symbol]))
    return grid


def flat_grid(width, height, **kwargs):
    """All grass, no features."""
    return grid_from_rows(['.' * width] * height, **kwargs)
