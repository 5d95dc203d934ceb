"""
Purpose: Hex map (tiles, rivers, visibility) that the router queries; pixel conversion for the viewer.
Dependencies: client/map/tile.py, core/hex/utils.py, random, math.
Ext Hooks: Procedural maps from scenarios; map wrapping.
"""

import random
import math
from client.map.tile import Tile
from core.config import HEX_SIZE
from core.hex.utils import get_neighbors, hex_distance, neighbor, DIRECTIONS


def parse_pos(pos_str):
    """Parse a "(q, r)" tile key back into a tuple."""
    pos_str = pos_str.strip("()").replace(" ", "")
    q, r = map(int, pos_str.split(","))
    return (q, r)


class HexGrid:
    """
    Rhombus of axial cells, q in [0, width) and r in [0, height).
    - Cells are (q, r) tuples; plot_index gives each a stable integer id.
    - Rivers run along edges between two adjacent cells.
    - reveal_unknown_players: whether a player with no revealed set sees the whole map (True)
      or nothing at all (False).
    """

    def __init__(self, width=10, height=10, hex_size=HEX_SIZE, tiles=None, reveal_unknown_players=True):
        self.width = width
        self.height = height
        self.hex_size = hex_size
        self.tiles = {}  # (q, r): Tile object
        self.rivers = set()  # frozenset({a, b}) per river edge
        self.revealed = {}  # player: set of (q, r)
        self.reveal_unknown_players = reveal_unknown_players
        self.path_highlight = []  # Route to draw, any order
        for q in range(width):
            for r in range(height):
                self.tiles[(q, r)] = Tile()
        if tiles:
            for pos, tile in tiles.items():
                self.set_tile(pos, tile)

    # --- map provider queries ---

    def contains(self, cell):
        return cell is not None and tuple(cell) in self.tiles

    def tile(self, cell):
        return self.tiles.get(tuple(cell))

    def plot_index(self, cell):
        q, r = cell
        return r * self.width + q

    def distance(self, a, b):
        return hex_distance(a[0], a[1], b[0], b[1])

    def adjacent(self, cell, direction):
        """Neighbor of cell in direction 0-5, or None when it falls off the map."""
        pos = neighbor(cell[0], cell[1], direction)
        if pos in self.tiles:
            return pos
        return None

    def neighbors(self, cell):
        """Yield (direction, neighbor) for each on-map neighbor."""
        for direction in range(len(DIRECTIONS)):
            adj = self.adjacent(cell, direction)
            if adj is not None:
                yield direction, adj

    def is_river_crossing(self, a, b):
        return frozenset((tuple(a), tuple(b))) in self.rivers

    def is_revealed(self, player, cell):
        cells = self.revealed.get(player)
        if cells is None:
            return self.reveal_unknown_players
        return tuple(cell) in cells

    # --- editing ---

    def set_tile(self, pos, tile):
        pos = tuple(pos)
        if pos not in self.tiles:
            raise KeyError(f"Cell {pos} is outside the {self.width}x{self.height} map")
        self.tiles[pos] = tile

    def add_river(self, a, b):
        a, b = tuple(a), tuple(b)
        if b not in get_neighbors(*a):
            raise ValueError(f"River edge {a}-{b} does not join adjacent cells")
        self.rivers.add(frozenset((a, b)))

    def reveal(self, player, cells):
        self.revealed.setdefault(player, set()).update(tuple(c) for c in cells)

    def set_owner(self, cells, owner):
        for pos in cells:
            self.tiles[tuple(pos)].owner = owner

    def _initialize_random(self, rng):
        # ~60% grass/plains, some hills, forest and water, the odd mountain
        terrains = ['grass'] * 4 + ['plains'] * 3 + ['desert', 'tundra', 'snow', 'coast']
        reliefs = ['flat'] * 7 + ['hills'] * 2 + ['mountain']
        features = [None] * 6 + ['forest', 'jungle', 'marsh', 'floodplains']
        for pos in self.tiles:
            terrain = rng.choice(terrains)
            self.tiles[pos] = Tile(terrain, rng.choice(reliefs),
                                   None if terrain == 'coast' else rng.choice(features))
        for pos in list(self.tiles):
            for direction, adj in self.neighbors(pos):
                if direction < 3 and rng.random() < 0.08:
                    self.add_river(pos, adj)

    @classmethod
    def random(cls, width=10, height=10, seed=None, hex_size=HEX_SIZE):
        grid = cls(width, height, hex_size)
        grid._initialize_random(random.Random(seed))
        return grid

    # --- screen conversion (flat-top hexes) ---

    def hex_to_pixel(self, q, r):
        """Convert axial coordinates to pixel position."""
        x = self.hex_size * 3 / 2 * q
        y = self.hex_size * (math.sqrt(3) / 2 * q + math.sqrt(3) * r)
        return x, y

    def pixel_to_hex(self, x, y):
        """Convert pixel to axial coordinates, or None outside the map."""
        q = (2 * x / self.hex_size) / 3
        r = (y / self.hex_size / math.sqrt(3)) - q / 2
        # Find the closest hex by checking distance to all nearby hexes
        min_dist = float('inf')
        best = None
        for dq in [-1, 0, 1]:
            for dr in [-1, 0, 1]:
                cq = int(round(q)) + dq
                cr = int(round(r)) + dr
                px, py = self.hex_to_pixel(cq, cr)
                dist = math.hypot(px - x, py - y)
                if dist < min_dist:
                    min_dist = dist
                    best = (cq, cr)
        if best in self.tiles:
            return best
        return None

    def set_path_highlight(self, path):
        self.path_highlight = list(path)

    # --- serialization ---

    def to_dict(self):
        return {
            'width': self.width,
            'height': self.height,
            'tiles': {str(pos): tile.to_dict() for pos, tile in self.tiles.items()},
            'rivers': [sorted(list(edge)) for edge in self.rivers],
            'revealed': [{'player': player, 'cells': sorted(cells)}
                         for player, cells in self.revealed.items()],
            'reveal_unknown_players': self.reveal_unknown_players,
        }

    @classmethod
    def from_dict(cls, data, hex_size=HEX_SIZE):
        grid = cls(int(data['width']), int(data['height']), hex_size,
                   reveal_unknown_players=bool(data.get('reveal_unknown_players', True)))
        for pos_str, info in data.get('tiles', {}).items():
            grid.set_tile(parse_pos(pos_str), Tile.from_dict(info))
        for a, b in data.get('rivers', []):
            grid.add_river(a, b)
        for entry in data.get('revealed', []):
            grid.reveal(entry['player'], entry['cells'])
        return grid
