"""
Purpose: The narrow map interface the router consumes.
Dependencies: typing.
Ext Hooks: Adapters for other map backends (e.g., a live game API).
"""

from typing import Any, Hashable, Optional, Protocol, Tuple

Cell = Tuple[int, int]


class MapProvider(Protocol):
    """Read-only map queries. core/hex/grid.py HexGrid is the stock implementation."""

    def contains(self, cell: Optional[Cell]) -> bool: ...

    def tile(self, cell: Cell) -> Any: ...

    def plot_index(self, cell: Cell) -> int: ...

    def distance(self, a: Cell, b: Cell) -> int: ...

    def adjacent(self, cell: Cell, direction: int) -> Optional[Cell]: ...

    def is_river_crossing(self, a: Cell, b: Cell) -> bool: ...

    def is_revealed(self, player: Hashable, cell: Cell) -> bool: ...
