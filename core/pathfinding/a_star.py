"""
Purpose: A* land routing on the hex map with terrain, river and turn costs, bounded by a search range.
Dependencies: core/pathfinding/cost.py, core/config.py, heapq, logging.
Ext Hooks: Naval routes (invert the water filter); reuse of search state for repeated queries.
Client/Server: Shared logic; server/routes/route.py exposes it, client/viewer.py draws it.
"""

import heapq
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional

from core.config import (
    DEFAULT_RANGE,
    ROUTE_FAILED_COST,
    UNREACHABLE_COST,
    RouterConfig,
)
from core.pathfinding.cost import Adjacency, classify_adjacency, step_cost
from core.pathfinding.provider import Cell, MapProvider

log = logging.getLogger(__name__)


class InvalidEndpointError(ValueError):
    """Start or end cell is missing or not on the map."""


class SearchState(Enum):
    SEARCHING = "searching"
    FOUND = "found"
    EXHAUSTED = "exhausted"


@dataclass
class SearchNode:
    cell: Cell
    g: int  # accumulated cost from start
    h: int  # grid distance to end, fixed once computed
    direction: Optional[int] = None  # direction used to enter this cell
    parent: Optional[int] = None  # arena index of the predecessor

    @property
    def f(self):
        return self.g + self.h


class RouteResult(NamedTuple):
    """Path ordered end -> start, and its total movement cost."""
    path: List[Cell]
    cost: int

    @property
    def found(self):
        return bool(self.path) and self.cost < UNREACHABLE_COST

    def travel_order(self):
        return list(reversed(self.path))


class _Search:
    """State of one find_route call; discarded when it returns."""

    def __init__(self, start, end, max_range, player, owner):
        self.start = start
        self.end = end
        self.range = max_range
        self.player = player
        self.owner = owner
        self.nodes = []  # arena of SearchNode, indices never move
        self.open = {}  # cell: node index
        self.closed = {}  # cell: node index
        self.queue = []  # heap of (f, plot index, node index)

    def node(self, cell):
        index = self.closed.get(cell, self.open.get(cell))
        return None if index is None else self.nodes[index]


class Router:
    """
    Single-source, single-target land router.
    - Closed cells are never reopened, even if a cheaper way in turns up later.
    - Ties on f go to the lowest plot index.
    """

    def __init__(self, grid: MapProvider, config: Optional[RouterConfig] = None):
        self.grid = grid
        self.config = config or RouterConfig()

    def find_route(self, start, end, range=None, player=None) -> RouteResult:
        """
        Route over land from start to end.
        - range: max grid distance from start a route may stray; unbounded when None.
        - player: if given, only cells revealed to this player are searched.
        Returns RouteResult(path end -> start, cost); cost >= 99999 means no route.
        """
        if not self.grid.contains(start) or not self.grid.contains(end):
            log.error("Cannot route between %s and %s: cell missing or off the map", start, end)
            raise InvalidEndpointError(f"Invalid route endpoints: {start!r} -> {end!r}")
        start, end = tuple(start), tuple(end)
        if range is None:
            range = DEFAULT_RANGE

        start_tile = self.grid.tile(start)
        if start_tile.is_water or self.grid.tile(end).is_water:
            log.info("No land route %s -> %s: an endpoint is water", start, end)
            return RouteResult([], UNREACHABLE_COST)
        if start == end:
            log.info("Start and end are the same cell %s", start)
            return RouteResult([start], 0)
        min_dist = self.grid.distance(start, end)
        if min_dist <= 1:
            return RouteResult([end, start], 1)
        if min_dist > range:
            log.info("No route %s -> %s: distance %d exceeds range %d", start, end, min_dist, range)
            return RouteResult([], UNREACHABLE_COST)

        search = _Search(start, end, range, player, start_tile.owner)
        self._trace("Routing from %s to %s", start, end)
        if self._run(search) is SearchState.EXHAUSTED:
            log.error("Search from %s ended without reaching %s", start, end)
            return RouteResult([], ROUTE_FAILED_COST)

        cost = search.node(end).g
        if self.config.backtrace == "scan":
            path = self._backtrace_scan(search)
        else:
            path = self._backtrace_parents(search)
        if not path:
            log.error("Route %s -> %s was found but could not be traced back", start, end)
            return RouteResult([], ROUTE_FAILED_COST)
        self._trace("Path complete, cost = %d", cost)
        return RouteResult(path, cost)

    # --- search phase ---

    def _run(self, search):
        self._open_start(search)
        state = SearchState.SEARCHING
        while state is SearchState.SEARCHING:
            index = self._next_node(search)
            if index is None:
                state = SearchState.EXHAUSTED
                break
            node = search.nodes[index]
            self._close(search, index)
            if node.cell == search.end:
                state = SearchState.FOUND
            else:
                self._expand(search, index)
        return state

    def _push(self, search, index):
        node = search.nodes[index]
        heapq.heappush(search.queue, (node.f, self.grid.plot_index(node.cell), index))

    def _open_start(self, search):
        node = SearchNode(search.start, 0, self.grid.distance(search.start, search.end))
        search.nodes.append(node)
        search.open[node.cell] = 0
        self._push(search, 0)

    def _next_node(self, search):
        """Pop the open node with the lowest f, skipping stale queue entries."""
        while search.queue:
            f, _, index = heapq.heappop(search.queue)
            node = search.nodes[index]
            if search.open.get(node.cell) == index and node.f == f:
                return index
        return None

    def _close(self, search, index):
        node = search.nodes[index]
        del search.open[node.cell]
        search.closed[node.cell] = index
        self._trace("Closed %s <g=%d, h=%d> dir %s", node.cell, node.g, node.h, node.direction)

    def _expand(self, search, index):
        node = search.nodes[index]
        for direction in range(6):
            adj = self.grid.adjacent(node.cell, direction)
            if adj is None:
                continue
            adjacency = classify_adjacency(self.grid, node.cell, adj, direction, node.direction)
            self._open_or_update(search, adj, index, adjacency)

    def _open_or_update(self, search, cell, predecessor, adjacency: Adjacency):
        """Open `cell` from node `predecessor`, or relax it if it is already open."""
        if not self._is_candidate(search, cell):
            return
        g = search.nodes[predecessor].g + step_cost(self.grid.tile(cell), adjacency, self.config)
        index = search.open.get(cell)
        if index is None:
            node = SearchNode(cell, g, self.grid.distance(cell, search.end),
                              adjacency.direction, predecessor)
            search.nodes.append(node)
            index = len(search.nodes) - 1
            search.open[cell] = index
            self._trace("Opened %s <g=%d, h=%d> dir %d", cell, node.g, node.h, node.direction)
        else:
            node = search.nodes[index]
            if g + node.h >= node.f:
                return
            node.g = g
            node.direction = adjacency.direction
            node.parent = predecessor
        self._push(search, index)

    def _is_candidate(self, search, cell):
        tile = self.grid.tile(cell)
        if tile is None or tile.is_water:
            return False
        # Mountains are routable even though units cannot normally enter them
        if tile.is_impassable and not tile.is_mountain:
            return False
        if tile.is_volcano or tile.natural_wonder:
            return False
        if cell in search.closed:
            return False
        if self.grid.distance(search.start, cell) > search.range:
            return False
        if search.player is not None and not self.grid.is_revealed(search.player, cell):
            return False
        if self.config.restrict_to_territory and tile.owner is not None and tile.owner != search.owner:
            return False
        return True

    # --- backtrace phase ---

    def _backtrace_parents(self, search):
        path = []
        index = search.closed[search.end]
        while index is not None:
            node = search.nodes[index]
            path.append(node.cell)
            index = node.parent
        if path[-1] != search.start:
            return []
        return path

    def _backtrace_scan(self, search):
        """
        Rebuild the path from the closed set alone, consuming it.
        - From each cell step to the closed neighbor with the lowest g; on a tie keep going straight.
        - Gives up when stuck or after backtrace_max_iterations steps.
        """
        current = search.end
        path = [current]
        last_dir = None
        for iteration in range(1, self.config.backtrace_max_iterations + 1):
            search.closed.pop(current, None)
            best, best_g, best_dir = None, None, None
            for direction in range(6):
                adj = self.grid.adjacent(current, direction)
                if adj is None or adj not in search.closed:
                    continue
                g = search.nodes[search.closed[adj]].g
                if best is None or g < best_g or (g == best_g and direction == last_dir):
                    best, best_g, best_dir = adj, g, direction
            if best is None:
                log.error("Backtrace stuck at %s: no closed neighbor (step %d)", current, iteration)
                return []
            path.append(best)
            if best == search.start:
                return path
            current = best
            last_dir = best_dir
        log.error("Backtrace gave up after %d steps", self.config.backtrace_max_iterations)
        return []

    def _trace(self, msg, *args):
        if self.config.debug:
            log.debug(msg, *args)


def get_land_route(grid, start, end, range=None, player=None, config=None) -> RouteResult:
    """One-shot helper: Router(grid, config).find_route(...)."""
    return Router(grid, config).find_route(start, end, range, player)
