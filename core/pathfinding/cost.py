"""
Purpose: Movement cost of entering a tile, and the adjacency data it depends on.
Dependencies: core/config.py.
Ext Hooks: Road/railroad discounts on already-improved tiles.
"""

from typing import NamedTuple, Optional
from core.config import RouterConfig


class Adjacency(NamedTuple):
    """How a step enters a tile: across a river? in a new direction?"""
    river_crossing: bool
    direction: int
    direction_change: bool


def classify_adjacency(grid, cell, adj, direction, incoming: Optional[int]) -> Adjacency:
    """
    Describe the step cell -> adj taken in `direction`.
    - incoming: direction used to reach `cell`; None for the start cell, whose first step never counts as a turn.
    """
    return Adjacency(
        river_crossing=grid.is_river_crossing(cell, adj),
        direction=direction,
        direction_change=incoming is not None and direction != incoming,
    )


def terrain_cost(tile, config: RouterConfig) -> int:
    """Base cost plus relief, snow and feature surcharges."""
    cost = config.base_cost + config.relief_costs.get(tile.relief, 0)
    if tile.is_snow:
        cost += config.snow_cost
    # Unknown / sentinel features count as no feature
    if tile.feature:
        cost += config.feature_costs.get(tile.feature, 0)
    return cost


def step_cost(tile, adjacency: Optional[Adjacency], config: RouterConfig) -> int:
    """Cost (the search's delta-G) of entering `tile` through `adjacency`."""
    cost = terrain_cost(tile, config)
    if adjacency is not None:
        if adjacency.river_crossing:
            cost += config.river_crossing_cost
        if adjacency.direction_change:
            cost += config.direction_change_cost
    return cost
