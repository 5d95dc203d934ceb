"""
Purpose: Configs for the router, hexes and the route server.
Dependencies: dataclasses, os.
Ext Hooks: Add per-ruleset weight presets.
"""

import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

HEX_SIZE = 32
SERVER_URL = os.environ.get("HEXROUTE_SERVER_URL", "http://localhost:5000")

# Sentinels returned by the router
DEFAULT_RANGE = 999999
UNREACHABLE_COST = 99999  # water endpoint or end beyond range
ROUTE_FAILED_COST = 9999999  # search ran but produced no route
BACKTRACE_MAX_ITERATIONS = 1000

# Land route weights
BASE_COST = 1
HILLS_COST = 1
MOUNTAIN_COST = 2
SNOW_COST = 2
FOREST_COST = 1
JUNGLE_COST = 2
MARSH_COST = 2
FLOODPLAINS_COST = 1
RIVER_CROSSING_COST = 2
DIRECTION_CHANGE_COST = 2

BACKTRACE_STRATEGIES = ("parent", "scan")


def _default_relief_costs():
    return {"flat": 0, "hills": HILLS_COST, "mountain": MOUNTAIN_COST}


def _default_feature_costs():
    return {
        "forest": FOREST_COST,
        "jungle": JUNGLE_COST,
        "marsh": MARSH_COST,
        "floodplains": FLOODPLAINS_COST,
    }


@dataclass
class RouterConfig:
    """
    Weights and switches for one Router.
    - relief_costs: surcharge per relief (flat/hills/mountain).
    - feature_costs: surcharge per feature; features not listed cost nothing.
    - backtrace: "parent" walks predecessor links, "scan" re-derives the path from the closed set.
    """
    base_cost: int = BASE_COST
    relief_costs: Dict[str, int] = field(default_factory=_default_relief_costs)
    snow_cost: int = SNOW_COST
    feature_costs: Dict[str, int] = field(default_factory=_default_feature_costs)
    river_crossing_cost: int = RIVER_CROSSING_COST
    direction_change_cost: int = DIRECTION_CHANGE_COST
    restrict_to_territory: bool = True
    backtrace: str = "parent"
    backtrace_max_iterations: int = BACKTRACE_MAX_ITERATIONS
    debug: bool = False

    def __post_init__(self):
        if self.backtrace not in BACKTRACE_STRATEGIES:
            raise ValueError(f"Unknown backtrace strategy: {self.backtrace!r}")
        if self.backtrace_max_iterations < 1:
            raise ValueError("backtrace_max_iterations must be positive")
        for name, value in self._weights().items():
            if value < 0:
                raise ValueError(f"Negative weight for {name}: {value}")

    def _weights(self):
        weights = {
            "base_cost": self.base_cost,
            "snow_cost": self.snow_cost,
            "river_crossing_cost": self.river_crossing_cost,
            "direction_change_cost": self.direction_change_cost,
        }
        weights.update({f"relief:{k}": v for k, v in self.relief_costs.items()})
        weights.update({f"feature:{k}": v for k, v in self.feature_costs.items()})
        return weights

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "RouterConfig":
        """Build a config from JSON overrides; surcharge tables are merged onto the defaults."""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown router options: {', '.join(sorted(unknown))}")
        options = dict(data)
        if "relief_costs" in options:
            options["relief_costs"] = {**_default_relief_costs(), **options["relief_costs"]}
        if "feature_costs" in options:
            options["feature_costs"] = {**_default_feature_costs(), **options["feature_costs"]}
        return cls(**options)
