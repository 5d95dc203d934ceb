import unittest
from client.map.tile import Tile
from core.config import RouterConfig
from core.hex.grid import HexGrid
from core.pathfinding.cost import Adjacency, classify_adjacency, step_cost, terrain_cost


class TestTerrainCost(unittest.TestCase):
    def setUp(self):
        self.config = RouterConfig()

    def cost(self, *args, **kwargs):
        return terrain_cost(Tile(*args, **kwargs), self.config)

    def test_relief(self):
        self.assertEqual(self.cost('grass'), 1)
        self.assertEqual(self.cost('grass', 'hills'), 2)
        self.assertEqual(self.cost('grass', 'mountain'), 3)

    def test_snow_stacks_with_relief(self):
        self.assertEqual(self.cost('snow'), 3)
        self.assertEqual(self.cost('snow', 'hills'), 4)
        self.assertEqual(self.cost('snow', 'mountain'), 5)

    def test_features(self):
        self.assertEqual(self.cost('grass', feature='forest'), 2)
        self.assertEqual(self.cost('grass', feature='jungle'), 3)
        self.assertEqual(self.cost('grass', feature='marsh'), 3)
        self.assertEqual(self.cost('desert', feature='floodplains'), 2)
        self.assertEqual(self.cost('grass', 'hills', 'forest'), 3)

    def test_no_or_unknown_feature(self):
        # Sentinel / unlisted features cost nothing extra
        self.assertEqual(self.cost('grass', feature=None), 1)
        self.assertEqual(self.cost('grass', feature=-1), 1)
        self.assertEqual(self.cost('desert', feature='oasis'), 1)

    def test_custom_weights(self):
        config = RouterConfig(base_cost=2, feature_costs={'forest': 5})
        self.assertEqual(terrain_cost(Tile('grass', feature='forest'), config), 7)
        self.assertEqual(terrain_cost(Tile('grass', feature='jungle'), config), 2)


class TestStepCost(unittest.TestCase):
    def setUp(self):
        self.config = RouterConfig()
        self.tile = Tile('grass')

    def test_no_adjacency(self):
        self.assertEqual(step_cost(self.tile, None, self.config), 1)

    def test_adjacency_surcharges(self):
        straight = Adjacency(river_crossing=False, direction=0, direction_change=False)
        river = Adjacency(river_crossing=True, direction=0, direction_change=False)
        turn = Adjacency(river_crossing=False, direction=1, direction_change=True)
        both = Adjacency(river_crossing=True, direction=1, direction_change=True)
        self.assertEqual(step_cost(self.tile, straight, self.config), 1)
        self.assertEqual(step_cost(self.tile, river, self.config), 3)
        self.assertEqual(step_cost(self.tile, turn, self.config), 3)
        self.assertEqual(step_cost(self.tile, both, self.config), 5)


class TestClassifyAdjacency(unittest.TestCase):
    def setUp(self):
        self.grid = HexGrid(width=5, height=5)
        self.grid.add_river((2, 2), (3, 2))

    def test_first_step_is_never_a_turn(self):
        adj = classify_adjacency(self.grid, (2, 2), (2, 3), 5, None)
        self.assertFalse(adj.direction_change)
        self.assertEqual(adj.direction, 5)

    def test_turn(self):
        self.assertFalse(classify_adjacency(self.grid, (2, 2), (3, 2), 0, 0).direction_change)
        self.assertTrue(classify_adjacency(self.grid, (2, 2), (3, 1), 1, 0).direction_change)

    def test_river(self):
        self.assertTrue(classify_adjacency(self.grid, (2, 2), (3, 2), 0, 0).river_crossing)
        self.assertFalse(classify_adjacency(self.grid, (2, 2), (2, 1), 2, 0).river_crossing)


class TestRouterConfig(unittest.TestCase):
    def test_defaults(self):
        config = RouterConfig()
        self.assertEqual(config.backtrace, 'parent')
        self.assertEqual(config.backtrace_max_iterations, 1000)
        self.assertEqual(config.relief_costs, {'flat': 0, 'hills': 1, 'mountain': 2})

    def test_from_dict_merges_tables(self):
        config = RouterConfig.from_dict({'relief_costs': {'hills': 4}, 'river_crossing_cost': 0})
        self.assertEqual(config.relief_costs, {'flat': 0, 'hills': 4, 'mountain': 2})
        self.assertEqual(config.river_crossing_cost, 0)
        self.assertEqual(RouterConfig.from_dict(None), RouterConfig())

    def test_rejects_bad_options(self):
        with self.assertRaises(ValueError):
            RouterConfig.from_dict({'warp_speed': 9})
        with self.assertRaises(ValueError):
            RouterConfig(backtrace='teleport')
        with self.assertRaises(ValueError):
            RouterConfig(direction_change_cost=-1)
        with self.assertRaises(ValueError):
            RouterConfig(backtrace_max_iterations=0)


if __name__ == '__main__':
    unittest.main()
