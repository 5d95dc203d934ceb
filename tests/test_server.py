import unittest
from client.map.tile import Tile
from core.config import ROUTE_FAILED_COST, UNREACHABLE_COST
from server.app import create_app
from utils.map_layout import flat_grid, grid_from_rows


class TestRouteServer(unittest.TestCase):
    def setUp(self):
        self.client = create_app().test_client()
        self.grid = flat_grid(7, 5)

    def post(self, **payload):
        payload.setdefault('grid', self.grid.to_dict())
        return self.client.post("/api/route", json=payload)

    def test_route(self):
        resp = self.post(start=[1, 2], end=[4, 2])
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.get_json(), {
            "path": [[4, 2], [3, 2], [2, 2], [1, 2]],
            "cost": 3,
            "found": True,
        })

    def test_weights_override(self):
        self.grid.add_river((2, 2), (3, 2))
        resp = self.post(start=[1, 2], end=[4, 2], weights={'river_crossing_cost': 0})
        self.assertEqual(resp.get_json()['cost'], 3)

    def test_range_and_player(self):
        resp = self.post(start=[0, 0], end=[6, 4], range=3)
        self.assertEqual(resp.get_json(), {"path": [], "cost": UNREACHABLE_COST, "found": False})
        self.grid.reveal(1, [(1, 2), (2, 2), (4, 2)])
        resp = self.post(start=[1, 2], end=[4, 2], player=1)
        self.assertEqual(resp.get_json()['cost'], ROUTE_FAILED_COST)

    def test_water_endpoint(self):
        self.grid.set_tile((4, 2), Tile('ocean'))
        resp = self.post(start=[1, 2], end=[4, 2])
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(resp.get_json()['found'])
        self.assertEqual(resp.get_json()['cost'], UNREACHABLE_COST)

    def test_missing_fields(self):
        resp = self.client.post("/api/route", json={"start": [0, 0]})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("error", resp.get_json())
        resp = self.client.post("/api/route", data="not json", content_type="text/plain")
        self.assertEqual(resp.status_code, 400)

    def test_bad_values(self):
        self.assertEqual(self.post(start=[0], end=[4, 2]).status_code, 400)
        self.assertEqual(self.post(start=[0, 0], end=[4, 2], weights={'nope': 1}).status_code, 400)
        self.assertEqual(self.post(start=[0, 0], end=[4, 2], grid={'width': 2}).status_code, 400)
        bad_tile = grid_from_rows([". ."]).to_dict()
        bad_tile['tiles']['(0, 0)'] = {'terrain': 'lava'}
        self.assertEqual(self.post(start=[0, 0], end=[1, 0], grid=bad_tile).status_code, 400)

    def test_unhashable_player(self):
        for player in ([1], {"id": 1}):
            resp = self.post(start=[1, 2], end=[4, 2], player=player)
            self.assertEqual(resp.status_code, 400, player)
            self.assertIn("error", resp.get_json())

    def test_off_map_endpoint(self):
        resp = self.post(start=[0, 0], end=[40, 40])
        self.assertEqual(resp.status_code, 400)

    def test_health(self):
        self.assertEqual(self.client.get("/api/health").get_json(), {"status": "ok"})


if __name__ == '__main__':
    unittest.main()
