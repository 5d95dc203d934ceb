import os
os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')

import unittest
import pygame
from client.map.hex_grid import HexGrid, RIVER_COLOR
from core.pathfinding.a_star import Router


class TestHexGridDrawing(unittest.TestCase):
    def setUp(self):
        self.grid = HexGrid(width=6, height=4, hex_size=20)
        self.screen = pygame.Surface(self.grid.screen_size())

    def center(self, cell):
        x, y = self.grid.hex_to_pixel(*cell)
        return int(x + self.grid.origin[0]), int(y + self.grid.origin[1])

    def test_mouse_lookup(self):
        for cell in self.grid.tiles:
            self.assertEqual(self.grid.get_hex_at_mouse(self.center(cell)), cell)
        self.assertIsNone(self.grid.get_hex_at_mouse((-200, -200)))

    def test_whole_map_fits(self):
        width, height = self.grid.screen_size()
        for cell in self.grid.tiles:
            for x, y in self.grid.hex_corners(*cell):
                self.assertTrue(0 <= x <= width and 0 <= y <= height)

    def test_draw_route_highlight(self):
        result = Router(self.grid).find_route((0, 1), (4, 1))
        self.grid.set_path_highlight(result.path)
        self.grid.draw(self.screen)
        plain = self.grid.tiles[(0, 0)].color
        self.assertEqual(tuple(self.screen.get_at(self.center((0, 0))))[:3], plain)
        for cell in result.path:
            self.assertNotEqual(tuple(self.screen.get_at(self.center(cell)))[:3], plain)

    def test_draw_river(self):
        self.grid.add_river((2, 1), (2, 2))
        self.grid.draw(self.screen)
        (ax, ay), (bx, by) = self.center((2, 1)), self.center((2, 2))
        midpoint = ((ax + bx) // 2, (ay + by) // 2)
        self.assertEqual(tuple(self.screen.get_at(midpoint))[:3], RIVER_COLOR)

    def test_empty_highlight(self):
        self.grid.set_path_highlight([])
        self.grid.draw_highlight_path(self.screen, [], (255, 255, 0))
        self.assertEqual(self.grid.path_highlight, [])


if __name__ == '__main__':
    unittest.main()
