"""
Purpose: Interactive route viewer - click two land hexes, see the route and its cost.
Dependencies: client/map/hex_grid.py, client/network/client.py, core/pathfinding/a_star.py, core/config.py, pygame, threading.
Ext Hooks: Edit tiles / rivers with the mouse.
Client Only: Input and visuals.

Controls:
- Left click: pick start, then end (computes the route)
- Right click: clear
- B: toggle backtrace strategy (parent / scan)
- N: new random map
"""

import argparse
import logging
import threading
import pygame
from client.map.hex_grid import HexGrid
from client.network.client import RouteClient
from core.config import HEX_SIZE, SERVER_URL, RouterConfig
from core.pathfinding.a_star import Router

log = logging.getLogger(__name__)


class RouteViewer:
    """Owns the window, the map and the current start/end selection."""

    def __init__(self, width=16, height=12, seed=None, max_range=None, server_url=None):
        self.seed = seed
        self.max_range = max_range
        self.grid = HexGrid.random(width, height, seed=seed, hex_size=HEX_SIZE)
        self.config = RouterConfig()
        self.client = RouteClient(server_url, max_retries=1) if server_url else None
        self.start = None
        self.end = None
        self.status = "Click a start hex"
        self.running = True

        pygame.init()
        pygame.font.init()
        self.font = pygame.font.SysFont('Arial', 18)
        map_w, map_h = self.grid.screen_size()
        self.screen = pygame.display.set_mode((map_w, map_h + 30))
        pygame.display.set_caption("hexroute - land route viewer")
        self.clock = pygame.time.Clock()

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 3:
                    self.clear()
                else:
                    cell = self.grid.get_hex_at_mouse(event.pos)
                    if cell is not None:
                        self.select(cell)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_b:
                    self.config.backtrace = "scan" if self.config.backtrace == "parent" else "parent"
                    self.status = f"Backtrace: {self.config.backtrace}"
                    self.compute_route()
                elif event.key == pygame.K_n:
                    self.seed = None if self.seed is None else self.seed + 1
                    self.grid = HexGrid.random(self.grid.width, self.grid.height, seed=self.seed,
                                               hex_size=self.grid.hex_size)
                    self.clear()

    def select(self, cell):
        if self.start is None or self.end is not None:
            self.start, self.end = cell, None
            self.grid.set_path_highlight([])
            self.status = f"Start {cell}; click an end hex"
        else:
            self.end = cell
            self.compute_route()

    def clear(self):
        self.start = self.end = None
        self.grid.set_path_highlight([])
        self.status = "Click a start hex"

    def compute_route(self):
        if self.start is None or self.end is None:
            return
        result = Router(self.grid, self.config).find_route(self.start, self.end, self.max_range)
        self.grid.set_path_highlight(result.path)
        if result.found:
            self.status = f"{self.start} -> {self.end}: cost {result.cost}, {len(result.path)} hexes"
        else:
            self.status = f"{self.start} -> {self.end}: no route (cost {result.cost})"
        if self.client is not None:
            thread = threading.Thread(target=self._check_with_server, args=(self.grid, self.start, self.end,
                                                                          self.config.backtrace, result.cost))
            thread.daemon = True
            thread.start()

    def _check_with_server(self, grid, start, end, backtrace, local_cost):
        """Compare the server's answer with the local one, for the map and strategy the local route used."""
        answer = self.client.request_route(grid, start, end, range=self.max_range,
                                           weights={'backtrace': backtrace})
        if answer is None:
            log.warning("Server unreachable, keeping local route")
        elif answer['cost'] != local_cost:
            log.warning("Server cost %s differs from local cost %s", answer['cost'], local_cost)
        else:
            log.info("Server agrees: cost %s", local_cost)

    def draw(self):
        self.screen.fill((20, 20, 20))
        self.grid.draw(self.screen, endpoints=(self.start, self.end))
        text = self.font.render(self.status, True, (230, 230, 230))
        self.screen.blit(text, (8, self.screen.get_height() - 26))

    def run(self):
        while self.running:
            self.clock.tick(30)
            self.handle_input()
            self.draw()
            pygame.display.flip()
        pygame.quit()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Hex land route viewer")
    parser.add_argument('--width', type=int, default=16)
    parser.add_argument('--height', type=int, default=12)
    parser.add_argument('--seed', type=int, default=None)
    parser.add_argument('--range', type=int, default=None, dest='max_range')
    parser.add_argument('--server', nargs='?', const=SERVER_URL, default=None,
                        help="also ask the route server (default URL from HEXROUTE_SERVER_URL)")
    parser.add_argument('--debug', action='store_true')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    viewer = RouteViewer(args.width, args.height, args.seed, args.max_range, args.server)
    viewer.config.debug = args.debug
    viewer.run()


if __name__ == "__main__":
    main()
