"""
Purpose: Hex map drawing - tiles, rivers and the highlighted route.
Dependencies: core/hex/grid.py, pygame, math.
Ext Hooks: Owner borders; fog for unrevealed cells.
Client Only: Visuals.
"""

import pygame
import math  # For trigonometry
from core.hex.grid import HexGrid as HexGridCore

RIVER_COLOR = (40, 90, 220)
PATH_COLOR = (255, 255, 0)
ENDPOINT_COLOR = (255, 140, 0)


class HexGrid(HexGridCore):
    @property
    def origin(self):
        # Top-left margin so q=0 / r=0 hexes are fully on screen
        return self.hex_size, self.hex_size

    def hex_corners(self, q, r):
        center = self.hex_to_pixel(q, r)
        cx, cy = center[0] + self.origin[0], center[1] + self.origin[1]
        points = []
        for i in range(6):
            angle_rad = math.radians(60 * i)  # flat-top
            points.append((cx + self.hex_size * math.cos(angle_rad),
                           cy + self.hex_size * math.sin(angle_rad)))
        return points

    def get_hex_at_mouse(self, pos):
        x, y = pos
        return self.pixel_to_hex(x - self.origin[0], y - self.origin[1])

    def draw_hex(self, screen, q, r, color=None):
        points = self.hex_corners(q, r)
        if not color:
            color = self.tiles[(q, r)].color
        pygame.draw.polygon(screen, color, points)
        pygame.draw.lines(screen, (0, 0, 0), True, points, 1)

    def draw_river(self, screen, a, b):
        """Thick line along the shared edge of cells a and b."""
        bx, by = self.hex_to_pixel(*b)
        bx, by = bx + self.origin[0], by + self.origin[1]
        corners = sorted(self.hex_corners(*a), key=lambda p: math.hypot(p[0] - bx, p[1] - by))
        pygame.draw.line(screen, RIVER_COLOR, corners[0], corners[1], 4)

    def draw_highlight_path(self, screen, path, color, alpha=128):
        """Draw a path with specified color and alpha."""
        if not path:
            return

        for pos in path:
            pos_tuple = tuple(pos)  # Ensure tuple for dict lookup
            if pos_tuple not in self.tiles:
                continue
            points = self.hex_corners(*pos_tuple)
            cx = sum(p[0] for p in points) / 6
            cy = sum(p[1] for p in points) / 6
            size = self.hex_size

            # Draw semi-transparent overlay
            surf_width = int(size * 3.5)
            surf_height = int(size * 3.5)
            temp_surf = pygame.Surface((surf_width, surf_height), pygame.SRCALPHA)
            temp_surf_points = [(p[0] - cx + surf_width // 2, p[1] - cy + surf_height // 2) for p in points]
            pygame.draw.polygon(temp_surf, color + (alpha,), temp_surf_points)
            screen.blit(temp_surf, (cx - surf_width // 2, cy - surf_height // 2))

    def draw(self, screen, endpoints=()):
        for q, r in self.tiles:
            self.draw_hex(screen, q, r)
        for edge in self.rivers:
            a, b = tuple(edge)
            self.draw_river(screen, a, b)

        self.draw_highlight_path(screen, self.path_highlight, PATH_COLOR, 128)
        self.draw_highlight_path(screen, [p for p in endpoints if p is not None], ENDPOINT_COLOR, 160)

    def screen_size(self):
        """Window size that fits the whole map."""
        x, y = self.hex_to_pixel(self.width - 1, self.height - 1)
        return int(x + 2 * self.origin[0]) + 1, int(y + 2 * self.origin[1]) + 1
