"""
Purpose: Axial hex math (directions, neighbors, distance).
Dependencies: None.
Ext Hooks: Add line drawing / rings.
"""

# Axial offsets, indexed by direction 0-5 (counter-clockwise starting east)
DIRECTIONS = [(1, 0), (1, -1), (0, -1), (-1, 0), (-1, 1), (0, 1)]


def neighbor(q, r, direction):
    dq, dr = DIRECTIONS[direction]
    return (q + dq, r + dr)


def get_neighbors(q, r):
    # Axial coordinates: neighbors in 6 directions
    return [(q + dq, r + dr) for dq, dr in DIRECTIONS]


def hex_distance(q1, r1, q2, r2):
    # Formula for axial distance
    return (abs(q1 - q2) + abs(q1 + r1 - q2 - r2) + abs(r1 - r2)) // 2


def direction_to(a, b):
    """Direction index from cell a to adjacent cell b, or None if not adjacent."""
    delta = (b[0] - a[0], b[1] - a[1])
    if delta in DIRECTIONS:
        return DIRECTIONS.index(delta)
    return None
