"""
Purpose: Map tiles with terrain, relief, feature and ownership for land routing.
Dependencies: None.
Ext Hooks: Add more features (e.g., reef routing for naval paths).
Client: Visuals (colors); Server: Rules (JSON serializable).
"""

WATER_TERRAINS = ('coast', 'ocean', 'lake')
TERRAINS = ('grass', 'plains', 'desert', 'tundra', 'snow') + WATER_TERRAINS
RELIEFS = ('flat', 'hills', 'mountain')
# Features that block land units outright
IMPASSABLE_FEATURES = ('ice',)

TERRAIN_COLORS = {
    'grass': (70, 140, 50),
    'plains': (160, 160, 70),
    'desert': (220, 200, 130),
    'tundra': (130, 120, 100),
    'snow': (235, 235, 240),
    'coast': (70, 130, 200),
    'ocean': (30, 60, 140),
    'lake': (80, 150, 210),
}
MOUNTAIN_COLOR = (110, 100, 95)
WONDER_COLOR = (200, 80, 200)


class Tile:
    def __init__(self, terrain='grass', relief='flat', feature=None, owner=None,
                 impassable=False, natural_wonder=False):
        if terrain not in TERRAINS:
            raise ValueError(f"Unknown terrain: {terrain!r}")
        if relief not in RELIEFS:
            raise ValueError(f"Unknown relief: {relief!r}")
        if terrain in WATER_TERRAINS:
            relief = 'flat'  # no hills at sea
        self.terrain = terrain
        self.relief = relief
        self.feature = feature
        self.owner = owner
        self.natural_wonder = natural_wonder
        self._impassable = impassable

    @property
    def is_water(self):
        return self.terrain in WATER_TERRAINS

    @property
    def is_hills(self):
        return self.relief == 'hills'

    @property
    def is_mountain(self):
        return self.relief == 'mountain'

    @property
    def is_snow(self):
        return self.terrain == 'snow'

    @property
    def is_volcano(self):
        return self.feature == 'volcano'

    @property
    def is_impassable(self):
        # Mountains are impassable to regular units; routing may still cross them
        return self._impassable or self.is_mountain or self.feature in IMPASSABLE_FEATURES

    @property
    def color(self):
        if self.natural_wonder:
            return WONDER_COLOR
        if self.is_mountain:
            return MOUNTAIN_COLOR
        r, g, b = TERRAIN_COLORS[self.terrain]
        if self.is_hills:
            return (int(r * 0.8), int(g * 0.8), int(b * 0.8))
        return (r, g, b)

    def to_dict(self):
        data = {'terrain': self.terrain, 'relief': self.relief}
        if self.feature:
            data['feature'] = self.feature
        if self.owner is not None:
            data['owner'] = self.owner
        if self._impassable:
            data['impassable'] = True
        if self.natural_wonder:
            data['natural_wonder'] = True
        return data

    @classmethod
    def from_dict(cls, data):
        return cls(
            terrain=data.get('terrain', 'grass'),
            relief=data.get('relief', 'flat'),
            feature=data.get('feature'),
            owner=data.get('owner'),
            impassable=bool(data.get('impassable', False)),
            natural_wonder=bool(data.get('natural_wonder', False)),
        )

    def __repr__(self):
        return f"Tile({self.terrain!r}, {self.relief!r}, feature={self.feature!r}, owner={self.owner!r})"
