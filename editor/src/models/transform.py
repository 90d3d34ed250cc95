"""Transform data structures for the crop state."""
from dataclasses import dataclass, replace

from constants import MIN_SCALE, MAX_SCALE, DEFAULT_SCALE


def clamp_scale(value):
    """Clamp a requested scale into [MIN_SCALE, MAX_SCALE]."""
    return max(MIN_SCALE, min(MAX_SCALE, float(value)))


@dataclass(frozen=True)
class Vec2:
    """2D vector for coordinate pairs.

    Used for pointer positions and offsets, both in preview-viewport pixels.
    """
    x: float
    y: float

    def __iter__(self):
        """Allow tuple unpacking: x, y = vec2"""
        return iter((self.x, self.y))

    def __add__(self, other):
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        return Vec2(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Transform:
    """Offset and scale applied to the raster before clipping.

    Offsets are in preview-viewport pixels and are unconstrained: the clip
    disc, not the offset range, bounds what is visible. Scale always sits in
    [MIN_SCALE, MAX_SCALE]; out-of-range values are clamped on construction.

    Frozen so it can be used as part of the publication key.
    """
    offset_x: float = 0.0
    offset_y: float = 0.0
    scale: float = DEFAULT_SCALE

    def __post_init__(self):
        object.__setattr__(self, 'offset_x', float(self.offset_x))
        object.__setattr__(self, 'offset_y', float(self.offset_y))
        object.__setattr__(self, 'scale', clamp_scale(self.scale))

    @classmethod
    def identity(cls):
        return cls(0.0, 0.0, DEFAULT_SCALE)

    @property
    def offset(self):
        return Vec2(self.offset_x, self.offset_y)

    @property
    def is_identity(self):
        return self == Transform.identity()

    def with_offset(self, offset):
        """Return a copy moved to the given Vec2 offset."""
        return replace(self, offset_x=offset.x, offset_y=offset.y)

    def with_scale(self, scale):
        """Return a copy with scale clamped into range."""
        return replace(self, scale=scale)
