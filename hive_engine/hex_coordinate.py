from dataclasses import dataclass
from enum import Enum


class HexDirection(Enum):
    """
    The six neighbours of a hex in axial coordinates.
    Declared clockwise, so the two directions 60 degrees to either side of
    a direction are its neighbours in declaration order.
    """
    UP_RIGHT = (0, 1)
    RIGHT = (1, 0)
    DOWN_RIGHT = (1, -1)
    DOWN_LEFT = (0, -1)
    LEFT = (-1, 0)
    UP_LEFT = (-1, 1)

    def get_adjacent_directions(self):
        """Return the two directions rotated +/-60 degrees from this one."""
        index = ALL_DIRECTIONS.index(self)
        return (ALL_DIRECTIONS[(index + 5) % 6], ALL_DIRECTIONS[(index + 1) % 6])


ALL_DIRECTIONS = tuple(HexDirection)


@dataclass(frozen=True, order=True)
class HexCoordinate:
    x: int
    y: int

    @classmethod
    def origin(cls):
        return cls(0, 0)

    def get_relative(self, direction):
        dx, dy = direction.value
        return HexCoordinate(self.x + dx, self.y + dy)

    def neighbors(self):
        """Returns a generator of the six neighbours, in ALL_DIRECTIONS order."""
        return (self.get_relative(direction) for direction in ALL_DIRECTIONS)

    def __repr__(self):
        return f"({self.x},{self.y})"


def hex_distance(a, b):
    # axial -> cube, third axis is implicit
    az = -a.x - a.y
    bz = -b.x - b.y
    return (abs(a.x - b.x) + abs(a.y - b.y) + abs(az - bz)) // 2
