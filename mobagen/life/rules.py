"""Rules that advance a Game of Life world by one generation."""

from __future__ import annotations

from abc import ABC, abstractmethod

from mobagen.life.world import Point, World

NEIGHBOR_OFFSETS: tuple[Point, ...] = (
    (0, -1),
    (-1, -1),
    (1, -1),
    (-1, 0),
    (1, 0),
    (0, 1),
    (-1, 1),
    (1, 1),
)


class RuleBase(ABC):
    """A rule reads the current buffer of a world and writes the next one."""

    name: str = ""

    @abstractmethod
    def step(self, world: World) -> None:
        """Write the next generation of ``world`` into its next buffer."""


class JohnConway(RuleBase):
    """The classic B3/S23 rule."""

    name = "JohnConway"

    def step(self, world: World) -> None:
        side = world.side_size
        for line in range(side):
            for column in range(side):
                point = (line, column)
                neighbors = self.count_neighbors(world, point)
                if world.get(point):
                    world.set_next(point, neighbors in (2, 3))
                elif neighbors == 3:
                    world.set_next(point, True)

    def count_neighbors(self, world: World, point: Point) -> int:
        """Number of live cells among the eight cells around ``point``."""
        x, y = point
        return sum(world.get((x + dx, y + dy)) for dx, dy in NEIGHBOR_OFFSETS)