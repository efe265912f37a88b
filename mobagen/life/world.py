"""Toroidal double-buffered grid of cells for the Game of Life."""

from __future__ import annotations

import random
from collections.abc import Iterator

Point = tuple[int, int]


class World:
    """A square grid of boolean cells with a current and a next buffer.

    Coordinates wrap around the edges, so the grid behaves as a torus.
    Rules read the current buffer and write the next one; calling
    :meth:`swap_buffers` makes the next buffer current.
    """

    def __init__(self, side_size: int = 16) -> None:
        self._side = 0
        self._current = 0
        self._buffers: list[list[bool]] = [[], []]
        self.resize(side_size)

    @property
    def side_size(self) -> int:
        """Number of cells along one side of the grid."""
        return self._side

    def resize(self, side_size: int) -> None:
        """Set a new side size and clear both buffers."""
        if side_size <= 0:
            raise ValueError(f"side size must be positive, got {side_size}")
        self._side = side_size
        self._current = 0
        cell_count = side_size * side_size
        self._buffers = [[False] * cell_count, [False] * cell_count]

    def _index(self, point: Point) -> int:
        x, y = point
        return (y % self._side) * self._side + (x % self._side)

    @property
    def _next(self) -> int:
        return self._current ^ 1

    def swap_buffers(self) -> None:
        """Make the next buffer current and copy it into the new next buffer."""
        self._current = self._next
        self._buffers[self._next][:] = self._buffers[self._current]

    def get(self, point: Point) -> bool:
        """State of a cell in the current buffer; coordinates wrap."""
        return self._buffers[self._current][self._index(point)]

    def set_next(self, point: Point, value: bool) -> None:
        """Write a cell into the next buffer; coordinates wrap."""
        self._buffers[self._next][self._index(point)] = bool(value)

    def set_current(self, point: Point, value: bool) -> None:
        """Write a cell into the current buffer; coordinates wrap."""
        self._buffers[self._current][self._index(point)] = bool(value)

    def randomize(self, rng: random.Random | None = None) -> None:
        """Fill the grid with random states, identical in both buffers."""
        source = random if rng is None else rng
        cells = [source.randint(0, 1) != 0 for _ in range(self._side * self._side)]
        self._buffers = [cells, list(cells)]

    def alive_cells(self) -> Iterator[Point]:
        """Yield the (x, y) coordinates of every live cell in the current buffer."""
        for index, alive in enumerate(self._buffers[self._current]):
            if alive:
                y, x = divmod(index, self._side)
                yield (x, y)