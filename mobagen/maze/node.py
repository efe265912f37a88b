"""The four walls around a single maze cell."""

from __future__ import annotations

from dataclasses import dataclass

_NORTH_BIT = 1 << 0
_EAST_BIT = 1 << 1
_SOUTH_BIT = 1 << 2
_WEST_BIT = 1 << 3


@dataclass
class Node:
    """Which of a cell's four walls are standing."""

    north: bool = False
    east: bool = False
    south: bool = False
    west: bool = False

    def to_bits(self) -> int:
        """Pack the walls into four bits: north, east, south, west from bit 0 up."""
        bits = 0
        if self.north:
            bits |= _NORTH_BIT
        if self.east:
            bits |= _EAST_BIT
        if self.south:
            bits |= _SOUTH_BIT
        if self.west:
            bits |= _WEST_BIT
        return bits

    @classmethod
    def from_bits(cls, bits: int) -> Node:
        """Unpack walls from the four-bit layout produced by :meth:`to_bits`."""
        if not 0 <= bits <= 0b1111:
            raise ValueError(f"node bits must be within [0, 15], got {bits}")
        return cls(
            north=bool(bits & _NORTH_BIT),
            east=bool(bits & _EAST_BIT),
            south=bool(bits & _SOUTH_BIT),
            west=bool(bits & _WEST_BIT),
        )