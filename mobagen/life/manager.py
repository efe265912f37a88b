"""Simulation controller for the Game of Life."""

from __future__ import annotations

import random
from collections.abc import Sequence

from mobagen.life.rules import JohnConway, RuleBase
from mobagen.life.world import Point, World

MIN_SIDE_SIZE = 16
MAX_SIDE_SIZE = 256
MIN_TIME_BETWEEN_STEPS = 0.0001
MAX_TIME_BETWEEN_STEPS = 1.0


class LifeManager:
    """Owns a world and a set of rules and drives the simulation over time."""

    def __init__(
        self,
        side_size: int = 16,
        rules: Sequence[RuleBase] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.side_size = side_size
        self.world = World(side_size)
        self.rules: list[RuleBase] = list(rules) if rules is not None else [JohnConway()]
        if not self.rules:
            raise ValueError("at least one rule is required")
        self.rule_id = 0
        self.rng = rng if rng is not None else random.Random()
        self.is_simulating = False
        self.accumulated_time = 0.0
        self._time_between_steps = 0.2

    @property
    def rule(self) -> RuleBase:
        """The rule currently in use."""
        return self.rules[self.rule_id]

    @property
    def rule_names(self) -> list[str]:
        return [rule.name for rule in self.rules]

    @property
    def time_between_steps(self) -> float:
        return self._time_between_steps

    @time_between_steps.setter
    def time_between_steps(self, value: float) -> None:
        if not MIN_TIME_BETWEEN_STEPS <= value <= MAX_TIME_BETWEEN_STEPS:
            raise ValueError(
                f"time between steps must be within "
                f"[{MIN_TIME_BETWEEN_STEPS}, {MAX_TIME_BETWEEN_STEPS}], got {value}"
            )
        self._time_between_steps = value

    @property
    def time_to_next_step(self) -> float:
        return self._time_between_steps - self.accumulated_time

    def _advance(self) -> None:
        self.rule.step(self.world)
        self.world.swap_buffers()

    def step(self) -> None:
        """Pause the simulation and advance exactly one generation."""
        self.is_simulating = False
        self._advance()

    def clear(self) -> None:
        """Stop the simulation and empty the world."""
        self.is_simulating = False
        self.world.resize(self.side_size)

    def update(self, delta_time: float) -> None:
        """Advance simulated time; step once the step interval is exceeded."""
        if not self.is_simulating:
            return
        self.accumulated_time += delta_time
        if self.accumulated_time > self._time_between_steps:
            self._advance()
            self.accumulated_time = 0.0

    def resize(self, side_size: int) -> None:
        """Change the side size; a different size clears the world."""
        if not MIN_SIDE_SIZE <= side_size <= MAX_SIDE_SIZE:
            raise ValueError(
                f"side size must be within [{MIN_SIDE_SIZE}, {MAX_SIDE_SIZE}], got {side_size}"
            )
        if side_size != self.side_size:
            self.side_size = side_size
            self.world.resize(side_size)

    def select_rule(self, index: int) -> None:
        """Switch to another rule and clear the world."""
        if not 0 <= index < len(self.rules):
            raise IndexError(f"no rule at index {index}")
        self.rule_id = index
        self.clear()

    def start(self) -> None:
        self.is_simulating = True

    def pause(self) -> None:
        self.is_simulating = False

    def randomize(self) -> None:
        """Pause and fill the world with random cells."""
        self.is_simulating = False
        self.world.randomize(self.rng)

    def toggle(self, point: Point) -> bool:
        """Flip a cell inside the grid; return False when the point is outside."""
        x, y = point
        if not (0 <= x < self.side_size and 0 <= y < self.side_size):
            return False
        self.world.set_current(point, not self.world.get(point))
        self.world.set_next(point, not self.world.get(point))
        return True

    def mouse_position_to_index(
        self, mouse_pos: tuple[float, float], window_size: tuple[int, int]
    ) -> Point:
        """Map a window position to grid coordinates (possibly outside the grid)."""
        width, height = window_size
        center_x, center_y = width // 2, height // 2
        min_dimension = min(width, height) * 0.99
        square_side = min_dimension / self.side_size
        rel_x = (mouse_pos[0] - center_x) * 0.99 + min_dimension / 2
        rel_y = (mouse_pos[1] - center_y) * 0.99 + min_dimension / 2
        return int(rel_x / square_side), int(rel_y / square_side)