# mobagen

Small, dependency-free building blocks for grid simulations and geometry:

- **`mobagen.life`**: Conway's Game of Life on a wrapping square board with
  double-buffered state, and a manager that drives it over time.
- **`mobagen.maze.node`**: the four walls of a single maze cell, packable into
  four bits.
- **`mobagen.voronoi`**: Fortune's sweep-line algorithm for Voronoi diagrams
  clipped to a rectangle, together with the red-black tree it relies on.

Everything is driven explicitly. You call `step()` or `update(delta_time)`
yourself, so the package fits into any loop or test. Randomness comes from a
`random.Random` instance you pass in, which makes runs reproducible.

## Game of Life

```python
import random

from mobagen.life.manager import LifeManager
from mobagen.life.rules import JohnConway

manager = LifeManager(16, [JohnConway()], random.Random(42))
manager.randomize()   # pause and fill the board with random live cells
manager.step()        # pause and advance exactly one generation

manager.start()       # let update() advance the simulation on a timer
manager.update(0.25)  # feed elapsed seconds; steps once time_between_steps is exceeded
manager.pause()
```

`LifeManager(side_size=16, rules=None, rng=None)` uses `JohnConway` when no
rules are given. It also has:

- `resize(side_size)`: accepts sizes from 16 to 256 (otherwise `ValueError`);
  a different size clears the board.
- `clear()`: stops the simulation and empties the board.
- `select_rule(index)`: switches rule and clears the board (`IndexError` for an
  unknown index). `rule` and `rule_names` describe the rules.
- `time_between_steps`: seconds between automatic steps, from 0.0001 to 1.0
  (otherwise `ValueError`); `time_to_next_step` tells how long remains.
- `toggle(point)`: flips the cell at `(x, y)` and returns `True`, or returns
  `False` when the point is outside the board.
- `mouse_position_to_index(mouse_pos, window_size)`: maps a window position to
  board coordinates, which may lie outside the board.

The board is a `mobagen.life.world.World`. `get`, `set_current` and `set_next`
take `(x, y)` points whose coordinates wrap around the edges; `swap_buffers()`
makes the next buffer current; `randomize(rng)` fills both buffers alike;
`alive_cells()` yields the coordinates of live cells. New rules subclass
`mobagen.life.rules.RuleBase`, set `name` and implement `step(world)`, reading
the current buffer and writing the next one.

## Maze cells

```python
from mobagen.maze.node import Node

node = Node(north=True, west=True)
node.to_bits()        # 0b1001: north is bit 0, east bit 1, south bit 2, west bit 3
Node.from_bits(0b0110) == Node(east=True, south=True)
```

`Node.from_bits` raises `ValueError` for values outside 0 to 15.

## Voronoi diagrams

```python
from mobagen.voronoi.fortune import build

graph = build([(20, 30), (70, 40), (50, 80)], 100, 100)
for cell in graph.cells:
    site = graph.sites[cell.site]
    corners = [graph.half_edge_startpoint(h) for h in cell.half_edges]
```

`build(sites, x_bound, y_bound)` accepts `Site` or `Vertex` objects or `(x, y)`
tuples from `mobagen.voronoi.graph`, ignoring a site equal to the one just
before it, and returns a `Graph` clipped to `[0, x_bound] × [0, y_bound]`.
The graph holds `sites`, `edges` and `cells`. Each `Cell` lists its
`HalfEdge`s sorted by descending angle, with border edges added so that cells
touching the box are closed. Edges that fall outside the box or shrink to a
point keep their index but get undefined (NaN) endpoints; check them with
`Vertex.is_defined()`.

`mobagen.voronoi.fortune.Fortune` exposes the sweep itself
(`add_beach_section`, `remove_beach_section`, `top_circle_event`) for callers
who want to drive it step by step.

`mobagen.voronoi.rbtree.RBTree` is a red-black tree that keeps its `RBNode`s
threaded in order through `previous`/`next` links. It inserts a node directly
after a given node (or first, when given `None`) instead of comparing keys, and
supports `remove`, `first()` and in-order iteration.

## What this package does not do

- It does not generate mazes. `mobagen.maze` holds only the `Node` wall record;
  there is no maze board and no generator.
- It draws nothing and opens no window. There is no settings panel, no mouse
  handling beyond `mouse_position_to_index`, and no terrain or image output.
- It installs no command. Everything is used from Python code.

## Running the tests

Install the `test` extra and run `pytest` from the project root.