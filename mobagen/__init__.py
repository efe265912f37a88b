"""Game of Life simulation, maze cell walls and Voronoi diagrams."""

__version__ = "0.1.0"