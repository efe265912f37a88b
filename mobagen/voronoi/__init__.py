"""Voronoi diagrams by Fortune's algorithm, with the red-black tree it uses."""