"""Conway's Game of Life on a wrapping, double-buffered square board."""