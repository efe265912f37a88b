"""Wall layout of a single maze cell."""