class MazeError(Exception):
    """Base class for all maze errors."""


class InvalidDimensions(MazeError, ValueError):
    def __init__(self, rows, cols):
        super().__init__(f"Maze dimensions must be positive integers, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols


class InvalidAdjacency(MazeError, ValueError):
    """Raised when a wall operation names two cells that are not grid-adjacent."""
    def __init__(self, cell_a, cell_b):
        super().__init__(f"Cells {cell_a} and {cell_b} are not grid-adjacent")
        self.cell_a = cell_a
        self.cell_b = cell_b


class NoPathFound(MazeError):
    def __init__(self, start, end):
        super().__init__(f"No path from {start} to {end}")
        self.start = start
        self.end = end
