from array import array
from typing import Iterator, List, Tuple

from astar_maze.core.errors import InvalidAdjacency, InvalidDimensions

INF = float("inf")


class Cell:
    """
    Read-only snapshot of one grid position.
    Handed to rendering code; mutating it does not touch the grid.
    """
    __slots__ = ('row', 'col', 'walls', 'visited', 'g_score', 'h_score',
                 'parent', 'on_solution_path', 'is_start', 'is_end')

    def __init__(self, row, col, walls, visited, g_score, h_score, parent,
                 on_solution_path, is_start, is_end):
        self.row = row
        self.col = col
        self.walls = walls  # (top, right, bottom, left)
        self.visited = visited
        self.g_score = g_score
        self.h_score = h_score
        self.parent = parent
        self.on_solution_path = on_solution_path
        self.is_start = is_start
        self.is_end = is_end

    @property
    def f_score(self) -> float:
        return self.g_score + self.h_score

    def __repr__(self):
        return f"Cell(row={self.row}, col={self.col}, walls={self.walls})"


class Grid:
    # Bitmask Constants
    TOP    = 0b00000001
    RIGHT  = 0b00000010
    BOTTOM = 0b00000100
    LEFT   = 0b00001000

    # Flags
    VISITED = 0b00010000
    PATH    = 0b00100000

    # All walls present by default (T|R|B|L) = 15
    ALL_WALLS = TOP | RIGHT | BOTTOM | LEFT

    # Fixed neighbour order: up, right, down, left
    DIRECTIONS = (TOP, RIGHT, BOTTOM, LEFT)

    # Direction Helpers
    DROW = {TOP: -1, BOTTOM: 1, RIGHT: 0, LEFT: 0}
    DCOL = {TOP: 0, BOTTOM: 0, RIGHT: 1, LEFT: -1}
    OPPOSITE = {TOP: BOTTOM, BOTTOM: TOP, RIGHT: LEFT, LEFT: RIGHT}

    __slots__ = ('rows', 'cols', 'cells', 'g_score', 'h_score', 'parent')

    def __init__(self, rows: int, cols: int):
        if not isinstance(rows, int) or not isinstance(cols, int) or rows <= 0 or cols <= 0:
            raise InvalidDimensions(rows, cols)
        self.rows = rows
        self.cols = cols
        size = rows * cols
        # 'B' (unsigned char) -> 1 byte per cell, all walls up, nothing visited
        self.cells = array('B', [self.ALL_WALLS] * size)

        # Dense search fields, owned by the grid and rewritten by each solve
        self.g_score = array('d', [INF] * size)
        self.h_score = array('i', [0] * size)
        self.parent = array('i', [-1] * size)

    @property
    def start(self) -> Tuple[int, int]:
        return (0, 0)

    @property
    def end(self) -> Tuple[int, int]:
        return (self.rows - 1, self.cols - 1)

    def __len__(self):
        return self.rows * self.cols

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get_index(self, row: int, col: int) -> int:
        if 0 <= row < self.rows and 0 <= col < self.cols:
            return row * self.cols + col
        raise IndexError(f"Coordinate ({row}, {col}) out of bounds")

    def coords(self, idx: int) -> Tuple[int, int]:
        return divmod(idx, self.cols)

    def direction_between(self, cell_a: Tuple[int, int], cell_b: Tuple[int, int]) -> int:
        """
        Returns the wall bit of cell_a that faces cell_b.
        Both cells must be in bounds and differ by exactly one row or one column.
        """
        (r1, c1), (r2, c2) = cell_a, cell_b
        if not (self.in_bounds(r1, c1) and self.in_bounds(r2, c2)):
            raise InvalidAdjacency(cell_a, cell_b)

        dr, dc = r2 - r1, c2 - c1
        if dr == -1 and dc == 0:
            return self.TOP
        if dr == 1 and dc == 0:
            return self.BOTTOM
        if dr == 0 and dc == 1:
            return self.RIGHT
        if dr == 0 and dc == -1:
            return self.LEFT
        raise InvalidAdjacency(cell_a, cell_b)

    def remove_wall(self, cell_a: Tuple[int, int], cell_b: Tuple[int, int]):
        """
        Removes the wall between two adjacent cells.
        Clears the facing bit on both sides so there are no one-sided openings.
        """
        dir_bit = self.direction_between(cell_a, cell_b)
        idx1 = self.get_index(*cell_a)
        idx2 = self.get_index(*cell_b)

        self.cells[idx1] &= ~dir_bit
        self.cells[idx2] &= ~self.OPPOSITE[dir_bit]

    def has_wall(self, cell_a: Tuple[int, int], cell_b: Tuple[int, int]) -> bool:
        dir_bit = self.direction_between(cell_a, cell_b)
        return (self.cells[self.get_index(*cell_a)] & dir_bit) != 0

    def wall_flags(self, row: int, col: int) -> Tuple[bool, bool, bool, bool]:
        """(top, right, bottom, left) wall state of a cell."""
        val = self.cells[self.get_index(row, col)]
        return tuple((val & d) != 0 for d in self.DIRECTIONS)

    def set_visited(self, row: int, col: int, visited: bool = True):
        idx = self.get_index(row, col)
        if visited:
            self.cells[idx] |= self.VISITED
        else:
            self.cells[idx] &= ~self.VISITED

    def is_visited(self, row: int, col: int) -> bool:
        return (self.cells[self.get_index(row, col)] & self.VISITED) != 0

    def mark_solution(self, row: int, col: int, on_path: bool = True):
        idx = self.get_index(row, col)
        if on_path:
            self.cells[idx] |= self.PATH
        else:
            self.cells[idx] &= ~self.PATH

    def on_solution_path(self, row: int, col: int) -> bool:
        return (self.cells[self.get_index(row, col)] & self.PATH) != 0

    def reset_search_state(self):
        """Clears every search field and solution mark. Walls and visited flags are kept."""
        size = self.rows * self.cols
        self.g_score = array('d', [INF] * size)
        self.h_score = array('i', [0] * size)
        self.parent = array('i', [-1] * size)
        for idx in range(size):
            self.cells[idx] &= ~self.PATH

    def grid_adjacent_cells(self, row: int, col: int) -> Iterator[Tuple[int, int, int]]:
        """
        Yields (nrow, ncol, direction_to_neighbor) for every in-bounds neighbour,
        in the order up, right, down, left.
        Does NOT check walls or visited flags (that's for the caller).
        """
        if row > 0:
            yield (row - 1, col, self.TOP)
        if col < self.cols - 1:
            yield (row, col + 1, self.RIGHT)
        if row < self.rows - 1:
            yield (row + 1, col, self.BOTTOM)
        if col > 0:
            yield (row, col - 1, self.LEFT)

    def unvisited_grid_neighbors(self, row: int, col: int) -> List[Tuple[int, int, int]]:
        """Neighbours not yet carved into the maze, same order as grid_adjacent_cells."""
        return [
            (nr, nc, d) for nr, nc, d in self.grid_adjacent_cells(row, col)
            if not (self.cells[nr * self.cols + nc] & self.VISITED)
        ]

    def get_open_neighbors(self, row: int, col: int) -> Iterator[Tuple[int, int]]:
        """
        Yields (nrow, ncol) for neighbours that are NOT blocked by a wall.
        """
        val = self.cells[row * self.cols + col]
        for nr, nc, d in self.grid_adjacent_cells(row, col):
            if not (val & d):
                yield (nr, nc)

    def cell(self, row: int, col: int) -> Cell:
        idx = self.get_index(row, col)
        val = self.cells[idx]
        parent = self.parent[idx]
        return Cell(
            row, col,
            walls=tuple((val & d) != 0 for d in self.DIRECTIONS),
            visited=(val & self.VISITED) != 0,
            g_score=self.g_score[idx],
            h_score=self.h_score[idx],
            parent=self.coords(parent) if parent >= 0 else None,
            on_solution_path=(val & self.PATH) != 0,
            is_start=(row, col) == self.start,
            is_end=(row, col) == self.end,
        )

    def iter_cells(self) -> Iterator[Cell]:
        for row in range(self.rows):
            for col in range(self.cols):
                yield self.cell(row, col)
