import heapq
import logging
from enum import Enum
from itertools import count
from typing import List, Set, Tuple

from astar_maze.core.errors import NoPathFound
from astar_maze.core.grid import Grid
from astar_maze.algo.base import SteppedAlgorithm

logger = logging.getLogger(__name__)


class SolveState(Enum):
    SEARCHING = "searching"
    FOUND = "found"
    EXHAUSTED = "exhausted"


def manhattan(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


class AStarSolver(SteppedAlgorithm):
    """
    A* over the carved grid, one expansion per step.

    The open set is a heap keyed on (f, h, discovery order), so the pick is
    minimum f, then minimum h, then the cell discovered first. Entries made
    stale by a g-score improvement are skipped on pop.

    Search fields (g, h, parent) and the solution flag are written to the grid.
    Unlike a trace that stops before the start cell, the start cell is marked
    on the solution path too, so `path` and the grid flags agree.
    """
    def __init__(self, grid: Grid, start: Tuple[int, int] = None, end: Tuple[int, int] = None):
        super().__init__(grid)
        self.start = start if start is not None else grid.start
        self.end = end if end is not None else grid.end
        self.start_idx = grid.get_index(*self.start)
        self.end_idx = grid.get_index(*self.end)
        self.path: List[Tuple[int, int]] = []

        self.grid.reset_search_state()
        self.grid.g_score[self.start_idx] = 0
        self.grid.h_score[self.start_idx] = self.heuristic(self.start, self.end)

        # Priority Queue: (f_score, h_score, order, idx)
        self._order = count()
        self.open_heap: List[Tuple[float, int, int, int]] = []
        self.open_set: Set[int] = set()
        self.closed_set: Set[int] = set()
        self._push(self.start_idx)

        self.state = SolveState.SEARCHING

    def heuristic(self, a, b):
        return manhattan(a, b)

    @property
    def found(self) -> bool:
        return self.state is SolveState.FOUND

    @property
    def exhausted(self) -> bool:
        return self.state is SolveState.EXHAUSTED

    @property
    def finished(self) -> bool:
        return self.state is not SolveState.SEARCHING

    @property
    def visited_count(self) -> int:
        return len(self.closed_set)

    def _push(self, idx: int):
        g = self.grid.g_score[idx]
        h = self.grid.h_score[idx]
        heapq.heappush(self.open_heap, (g + h, h, next(self._order), idx))
        self.open_set.add(idx)

    def _pop_best(self) -> int:
        while self.open_heap:
            f, h, _, idx = heapq.heappop(self.open_heap)
            # Stale entry: cell was re-queued with a better g, or already closed
            if idx not in self.open_set or f != self.grid.g_score[idx] + self.grid.h_score[idx]:
                continue
            return idx
        return -1

    def step(self) -> str:
        if self.state is SolveState.FOUND:
            return "Solved"
        if self.state is SolveState.EXHAUSTED:
            return "No Path"

        curr_idx = self._pop_best()
        if curr_idx == -1:
            self.state = SolveState.EXHAUSTED
            logger.info("Open set exhausted; no path from %s to %s", self.start, self.end)
            return "No Path"

        self.step_count += 1
        if curr_idx == self.end_idx:
            self.state = SolveState.FOUND
            self.reconstruct_path()
            logger.debug("Path found: %d cells, %d expansions", len(self.path), self.step_count)
            return "Solved"

        self.open_set.discard(curr_idx)
        self.closed_set.add(curr_idx)

        current = self.grid.coords(curr_idx)
        curr_val = self.grid.cells[curr_idx]
        tentative_g = self.grid.g_score[curr_idx] + 1

        for nr, nc, direction in self.grid.grid_adjacent_cells(*current):
            neighbor_idx = nr * self.grid.cols + nc
            if neighbor_idx in self.closed_set or (curr_val & direction):
                continue

            in_open = neighbor_idx in self.open_set
            if not in_open or tentative_g < self.grid.g_score[neighbor_idx]:
                self.grid.g_score[neighbor_idx] = tentative_g
                self.grid.h_score[neighbor_idx] = self.heuristic((nr, nc), self.end)
                self.grid.parent[neighbor_idx] = curr_idx
                self._push(neighbor_idx)

        return f"Visited: {self.visited_count}"

    def reconstruct_path(self):
        curr = self.end_idx
        while curr != self.start_idx:
            self.path.append(self.grid.coords(curr))
            self.grid.cells[curr] |= Grid.PATH
            curr = self.grid.parent[curr]

        self.path.append(self.start)
        self.grid.cells[self.start_idx] |= Grid.PATH
        self.path.reverse()

    def require_path(self) -> List[Tuple[int, int]]:
        """Runs to completion and returns the path, raising NoPathFound when exhausted."""
        self.run_all()
        if self.exhausted:
            raise NoPathFound(self.start, self.end)
        return self.path
