import logging
import random
from enum import Enum
from typing import List, Tuple

from astar_maze.core.grid import Grid
from astar_maze.algo.base import SteppedAlgorithm

logger = logging.getLogger(__name__)


class GenState(Enum):
    CARVING = "carving"
    BACKTRACKING = "backtracking"
    DONE = "done"


class MazeGenerator(SteppedAlgorithm):
    """
    Randomized depth-first carving (recursive backtracker) with an explicit stack.

    Starts at the grid's start cell. Each step either carves into a random
    unvisited neighbour, pops the stack, or finishes. When DONE every cell has
    been visited once and the open passages form a spanning tree.

    `rng` can be any object with a `choice(sequence)` method; otherwise a
    `random.Random(seed)` is used.
    """
    def __init__(self, grid: Grid, seed: int = None, rng=None):
        super().__init__(grid)
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)

        # Stack of flat indices
        self.stack: List[int] = []
        self.current: Tuple[int, int] = grid.start
        self.grid.set_visited(*self.current)
        self.visited_count = 1
        self.state = GenState.CARVING

    @property
    def done(self) -> bool:
        return self.state is GenState.DONE

    @property
    def finished(self) -> bool:
        return self.done

    def step(self) -> str:
        if self.state is GenState.DONE:
            return "Done"

        cr, cc = self.current
        neighbors = self.grid.unvisited_grid_neighbors(cr, cc)

        if neighbors:
            # Choose random neighbor
            nr, nc, _ = self.rng.choice(neighbors)

            # Carve
            self.grid.remove_wall((cr, cc), (nr, nc))
            self.stack.append(self.grid.get_index(cr, cc))
            self.current = (nr, nc)
            self.grid.set_visited(nr, nc)
            self.visited_count += 1
            self.state = GenState.CARVING
        elif self.stack:
            # Backtrack
            self.current = self.grid.coords(self.stack.pop())
            self.state = GenState.BACKTRACKING
        else:
            self.state = GenState.DONE
            logger.debug("Generation finished after %d steps (%d cells visited)",
                         self.step_count + 1, self.visited_count)

        self.step_count += 1
        if self.state is GenState.DONE:
            return "Done"
        if self.state is GenState.CARVING:
            return f"Carving... Stack: {len(self.stack)}"
        return f"Backtracking... Stack: {len(self.stack)}"
