import logging
from typing import Iterator, Optional

from astar_maze.core.grid import Grid
from astar_maze.algo.dfs import MazeGenerator
from astar_maze.algo.astar import AStarSolver

logger = logging.getLogger(__name__)


class MazeSession:
    """
    One generate-then-solve run over a fresh grid.

    `step()` advances generation until it is done, then solving. The solver is
    only created once generation has finished, so the two phases never
    interleave.
    """
    PHASE_GENERATING = "generating"
    PHASE_SOLVING = "solving"
    PHASE_FINISHED = "finished"

    def __init__(self, rows: int, cols: int, seed: int = None, rng=None):
        self.grid = Grid(rows, cols)
        self.seed = seed
        self.generator = MazeGenerator(self.grid, seed=seed, rng=rng)
        self.solver: Optional[AStarSolver] = None
        self.phase = self.PHASE_GENERATING

    @property
    def path(self):
        return self.solver.path if self.solver else []

    @property
    def found(self) -> bool:
        return self.solver is not None and self.solver.found

    @property
    def exhausted(self) -> bool:
        return self.solver is not None and self.solver.exhausted

    @property
    def finished(self) -> bool:
        return self.phase == self.PHASE_FINISHED

    def step(self) -> str:
        if self.phase == self.PHASE_GENERATING:
            status = self.generator.step()
            if self.generator.done:
                logger.info("Generated %dx%d maze in %d steps",
                            self.grid.rows, self.grid.cols, self.generator.step_count)
                self.solver = AStarSolver(self.grid)
                self.phase = self.PHASE_SOLVING
            return status

        if self.phase == self.PHASE_SOLVING:
            status = self.solver.step()
            if self.solver.finished:
                self.phase = self.PHASE_FINISHED
                if self.solver.found:
                    logger.info("Solved: path of %d cells after %d expansions",
                                len(self.solver.path), self.solver.step_count)
                else:
                    logger.warning("Solver exhausted the open set without reaching %s",
                                   self.solver.end)
            return status

        return "Solved" if self.found else "No Path"

    def run(self) -> Iterator[str]:
        while not self.finished:
            yield self.step()

    def run_all(self):
        for _ in self.run():
            pass
        return self
