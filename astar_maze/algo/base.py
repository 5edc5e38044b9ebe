from abc import ABC, abstractmethod
from typing import Iterator

from astar_maze.core.grid import Grid


class SteppedAlgorithm(ABC):
    """
    An algorithm advanced one unit at a time by an external driver
    (render loop, CLI loop, tests). Grid modifications happen in-place.
    """
    def __init__(self, grid: Grid):
        self.grid = grid
        self.step_count = 0

    @property
    @abstractmethod
    def finished(self) -> bool:
        pass

    @abstractmethod
    def step(self) -> str:
        """Advances by one step and returns a status string."""
        pass

    def run(self) -> Iterator[str]:
        """Yields one status string per step until finished."""
        while not self.finished:
            yield self.step()

    def run_all(self):
        """Helper to run the algorithm to completion."""
        for _ in self.run():
            pass
