import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from astar_maze.core.grid import Grid
from astar_maze.core.stats import count_passages, is_perfect, reachable_count
from astar_maze.algo.dfs import MazeGenerator, GenState


class FirstChoice:
    """Deterministic random source: always picks the first candidate."""
    def choice(self, seq):
        return seq[0]


def assert_walls_symmetric(test, grid):
    for row in range(grid.rows):
        for col in range(grid.cols):
            for nr, nc, _ in grid.grid_adjacent_cells(row, col):
                test.assertEqual(grid.has_wall((row, col), (nr, nc)),
                                 grid.has_wall((nr, nc), (row, col)),
                                 f"Asymmetric wall between {(row, col)} and {(nr, nc)}")


class TestGenerators(unittest.TestCase):
    def test_dfs_coverage(self):
        rows, cols = 20, 15
        grid = Grid(rows, cols)
        algo = MazeGenerator(grid, seed=42)
        algo.run_all()

        visited_count = 0
        for i in range(rows * cols):
            if (grid.cells[i] & Grid.VISITED):
                visited_count += 1

        self.assertEqual(visited_count, rows * cols, "DFS should visit every cell")
        self.assertEqual(algo.visited_count, rows * cols)
        self.assertTrue(algo.done)
        self.assertEqual(algo.stack, [])

    def test_spanning_tree(self):
        for seed in range(10):
            for rows, cols in [(1, 1), (1, 8), (6, 1), (5, 5), (12, 9)]:
                grid = Grid(rows, cols)
                MazeGenerator(grid, seed=seed).run_all()
                self.assertEqual(count_passages(grid), rows * cols - 1)
                self.assertEqual(reachable_count(grid), rows * cols)
                self.assertTrue(is_perfect(grid))

    def test_walls_symmetric_every_step(self):
        grid = Grid(6, 6)
        algo = MazeGenerator(grid, seed=7)
        while not algo.done:
            before = grid.cells.tobytes()
            algo.step()
            assert_walls_symmetric(self, grid)
            if algo.state is GenState.CARVING:
                # One passage carved: exactly two cells changed
                changed = sum(1 for a, b in zip(before, grid.cells.tobytes()) if a != b)
                self.assertEqual(changed, 2)

    def test_visited_transitions(self):
        rows, cols = 7, 4
        grid = Grid(rows, cols)
        algo = MazeGenerator(grid, seed=3)
        carves = 0
        for status in algo.run():
            if status.startswith("Carving"):
                carves += 1
        # Start cell plus one visit per carve
        self.assertEqual(carves + 1, rows * cols)
        # Every cell is carved into once and backtracked out of once, plus the final step
        self.assertEqual(algo.step_count, 2 * (rows * cols - 1) + 1)

    def test_single_cell(self):
        grid = Grid(1, 1)
        algo = MazeGenerator(grid, seed=1)
        self.assertEqual(algo.step(), "Done")
        self.assertTrue(algo.done)
        self.assertEqual(grid.cells[0] & Grid.ALL_WALLS, Grid.ALL_WALLS)
        # Further steps are no-ops
        self.assertEqual(algo.step(), "Done")
        self.assertEqual(algo.step_count, 1)

    def test_first_choice_order(self):
        # Always taking the first unvisited neighbour (up, right, down, left)
        # runs right along the top row, then snakes back.
        grid = Grid(3, 3)
        algo = MazeGenerator(grid, rng=FirstChoice())
        algo.step()
        self.assertEqual(algo.current, (0, 1))
        algo.step()
        self.assertEqual(algo.current, (0, 2))
        algo.step()
        self.assertEqual(algo.current, (1, 2))
        algo.run_all()
        self.assertTrue(is_perfect(grid))

    def test_backtracking_state(self):
        grid = Grid(1, 3)
        algo = MazeGenerator(grid, rng=FirstChoice())
        algo.step()
        algo.step()
        self.assertEqual(algo.current, (0, 2))
        self.assertEqual(algo.state, GenState.CARVING)
        algo.step()
        self.assertEqual(algo.state, GenState.BACKTRACKING)
        self.assertEqual(algo.current, (0, 1))

    def test_determinism(self):
        rows, cols = 10, 10
        grid1 = Grid(rows, cols)
        MazeGenerator(grid1, seed=12345).run_all()

        grid2 = Grid(rows, cols)
        gen = MazeGenerator(grid2, seed=12345)
        while not gen.done:
            gen.step()

        self.assertEqual(grid1.cells.tobytes(), grid2.cells.tobytes())

        grid3 = Grid(rows, cols)
        MazeGenerator(grid3, seed=54321).run_all()
        self.assertNotEqual(grid1.cells.tobytes(), grid3.cells.tobytes())

if __name__ == '__main__':
    unittest.main()
