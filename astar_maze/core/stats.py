from collections import deque
from typing import Optional, Tuple

from astar_maze.core.grid import Grid


def popcount_walls(val: int) -> int:
    c = 0
    if val & Grid.TOP: c += 1
    if val & Grid.RIGHT: c += 1
    if val & Grid.BOTTOM: c += 1
    if val & Grid.LEFT: c += 1
    return c


def count_passages(grid: Grid) -> int:
    """Number of open passages (carved walls) between adjacent cells."""
    passages = 0
    for row in range(grid.rows):
        for col in range(grid.cols):
            val = grid.cells[row * grid.cols + col]
            # Count each passage once, from its top/left end
            if col < grid.cols - 1 and not (val & Grid.RIGHT):
                passages += 1
            if row < grid.rows - 1 and not (val & Grid.BOTTOM):
                passages += 1
    return passages


def reachable_count(grid: Grid, start: Tuple[int, int] = None) -> int:
    start = start if start is not None else grid.start
    seen = {start}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for nxt in grid.get_open_neighbors(*current):
            if nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return len(seen)


def is_perfect(grid: Grid) -> bool:
    """
    True when the open passages form a spanning tree:
    every cell reachable and exactly rows*cols - 1 passages.
    """
    total = grid.rows * grid.cols
    return count_passages(grid) == total - 1 and reachable_count(grid) == total


def shortest_path_length(grid: Grid, start: Tuple[int, int] = None,
                         end: Tuple[int, int] = None) -> Optional[int]:
    """
    Breadth-first reference: number of cells on a shortest wall-respecting
    path, or None when end is unreachable.
    """
    start = start if start is not None else grid.start
    end = end if end is not None else grid.end
    dist = {start: 1}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        if current == end:
            return dist[current]
        for nxt in grid.get_open_neighbors(*current):
            if nxt not in dist:
                dist[nxt] = dist[current] + 1
                queue.append(nxt)
    return None


def calculate_stats(grid: Grid):
    dead_ends = 0
    intersections = 0 # 0, 1 walls
    corridors = 0 # 2 walls

    for i in range(grid.rows * grid.cols):
        walls = popcount_walls(grid.cells[i])
        if walls == 3: dead_ends += 1
        elif walls == 2: corridors += 1
        elif walls <= 1: intersections += 1

    total = grid.rows * grid.cols
    return {
        "dead_ends": dead_ends,
        "corridors": corridors,
        "intersections": intersections,
        "passages": count_passages(grid),
        "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0
    }
