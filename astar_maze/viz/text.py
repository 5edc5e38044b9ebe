from astar_maze.core.grid import Grid


def render_text(grid: Grid, show_path: bool = True) -> str:
    """
    Plain-text drawing of the maze for headless runs.
    'S' and 'E' mark start and end, '*' marks solution cells.
    """
    lines = ["+" + "---+" * grid.cols]
    for row in range(grid.rows):
        body = "|"
        floor = "+"
        for col in range(grid.cols):
            val = grid.cells[row * grid.cols + col]
            if (row, col) == grid.start:
                mark = "S"
            elif (row, col) == grid.end:
                mark = "E"
            elif show_path and val & Grid.PATH:
                mark = "*"
            else:
                mark = " "
            body += f" {mark} " + ("|" if val & Grid.RIGHT else " ")
            floor += ("---" if val & Grid.BOTTOM else "   ") + "+"
        lines.append(body)
        lines.append(floor)
    return "\n".join(lines)
