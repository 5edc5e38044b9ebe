import pygame
from astar_maze.core.grid import Grid
from astar_maze.core.session import MazeSession
from astar_maze.viz.recorder import VideoRecorder


class Renderer:
    COLOR_BG = (10, 10, 10)
    COLOR_WALL = (200, 200, 200)
    COLOR_VISITED = (60, 100, 160)# Blue tint
    COLOR_ENDPOINT = (40, 170, 80)# Green
    COLOR_SOLUTION = (255, 215, 0)# Gold
    COLOR_CURSOR = (220, 60, 60)

    # Steps per frame for each phase
    GEN_STEPS_PER_FRAME = 10
    SOLVE_STEPS_PER_FRAME = 5

    def __init__(self, session: MazeSession, width=1280, height=720, record=False,
                 gen_steps=None, solve_steps=None):
        self.session = session
        self.grid = session.grid
        self.screen_width = width
        self.screen_height = height
        self.gen_steps = gen_steps or self.GEN_STEPS_PER_FRAME
        self.solve_steps = solve_steps or self.SOLVE_STEPS_PER_FRAME

        # Camera
        self.cell_size = 20.0  # Pixels per cell
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.zoom_speed = 1.1

        self.recorder = VideoRecorder(active=record)

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None

    def fit_to_screen(self):
        """Auto-adjust zoom and pan to fit the entire grid on screen with padding."""
        padding = 40
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2)

        zoom_x = available_w / self.grid.cols
        zoom_y = available_h / self.grid.rows
        self.cell_size = max(1.0, min(zoom_x, zoom_y))

        # Center
        total_maze_w = self.grid.cols * self.cell_size
        total_maze_h = self.grid.rows * self.cell_size

        self.offset_x = (self.screen_width - total_maze_w) / 2
        self.offset_y = (self.screen_height - total_maze_h) / 2

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"A* Maze - {self.grid.rows}x{self.grid.cols}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)

        self.fit_to_screen()

    def world_to_screen(self, row, col):
        sx = col * self.cell_size + self.offset_x
        sy = row * self.cell_size + self.offset_y
        return sx, sy

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h

            elif event.type == pygame.MOUSEWHEEL:
                # Zoom towards mouse
                mx, my = pygame.mouse.get_pos()
                wx = (mx - self.offset_x) / self.cell_size
                wy = (my - self.offset_y) / self.cell_size

                if event.y > 0:
                    self.cell_size *= self.zoom_speed
                else:
                    self.cell_size /= self.zoom_speed
                self.cell_size = max(0.5, min(200.0, self.cell_size))

                # Keep mouse at same world coord
                self.offset_x = mx - wx * self.cell_size
                self.offset_y = my - wy * self.cell_size

            elif event.type == pygame.MOUSEMOTION:
                if pygame.mouse.get_pressed()[0] or pygame.mouse.get_pressed()[2]: # Left or Right drag
                    self.offset_x += event.rel[0]
                    self.offset_y += event.rel[1]

    def visible_range(self):
        # Culling: Calculate visible cell range, clamped to grid bounds
        start_col = max(0, int((-self.offset_x) / self.cell_size))
        start_row = max(0, int((-self.offset_y) / self.cell_size))
        end_col = min(self.grid.cols, int((self.screen_width - self.offset_x) / self.cell_size) + 1)
        end_row = min(self.grid.rows, int((self.screen_height - self.offset_y) / self.cell_size) + 1)
        return start_row, end_row, start_col, end_col

    def draw_grid(self):
        self.surface.fill(self.COLOR_BG)
        start_row, end_row, start_col, end_col = self.visible_range()
        size = int(self.cell_size) + 1

        # 1. Cell backgrounds
        for row in range(start_row, end_row):
            for col in range(start_col, end_col):
                cell = self.grid.cells[row * self.grid.cols + col]
                px, py = self.world_to_screen(row, col)

                color = None
                if cell & Grid.PATH:
                    color = self.COLOR_SOLUTION
                elif (row, col) == self.grid.start or (row, col) == self.grid.end:
                    color = self.COLOR_ENDPOINT
                elif cell & Grid.VISITED:
                    color = self.COLOR_VISITED
                if color:
                    pygame.draw.rect(self.surface, color, (int(px), int(py), size, size))

        # Generation cursor
        if self.session.phase == MazeSession.PHASE_GENERATING:
            row, col = self.session.generator.current
            px, py = self.world_to_screen(row, col)
            pygame.draw.rect(self.surface, self.COLOR_CURSOR, (int(px), int(py), size, size))

        # 2. Walls
        if self.cell_size > 4.0:
            for row in range(start_row, end_row):
                for col in range(start_col, end_col):
                    cell = self.grid.cells[row * self.grid.cols + col]
                    px, py = self.world_to_screen(row, col)
                    px, py = int(px), int(py)

                    wall_color = self.COLOR_WALL
                    if cell & Grid.BOTTOM:
                        pygame.draw.line(self.surface, wall_color, (px, py + size), (px + size, py + size), 1)
                    if cell & Grid.RIGHT:
                        pygame.draw.line(self.surface, wall_color, (px + size, py), (px + size, py + size), 1)

                    if row == 0 and (cell & Grid.TOP):
                        pygame.draw.line(self.surface, wall_color, (px, py), (px + size, py), 1)
                    if col == 0 and (cell & Grid.LEFT):
                        pygame.draw.line(self.surface, wall_color, (px, py), (px, py + size), 1)

    def draw_hud(self):
        fps = int(self.clock.get_fps())
        cells = self.grid.rows * self.grid.cols
        status = self.session.phase.capitalize()
        if self.session.finished:
            status = f"Solved ({len(self.session.path)} cells)" if self.session.found else "No Path"
        info = [
            f"FPS: {fps}",
            f"Size: {self.grid.rows}x{self.grid.cols} ({cells:,})",
            f"Zoom: {self.cell_size:.2f}",
            f"Status: {status}",
            "REC" if self.recorder.active else ""
        ]

        for i, text in enumerate(info):
            lbl = self.font.render(text, True, (255, 255, 255))
            self.surface.blit(lbl, (10, 10 + i * 20))

    def advance(self):
        """Steps the session for one frame."""
        if self.session.finished:
            return
        if self.session.phase == MazeSession.PHASE_GENERATING:
            steps = self.gen_steps
        else:
            steps = self.solve_steps
        for _ in range(steps):
            self.session.step()
            if self.session.finished:
                break

    def run_loop(self):
        while self.running:
            self.handle_input()
            self.advance()

            self.draw_grid()
            self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(self.surface)

            self.clock.tick(60)

        self.recorder.stop()
        pygame.quit()
