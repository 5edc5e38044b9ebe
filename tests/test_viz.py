import unittest
import sys
import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

try:
    import pygame
    import cv2
except ImportError:
    pygame = None

from astar_maze.core.grid import Grid
from astar_maze.core.session import MazeSession
from astar_maze.viz.text import render_text


class TestTextRender(unittest.TestCase):
    def test_two_cell_corridor(self):
        grid = Grid(1, 2)
        grid.remove_wall((0, 0), (0, 1))
        self.assertEqual(render_text(grid), "\n".join([
            "+---+---+",
            "| S   E |",
            "+---+---+",
        ]))

    def test_solution_marks(self):
        session = MazeSession(5, 5, seed=8).run_all()
        text = render_text(session.grid)
        lines = text.splitlines()
        self.assertEqual(len(lines), 2 * 5 + 1)
        # Start and end are lettered, the rest of the path is starred
        self.assertEqual(text.count("*"), len(session.path) - 2)
        self.assertEqual(render_text(session.grid, show_path=False).count("*"), 0)


@unittest.skipIf(pygame is None, "pygame/opencv not installed")
class TestRenderer(unittest.TestCase):
    def make_renderer(self, session):
        from astar_maze.viz.renderer import Renderer
        renderer = Renderer(session, width=200, height=200)
        renderer.surface = pygame.Surface((200, 200))
        renderer.fit_to_screen()
        return renderer

    def test_fit_to_screen(self):
        renderer = self.make_renderer(MazeSession(4, 4, seed=1))
        # (200 - 2 * 40) / 4
        self.assertEqual(renderer.cell_size, 30.0)
        self.assertEqual(renderer.offset_x, 40.0)
        self.assertEqual(renderer.offset_y, 40.0)

    def test_draw_solution(self):
        from astar_maze.viz.renderer import Renderer
        session = MazeSession(4, 4, seed=1).run_all()
        renderer = self.make_renderer(session)
        renderer.draw_grid()

        # Center of the start cell is on the path
        color = renderer.surface.get_at((55, 55))
        self.assertEqual(tuple(color)[:3], Renderer.COLOR_SOLUTION)

    def test_advance_steps_session(self):
        session = MazeSession(3, 3, seed=4)
        renderer = self.make_renderer(session)
        renderer.gen_steps = 1
        renderer.advance()
        self.assertEqual(session.generator.step_count, 1)
        # Cursor is drawn while generating
        renderer.draw_grid()

        for _ in range(100):
            renderer.advance()
        self.assertTrue(session.finished)
        self.assertTrue(session.found)

    def test_surface_to_frame(self):
        from astar_maze.viz.recorder import surface_to_frame
        surface = pygame.Surface((4, 3))
        surface.fill((255, 0, 0))
        frame = surface_to_frame(surface)
        self.assertEqual(frame.shape, (3, 4, 3))
        self.assertEqual(list(frame[0, 0]), [0, 0, 255])

    def test_inactive_recorder_ignores_frames(self):
        from astar_maze.viz.recorder import VideoRecorder
        rec = VideoRecorder(active=False)
        rec.capture_frame(pygame.Surface((4, 4)))
        self.assertEqual(rec.frame_count, 0)
        self.assertIsNone(rec.writer)
        rec.stop()

if __name__ == '__main__':
    unittest.main()
