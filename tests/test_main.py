import unittest
import sys
import os
import io
from contextlib import redirect_stdout

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from astar_maze.main import main, build_parser

class TestCLI(unittest.TestCase):
    def test_parser_defaults(self):
        args = build_parser().parse_args(["run"])
        self.assertEqual((args.rows, args.cols), (40, 40))
        self.assertIsNone(args.seed)
        self.assertFalse(args.visual)

    def test_headless_run(self):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(["run", "--rows", "4", "--cols", "5", "--seed", "1", "--ascii"])
        self.assertEqual(code, 0)
        text = out.getvalue()
        self.assertIn("Path Length:", text)
        self.assertIn("S", text)
        self.assertIn("E", text)

    def test_invalid_dimensions_exit_code(self):
        with redirect_stdout(io.StringIO()):
            self.assertEqual(main(["run", "--rows", "0"]), 1)

    def test_benchmark(self):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(["benchmark", "--size", "12", "--seed", "3"])
        self.assertEqual(code, 0)
        self.assertIn("A*", out.getvalue())

    def test_no_command(self):
        with redirect_stdout(io.StringIO()):
            self.assertEqual(main([]), 0)

if __name__ == '__main__':
    unittest.main()
