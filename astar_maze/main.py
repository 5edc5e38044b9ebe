import argparse
import sys
import os
import logging
import time

# Ensure project root is in path so we can import 'astar_maze' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from astar_maze.core.errors import MazeError, NoPathFound


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def build_parser():
    parser = argparse.ArgumentParser(description="A* Maze: generate a perfect maze and solve it with A*")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Run Command
    run_parser = subparsers.add_parser("run", help="Generate a maze, then solve it")
    run_parser.add_argument("--rows", type=int, default=40, help="Maze Rows")
    run_parser.add_argument("--cols", type=int, default=40, help="Maze Columns")
    run_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    run_parser.add_argument("--visual", action="store_true", help="Show visualization")
    run_parser.add_argument("--record", action="store_true", help="Record video of the run")
    run_parser.add_argument("--gen-steps", type=int, default=None, help="Generation steps per frame")
    run_parser.add_argument("--solve-steps", type=int, default=None, help="Solver steps per frame")
    run_parser.add_argument("--ascii", action="store_true", help="Print the solved maze as text")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Time generation and solving")
    bench_parser.add_argument("--size", type=int, default=200, help="Benchmark size (rows = cols)")
    bench_parser.add_argument("--seed", type=int, default=123, help="Random Seed")

    return parser


def run_command(args, logger):
    from astar_maze.core.session import MazeSession
    from astar_maze.core.stats import calculate_stats

    session = MazeSession(args.rows, args.cols, seed=args.seed)
    logger.info(f"Generating {args.rows}x{args.cols} maze (seed={args.seed})...")

    if args.visual or args.record:
        logger.info("Visual mode enabled - Opening window...")
        from astar_maze.viz.renderer import Renderer
        renderer = Renderer(session, record=args.record,
                            gen_steps=args.gen_steps, solve_steps=args.solve_steps)

        # Auto-Name Recording
        if args.record:
            import datetime
            if not os.path.exists("recordings"):
                os.makedirs("recordings")

            ts = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
            fname = f"astar_{args.rows}x{args.cols}_{ts}.mp4"
            renderer.recorder.output_file = os.path.join("recordings", fname)
            logger.info(f"Recording video to {renderer.recorder.output_file}")

        renderer.init_window()
        renderer.run_loop()

        if not session.finished:
            logger.info("Visualization closed before the run finished.")
            return 0
    else:
        logger.info("Headless run...")
        session.run_all()

    logger.debug(f"Stats: {calculate_stats(session.grid)}")

    if args.ascii:
        from astar_maze.viz.text import render_text
        print(render_text(session.grid))

    if session.exhausted:
        raise NoPathFound(session.grid.start, session.grid.end)

    print(f"Done. Path Length: {len(session.path)}")
    return 0


def benchmark_command(args, logger):
    from astar_maze.core.grid import Grid
    from astar_maze.algo.dfs import MazeGenerator
    from astar_maze.algo.astar import AStarSolver
    from astar_maze.core.stats import shortest_path_length

    logger.info(f"Running Benchmark (Size: {args.size}x{args.size})...")

    t0 = time.time()
    grid = Grid(args.size, args.size)
    MazeGenerator(grid, seed=args.seed).run_all()
    gen_time = time.time() - t0

    t0 = time.time()
    solver = AStarSolver(grid)
    solver.run_all()
    solve_time = time.time() - t0

    t0 = time.time()
    bfs_len = shortest_path_length(grid)
    bfs_time = time.time() - t0

    print(f"\n{'PHASE':<20} | {'TIME (s)':<10} | {'PATH LEN':<10} | {'EXPANDED':<10}")
    print("-" * 60)
    print(f"{'Generation (DFS)':<20} | {gen_time:<10.4f} | {'-':<10} | {grid.rows * grid.cols:<10}")
    print(f"{'A*':<20} | {solve_time:<10.4f} | {len(solver.path):<10} | {solver.visited_count:<10}")
    print(f"{'BFS (reference)':<20} | {bfs_time:<10.4f} | {bfs_len:<10} | {'-':<10}")
    return 0


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("astar_maze")

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    try:
        if args.command == "run":
            return run_command(args, logger)
        elif args.command == "benchmark":
            return benchmark_command(args, logger)
    except MazeError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
