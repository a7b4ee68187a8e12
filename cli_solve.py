from __future__ import annotations

import argparse
import logging
import sys

from pipe_maze.core.analysis import LoopAnalyzer
from pipe_maze.core.config import AnalysisParams
from pipe_maze.core.errors import PipeMazeError
from pipe_maze.core.io import load_grid, save_report
from pipe_maze.log_utils import setup_logging


def get_cli_args(argv=None):
    """Configures and parses command-line arguments."""
    p = argparse.ArgumentParser(
        description="Traces the pipe loop through 'S' and counts the tiles it encloses."
    )
    p.add_argument("input", help="Path to the grid text file.")
    p.add_argument("--report", metavar="FILE", help="Write a JSON report to FILE.")
    p.add_argument(
        "--show-map",
        action="store_true",
        help="Print the per-tile classification (L=loop, O=outside, I=inside).",
    )
    p.add_argument(
        "--no-infer-origin",
        action="store_true",
        help=(
            "Treat 'S' as open toward every in-bounds neighbour instead of inferring "
            "its shape. A stray pipe pointing at 'S' is then counted as loop, which "
            "can inflate steps and loop tiles."
        ),
    )
    g_log = p.add_argument_group("Logging & Output")
    g_log.add_argument(
        "-v", "--verbose", action="store_true", help="Enable INFO logging."
    )
    g_log.add_argument(
        "--color-logs", action="store_true", help="Enable colored logging."
    )
    g_log.add_argument(
        "--log-file", metavar="FILE", help="Redirect log output to a file."
    )
    g_log.add_argument(
        "-d",
        "--debug",
        nargs="?",
        const="all",
        dest="debug_topics",
        metavar="TOPICS",
        help="Enable DEBUG logging (all,grid,network,trace,fill,classify,io).",
    )
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = get_cli_args(argv)
    level = logging.INFO if args.verbose else logging.WARNING
    setup_logging(level, args.color_logs, args.debug_topics, args.log_file)
    log = logging.getLogger("pipe_maze.main")

    params = AnalysisParams(infer_origin=not args.no_infer_origin)
    try:
        grid = load_grid(args.input)
        analyzer = LoopAnalyzer(grid, params)
        report = analyzer.analyze()
    except (PipeMazeError, FileNotFoundError) as e:
        log.error("%s", e)
        return 1

    if logging.getLogger("pipe_maze.network").isEnabledFor(logging.DEBUG):
        logging.getLogger("pipe_maze.network").debug(
            "\n".join(analyzer.network.as_rows()), extra={"raw": True}
        )

    print(f"steps: {report.steps}")
    print(f"enclosed: {report.enclosed_count}")
    if args.show_map:
        print("\n".join(report.classification_rows()))

    if args.report:
        path = save_report(args.report, report)
        log.info("Report written to %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
