from __future__ import annotations
import logging
import sys
from pathlib import Path

from pipe_maze.log_utils import setup_logging
from pipe_maze.viewer.config import AppConfig
from pipe_maze.viewer.app import ViewerApp


def main():
    setup_logging(logging.INFO)
    grid_path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    app = ViewerApp(AppConfig(), grid_path)
    app.run()


if __name__ == "__main__":
    main()
