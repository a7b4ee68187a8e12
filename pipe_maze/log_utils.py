from __future__ import annotations

import logging
from typing import Dict, Optional, Set

LOGGER_ROOT = "pipe_maze"

# Each topic is a child logger "pipe_maze.<topic>" that `-d` can switch to DEBUG.
PROJECT_TOPICS: Set[str] = {
    "main",
    "grid",
    "network",
    "trace",
    "fill",
    "classify",
    "io",
    "render",
}

ANSI_RESET = "\033[0m"
ANSI_BOLD = "\033[1m"

LEVEL_COLORS: Dict[int, str] = {
    logging.DEBUG: "\033[2m",
    logging.INFO: "\033[36m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}


def topic_of(logger_name: str) -> str:
    if logger_name.startswith(LOGGER_ROOT + "."):
        return logger_name[len(LOGGER_ROOT) + 1:]
    return logger_name


class TopicFormatter(logging.Formatter):
    """
    Prefixes every line of a message with `LEVEL [topic]`.

    Records logged with `extra={"raw": True}` (network dumps) skip the prefix
    so their columns stay aligned.
    """

    def __init__(self, color: bool = False) -> None:
        super().__init__("%(message)s")
        self.color = color

    def _prefix(self, record: logging.LogRecord) -> str:
        level = record.levelname.ljust(7)
        topic = f"[{topic_of(record.name)}]"
        if not self.color:
            return f"{level} {topic} "
        tint = LEVEL_COLORS.get(record.levelno, "")
        return f"{tint}{level}{ANSI_RESET} {ANSI_BOLD}{topic}{ANSI_RESET} "

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        if getattr(record, "raw", False):
            return text
        prefix = self._prefix(record)
        return "\n".join(prefix + line for line in text.splitlines() or [""])


def resolve_topics(debug_topics: Optional[str]) -> Set[str]:
    """'all', full topic names and unique-enough prefixes ("tr" -> "trace")."""
    if not debug_topics:
        return set()
    wanted = {t.strip() for t in debug_topics.split(",")} - {""}
    if "all" in wanted:
        return set(PROJECT_TOPICS)
    found: Set[str] = set()
    for prefix in wanted:
        found.update(t for t in PROJECT_TOPICS if t.startswith(prefix))
    return found


def _add_handler(logger: logging.Logger, handler: logging.Handler, color: bool) -> None:
    handler.setFormatter(TopicFormatter(color=color))
    logger.addHandler(handler)


def setup_logging(
    level: int,
    color_logs: bool = False,
    debug_topics: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Install handlers on the package logger; calling it again replaces them."""
    root = logging.getLogger(LOGGER_ROOT)
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    root.setLevel(level)

    _add_handler(root, logging.StreamHandler(), color_logs)

    if log_file:
        try:
            _add_handler(root, logging.FileHandler(log_file, mode="w", encoding="utf-8"), False)
        except OSError as e:
            root.error("Could not open log file %s: %s", log_file, e)
        else:
            root.info("Logging to file: %s", log_file)

    for topic in sorted(resolve_topics(debug_topics)):
        logging.getLogger(f"{LOGGER_ROOT}.{topic}").setLevel(logging.DEBUG)
    return root
