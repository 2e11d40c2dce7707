"""Logging configuration for the API process."""
import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger with a single console handler.

    Args:
        level: Log level name, e.g. "INFO" or "DEBUG"
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    # Remove existing handlers so repeated setup (reloads, tests) doesn't duplicate output
    for handler in list(root.handlers):
        root.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    root.addHandler(console_handler)

    # Uvicorn's access log is noisy at INFO and duplicates our request logging
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
