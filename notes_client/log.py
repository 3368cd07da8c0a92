import logging

from rich.console import Console
from rich.logging import RichHandler

_console = Console(stderr=True)


def get_logger(name: str = "notes_client") -> logging.Logger:
    """Module loggers share one rich handler installed on the package root."""
    root = logging.getLogger("notes_client")
    if not root.handlers:
        handler = RichHandler(console=_console, show_time=True, show_level=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        root.setLevel(logging.INFO)
        root.propagate = False
    return logging.getLogger(name)


def set_level(level: str):
    get_logger().setLevel(level.upper())
