"""
Central logging setup. Standard output is reserved for generated text, so logs go to stderr.
"""

import logging
import sys


def setup_logging(level: int = logging.WARNING) -> None:
    """Configure the root logger with a stderr handler."""
    handler = logging.StreamHandler(sys.stderr)
    fmt = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    handler.setFormatter(logging.Formatter(fmt))
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
