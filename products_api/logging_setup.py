# products_api/logging_setup.py
import logging

from rich.logging import RichHandler


def configure_logging(level: str = "INFO") -> None:
    """Route every logger through a single rich console handler."""
    root = logging.getLogger()

    # Clear existing handlers so repeated calls (reloads, tests) don't duplicate output
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = RichHandler(rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(level)
