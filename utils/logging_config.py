import logging
from typing import Optional

DEFAULT_FORMAT = '%(levelname)s:%(name)s:%(message)s'


def level_for(verbose: bool = False, quiet: bool = False) -> int:
    """Map CLI verbosity flags to a logging level."""
    if quiet:
        return logging.WARNING
    if verbose:
        return logging.DEBUG
    return logging.INFO


def configure_logging(level: int = logging.INFO, fmt: Optional[str] = None) -> None:
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)
    # lxml and yaml stay quiet unless something is wrong
    for noisy in ("lxml", "yaml"):
        logging.getLogger(noisy).setLevel(max(level, logging.WARNING))
