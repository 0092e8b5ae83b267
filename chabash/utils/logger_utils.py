# logger_utils.py - logging setup shared by the CLI and library code

import logging
import time

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "chabash"

# diagnostics go to stderr so replies on stdout stay clean
err_console = Console(stderr=True)


def setup_logging(verbose: bool = False, console: Console = None) -> logging.Logger:
    """
    Attach a RichHandler to the package logger.
    verbose=True shows DEBUG traces (tokenizer steps, draws, anchor words),
    otherwise only warnings and errors are shown.
    """
    log = logging.getLogger(LOGGER_NAME)
    for h in list(log.handlers):
        if h.get_name() == LOGGER_NAME:
            log.removeHandler(h)
    handler = RichHandler(
        console=console or err_console,
        show_time=verbose,
        show_path=False,
        markup=False,
    )
    handler.set_name(LOGGER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    log.addHandler(handler)
    log.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return log


class time_block:
    """
    Log how long a block took, at INFO level:
        with time_block("ingest"):
            graph.add_sentences(lines)
    """

    def __init__(self, label, logger=None):
        self.label = label
        self.log = logger or logging.getLogger(LOGGER_NAME)

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.elapsed = time.perf_counter() - self.start
        self.log.info("%s done in %.3fs", self.label, self.elapsed)
