# chabash/utils/__init__.py
# config, logging and graph persistence helpers

from .config_manager import Config
from .logger_utils import setup_logging, time_block
from .model_store import (
    SEED_SENTENCES,
    dump_graph,
    load_graph,
    load_or_seed,
    parse_graph,
    save_graph,
)

__all__ = [
    "Config",
    "SEED_SENTENCES",
    "dump_graph",
    "load_graph",
    "load_or_seed",
    "parse_graph",
    "save_graph",
    "setup_logging",
    "time_block",
]
