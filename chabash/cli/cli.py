"""
cli.py - command line front end for the chabash Markov chat engine
Modes:
- batch (-r FILE): learn every sentence of a text file, save the graph, exit
- interactive: each input line is learnt, then answered with a sentence
  built around its rarest known word
The graph is loaded from (or seeded and later saved to) the -d file.
"""

import argparse
import logging
import random
import sys
from typing import List, Optional, TextIO

from rich.console import Console

from chabash.context.normalizer import split_sentences
from chabash.core.generator import GeneratedSentence, SentenceGenerator
from chabash.core.graph import MarkovGraph
from chabash.core.rarity import rarest_known_word
from chabash.core.sampler import Sampler
from chabash.errors import ChabashError
from chabash.utils.config_manager import Config
from chabash.utils.logger_utils import err_console, setup_logging, time_block
from chabash.utils.model_store import load_or_seed, save_graph

logger = logging.getLogger(__name__)

PROMPT = "> "

USAGE = """\
{prog} usage:
-h             : print this help and exit
-v             : verbose output
-d <filename>  : restore and save graph from given filename
-r <filename>  : read text from filename
-c <filename>  : read settings from a JSON config file
"""


class UsageError(ChabashError):
    pass


class ArgumentParser(argparse.ArgumentParser):
    """argparse with exit status 1 for every usage problem."""

    def error(self, message):
        raise UsageError(message)


def build_parser(prog: str = "chabash") -> ArgumentParser:
    p = ArgumentParser(prog=prog, add_help=False)
    p.add_argument("-h", dest="help", action="store_true")
    p.add_argument("-v", dest="verbose", action="store_true")
    p.add_argument("-d", dest="data_file", metavar="FILE")
    p.add_argument("-r", dest="read_file", metavar="FILE")
    p.add_argument("-c", dest="config", metavar="FILE")
    return p


class CLI:
    """Interactive loop: learn a line, answer it, repeat until EOF."""

    def __init__(self, graph: MarkovGraph, generator: SentenceGenerator,
                 console: Optional[Console] = None, stream: Optional[TextIO] = None):
        self.graph = graph
        self.generator = generator
        self.console = console or Console()
        self.stream = stream
        self.running = True

    def _read(self) -> str:
        if self.stream is None:
            return self.console.input(PROMPT)
        line = self.console.input(PROMPT, stream=self.stream)
        if not line:
            raise EOFError
        return line.rstrip("\r\n")

    def reply(self, line: str) -> GeneratedSentence:
        self.graph.add_sentence(line)
        anchor = rarest_known_word(self.graph, line)
        return self.generator.generate_from_seed(anchor)

    def run(self) -> None:
        while self.running:
            try:
                line = self._read()
            except (EOFError, KeyboardInterrupt):
                self.running = False
                break
            answer = self.reply(line)
            self.console.print(answer.text, markup=False, highlight=False, soft_wrap=True)


def ingest_file(graph: MarkovGraph, path: str) -> int:
    """Learn every sentence of a text file. Raises OSError if it can't be read."""
    with open(path, "r", encoding="ascii", errors="ignore", newline="") as f:
        sentences: List[str] = split_sentences(f.read())
    with time_block(f"ingest {path}", logger):
        graph.add_sentences(sentences)
    logger.info("learnt %d sentences from %s", len(sentences), path)
    return len(sentences)


def _fail(msg: str) -> int:
    err_console.print(msg, markup=False, highlight=False)
    return 1


def _save(graph: MarkovGraph, cfg: Config) -> int:
    try:
        save_graph(graph, cfg["data_file"], cfg["var_prefix"])
    except OSError as e:
        return _fail(f"cannot write {cfg['data_file']}: {e}")
    return 0


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None,
         stream: Optional[TextIO] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        return _fail(f"{parser.prog}: {e}")
    if args.help:
        return _fail(USAGE.format(prog=parser.prog).rstrip())

    setup_logging(args.verbose)
    logger.debug("Verbose Mode")

    try:
        cfg = Config(args.config)
        if args.data_file:
            cfg.set("data_file", args.data_file)
        graph = load_or_seed(cfg["data_file"], cfg["var_prefix"], cfg["bidirectional"])
    except ChabashError as e:
        return _fail(str(e))
    except OSError as e:
        return _fail(f"cannot read {cfg['data_file']}: {e}")

    if args.read_file:
        try:
            ingest_file(graph, args.read_file)
        except OSError:
            return _fail(f"cannot open {args.read_file}")
        return _save(graph, cfg)

    sampler = Sampler(graph, random.Random(cfg["seed"]), cfg["strict_weighting"])
    generator = SentenceGenerator(graph, sampler, cfg["max_steps"])
    CLI(graph, generator, console=console, stream=stream).run()
    return _save(graph, cfg)


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
