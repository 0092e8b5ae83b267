# model_store.py - persistence layer for the word graph

# the store is a flat list of shell-style assignments, one per line:
#   CB_<word>_nexts=([0]="a" [1]="b")     successors, in insertion order
#   CB_<word>_counts=([0]="2" [1]="1")    matching weights
#   CB_<word>_total=3
#   CB_<word>_prevs / _prev_counts / _prev_total   (bidirectional graphs)
# every save rewrites the whole file.

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from chabash.core.graph import Edge, MarkovGraph, Node
from chabash.errors import ModelStoreError

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

DEFAULT_DATA_FILE = "chabash.dat"
DEFAULT_PREFIX = "CB"

# longest first, "_prev_counts" must win over "_counts"
SUFFIXES = ("_prev_counts", "_prev_total", "_prevs", "_nexts", "_counts", "_total")

SEED_SENTENCES = (
    "there once was a man from nantucket",
    "who got his foot caught in a sandwich?",
    "his foot got caught in a sandwich!",
    "i would tell you if i knew",
    "do you know what i mean?",
    "if you know what i mean",
    "i would like to eat a sandwich",
    "goddamn, you sure are patient!",
    "i am a computer",
    "this is a waste of my time and yours",
    "time and tide waits for no man",
    "man, i could sure use a drink",
)

_line_re = re.compile(r"^(?P<key>[A-Za-z0-9_]+)=(?P<value>.*)$")
_item_re = re.compile(r'\[(\d+)\]=(?:"((?:[^"\\]|\\.)*)"|(\S*))')


# Writing ------------------------------------------------------------
def _array(values: Iterable[object]) -> str:
    return "(" + " ".join(f'[{i}]="{v}"' for i, v in enumerate(values)) + ")"


def _node_lines(node: Node, prefix: str, bidirectional: bool) -> List[Tuple[str, str]]:
    base = f"{prefix}_{node.word}"
    out = []
    if node.nexts:
        out.append((f"{base}_nexts", _array(e.word for e in node.nexts)))
        out.append((f"{base}_counts", _array(e.weight for e in node.nexts)))
        out.append((f"{base}_total", str(node.out_total)))
    if bidirectional and node.prevs:
        out.append((f"{base}_prevs", _array(e.word for e in node.prevs)))
        out.append((f"{base}_prev_counts", _array(e.weight for e in node.prevs)))
        out.append((f"{base}_prev_total", str(node.in_total)))
    return out


def dump_graph(graph: MarkovGraph, prefix: str = DEFAULT_PREFIX) -> str:
    """Serialize graph to the store text (sorted by key)."""
    pairs: List[Tuple[str, str]] = []
    for node in graph:
        pairs.extend(_node_lines(node, prefix, graph.bidirectional))
    pairs.sort()
    return "".join(f"{k}={v}\n" for k, v in pairs)


def save_graph(graph: MarkovGraph, path: PathLike = DEFAULT_DATA_FILE,
               prefix: str = DEFAULT_PREFIX) -> None:
    """
    Write the full graph to path, replacing any previous file.
    Args:
        graph: the graph to store
        path: destination file
        prefix: variable prefix used for every key
    """
    path = Path(path)
    text = dump_graph(graph, prefix)
    fd, tmp = tempfile.mkstemp(prefix=path.name + ".", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp, path)
    except BaseException:
        os.unlink(tmp)
        raise
    logger.info("Saved graph to %s (%d words, %d edges)", path, len(graph), graph.edge_count())


# Reading ------------------------------------------------------------
def _split_key(key: str, prefix: str) -> Optional[Tuple[str, str]]:
    head = prefix + "_"
    if not key.startswith(head):
        return None
    rest = key[len(head):]
    for suffix in SUFFIXES:
        if rest.endswith(suffix):
            return rest[: -len(suffix)], suffix[1:]
    return None


def _parse_value(value: str) -> Union[str, List[str]]:
    value = value.strip()
    if value.startswith("(") and value.endswith(")"):
        items = sorted((int(i), q if q else bare) for i, q, bare in _item_re.findall(value))
        return [v for _, v in items]
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        value = value[1:-1]
    return value


def _edges(words: object, counts: object) -> Tuple[List[Edge], bool]:
    """Pair words with weights; the flag is False when the lists disagree in length."""
    if not isinstance(words, list) or not isinstance(counts, list):
        raise TypeError("expected an array")
    edges = []
    for w, c in zip(words, counts):
        weight = int(c)
        if weight < 1:
            raise ValueError(f"non-positive weight {weight}")
        edges.append(Edge(w, weight))
    return edges, len(words) == len(counts)


def parse_graph(text: str, prefix: str = DEFAULT_PREFIX, bidirectional: bool = True,
                source: PathLike = "<string>") -> MarkovGraph:
    """Rebuild a MarkovGraph from store text. Lines with other prefixes are ignored."""
    fields: Dict[str, Dict[str, object]] = {}
    first_line: Dict[str, Tuple[int, str]] = {}
    for lineno, line in enumerate(text.splitlines(), 1):
        if not line.startswith(prefix + "_"):
            continue
        m = _line_re.match(line)
        parts = _split_key(m.group("key"), prefix) if m else None
        if parts is None:
            raise ModelStoreError(source, lineno, line)
        word, kind = parts
        if not word:
            logger.warning("%s:%d: skipping entry with empty word", source, lineno)
            continue
        fields.setdefault(word, {})[kind] = _parse_value(m.group("value"))
        first_line.setdefault(word, (lineno, line))

    graph = MarkovGraph(bidirectional=bidirectional)
    prevs_usable = False
    prevs_broken = False
    for word, f in fields.items():
        nexts = prevs = None
        try:
            if "nexts" in f:
                nexts, ok = _edges(f["nexts"], f.get("counts", []))
                if not ok:
                    logger.warning("%s: nexts and counts differ in length", word)
            if bidirectional and "prevs" in f:
                prevs, ok = _edges(f["prevs"], f.get("prev_counts", []))
                prevs_usable = True
                prevs_broken = prevs_broken or not ok
        except (TypeError, ValueError):
            lineno, line = first_line[word]
            raise ModelStoreError(source, lineno, line) from None
        if nexts or prevs:
            node = graph.restore(word, nexts=nexts, prevs=prevs)
            total = f.get("total")
            if nexts and total is not None and str(total) != str(node.out_total):
                logger.debug("%s: stored total %s, recomputed %d", word, total, node.out_total)

    if bidirectional and (prevs_broken or not prevs_usable):
        logger.info("rebuilding incoming edges from outgoing edges")
        _rebuild_prevs(graph)
    return graph


def _rebuild_prevs(graph: MarkovGraph) -> None:
    # derive the incoming index from the outgoing edges
    incoming: Dict[str, List[Edge]] = {}
    for node in list(graph):
        node.prevs, node.in_total = [], 0
        for e in node.nexts:
            incoming.setdefault(e.word, []).append(Edge(node.word, e.weight))
    for word, edges in incoming.items():
        graph.restore(word, prevs=edges)


def load_graph(path: PathLike = DEFAULT_DATA_FILE, prefix: str = DEFAULT_PREFIX,
               bidirectional: bool = True) -> MarkovGraph:
    """
    Load a graph from disk.
    Raises FileNotFoundError if path is missing and ModelStoreError if it is corrupt.
    """
    with open(path, "rb") as f:
        raw = f.read()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        lineno = raw.count(b"\n", 0, e.start) + 1
        line = raw.split(b"\n")[lineno - 1].decode("utf-8", "replace")
        raise ModelStoreError(path, lineno, line) from None
    graph = parse_graph(text, prefix, bidirectional, source=path)
    logger.info("Loaded graph from %s (%d words, %d edges)", path, len(graph), graph.edge_count())
    return graph


def seed_graph(bidirectional: bool = True) -> MarkovGraph:
    graph = MarkovGraph(bidirectional=bidirectional)
    graph.add_sentences(SEED_SENTENCES)
    return graph


def load_or_seed(path: PathLike = DEFAULT_DATA_FILE, prefix: str = DEFAULT_PREFIX,
                 bidirectional: bool = True) -> MarkovGraph:
    """Load the store at path, or start from the built-in seed sentences if there is none."""
    if os.path.isfile(path):
        return load_graph(path, prefix, bidirectional)
    logger.info("No graph at %s, starting from seed sentences", path)
    return seed_graph(bidirectional)
