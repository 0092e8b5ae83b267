# graph.py
# word-level Markov graph: weighted transitions between words, both directions.

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional

from chabash.context.tokenizer import sentence_edges, tokenize

logger = logging.getLogger(__name__)

Word = str


@dataclass
class Edge:
    word: Word
    weight: int = 1


@dataclass(frozen=True)
class Adjacency:
    """Read-only view of one direction of a node."""
    edges: List[Edge]
    total: int


@dataclass
class Node:
    """
    A word with its ordered outgoing edges and, in bidirectional mode,
    its ordered incoming edges. Totals are kept alongside the edge lists.
    """
    word: Word
    nexts: List[Edge] = field(default_factory=list)
    out_total: int = 0
    prevs: List[Edge] = field(default_factory=list)
    in_total: int = 0


def _bump(edges: List[Edge], word: Word) -> None:
    # linear scan, out-degree of real text stays small
    for e in edges:
        if e.word == word:
            e.weight += 1
            return
    edges.append(Edge(word))


class MarkovGraph:
    """
    Directed graph of word transitions.

    Grows monotonically: edges are never removed and weights never drop.
    With bidirectional=True every add_edge is mirrored into the target's
    incoming edges so backward walks are as cheap as forward ones.
    """

    def __init__(self, bidirectional: bool = True) -> None:
        self.bidirectional = bidirectional
        self._nodes: Dict[Word, Node] = {}

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def _node(self, word: Word) -> Node:
        node = self._nodes.get(word)
        if node is None:
            node = self._nodes[word] = Node(word)
        return node

    def add_edge(self, source: Word, target: Word) -> None:
        src = self._node(source)
        _bump(src.nexts, target)
        src.out_total += 1

        if not self.bidirectional:
            return

        dst = self._node(target)
        _bump(dst.prevs, source)
        dst.in_total += 1

    def restore(self, word: Word, nexts: Optional[List[Edge]] = None,
                prevs: Optional[List[Edge]] = None) -> Node:
        """
        Replace a node's edge lists wholesale (used when loading a store).
        Totals are recomputed from the weights.
        """
        node = self._node(word)
        if nexts is not None:
            node.nexts = list(nexts)
            node.out_total = sum(e.weight for e in node.nexts)
        if prevs is not None:
            node.prevs = list(prevs)
            node.in_total = sum(e.weight for e in node.prevs)
        return node

    def add_sentence(self, sentence: str) -> int:
        """Ingest one sentence; returns the number of edges recorded."""
        result = tokenize(sentence)
        count = 0
        for a, b in sentence_edges(result.tokens):
            self.add_edge(a, b)
            count += 1
        logger.debug("learnt %r (%d edges)", sentence, count)
        return count

    def add_sentences(self, sentences: Iterable[str]) -> int:
        n = 0
        for s in sentences:
            self.add_sentence(s)
            n += 1
        return n

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def edges_out(self, word: Word) -> Optional[Adjacency]:
        """Outgoing edges of word, or None if word was never a source."""
        node = self._nodes.get(word)
        if node is None or not node.nexts:
            return None
        return Adjacency(node.nexts, node.out_total)

    def edges_in(self, word: Word) -> Optional[Adjacency]:
        """Incoming edges of word, or None if none were recorded."""
        node = self._nodes.get(word)
        if node is None or not node.prevs:
            return None
        return Adjacency(node.prevs, node.in_total)

    def out_total(self, word: Word) -> Optional[int]:
        adj = self.edges_out(word)
        return adj.total if adj is not None else None

    def sources_of(self, word: Word) -> List[Word]:
        """
        Distinct words with an outgoing edge to word, in node order.
        Full scan over the graph, used when no incoming index is kept.
        """
        return [
            n.word for n in self._nodes.values()
            if any(e.word == word for e in n.nexts)
        ]

    def node(self, word: Word) -> Optional[Node]:
        return self._nodes.get(word)

    # ------------------------------------------------------------------
    # Introspection helpers
    # ------------------------------------------------------------------
    def words(self) -> List[Word]:
        return list(self._nodes)

    def edge_count(self) -> int:
        return sum(len(n.nexts) for n in self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, word: object) -> bool:
        return word in self._nodes

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes.values())
