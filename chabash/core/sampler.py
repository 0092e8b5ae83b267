# sampler.py
# weighted random choice of the next / previous word in a MarkovGraph

from __future__ import annotations

import logging
import random
from typing import List, Optional

from chabash.context.tokenizer import BEGIN, END
from chabash.core.graph import Adjacency, Edge, MarkovGraph, Word

logger = logging.getLogger(__name__)


class Sampler:
    """
    Draws successors and predecessors from a MarkovGraph.

    By default the walk over an edge list picks the first edge whose weight
    is >= the remaining draw. That comparison gives the first edge one extra
    slot, taken from the last edge; it is kept for parity with older stores.
    strict_weighting=True switches to exact proportional sampling (draw < weight).
    """

    def __init__(self, graph: MarkovGraph, rng: Optional[random.Random] = None,
                 strict_weighting: bool = False) -> None:
        self.graph = graph
        self.rng = rng or random.Random()
        self.strict_weighting = strict_weighting

    def _pick(self, adj: Adjacency) -> Optional[Word]:
        draw = self.rng.randrange(adj.total)
        logger.debug("draw %d of %d", draw, adj.total)
        return pick_weighted(adj.edges, draw, self.strict_weighting)

    def sample_next(self, word: Word) -> Word:
        adj = self.graph.edges_out(word)
        if adj is None or adj.total <= 0:
            return END
        return self._pick(adj) or END

    def sample_prev(self, word: Word) -> Word:
        if not self.graph.bidirectional:
            return self._sample_prev_scan(word)
        adj = self.graph.edges_in(word)
        if adj is None or adj.total <= 0:
            return BEGIN
        return self._pick(adj) or BEGIN

    def _sample_prev_scan(self, word: Word) -> Word:
        # uniform over distinct sources, counts are not consulted
        sources: List[Word] = self.graph.sources_of(word)
        if not sources:
            return BEGIN
        return sources[self.rng.randrange(len(sources))]


def pick_weighted(edges: List[Edge], draw: int, strict: bool = False) -> Optional[Word]:
    """Walk edges, subtracting weights from draw until one is selected."""
    for e in edges:
        if (draw < e.weight) if strict else (draw <= e.weight):
            return e.word
        draw -= e.weight
    return None
