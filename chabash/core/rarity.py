# rarity.py
# pick the anchor word for a reply: the known word with the fewest transitions

from __future__ import annotations

import logging
from typing import Optional

from chabash.context.tokenizer import word_tokens
from chabash.core.graph import MarkovGraph, Word

logger = logging.getLogger(__name__)


def rarest_known_word(graph: MarkovGraph, sentence: str) -> Optional[Word]:
    """
    Word of sentence with the smallest out-total in graph.
    Unknown words are skipped; ties go to the first occurrence.
    Returns None when no word of the sentence is in the graph.
    """
    rarest: Optional[Word] = None
    rarest_total = 0
    for w in word_tokens(sentence):
        total = graph.out_total(w)
        if total is None:
            continue
        if rarest is None or total < rarest_total:
            rarest, rarest_total = w, total
    logger.debug("RARE: %s", rarest)
    return rarest
