# generator.py
# random walks over the MarkovGraph, rendered as printable sentences

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from chabash.context.tokenizer import BEGIN, END, detokenize, encode_word
from chabash.core.graph import MarkovGraph, Word
from chabash.core.sampler import Sampler

logger = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 1000


class WalkState(enum.Enum):
    WALKING = "walking"
    DONE = "done"
    TRUNCATED = "truncated"


@dataclass(frozen=True)
class GeneratedSentence:
    text: str
    tokens: Tuple[Word, ...]
    truncated: bool = False

    def __str__(self) -> str:
        return self.text


class SentenceGenerator:
    """
    Builds sentences by walking the graph.

    Forward walks start at BEGIN (or any word) and stop at END; seeded
    walks go backward to BEGIN first and then forward to END. Each walk
    takes at most max_steps samples; a walk that hits the limit stops
    early and the result is flagged truncated.
    """

    def __init__(self, graph: MarkovGraph, sampler: Optional[Sampler] = None,
                 max_steps: int = DEFAULT_MAX_STEPS) -> None:
        if max_steps < 1:
            raise ValueError("max_steps must be >= 1")
        self.graph = graph
        self.sampler = sampler or Sampler(graph)
        self.max_steps = max_steps

    def _walk(self, start: Word, step: Callable[[Word], Word], stop: Word) -> Tuple[List[Word], WalkState]:
        words: List[Word] = []
        current = start
        state = WalkState.WALKING
        steps = 0
        while state is WalkState.WALKING:
            if steps >= self.max_steps:
                state = WalkState.TRUNCATED
                logger.warning("walk from %s stopped after %d steps", start, steps)
                break
            nxt = step(current)
            steps += 1
            if nxt == stop:
                state = WalkState.DONE
            else:
                words.append(nxt)
                current = nxt
        return words, state

    def generate_forward(self, start: Word = BEGIN) -> GeneratedSentence:
        words, state = self._walk(start, self.sampler.sample_next, END)
        return GeneratedSentence(detokenize(words), tuple(words),
                                 state is WalkState.TRUNCATED)

    def generate_from_seed(self, word: Optional[Word]) -> GeneratedSentence:
        """Sentence passing through word; unconstrained when word is empty."""
        if not word:
            return self.generate_forward()
        seed = encode_word(word)
        before, back_state = self._walk(seed, self.sampler.sample_prev, BEGIN)
        after, fwd_state = self._walk(seed, self.sampler.sample_next, END)
        before.reverse()
        tokens = before + [seed] + after
        truncated = WalkState.TRUNCATED in (back_state, fwd_state)
        logger.debug("seed %s: %d before, %d after", seed, len(before), len(after))
        return GeneratedSentence(detokenize(tokens), tuple(tokens), truncated)
