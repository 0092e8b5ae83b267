"""
chabash - a word-level Markov chain chat engine.

Sentences are learnt into a weighted graph of word transitions
(MarkovGraph) and new sentences are produced by random walks over it,
either from the start of a sentence or around an anchor word.
"""

from chabash.core import MarkovGraph, Sampler, SentenceGenerator, rarest_known_word
from chabash.utils.model_store import load_graph, load_or_seed, save_graph

__all__ = [
    "MarkovGraph",
    "Sampler",
    "SentenceGenerator",
    "rarest_known_word",
    "load_graph",
    "load_or_seed",
    "save_graph",
]

__version__ = "0.1.0"
