"""
chabash.core

The Markov chain engine:
 - word transition graph (MarkovGraph)
 - weighted successor / predecessor sampling (Sampler)
 - sentence building, forward or around an anchor word (SentenceGenerator)
 - anchor selection by rarity (rarest_known_word)
"""

from .graph import Adjacency, Edge, MarkovGraph, Node
from .sampler import Sampler
from .generator import GeneratedSentence, SentenceGenerator, WalkState
from .rarity import rarest_known_word

__all__ = [
    "Adjacency",
    "Edge",
    "MarkovGraph",
    "Node",
    "Sampler",
    "GeneratedSentence",
    "SentenceGenerator",
    "WalkState",
    "rarest_known_word",
]
