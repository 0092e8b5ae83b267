# chabash/context/__init__.py
# text handling: tokenizing sentences and preparing raw text for ingestion

from .normalizer import normalize_text, split_sentences
from .tokenizer import (
    BEGIN,
    END,
    TokenizedSentence,
    detokenize,
    expand_token,
    sentence_edges,
    tokenize,
    word_tokens,
)

__all__ = [
    "BEGIN",
    "END",
    "TokenizedSentence",
    "detokenize",
    "expand_token",
    "normalize_text",
    "sentence_edges",
    "split_sentences",
    "tokenize",
    "word_tokens",
]
