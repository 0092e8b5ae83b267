# chabash/context/tokenizer.py
# sentence tokenizer: words + punctuation tags, apostrophe encoding, detokenizing

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

# sentinels + punctuation tags (same spelling as the on-disk store keys)
BEGIN = "__BEGIN__"
END = "__END__"
COMMA = "__COMMA__"
PERIOD = "__PERIOD__"
QUESTION = "__QM__"
BANG = "__BANG__"

APOSTROPHE = "'"
APOSTROPHE_MARK = "_"

PUNCTUATION_TAGS = {
    ".": PERIOD,
    "?": QUESTION,
    "!": BANG,
    ",": COMMA,
}

_SURFACE = {
    COMMA: ", ",
    PERIOD: ". ",
    QUESTION: "? ",
    BANG: "! ",
}

TAGS = frozenset(_SURFACE)


def is_word_char(ch: str) -> bool:
    return ch == APOSTROPHE or (ch.isascii() and ch.isalnum())


def is_filler(ch: str) -> bool:
    """Printable ASCII that is not part of a word."""
    return " " <= ch <= "~" and not is_word_char(ch)


def encode_word(word: str) -> str:
    return word.replace(APOSTROPHE, APOSTROPHE_MARK)


def decode_word(word: str) -> str:
    return word.replace(APOSTROPHE_MARK, APOSTROPHE)


@dataclass(frozen=True)
class TokenizedSentence:
    """
    Tokens of one sentence.
    failed_at holds the unparsed remainder when scanning stopped early.
    """
    tokens: Tuple[str, ...]
    failed_at: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failed_at is None


def tokenize(sentence: str) -> TokenizedSentence:
    """
    Split a sentence into word tokens and punctuation tags.

    Each step skips a filler run. A filler run starting with . ? ! or ,
    yields a tag and consumes only that one character; otherwise the
    following run of letters/digits/apostrophes is the word. A step that
    consumes nothing (tab, non-ASCII, ...) stops the scan.
    """
    tokens: List[str] = []
    pos = 0
    n = len(sentence)
    while pos < n:
        start = pos
        while pos < n and is_filler(sentence[pos]):
            pos += 1
        filler = sentence[start:pos]

        if filler and filler[0] in PUNCTUATION_TAGS:
            tokens.append(PUNCTUATION_TAGS[filler[0]])
            pos = start + 1
            continue

        word_start = pos
        while pos < n and is_word_char(sentence[pos]):
            pos += 1
        word = sentence[word_start:pos]
        logger.debug("filler=%r word=%r rest=%r", filler, word, sentence[pos:])

        if word:
            tokens.append(encode_word(word))
        elif pos == start:
            rest = sentence[start:]
            logger.warning("Parse error at %s", rest)
            return TokenizedSentence(tuple(tokens), failed_at=rest)
    return TokenizedSentence(tuple(tokens))


def word_tokens(sentence: str) -> List[str]:
    """Word tokens only, punctuation tags dropped."""
    return [t for t in tokenize(sentence).tokens if t not in TAGS]


def sentence_edges(tokens: Iterable[str]) -> Iterator[Tuple[str, str]]:
    """BEGIN -> t1 -> ... -> tk -> END, END edge always present."""
    last = BEGIN
    for tok in tokens:
        yield last, tok
        last = tok
    yield last, END


# ------------------------------------------------------------------
# Detokenizing
# ------------------------------------------------------------------
def expand_token(token: str) -> str:
    """Printable surface form of a token."""
    if token in _SURFACE:
        return _SURFACE[token]
    return decode_word(token)


def joins_tight(token: str) -> bool:
    # tags and apostrophe-leading words attach without a space
    return token.startswith(APOSTROPHE_MARK)


def detokenize(tokens: Iterable[str]) -> str:
    out = ""
    prev: Optional[str] = None
    for tok in tokens:
        if prev is None:
            out = expand_token(tok)
        elif joins_tight(prev) or joins_tight(tok):
            out += expand_token(tok)
        else:
            out += " " + expand_token(tok)
        prev = tok
    return out
