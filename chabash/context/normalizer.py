# chabash/context/normalizer.py
# raw text -> sentence lines for batch ingestion

import re
from typing import List

_unprintable_re = re.compile(r"[^\n\r -~]")   # keep newlines + printable ascii
_break_re = re.compile(r"([.?!]) ")


def normalize_text(s: str) -> str:
    if not s:
        return ""
    s = _unprintable_re.sub("", s)
    # fold line breaks into plain spaces
    return s.replace("\r", " ").replace("\n", " ")


def split_sentences(s: str) -> List[str]:
    """
    Break text into sentences after every '. ', '? ' and '! '.
    The space after the mark is consumed, the mark stays with its sentence.
    """
    text = _break_re.sub("\\1\n", normalize_text(s))
    out = []
    for line in text.split("\n"):
        line = line.strip()
        if line:
            out.append(line)
    return out
