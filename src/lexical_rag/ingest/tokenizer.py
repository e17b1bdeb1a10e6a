"""Punctuation-stripping, case-folding tokenizer."""

from __future__ import annotations

# Full-width marks first, then their ASCII counterparts.
PUNCTUATION = "。，、；：！？.,;:!?"

_PUNCTUATION_TABLE = str.maketrans({mark: " " for mark in PUNCTUATION})


def tokenize(text: str) -> list[str]:
    """Split text into lower-cased tokens.

    Each punctuation mark in `PUNCTUATION` becomes a space and the result is
    split on whitespace. There is no word segmentation, so a run of CJK
    characters without spaces or punctuation stays one token.
    """

    return text.lower().translate(_PUNCTUATION_TABLE).split()
