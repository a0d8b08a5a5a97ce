from __future__ import annotations

from typing import Sequence


def search_terms(term: str) -> list[str]:
    text = (term or "").strip().lower()
    if not text:
        return []
    return [part.strip() for part in text.split(" or ")]


def filter_blocks(blocks: Sequence[str], term: str) -> list[str]:
    """
    Keep blocks containing any of the ` OR `-separated terms, case-insensitively.

    A blank term keeps every block.
    """
    terms = search_terms(term)
    if not terms:
        return list(blocks)

    out: list[str] = []
    for block in blocks:
        lowered = block.lower()
        if any(t in lowered for t in terms):
            out.append(block)
    return out
