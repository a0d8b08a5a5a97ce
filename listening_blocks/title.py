from __future__ import annotations

import re
from dataclasses import dataclass

DEFAULT_MAX_WORDS = 7
DEFAULT_MIN_WORDS = 4

_QUOTES_RE = re.compile(r"[\"']")


@dataclass(frozen=True)
class TitleFragment:
    words: str
    operator: str


def title_fragment(
    caption: str | None,
    *,
    max_words: int = DEFAULT_MAX_WORDS,
    min_words: int = DEFAULT_MIN_WORDS,
) -> TitleFragment:
    """
    Build the `title:"..."` search operator from the first words of a caption.

    Quotes are removed before splitting so they can never break the operator. Titles
    shorter than `min_words` are too weak to search on and get no operator.
    """
    cleaned = _QUOTES_RE.sub("", caption or "")
    words = cleaned.split()[:max_words]
    text = " ".join(words)

    if len(words) < min_words:
        return TitleFragment(words=text, operator="")
    return TitleFragment(words=text, operator=f'title:"{text}"')
