from __future__ import annotations

import re

from .post import RawSegment
from .run_log import RunLogger

FALLBACK_DATE_TOKEN = "01-01-00"

_URL_RE = re.compile(r"https?://\S+")
_TRAILING_DATE_RE = re.compile(r"(\d{2}-\d{2}-\d{2})$")

# A Facebook post id glued to the first caption word: "..._921437093355563Hola".
# Only the last _<digits> run qualifies and the cut-off text never holds a path separator.
_GLUED_FACEBOOK_RE = re.compile(r"^(\S*facebook\.com/\S*_\d+)([^\d/?&=#_.][^/]*)$")


def _split_glued_caption(url: str) -> tuple[str, str]:
    m = _GLUED_FACEBOOK_RE.match(url)
    if m is None:
        return url, ""
    return m.group(1), m.group(2)


def _split_trailing_date(text: str) -> tuple[str, str | None]:
    matches = list(_TRAILING_DATE_RE.finditer(text))
    if not matches:
        return text, None
    last = matches[-1]
    return text[: last.start()].strip(), last.group(1)


def segment_posts(raw_text: str, *, logger: RunLogger | None = None) -> list[RawSegment]:
    """
    Split pasted text into one segment per URL, in input order.

    Each segment runs from the end of its URL to the start of the next URL (or the end of
    the text). A DD-MM-YY token closing the trimmed segment is its date; segments without
    one fall back to FALLBACK_DATE_TOKEN.
    """
    text = raw_text or ""
    found = list(_URL_RE.finditer(text))

    segments: list[RawSegment] = []
    for i, match in enumerate(found):
        end = found[i + 1].start() if i + 1 < len(found) else len(text)
        url, glued = _split_glued_caption(match.group(0))
        trailing = (glued + text[match.end() : end]).strip()

        caption, date_token = _split_trailing_date(trailing)
        if date_token is None:
            if logger is not None:
                logger.warning(
                    "date_token_missing",
                    link=url,
                    fallback=FALLBACK_DATE_TOKEN,
                )
            date_token = FALLBACK_DATE_TOKEN

        segments.append(RawSegment(url=url, copy_segment=caption, date_token=date_token))

    return segments
