from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RawSegment:
    """One pasted post: the URL, the caption glued after it and its trailing date token."""

    url: str
    copy_segment: str
    date_token: str


@dataclass(frozen=True)
class ParsedRow:
    """A normalized post record used for grouping, rendering and auditing."""

    identifier: str
    identifier_operator: str
    abbreviated_platform: str
    title_words: str
    title_operator: str
    formatted_date: str
    sortable_date: int
    topic_for_header: str
    original_link: str
    platform: str = ""

    @property
    def full_identifier(self) -> str:
        return f"{self.identifier_operator}{self.identifier}"
