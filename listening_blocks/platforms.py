from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

TRACKING_MARKER = "?utm_campaign"


class Platform(Enum):
    FACEBOOK = ("Facebook", "FB")
    TIKTOK = ("TikTok", "TK")
    INSTAGRAM = ("Instagram", "IG")
    UNKNOWN = ("Desconocida", "??")

    @property
    def display_name(self) -> str:
        return self.value[0]

    @property
    def code(self) -> str:
        return self.value[1]


ENGAGING_WITH_GUID = "engagingWithGuid:"
URL_OPERATOR = "url:"
UNKNOWN_OPERATOR = "unknown:"


@dataclass(frozen=True)
class PlatformMatcher:
    platform: Platform
    host_marker: str
    identifier_re: re.Pattern[str]
    operator: str

    def matches(self, link: str) -> bool:
        return self.host_marker in link

    def extract_identifier(self, link: str) -> str:
        m = self.identifier_re.search(link)
        if m is None:
            return ""
        return m.group(1) or ""


# Tried in order; the first host marker found in the link wins.
MATCHERS: tuple[PlatformMatcher, ...] = (
    PlatformMatcher(
        platform=Platform.FACEBOOK,
        host_marker="facebook.com",
        identifier_re=re.compile(r"_(\d+)$"),
        operator=ENGAGING_WITH_GUID,
    ),
    PlatformMatcher(
        platform=Platform.TIKTOK,
        host_marker="tiktok.com",
        identifier_re=re.compile(r"/video/(\d+)"),
        operator=ENGAGING_WITH_GUID,
    ),
    PlatformMatcher(
        platform=Platform.INSTAGRAM,
        host_marker="instagram.com",
        identifier_re=re.compile(r"(?:p|reel|tv)/([A-Za-z0-9_-]+)(?:/|\?|$)"),
        operator=URL_OPERATOR,
    ),
)

SKIPPED_HOST_MARKERS: tuple[str, ...] = ("linkedin.com",)


@dataclass(frozen=True)
class LinkClassification:
    """Platform, identifier and search operator resolved for one cleaned link."""

    link: str
    platform: Platform
    identifier: str
    operator: str

    @property
    def is_unknown(self) -> bool:
        return self.platform is Platform.UNKNOWN


def strip_tracking(url: str) -> str:
    idx = url.find(TRACKING_MARKER)
    if idx == -1:
        return url
    return url[:idx]


def is_skipped_link(link: str) -> bool:
    return any(marker in link for marker in SKIPPED_HOST_MARKERS)


def classify_link(url: str) -> LinkClassification | None:
    """
    Resolve platform and identifier for a pasted post URL.

    Returns None for links that are intentionally skipped (LinkedIn). Links from an
    unrecognized host come back as Platform.UNKNOWN with the `unknown:` operator.
    """
    link = strip_tracking(url or "")
    if is_skipped_link(link):
        return None

    for matcher in MATCHERS:
        if matcher.matches(link):
            return LinkClassification(
                link=link,
                platform=matcher.platform,
                identifier=matcher.extract_identifier(link),
                operator=matcher.operator,
            )

    return LinkClassification(
        link=link,
        platform=Platform.UNKNOWN,
        identifier="",
        operator=UNKNOWN_OPERATOR,
    )
