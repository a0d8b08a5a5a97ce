from __future__ import annotations

from .config_schema import AppConfig
from .dates import normalize_date
from .platforms import classify_link
from .post import ParsedRow, RawSegment
from .run_log import RunLogger
from .title import title_fragment


def _coerce_topic(value: str | None, default: str) -> str:
    if isinstance(value, str):
        s = value.strip()
        if s:
            return value
    return default


def parsed_row_from_segment(
    segment: RawSegment,
    *,
    config: AppConfig | None = None,
    topic: str | None = None,
    logger: RunLogger | None = None,
) -> ParsedRow | None:
    """
    Build the normalized row for one pasted post.

    Returns None for links that are skipped on purpose (LinkedIn). Unknown platforms,
    missing captions and unparseable dates degrade the row instead of rejecting it.
    """
    cfg = config or AppConfig()

    link = classify_link(segment.url)
    if link is None:
        if logger is not None:
            logger.warning("linkedin_skipped", link=segment.url)
        return None

    if logger is not None:
        if link.link != segment.url:
            logger.info("link_cleaned", link=link.link, original=segment.url)
        if link.is_unknown:
            logger.warning("unknown_platform", link=link.link)

    title = title_fragment(
        segment.copy_segment,
        max_words=cfg.titles.max_words,
        min_words=cfg.titles.min_words,
    )
    if not title.operator and logger is not None:
        logger.info("title_omitted", link=link.link, title_words=title.words)

    when = normalize_date(segment.date_token)
    if not when.parsed and logger is not None:
        logger.warning("date_unparsed", link=link.link, date_token=segment.date_token)

    return ParsedRow(
        identifier=link.identifier,
        identifier_operator=link.operator,
        abbreviated_platform=link.platform.code,
        platform=link.platform.display_name,
        title_words=title.words,
        title_operator=title.operator,
        formatted_date=when.formatted,
        sortable_date=when.sortable,
        topic_for_header=_coerce_topic(topic, cfg.blocks.default_topic),
        original_link=link.link,
    )
