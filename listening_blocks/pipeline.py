from __future__ import annotations

from dataclasses import dataclass

from .audit import AuditFinding, run_audit
from .config_schema import AppConfig
from .grouping import DateGroup, build_blocks
from .normalize import parsed_row_from_segment
from .post import ParsedRow
from .run_log import RunLogger
from .segment import segment_posts


@dataclass(frozen=True)
class PipelineResult:
    """Everything one run derived from the pasted text; the audit reads only this."""

    rows: tuple[ParsedRow, ...]
    blocks: tuple[str, ...]
    emitted_identifiers: frozenset[str]
    groups: tuple[DateGroup, ...]
    links_found: int
    linkedin_skipped: int
    failed_rows: int
    empty_input: bool = False

    def audit(self) -> list[AuditFinding]:
        return run_audit(self.rows, self.emitted_identifiers)


def run_pipeline(
    raw_text: str,
    *,
    config: AppConfig | None = None,
    logger: RunLogger | None = None,
) -> PipelineResult:
    """
    Segment, classify and group pasted post metadata into search blocks.

    A row that raises while being built is dropped and logged; the rest of the batch
    still goes through.
    """
    cfg = config or AppConfig()
    text = raw_text or ""

    if not text:
        return PipelineResult(
            rows=(),
            blocks=(),
            emitted_identifiers=frozenset(),
            groups=(),
            links_found=0,
            linkedin_skipped=0,
            failed_rows=0,
            empty_input=True,
        )

    segments = segment_posts(text, logger=logger)

    rows: list[ParsedRow] = []
    skipped = 0
    failed = 0
    for segment in segments:
        try:
            row = parsed_row_from_segment(segment, config=cfg, logger=logger)
        except Exception as e:
            failed += 1
            if logger is not None:
                logger.exception("row_failed", exc=e, link=segment.url)
            continue

        if row is None:
            skipped += 1
            continue
        rows.append(row)

    grouped = build_blocks(rows, logger=logger)

    if logger is not None:
        logger.info(
            "pipeline_completed",
            links_found=len(segments),
            rows=len(rows),
            blocks=len(grouped.blocks),
            linkedin_skipped=skipped,
            failed_rows=failed,
        )

    return PipelineResult(
        rows=tuple(rows),
        blocks=grouped.blocks,
        emitted_identifiers=grouped.emitted_identifiers,
        groups=grouped.groups,
        links_found=len(segments),
        linkedin_skipped=skipped,
        failed_rows=failed,
    )
