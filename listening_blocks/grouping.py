from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .post import ParsedRow
from .run_log import RunLogger


@dataclass
class DateGroup:
    """Everything collected for one publication date; sets only ever grow."""

    formatted_date: str
    topic: str
    sortable_date: int
    identifiers: dict[str, None] = field(default_factory=dict)
    platforms: set[str] = field(default_factory=set)
    title_operators: dict[str, None] = field(default_factory=dict)

    def add(self, row: ParsedRow) -> None:
        if row.identifier:
            self.identifiers.setdefault(row.full_identifier, None)
        self.platforms.add(row.abbreviated_platform)
        if row.title_operator:
            self.title_operators.setdefault(row.title_operator, None)

    def header(self) -> str:
        platforms = "+".join(sorted(self.platforms))
        return f"<<<{self.topic} {self.formatted_date} {platforms}>>>"

    def operators(self) -> list[str]:
        return [*self.identifiers, *self.title_operators]

    def render(self) -> str | None:
        ops = self.operators()
        if not ops:
            return None
        return f"{self.header()}\n{' OR '.join(ops)}"


@dataclass(frozen=True)
class GroupingResult:
    blocks: tuple[str, ...]
    emitted_identifiers: frozenset[str]
    groups: tuple[DateGroup, ...]


def group_rows(rows: Iterable[ParsedRow]) -> list[DateGroup]:
    """
    Fold rows into one group per formatted date.

    Groups keep the order in which their date first appears in the input; they are not
    sorted chronologically.
    """
    by_date: dict[str, DateGroup] = {}
    for row in rows:
        group = by_date.get(row.formatted_date)
        if group is None:
            group = DateGroup(
                formatted_date=row.formatted_date,
                topic=row.topic_for_header,
                sortable_date=row.sortable_date,
            )
            by_date[row.formatted_date] = group
        group.add(row)
    return list(by_date.values())


def render_blocks(
    groups: Sequence[DateGroup],
    *,
    logger: RunLogger | None = None,
) -> GroupingResult:
    blocks: list[str] = []
    emitted: set[str] = set()

    for group in groups:
        block = group.render()
        if block is None:
            if logger is not None:
                logger.warning(
                    "block_omitted",
                    formatted_date=group.formatted_date,
                    platforms=sorted(group.platforms),
                )
            continue
        blocks.append(block)
        emitted.update(group.identifiers)

    return GroupingResult(
        blocks=tuple(blocks),
        emitted_identifiers=frozenset(emitted),
        groups=tuple(groups),
    )


def build_blocks(rows: Iterable[ParsedRow], *, logger: RunLogger | None = None) -> GroupingResult:
    return render_blocks(group_rows(rows), logger=logger)
