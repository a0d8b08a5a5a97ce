from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .errors import ExportError

BLOCK_SEPARATOR = "\nOR\n"


def join_blocks(blocks: Sequence[str], *, separator: str = BLOCK_SEPARATOR) -> str:
    return separator.join(blocks)


def write_markdown(
    blocks: Sequence[str],
    out_path: str | Path,
    *,
    separator: str = BLOCK_SEPARATOR,
) -> Path:
    out = Path(out_path)
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(join_blocks(blocks, separator=separator), encoding="utf-8")
    except OSError as e:
        raise ExportError(f"Failed to write markdown: {out}: {e}") from e
    return out
