from __future__ import annotations

import sys
from datetime import datetime, timezone
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any, Sequence

from .audit import AuditFinding
from .config import config_sha256
from .config_schema import AppConfig
from .errors import ExportError
from .pipeline import PipelineResult
from .status_report import pipeline_status


_EXCEL_FORMULA_PREFIXES = ("=", "+", "-", "@")
_SHEETS = ("blocks", "rows", "audit", "run_metadata")


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _pkg_version(name: str) -> str:
    try:
        return version(name)
    except PackageNotFoundError:
        return "unknown"


def _safe_excel_text(value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        return str(value)
    s = value
    if not s:
        return s
    if s.startswith(_EXCEL_FORMULA_PREFIXES):
        return "'" + s
    return s


def _block_rows(result: PipelineResult) -> list[dict[str, Any]]:
    out: list[dict[str, Any]] = []
    emitted = iter(result.blocks)
    for group in result.groups:
        if not group.operators():
            continue
        block = next(emitted)
        header, _, operators = block.partition("\n")
        out.append(
            {
                "formatted_date": _safe_excel_text(group.formatted_date),
                "topic": _safe_excel_text(group.topic),
                "platforms": _safe_excel_text("+".join(sorted(group.platforms))),
                "header": _safe_excel_text(header),
                "operators": _safe_excel_text(operators),
                "identifier_count": len(group.identifiers),
                "title_count": len(group.title_operators),
            }
        )
    return out


def _parsed_rows(result: PipelineResult) -> list[dict[str, Any]]:
    out: list[dict[str, Any]] = []
    for row in result.rows:
        out.append(
            {
                "original_link": _safe_excel_text(row.original_link),
                "platform": _safe_excel_text(row.platform),
                "abbreviated_platform": _safe_excel_text(row.abbreviated_platform),
                "identifier_operator": _safe_excel_text(row.identifier_operator),
                "identifier": _safe_excel_text(row.identifier),
                "title_words": _safe_excel_text(row.title_words),
                "title_operator": _safe_excel_text(row.title_operator),
                "formatted_date": _safe_excel_text(row.formatted_date),
                "sortable_date": int(row.sortable_date),
                "topic": _safe_excel_text(row.topic_for_header),
                "in_block": row.full_identifier in result.emitted_identifiers,
            }
        )
    return out


def _audit_rows(findings: Sequence[AuditFinding]) -> list[dict[str, Any]]:
    return [
        {
            "kind": f.kind,
            "label": _safe_excel_text(f.label),
            "title_words": _safe_excel_text(f.title_words),
            "message": _safe_excel_text(f.message),
            "original_link": _safe_excel_text(f.original_link),
        }
        for f in findings
    ]


def export_workbook(
    config: AppConfig,
    result: PipelineResult,
    out_path: str | Path,
    *,
    audit: Sequence[AuditFinding] | None = None,
) -> Path:
    """
    Write blocks, parsed rows, audit findings and run metadata to an .xlsx workbook.
    """
    try:
        import pandas as pd  # type: ignore[import-not-found]
    except Exception as e:
        raise ExportError("pandas is required for Excel export") from e

    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    findings = list(audit) if audit is not None else result.audit()

    meta_rows: list[dict[str, Any]] = [
        {"key": "exported_at_utc", "value": _safe_excel_text(_utc_now_iso())},
        {"key": "status", "value": pipeline_status(result)},
        {"key": "counts.links_found", "value": int(result.links_found)},
        {"key": "counts.rows", "value": len(result.rows)},
        {"key": "counts.blocks", "value": len(result.blocks)},
        {"key": "counts.linkedin_skipped", "value": int(result.linkedin_skipped)},
        {"key": "counts.failed_rows", "value": int(result.failed_rows)},
        {"key": "config_sha256", "value": config_sha256(config)},
        {"key": "versions.python", "value": sys.version.split()[0]},
        {"key": "versions.pandas", "value": _pkg_version("pandas")},
        {"key": "versions.openpyxl", "value": _pkg_version("openpyxl")},
        {"key": "output_path", "value": _safe_excel_text(str(out))},
    ]

    frames = {
        "blocks": pd.DataFrame(_block_rows(result)),
        "rows": pd.DataFrame(_parsed_rows(result)),
        "audit": pd.DataFrame(_audit_rows(findings)),
        "run_metadata": pd.DataFrame(meta_rows),
    }

    try:
        with pd.ExcelWriter(out, engine="openpyxl") as writer:
            for name in _SHEETS:
                frames[name].to_excel(writer, sheet_name=name, index=False)

            wb = writer.book
            for name in _SHEETS:
                if name in wb.sheetnames:
                    ws = wb[name]
                    ws.freeze_panes = "A2"
    except Exception as e:
        raise ExportError(f"Failed to write workbook: {out}: {e}") from e

    return out
