from __future__ import annotations

from typing import Any, Mapping

from .pipeline import PipelineResult

NO_LINKS_MESSAGE = (
    'No se encontraron enlaces en el texto. Asegúrate de que los enlaces comiencen con '
    '"http://" o "https://".'
)
ALL_LINKEDIN_MESSAGE = "Todos los enlaces eran de LinkedIn y fueron ignorados. No se generaron bloques."
NO_BLOCKS_MESSAGE = "No se pudieron procesar las filas. Verifica el formato de tus datos."


def pipeline_status(result: PipelineResult) -> str:
    if result.empty_input:
        return "empty_input"
    if result.links_found == 0:
        return "no_links"
    if result.blocks:
        return "ok"
    if result.linkedin_skipped > 0 and not result.rows and result.failed_rows == 0:
        return "all_linkedin"
    return "no_blocks"


def build_status_report(result: PipelineResult) -> dict[str, Any]:
    st = pipeline_status(result)

    details: dict[str, Any] = {
        "links_found": int(result.links_found),
        "rows": len(result.rows),
        "blocks": len(result.blocks),
        "linkedin_skipped": int(result.linkedin_skipped),
        "failed_rows": int(result.failed_rows),
    }

    message = ""
    if st == "no_links":
        message = NO_LINKS_MESSAGE
    elif st == "all_linkedin":
        message = ALL_LINKEDIN_MESSAGE
    elif st == "no_blocks":
        message = NO_BLOCKS_MESSAGE
    elif st == "ok":
        message = f"Se procesaron {len(result.blocks)} bloques."
        if result.linkedin_skipped > 0:
            message += f" Se ignoraron {result.linkedin_skipped} enlaces de LinkedIn."

    return {
        "status": st,
        "message": message,
        "details": details,
    }


def format_status_report(report: Mapping[str, Any]) -> str:
    status = str(report.get("status") or "").strip() or "unknown"
    message = str(report.get("message") or "").strip()
    return message or f"status={status}"
