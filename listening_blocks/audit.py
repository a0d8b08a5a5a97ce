from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Iterable, Literal

from .platforms import UNKNOWN_OPERATOR
from .post import ParsedRow

SUCCESS_LABEL = "Éxito"
MISSING_IDENTIFIER_LABEL = "Identificador Ausente en Bloque Final"

SUCCESS_MESSAGE = (
    "¡Auditoría completada! Todos los identificadores esperados se encontraron "
    "en los bloques generados."
)


@dataclass(frozen=True)
class AuditFinding:
    kind: Literal["success", "missing-identifier"]
    label: str
    message: str
    title_words: str = ""
    original_link: str = ""

    @property
    def is_success(self) -> bool:
        return self.kind == "success"


def _missing_identifier_message(row: ParsedRow) -> str:
    return (
        f'El identificador "{row.full_identifier}" (del link: {row.original_link}) se esperaba '
        "en un bloque final pero no se encontró. Esto puede ocurrir si la fila fue ignorada "
        "(ej. LinkedIn), o si hubo un problema al generar el bloque."
    )


def run_audit(
    rows: Iterable[ParsedRow],
    emitted_identifiers: AbstractSet[str],
) -> list[AuditFinding]:
    """
    Check that every resolvable identifier made it into some emitted block.

    Rows with an empty identifier or the `unknown:` operator are not expected in any
    block and are skipped. Returns a single success finding when nothing is missing.
    """
    findings: list[AuditFinding] = []
    for row in rows:
        if not row.identifier or row.identifier_operator == UNKNOWN_OPERATOR:
            continue
        if row.full_identifier in emitted_identifiers:
            continue
        findings.append(
            AuditFinding(
                kind="missing-identifier",
                label=MISSING_IDENTIFIER_LABEL,
                message=_missing_identifier_message(row),
                title_words=row.title_words,
                original_link=row.original_link,
            )
        )

    if not findings:
        return [AuditFinding(kind="success", label=SUCCESS_LABEL, message=SUCCESS_MESSAGE)]
    return findings
