# src/file_storage/modules/integrity/domain/value_objects.py
"""
Value Objects para el Bounded Context de Integridad.

Arquitectura: Modular Monolith
Capa: Domain
Responsabilidad: Hallazgos del escaneo, progreso por página y reporte final.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .entities import FileRecord


class FindingKind(Enum):
    """
    Tipos de hallazgo del escaneo.
    """

    MISSING = "missing"  # Ausencia confirmada (negativo confirmado)
    UNRESOLVED_ADAPTER = "unresolved_adapter"  # Adaptador no registrado
    ADAPTER_ERROR = "adapter_error"  # Fallo de I/O: estado desconocido

    def is_error(self) -> bool:
        return self is not FindingKind.MISSING


@dataclass(frozen=True)
class Finding:
    """Resultado atribuible a un único registro."""

    kind: FindingKind
    record_id: str
    adapter_name: str
    stored_path: str
    detail: str = ""

    @classmethod
    def for_record(
        cls, kind: FindingKind, record: FileRecord, detail: str = ""
    ) -> Finding:
        return cls(
            kind=kind,
            record_id=record.id,
            adapter_name=record.adapter_name,
            stored_path=record.stored_path,
            detail=detail,
        )

    @property
    def is_confirmed_missing(self) -> bool:
        return self.kind is FindingKind.MISSING

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "id": self.record_id,
            "adapter": self.adapter_name,
            "path": self.stored_path,
            "detail": self.detail,
        }


@dataclass(frozen=True)
class PageProgress:
    """Resumen de una página, emitido cuando todos sus chequeos terminaron."""

    page_number: int
    offset: int
    limit: int
    fetched: int
    total: int
    checked: int
    findings: tuple[Finding, ...] = ()


@dataclass
class ScanReport:
    """
    Acumulador del escaneo. Conserva resultados parciales aunque se aborte.
    """

    total: int = 0
    checked: int = 0
    missing: int = 0
    errors: int = 0
    pages: int = 0
    aborted: bool = False
    cancelled: bool = False
    fatal_error: Optional[str] = None
    findings: list[Finding] = field(default_factory=list)

    def add(self, finding: Finding) -> None:
        self.findings.append(finding)
        if finding.is_confirmed_missing:
            self.missing += 1
        else:
            self.errors += 1

    def abort(self, reason: str) -> None:
        self.aborted = True
        self.fatal_error = reason

    def findings_of(self, kind: FindingKind) -> list[Finding]:
        return [f for f in self.findings if f.kind is kind]

    def summary(self) -> dict[str, int]:
        return {"checked": self.checked, "missing": self.missing}

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "checked": self.checked,
            "missing": self.missing,
            "errors": self.errors,
            "pages": self.pages,
            "aborted": self.aborted,
            "cancelled": self.cancelled,
            "fatal_error": self.fatal_error,
            "findings": [f.to_dict() for f in self.findings],
        }
