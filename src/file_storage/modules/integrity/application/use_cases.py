# src/file_storage/modules/integrity/application/use_cases.py
"""
Casos de Uso para la Verificación de Integridad.

Arquitectura: Modular Monolith
Capa: Application
Responsabilidad: Recorrer la fuente de registros por páginas y preguntar a cada
adaptador si el archivo persistido sigue existiendo.
"""

import logging
import threading
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional

from file_storage.core.value_objects import PositiveValue
from file_storage.infrastructure.observability import ObservabilityService

# === Imports de Dominio ===
from file_storage.modules.integrity.domain.entities import FileRecord
from file_storage.modules.integrity.domain.exceptions import (
    AdapterError,
    AdapterResolutionError,
    RecordSourceError,
)
from file_storage.modules.integrity.domain.ports.record_source import RecordSource
from file_storage.modules.integrity.domain.ports.storage_adapter import AdapterRegistry
from file_storage.modules.integrity.domain.value_objects import (
    Finding,
    FindingKind,
    PageProgress,
    ScanReport,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50


class IntegrityScanner:
    """
    Caso de Uso Principal: detectar registros cuyo archivo desapareció del adaptador.
    Implementa:
    1. Paginación secuencial (nunca toda la tabla en memoria).
    2. Errores por registro como hallazgos (el escaneo no se aborta).
    3. Chequeos concurrentes opcionales dentro de una página.
    """

    def __init__(
        self,
        record_source: RecordSource,
        adapters: AdapterRegistry,
        max_workers: int = 1,
    ):
        # Inyección de Dependencias (DIP)
        self.source = record_source
        self.adapters = adapters
        self.max_workers = PositiveValue(max_workers, label="max_workers").value

    @ObservabilityService.measure_latency(operation_name="integrity_scan")
    def scan(
        self,
        page_size: int = DEFAULT_PAGE_SIZE,
        cancel_event: Optional[threading.Event] = None,
        on_page: Optional[Callable[[PageProgress], None]] = None,
        on_start: Optional[Callable[[int], None]] = None,
    ) -> ScanReport:
        """
        Ejecuta el escaneo completo.

        Termina cuando una página llega vacía, cuando lo verificado alcanza el
        conteo inicial, o cuando cancel_event se activa entre páginas.
        Solo un fallo de la fuente (RecordSourceError) aborta; el reporte
        conserva los resultados parciales.
        """
        page_size = PositiveValue(page_size, label="page_size").value
        report = ScanReport()

        try:
            report.total = self.source.count()
        except RecordSourceError as e:
            logger.error(f"No se pudo contar los registros: {e}")
            report.abort(str(e))
            return report

        logger.info(f"{report.total} record(s) will be checked.")
        if on_start is not None:
            on_start(report.total)

        executor = (
            ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="has")
            if self.max_workers > 1
            else None
        )
        offset = 0
        try:
            while True:
                if cancel_event is not None and cancel_event.is_set():
                    logger.warning(f"[CANCEL] Escaneo cancelado en offset {offset}")
                    report.cancelled = True
                    break

                try:
                    records = list(self.source.page(offset, page_size))
                except RecordSourceError as e:
                    logger.error(f"[ABORT] Fallo al leer la página offset={offset}: {e}")
                    report.abort(str(e))
                    break

                if not records:
                    break

                page_findings = self._check_page(records, executor)
                report.pages += 1
                report.checked += len(records)
                for finding in page_findings:
                    report.add(finding)

                progress = PageProgress(
                    page_number=report.pages,
                    offset=offset,
                    limit=page_size,
                    fetched=len(records),
                    total=report.total,
                    checked=report.checked,
                    findings=tuple(page_findings),
                )
                logger.info(f"{page_size} of {report.total} records processed.")
                if on_page is not None:
                    on_page(progress)

                offset += page_size
                if report.checked >= report.total:
                    break
        finally:
            if executor is not None:
                executor.shutdown(wait=True)

        logger.info(f"Resumen de escaneo: {report.summary()} | errores={report.errors}")
        return report

    def _check_page(
        self, records: Sequence[FileRecord], executor: Optional[ThreadPoolExecutor]
    ) -> list[Finding]:
        """Verifica una página; el orden de los hallazgos sigue el de los registros."""
        if executor is None:
            results = [self.check_record(record) for record in records]
        else:
            # map() se une en orden antes de emitir el resumen de la página
            results = list(executor.map(self.check_record, records))
        return [finding for finding in results if finding is not None]

    def check_record(self, record: FileRecord) -> Optional[Finding]:
        """
        Verifica un único registro. None significa que el archivo existe.
        """
        try:
            adapter = self.adapters.resolve(record.adapter_name)
            exists = adapter.has(record.stored_path)
        except AdapterResolutionError as e:
            logger.error(f"[UNRESOLVED] {record.id}: {e}")
            return Finding.for_record(FindingKind.UNRESOLVED_ADAPTER, record, str(e))
        except AdapterError as e:
            logger.error(f"[UNKNOWN] {record.id} en {record.adapter_name}: {e}")
            return Finding.for_record(FindingKind.ADAPTER_ERROR, record, str(e))
        except Exception as e:
            # Un registro defectuoso nunca detiene el escaneo
            logger.exception(f"[UNKNOWN] {record.id} en {record.adapter_name}: {e}")
            return Finding.for_record(
                FindingKind.ADAPTER_ERROR, record, f"{type(e).__name__}: {e}"
            )

        if exists:
            return None

        logger.warning(f"{record.id} file does not exist")
        logger.debug(f"Adapter: {record.adapter_name}")
        logger.debug(f"Path: {record.stored_path}")
        return Finding.for_record(FindingKind.MISSING, record)
