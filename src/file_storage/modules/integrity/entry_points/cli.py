# src/file_storage/modules/integrity/entry_points/cli.py
"""
Subcomando `exists` de la CLI.

Arquitectura: Interface Adapter
Responsabilidad: Traducir opciones de terminal al IntegrityScanner y presentar hallazgos.

Códigos de salida:
    0   escaneo completo (haya o no archivos faltantes)
    1   fallo duro: fuente de registros o adaptadores no disponibles
    130 cancelado (Ctrl-C / SIGTERM)
"""

import argparse
import json
import logging
import os
import signal
import sys
import threading

from file_storage.infrastructure.observability import configure_logging
from file_storage.modules.integrity.application.use_cases import (
    DEFAULT_PAGE_SIZE,
    IntegrityScanner,
)
from file_storage.modules.integrity.domain.value_objects import (
    FindingKind,
    PageProgress,
)
from file_storage.modules.integrity.infrastructure.adapters import (
    InMemoryAdapterRegistry,
    JsonFileRecordSource,
    LocalStorageAdapter,
)
from file_storage.modules.integrity.infrastructure.s3_adapter import S3StorageAdapter

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CANCELLED = 130

_FINDING_LABELS = {
    FindingKind.MISSING: "file does not exist",
    FindingKind.UNRESOLVED_ADAPTER: "adapter could not be resolved",
    FindingKind.ADAPTER_ERROR: "could not be checked",
}


def parse_s3_spec(value: str) -> tuple[str, str, str]:
    """'NAME=BUCKET[/PREFIX]' -> (name, bucket, prefix)."""
    name, sep, location = value.partition("=")
    if not sep or not name or not location:
        raise argparse.ArgumentTypeError(
            f"Formato inválido {value!r}, se esperaba NAME=BUCKET[/PREFIX]"
        )
    bucket, _, prefix = location.partition("/")
    if not bucket:
        raise argparse.ArgumentTypeError(f"Bucket vacío en {value!r}")
    return name, bucket, prefix


def add_exists_parser(subparsers) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "exists", help="Verifica que los archivos registrados existan en su adaptador"
    )
    parser.add_argument(
        "--adapter",
        "-a",
        default="Local",
        help="Solo registros de este adaptador ('*' para todos). Default: Local",
    )
    parser.add_argument(
        "--limit",
        "-l",
        type=int,
        default=DEFAULT_PAGE_SIZE,
        help="Registros por página (default: 50)",
    )
    parser.add_argument(
        "--identifier",
        "-i",
        default=None,
        help="Identificador de archivos (campo `model` del registro)",
    )
    parser.add_argument(
        "--model",
        "-m",
        default="FileStorage",
        help="Tabla de registros a usar (default: FileStorage)",
    )
    parser.add_argument(
        "--db",
        default=os.getenv("FILE_STORAGE_DB", "./file_storage.json"),
        help="Ruta a la DB JSON de registros",
    )
    parser.add_argument(
        "--local-root",
        default=os.getenv("FILE_STORAGE_LOCAL_ROOT", "."),
        help="Directorio raíz del adaptador Local",
    )
    parser.add_argument(
        "--s3",
        action="append",
        default=[],
        type=parse_s3_spec,
        metavar="NAME=BUCKET[/PREFIX]",
        help="Registra un adaptador S3 (repetible)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Chequeos concurrentes por página (default: 1)",
    )
    parser.add_argument("--json", action="store_true", help="Reporte final en JSON")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Logs detallados de progreso"
    )
    parser.set_defaults(handler=run_exists)
    return parser


def build_registry(args: argparse.Namespace) -> InMemoryAdapterRegistry:
    """Composition Root de adaptadores."""
    registry = InMemoryAdapterRegistry()
    registry.register("Local", LocalStorageAdapter(args.local_root))
    for name, bucket, prefix in args.s3:
        registry.register(name, S3StorageAdapter(bucket, prefix=prefix))
    return registry


def print_start(total: int) -> None:
    print(f"{total} record(s) will be checked.\n")


def print_page(progress: PageProgress) -> None:
    for finding in progress.findings:
        print(f"⚠️  {finding.record_id} {_FINDING_LABELS[finding.kind]}")
        print(f"   Adapter: {finding.adapter_name}")
        print(f"   Path: {finding.stored_path}")
        if finding.detail:
            print(f"   Detail: {finding.detail}")
    print(f"{progress.limit} of {progress.total} records processed.")


def run_exists(args: argparse.Namespace) -> int:
    configure_logging(level=logging.DEBUG if args.verbose else logging.CRITICAL)

    if not os.path.isdir(args.local_root):
        print(
            f"❌ Error fatal: la raíz del adaptador Local no existe: {args.local_root}",
            file=sys.stderr,
        )
        return EXIT_FAILURE

    # 1. Composición (Wiring)
    try:
        source = JsonFileRecordSource(
            args.db, table=args.model, model=args.identifier, adapter=args.adapter
        )
        scanner = IntegrityScanner(source, build_registry(args), max_workers=args.workers)
    except ValueError as e:
        print(f"❌ Error fatal: {e}", file=sys.stderr)
        return EXIT_FAILURE

    cancel_event = threading.Event()
    previous_handler = signal.signal(
        signal.SIGTERM, lambda signum, frame: cancel_event.set()
    )

    # 2. Ejecución del Caso de Uso
    try:
        if not args.json:
            print(f"🔎 DB: {args.db} | Tabla: {args.model} | Adaptador: {args.adapter}")
        report = scanner.scan(
            page_size=args.limit,
            cancel_event=cancel_event,
            on_page=None if args.json else print_page,
            on_start=None if args.json else print_start,
        )
    except ValueError as e:
        print(f"❌ Error fatal: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        print("\n⚠️  Operación cancelada por el usuario.", file=sys.stderr)
        return EXIT_CANCELLED
    finally:
        signal.signal(signal.SIGTERM, previous_handler)

    # 3. Presentación
    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print(
            f"\n📋 {report.checked} verificados | {report.missing} faltantes | "
            f"{report.errors} con error"
        )

    if report.aborted:
        print(f"❌ Escaneo abortado: {report.fatal_error}", file=sys.stderr)
        return EXIT_FAILURE
    if report.cancelled:
        return EXIT_CANCELLED
    return EXIT_OK
