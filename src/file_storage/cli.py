# src/file_storage/cli.py
"""
Interfaz de Línea de Comandos (CLI) de file-storage.

Arquitectura: Interface Adapter (Composition Root)
Responsabilidad: Registrar los subcomandos de cada módulo y despachar.

Uso:
    file-storage exists --db records.json --local-root /srv/files -l 100
    file-storage path --id 3fa85f64-5717-4562-b3fc-2c963f66afa6 --extension pdf
"""

import argparse
import sys
from typing import Optional

from file_storage import __version__
from file_storage.modules.integrity.entry_points.cli import add_exists_parser
from file_storage.modules.paths.entry_points.cli import add_path_parser


def setup_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="file-storage",
        description="Rutas de almacenamiento y chequeos de integridad de archivos",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_exists_parser(subparsers)
    add_path_parser(subparsers)
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = setup_parser()
    args = parser.parse_args(argv)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
