# src/file_storage/modules/paths/entry_points/cli.py
"""
Subcomando `path` de la CLI.

Arquitectura: Interface Adapter
Responsabilidad: Mostrar dónde se guardaría un archivo según la configuración vigente.
"""

import argparse
import json
import sys

from file_storage.modules.paths.application.use_cases import PathBuilder
from file_storage.modules.paths.domain.value_objects import EntityDescriptor
from file_storage.modules.paths.infrastructure.settings import load_path_builder_config


def add_path_parser(subparsers) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "path", help="Calcula ruta, nombre de archivo y URL para un id"
    )
    parser.add_argument("--id", required=True, help="Identificador de la entidad")
    parser.add_argument("--filename", help="Nombre original del archivo")
    parser.add_argument("--extension", help="Extensión (sin punto)")
    parser.add_argument(
        "--record-model", help="Modelo/categoría (usado con FILE_STORAGE_MODEL_FOLDER)"
    )
    parser.add_argument(
        "--sharding", help="Estrategia de sharding (sha1, crc32, crc32-signed, none)"
    )
    parser.add_argument("--depth", type=int, help="Niveles de sharding")
    parser.add_argument("--separator", help="Separador de directorios")
    parser.add_argument(
        "--preserve-filename",
        action="store_true",
        help="Usar el nombre original en lugar del id",
    )
    parser.add_argument("--json", action="store_true", help="Salida en formato JSON")
    parser.set_defaults(handler=run_path)
    return parser


def run_path(args: argparse.Namespace) -> int:
    try:
        config = load_path_builder_config()
        overrides = {}
        if args.sharding is not None:
            overrides["sharding_method"] = args.sharding
        if args.depth is not None:
            overrides["shard_depth"] = args.depth
        if args.separator is not None:
            overrides["separator"] = args.separator
        if args.preserve_filename:
            overrides["preserve_original_filename"] = True

        builder = PathBuilder(config.with_overrides(**overrides))
        entity = EntityDescriptor(
            id=args.id,
            filename=args.filename,
            extension=args.extension,
            model=args.record_model,
        )
        result = {
            "path": builder.path(entity),
            "filename": builder.filename(entity),
            "full_path": builder.full_path(entity),
            "url": builder.url(entity),
        }
    except ValueError as e:  # incluye InvalidConfiguration
        print(f"❌ Configuración inválida: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result, indent=2))
    else:
        for key, value in result.items():
            print(f"{key:<10} {value}")
    return 0
