# src/file_storage/modules/paths/domain/sharding.py
"""
Estrategias de Sharding de directorios.

Arquitectura: Modular Monolith
Capa: Domain
Responsabilidad: Convertir un identificador en `depth` segmentos de 2 caracteres
para acotar el número de entradas por directorio.

⚠️ Las rutas se persisten y NUNCA se recalculan: la salida de sha1 y crc32 debe
ser idéntica byte a byte a la de los archivos ya almacenados.
"""

from __future__ import annotations

import hashlib
import re
import zlib
from typing import Callable

from file_storage.core.value_objects import PositiveValue

from .exceptions import InvalidConfiguration
from .value_objects import NO_SHARDING

ShardStrategy = Callable[[str, int, str], str]

# sha1 hex = 40 caracteres; el primer byte (offset 0) nunca se usa
SHA1_MAX_DEPTH = 19

_LEADING_INT = re.compile(r"^\s*[-+]?\d+")


def _validate_depth(depth: int) -> int:
    try:
        return PositiveValue(depth, label="depth").value
    except ValueError as e:
        raise InvalidConfiguration(str(e)) from e


def sha1_shard(identifier: str, depth: int, separator: str) -> str:
    """
    Segmentos de 2 caracteres del hex digest en los offsets 2, 4, 6, ...

    El salto del primer byte es histórico y se conserva tal cual.
    """
    depth = _validate_depth(depth)
    if depth > SHA1_MAX_DEPTH:
        raise InvalidConfiguration(
            f"sha1 admite como máximo {SHA1_MAX_DEPTH} niveles, pedido: {depth}"
        )
    digest = hashlib.sha1(identifier.encode("utf-8")).hexdigest()
    segments = [digest[offset : offset + 2] for offset in range(2, 2 * depth + 1, 2)]
    return "".join(segment + separator for segment in segments)


def _leading_int(chunk: str) -> int:
    match = _LEADING_INT.match(chunk)
    return int(match.group()) if match else 0


def _crc32_layout(checksum: int, depth: int, separator: str) -> str:
    padded = "0" * (2 * depth) + str(checksum)
    path = ""
    for level in range(1, depth + 1):
        start = len(padded) - 2 * level
        # "%02d" sobre el fragmento, igual que el formato legado
        path += f"{_leading_int(padded[start : start + 2]):02d}" + separator
    return path


def crc32_shard(identifier: str, depth: int, separator: str) -> str:
    """
    Legado. CRC-32 sin signo en decimal, rellenado con 2*depth ceros, y grupos
    de 2 dígitos tomados desde el FINAL hacia la izquierda.
    """
    depth = _validate_depth(depth)
    checksum = zlib.crc32(identifier.encode("utf-8")) & 0xFFFFFFFF
    return _crc32_layout(checksum, depth, separator)


def crc32_signed_shard(identifier: str, depth: int, separator: str) -> str:
    """
    Variante de crc32 para datos escritos en hosts de 32 bits, donde el CRC
    se interpretaba como entero con signo.
    """
    depth = _validate_depth(depth)
    checksum = zlib.crc32(identifier.encode("utf-8")) & 0xFFFFFFFF
    if checksum >= 2**31:
        checksum -= 2**32
    return _crc32_layout(checksum, depth, separator)


class ShardingRegistry:
    """
    Registro explícito nombre -> estrategia. Reemplaza el despacho dinámico por
    nombre de método: un nombre no registrado falla de inmediato.
    """

    def __init__(self, strategies: dict[str, ShardStrategy] | None = None):
        self._strategies: dict[str, ShardStrategy] = {}
        for name, strategy in (strategies or {}).items():
            self.register(name, strategy)

    def register(self, name: str, strategy: ShardStrategy) -> None:
        if not name or name == NO_SHARDING:
            raise InvalidConfiguration(f"Nombre de estrategia reservado o vacío: {name!r}")
        if not callable(strategy):
            raise InvalidConfiguration(f"La estrategia {name!r} no es invocable")
        self._strategies[name] = strategy

    def resolve(self, name: str) -> ShardStrategy:
        try:
            return self._strategies[name]
        except KeyError:
            raise InvalidConfiguration(
                f"Estrategia de sharding no registrada: {name!r} "
                f"(disponibles: {', '.join(self.names())})"
            ) from None

    def names(self) -> list[str]:
        return sorted(self._strategies)

    def copy(self) -> ShardingRegistry:
        return ShardingRegistry(dict(self._strategies))

    def __contains__(self, name: object) -> bool:
        return name in self._strategies


def default_registry() -> ShardingRegistry:
    """Registro nuevo con las estrategias incluidas (sha1, crc32, crc32-signed)."""
    return ShardingRegistry(
        {
            "sha1": sha1_shard,
            "crc32": crc32_shard,
            "crc32-signed": crc32_signed_shard,
        }
    )
