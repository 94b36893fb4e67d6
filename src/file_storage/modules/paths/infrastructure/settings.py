# src/file_storage/modules/paths/infrastructure/settings.py
"""
Carga de configuración de PathBuilder desde variables de entorno.

Arquitectura: Infrastructure Layer
Responsabilidad: Traducir FILE_STORAGE_* a un PathBuilderConfig validado.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any, Optional

from file_storage.modules.paths.domain.exceptions import InvalidConfiguration
from file_storage.modules.paths.domain.value_objects import PathBuilderConfig

logger = logging.getLogger(__name__)

ENV_PREFIX = "FILE_STORAGE_"

# variable de entorno (sin prefijo) -> (campo, tipo)
ENV_FIELDS: dict[str, tuple[str, type]] = {
    "STRIP_ID_DASHES": ("strip_id_dashes", bool),
    "PATH_PREFIX": ("path_prefix", str),
    "PATH_SUFFIX": ("path_suffix", str),
    "FILE_PREFIX": ("file_prefix", str),
    "FILE_SUFFIX": ("file_suffix", str),
    "PRESERVE_FILENAME": ("preserve_original_filename", bool),
    "PRESERVE_EXTENSION": ("preserve_extension", bool),
    "ID_FOLDER": ("id_shard_folder", bool),
    "SHARDING": ("sharding_method", str),
    "SHARD_DEPTH": ("shard_depth", int),
    "MODEL_FOLDER": ("model_folder", bool),
    "SEPARATOR": ("separator", str),
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise InvalidConfiguration(f"{name}: valor booleano inválido {raw!r}")


def _parse(name: str, raw: str, kind: type) -> Any:
    if kind is bool:
        return parse_bool(name, raw)
    if kind is int:
        try:
            return int(raw)
        except ValueError:
            raise InvalidConfiguration(f"{name}: se esperaba un entero, llegó {raw!r}") from None
    return raw


def load_path_builder_config(
    environ: Optional[Mapping[str, str]] = None,
    base: Optional[PathBuilderConfig] = None,
) -> PathBuilderConfig:
    """
    Construye la configuración a partir de `environ` (por defecto os.environ).
    Solo las variables presentes sobrescriben a `base`.
    """
    environ = os.environ if environ is None else environ
    base = base or PathBuilderConfig()

    changes: dict[str, Any] = {}
    for suffix, (field_name, kind) in ENV_FIELDS.items():
        env_name = ENV_PREFIX + suffix
        if env_name in environ:
            changes[field_name] = _parse(env_name, environ[env_name], kind)

    if changes:
        logger.debug(f"Overrides de entorno para PathBuilder: {sorted(changes)}")
    return base.with_overrides(**changes)
