# src/file_storage/modules/paths/__init__.py
"""
Módulo de Derivación de Rutas.
"""

from __future__ import annotations

# Application
from .application.use_cases import PathBuilder

# Domain
from .domain.exceptions import InvalidConfiguration, PathBuilderError
from .domain.ports.subject import PathSubject
from .domain.sharding import (
    ShardingRegistry,
    crc32_shard,
    crc32_signed_shard,
    default_registry,
    sha1_shard,
)
from .domain.value_objects import EntityDescriptor, PathBuilderConfig, SlashPosition

# Infrastructure
from .infrastructure.settings import load_path_builder_config

__all__ = [
    "PathBuilder",
    "PathBuilderConfig",
    "EntityDescriptor",
    "PathBuilderError",
    "InvalidConfiguration",
    "PathSubject",
    "ShardingRegistry",
    "SlashPosition",
    "default_registry",
    "sha1_shard",
    "crc32_shard",
    "crc32_signed_shard",
    "load_path_builder_config",
]
