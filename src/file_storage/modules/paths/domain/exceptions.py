# src/file_storage/modules/paths/domain/exceptions.py
"""
Excepciones del dominio de Rutas.

Arquitectura: Domain Layer
Responsabilidad: Definir errores semánticos independientes de la infraestructura.
"""


class PathBuilderError(Exception):
    """Clase base para errores en el módulo de rutas."""

    pass


class InvalidConfiguration(PathBuilderError, ValueError):
    """
    Configuración o argumento inválido: posición desconocida en ensure_slash,
    estrategia de sharding no registrada, campo de override inexistente.
    Es fatal para la ruta que se está calculando.
    """

    pass
