# src/file_storage/modules/integrity/domain/exceptions.py
"""
Excepciones del dominio de Integridad.

Arquitectura: Domain Layer
Responsabilidad: Distinguir fallos por registro (recuperables) de fallos de la fuente (fatales).
"""


class IntegrityError(Exception):
    """Clase base para errores en el módulo de integridad."""

    pass


class AdapterResolutionError(IntegrityError):
    """El nombre de adaptador del registro no existe en el registry. Se reporta y se sigue."""

    pass


class AdapterError(IntegrityError):
    """Fallo de transporte/backend al consultar has(). Resultado 'desconocido', no 'ausente'."""

    pass


class RecordSourceError(IntegrityError):
    """No se pudo obtener el conteo o la siguiente página. Aborta el escaneo."""

    pass
