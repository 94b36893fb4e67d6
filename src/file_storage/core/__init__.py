"""📦 core/ — Building blocks universales del sistema

✨ ¿Qué pertenece aquí?
   • Value Objects lógicos reusables en CUALQUIER dominio (PositiveValue)
   • Helpers genéricos SIN dependencia de negocio

🚫 ¿Qué NO pertenece aquí?
   • FileRecord, PathBuilderConfig, Findings → modules/{bounded_context}/domain/
"""

from .value_objects import PositiveValue

__all__ = ["PositiveValue"]
