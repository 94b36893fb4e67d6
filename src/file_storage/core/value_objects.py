from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PositiveValue:
    """
    Value Object universal: valida invariante (entero > 0).
    Se usa para profundidad de sharding, tamaño de página y número de workers.
    """

    value: int
    label: str = "value"

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"{self.label} must be an integer, got {self.value!r}")
        if self.value <= 0:
            raise ValueError(f"{self.label} must be positive, got {self.value}")

    def __int__(self) -> int:
        return self.value
