# src/file_storage/infrastructure/observability.py
"""
Logging y métricas compartidas por todos los módulos.

Capa: Infrastructure (Shared Kernel)
Responsabilidad:
    - configure_logging: consola legible + archivo forense opcional.
    - measure_time: línea [METRIC] por llamada (paginación de registros).
    - ObservabilityService: eventos JSON con correlation_id, latencia y RAM (psutil).
"""

import functools
import json
import logging
import os
import sys
import time
import uuid
from typing import Any, Callable, Optional

import psutil

logger = logging.getLogger("file_storage")

CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"


def configure_logging(level=logging.INFO, log_file: Optional[str] = None):
    """
    Reemplaza los handlers del root logger. Llamarla dos veces no duplica salida.

    La consola respeta `level`; el archivo (si se pide) guarda todo desde DEBUG.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    console.setLevel(level)
    root_logger.addHandler(console)

    if log_file:
        forensic = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        forensic.setFormatter(logging.Formatter(FILE_FORMAT))
        forensic.setLevel(logging.DEBUG)
        root_logger.addHandler(forensic)
        logger.info(f"🔭 Logs persistentes en: {log_file}")


def measure_time(metric_name: str):
    """Decorador: emite `[METRIC] <name> duration=<s>` en el logger `metrics`."""

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            started = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                logging.getLogger("metrics").info(
                    f"[METRIC] {metric_name} duration={time.perf_counter() - started:.4f}s"
                )

        return wrapper

    return decorator


class ObservabilityService:
    """
    Eventos estructurados (JSON) para operaciones largas como el escaneo de integridad.
    """

    PRETTY_PRINT = os.getenv("LOG_FORMAT") == "PRETTY"

    @staticmethod
    def get_correlation_id() -> str:
        return uuid.uuid4().hex[:8]

    @staticmethod
    def _get_ram_usage_mb() -> float:
        try:
            rss = psutil.Process(os.getpid()).memory_info().rss
        except psutil.Error:
            return 0.0
        return round(rss / (1024 * 1024), 2)

    @staticmethod
    def log_event(
        event_name: str,
        correlation_id: str,
        payload: dict[str, Any],
        level: str = "INFO",
    ):
        entry = {
            "timestamp": time.time(),
            "level": level,
            "event": event_name,
            "correlation_id": correlation_id,
            "data": payload,
        }
        indent = 4 if ObservabilityService.PRETTY_PRINT else None
        message = json.dumps(entry, indent=indent, default=str)

        if level == "ERROR":
            logger.error(message)
        else:
            logger.info(message)

    @staticmethod
    def measure_latency(operation_name: str):
        """
        Decorador que emite `<op>.started`, `<op>.completed` o `<op>.failed`.

        Si el resultado expone `summary()` (p. ej. ScanReport) se adjunta al
        evento de cierre. Las excepciones se registran y se relanzan.
        """

        def decorator(func: Callable):
            @functools.wraps(func)
            def wrapper(*args, **kwargs):
                cid = ObservabilityService.get_correlation_id()
                target = func.__qualname__
                ram_before = ObservabilityService._get_ram_usage_mb()
                started = time.time()

                ObservabilityService.log_event(
                    f"{operation_name}.started",
                    cid,
                    {"target": target, "start_ram_mb": ram_before},
                )

                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    ObservabilityService.log_event(
                        f"{operation_name}.failed",
                        cid,
                        {
                            "target": target,
                            "duration_sec": round(time.time() - started, 3),
                            "crash_ram_mb": ObservabilityService._get_ram_usage_mb(),
                            "error_type": type(e).__name__,
                            "error_msg": str(e),
                        },
                        level="ERROR",
                    )
                    raise

                ram_after = ObservabilityService._get_ram_usage_mb()
                payload = {
                    "target": target,
                    "duration_sec": round(time.time() - started, 3),
                    "end_ram_mb": ram_after,
                    "ram_delta_mb": round(ram_after - ram_before, 2),
                    "status": "success",
                }
                summary = getattr(result, "summary", None)
                if callable(summary):
                    payload["result"] = summary()
                ObservabilityService.log_event(f"{operation_name}.completed", cid, payload)
                return result

            return wrapper

        return decorator
