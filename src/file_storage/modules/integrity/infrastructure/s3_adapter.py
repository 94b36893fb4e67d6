# src/file_storage/modules/integrity/infrastructure/s3_adapter.py
"""
Adaptador de infraestructura para Amazon S3 (o compatible, p.ej. LocalStack/MinIO).

Arquitectura: Infrastructure Layer
Responsabilidad: Implementar StorageAdapter.has() con head_object.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

# Imports de terceros (Solo permitidos en capa de infraestructura)
import boto3
from botocore.exceptions import BotoCoreError, ClientError

from file_storage.modules.integrity.domain.exceptions import AdapterError

logger = logging.getLogger(__name__)

# Códigos que significan "no existe" (negativo confirmado)
NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


def create_s3_client(endpoint_url: Optional[str] = None) -> Any:
    """Cliente S3 configurado desde el entorno (AWS_DEFAULT_REGION, AWS_ENDPOINT_URL)."""
    return boto3.client(
        "s3",
        region_name=os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
        endpoint_url=endpoint_url or os.environ.get("AWS_ENDPOINT_URL"),
    )


class S3StorageAdapter:
    """
    Verifica existencia de objetos en un bucket. Las claves son la ruta
    persistida (con '/' como separador) bajo un prefijo opcional.
    """

    def __init__(self, bucket: str, client: Any = None, prefix: str = ""):
        if not bucket:
            raise ValueError("El bucket de S3 es obligatorio.")
        self.bucket = bucket
        self.prefix = prefix.strip("/")
        self._client = client  # Lazy: se crea en el primer has()

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = create_s3_client()
        return self._client

    def key_for(self, path: str) -> str:
        key = path.replace("\\", "/").lstrip("/")
        return f"{self.prefix}/{key}" if self.prefix else key

    def has(self, path: str) -> bool:
        key = self.key_for(path)
        try:
            self.client.head_object(Bucket=self.bucket, Key=key)
            return True
        except ClientError as e:
            code = str(e.response.get("Error", {}).get("Code", ""))
            if code in NOT_FOUND_CODES:
                return False
            logger.error(f"S3 head_object falló para s3://{self.bucket}/{key}: {code}")
            raise AdapterError(f"S3 {code} en s3://{self.bucket}/{key}") from e
        except BotoCoreError as e:
            raise AdapterError(f"Fallo de transporte S3 en s3://{self.bucket}/{key}: {e}") from e
