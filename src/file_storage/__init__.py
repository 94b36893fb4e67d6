"""
file_storage — Derivación de rutas y verificación de integridad de archivos.

Contextos:
   • modules/paths/     → PathBuilder (rutas, nombres, URLs, sharding)
   • modules/integrity/ → IntegrityScanner (¿siguen existiendo los archivos?)
"""

__version__ = "0.1.0"
