"""📦 modules/ — Bounded contexts del almacenamiento de archivos

   • paths/     → PathBuilder: ruta, nombre, ruta completa, URL y sharding
   • integrity/ → IntegrityScanner: verificación de existencia por adaptador

📚 Cada módulo contiene sus propias capas Clean Architecture:
   • domain/         → Entidades, value objects, excepciones y puertos
   • application/    → Casos de uso
   • infrastructure/ → Adaptadores concretos (disco, S3, JSON)
"""
