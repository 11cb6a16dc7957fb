"""
Integration tests package.

Tests de integración contra una base SQLite real (aiosqlite):
- Persistencia de reservas y líneas de servicio
- Bloqueo optimista y reclamos de agenda por profesional
- El servicio de reservas completo sobre SQL

Para ejecutar solo tests de integración:
    pytest tests/integration/
"""
