"""Motor de reservas y disponibilidad para salones."""
