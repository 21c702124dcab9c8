"""Core de devcert: dominio, contratos y servicios (sin detalles de I/O en el dominio)."""
