"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras (Pydantic v2): versiones, fuentes,
  registro del certificado y resultados de aprovisionamiento.
- El dominio no conoce HTTP, subprocess ni CLI: solo conceptos del problema.
"""
