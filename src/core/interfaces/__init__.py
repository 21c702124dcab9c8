"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) para fuentes de mkcert y descargadores.
- Permite invertir dependencias: el Core depende de abstracciones y los tests
  sustituyen la red por objetos falsos.
"""
