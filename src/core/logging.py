"""Configuración de logging basada en structlog.

Por qué structlog:
- Logs estructurados (evento + campos) legibles en desarrollo.
- Los loggers de módulo (`get_logger`) aceptan campos extra como kwargs.
- El logger que pasa quien llama solo recibe mensajes ya formateados, así que
  sirve tanto uno de structlog como un `logging.Logger` de la stdlib.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Protocol

import structlog
from structlog.typing import FilteringBoundLogger


class DiagnosticLogger(Protocol):
    """Contrato mínimo de logger que aceptan el orquestador y el provisioner."""

    def debug(self, msg: str) -> Any: ...

    def info(self, msg: str) -> Any: ...

    def warning(self, msg: str) -> Any: ...

    def error(self, msg: str) -> Any: ...


def setup_logging(level: str = "INFO") -> None:
    """Configura structlog para la CLI (renderer de consola, filtrado por nivel)."""

    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> FilteringBoundLogger:
    return structlog.get_logger(name or "devcert")
