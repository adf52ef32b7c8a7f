"""
Logging — Настройка логирования

Модули библиотеки пишут в logging.getLogger(__name__) и ничего не
настраивают сами. configure_logging — для приложений и отладки.

Уровень по умолчанию: переменная окружения RECURRENCE_LOG_LEVEL (INFO).
"""

from __future__ import annotations

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "RECURRENCE_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

_INITIALIZED = False


def resolve_log_level(level: Optional[str] = None) -> int:
    """
    Имя уровня → числовой уровень logging.

    Args:
        level: Имя уровня ('DEBUG', 'info', ...). None → RECURRENCE_LOG_LEVEL → INFO

    Returns:
        Числовой уровень; неизвестное имя → logging.INFO
    """
    name = (level or os.getenv(LOG_LEVEL_ENV, "INFO")).upper()
    resolved = getattr(logging, name, None)
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: Optional[str] = None) -> None:
    """Stream handler для логгера пакета `src` (идемпотентно)."""

    global _INITIALIZED
    if _INITIALIZED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    package_logger = logging.getLogger("src")
    package_logger.setLevel(resolve_log_level(level))
    package_logger.addHandler(handler)

    _INITIALIZED = True
    logging.getLogger(__name__).debug("Logging configured at level %s", package_logger.level)


__all__ = ["configure_logging", "resolve_log_level", "LOG_LEVEL_ENV"]
