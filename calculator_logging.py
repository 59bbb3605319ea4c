"""Configuración del registro de la calculadora.

Los módulos usan ``logging.getLogger("calculator.<módulo>")`` y nunca
añaden handlers; solo el punto de entrada llama a ``setup_logging``.

Variables de entorno:
    CALC_LOG_LEVEL  nivel (DEBUG, INFO, ...); INFO por defecto
    CALC_LOG_FILE   ruta de un archivo rotativo opcional
"""

import logging
import os
from logging.handlers import RotatingFileHandler

LOGGER_NAME = "calculator"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logging(level_name: str | None = None) -> logging.Logger:
    level_name = (level_name or os.getenv("CALC_LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if logger.handlers:
        return logger  # ya configurado

    fmt = logging.Formatter(LOG_FORMAT)

    sh = logging.StreamHandler()
    sh.setLevel(level)
    sh.setFormatter(fmt)
    logger.addHandler(sh)

    log_path = os.getenv("CALC_LOG_FILE")
    if log_path:
        fh = RotatingFileHandler(log_path, maxBytes=512_000, backupCount=2, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    return logger
