"""
Configuracion de loguru para el API y los scripts del sync.
"""
import sys
from pathlib import Path
from typing import Optional

from loguru import logger


_configured = False


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Reemplaza el sink por defecto de loguru.

    - stderr con el nivel indicado
    - archivo rotativo (opcional) con el mismo nivel

    Es idempotente: llamadas posteriores no duplican sinks.
    """
    global _configured
    if _configured:
        return

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            rotation="500 MB",
            retention="10 days",
            level=level
        )

    _configured = True
