"""
Manejadores de eventos de inicio y cierre de la aplicacion.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable
from fastapi import FastAPI
from loguru import logger

from eventsync.core.config import settings
from eventsync.core.logging_config import configure_logging


def startup_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de inicio de la aplicacion.
    
    Args:
        app: Instancia de FastAPI
        
    Returns:
        Callable: Funcion asincrona de inicio
    """
    async def startup() -> None:
        """Configura logging y valida la configuracion del sync."""
        configure_logging(settings.LOG_LEVEL, settings.LOG_FILE)
        logger.info(f"Iniciando {settings.APP_NAME} v{settings.APP_VERSION}")
        logger.info(f"Entorno: {settings.ENVIRONMENT}")
        _validate_config()
        logger.success("Aplicacion iniciada correctamente")
    
    return startup


def _validate_config() -> None:
    """
    Advierte por configuracion faltante. No aborta el arranque: el endpoint
    de sync responde con el error concreto si se invoca sin credenciales.
    """
    missing = settings.missing_required()
    if missing:
        logger.warning(f"CONFIG: faltan variables para el sync: {', '.join(missing)}")

    if not settings.TELEGRAM_BOT_TOKEN or not settings.telegram_chat_ids:
        logger.warning("CONFIG: Telegram no configurado - no se notificaran eventos creados")


def shutdown_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de cierre de la aplicacion.
    """
    async def shutdown() -> None:
        logger.info("Cerrando aplicacion...")
    
    return shutdown


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan de FastAPI: startup -> app -> shutdown."""
    await startup_handler(app)()
    yield
    await shutdown_handler(app)()
