"""
Punto de entrada de la aplicación FastAPI del sync Splash -> Webflow.
"""
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from eventsync.core.config import settings
from eventsync.core.events import lifespan
from eventsync.api.v1.router import api_router
from eventsync.api.middlewares.error_handler import ErrorHandlerMiddleware
from eventsync.shared.exceptions.base import AppException


def create_application() -> FastAPI:
    """
    Factory para crear y configurar la aplicación FastAPI.
    
    Returns:
        FastAPI: Instancia configurada de la aplicación
    """
    application = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Sync one-way de eventos Splash hacia Webflow CMS",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    application.add_middleware(ErrorHandlerMiddleware)

    application.include_router(api_router, prefix="/api")

    # Errores de dominio (auth/transporte/config) con su status y detalle
    @application.exception_handler(AppException)
    async def app_exception_handler(request, exc: AppException):
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict()
        )

    @application.get("/health", tags=["Health"])
    async def health_check():
        """Endpoint para verificar el estado de la aplicación."""
        return {
            "status": "healthy",
            "app_name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "sync_configured": not settings.missing_required(),
        }

    return application


app = create_application()
