"""
Configuracion central del sync Splash -> Webflow.
Gestiona variables de entorno y las congela al arrancar el proceso.

El resto del codigo no lee os.environ: recibe objetos de configuracion
explicitos construidos a partir de `settings`.
"""
from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field, computed_field


class Settings(BaseSettings):
    """
    Clase de configuracion de la aplicacion.
    Lee variables de entorno (y .env) y proporciona valores por defecto.
    """

    # Configuracion de la aplicacion
    APP_NAME: str = Field(default="Splash -> Webflow Event Sync")
    APP_VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="production")

    # Configuracion del servidor (endpoint de sync)
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)

    # Splash (fuente)
    SPLASH_CLIENT_ID: str = Field(default="")
    SPLASH_CLIENT_SECRET: str = Field(default="")
    SPLASH_USERNAME: str = Field(default="")
    SPLASH_PASSWORD: str = Field(default="")
    SPLASH_API_BASE: str = Field(default="https://api.splashthat.com")
    SPLASH_PAGE_SIZE: int = Field(default=50)

    # Webflow (destino)
    WEBFLOW_API_TOKEN: str = Field(default="")
    WEBFLOW_COLLECTION_ID: str = Field(default="69650c17f7e5c3ac3938b16d")
    WEBFLOW_API_BASE: str = Field(default="https://api.webflow.com/v2")
    # Webflow v2 acepta limit <= 100
    WEBFLOW_PAGE_SIZE: int = Field(default=100, ge=1, le=100)
    # Webflow permite 60 req/min; 1.1s entre escrituras deja margen
    WEBFLOW_WRITE_DELAY_SECONDS: float = Field(default=1.1)

    # HTTP
    HTTP_TIMEOUT_SECONDS: int = Field(default=30)
    HTTP_MAX_RETRIES: int = Field(default=4)

    # Telegram (notificacion opcional de eventos creados)
    TELEGRAM_BOT_TOKEN: str = Field(default="")
    TELEGRAM_CHAT_IDS: str = Field(default="")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="logs/eventsync.log")

    @computed_field
    @property
    def telegram_chat_ids(self) -> List[str]:
        """Chat IDs de Telegram separados por coma."""
        return parse_chat_ids(self.TELEGRAM_CHAT_IDS)

    @computed_field
    @property
    def is_development(self) -> bool:
        """Indica si el entorno es de desarrollo."""
        return self.ENVIRONMENT.lower() == "development"

    def missing_required(self) -> List[str]:
        """
        Retorna las credenciales obligatorias que no estan configuradas.
        """
        required = [
            "SPLASH_CLIENT_ID",
            "SPLASH_CLIENT_SECRET",
            "SPLASH_USERNAME",
            "SPLASH_PASSWORD",
            "WEBFLOW_API_TOKEN",
            "WEBFLOW_COLLECTION_ID",
        ]
        return [name for name in required if not getattr(self, name)]

    class Config:
        """Configuracion de Pydantic."""
        env_file = ".env"
        case_sensitive = True
        frozen = True
        extra = "ignore"  # Ignorar campos extra del .env


def parse_chat_ids(raw: str) -> List[str]:
    """
    Parsea la lista de chat IDs.
    Acepta "123,456" o con espacios; ignora entradas vacias.
    """
    if not raw:
        return []
    return [chat_id.strip() for chat_id in raw.split(",") if chat_id.strip()]


# Instancia global de configuracion
settings = Settings()
