"""
Módulo de configuración para el servicio de revisión de código (Gemini).

Utiliza `pydantic-settings` para cargar la configuración desde variables
de entorno y/o archivos `.env`. Todos los atributos definidos en `Settings`
pueden sobreescribirse mediante variables de entorno con el mismo nombre.

Ejemplo de `.env`:
    APP_NAME=review_service
    ENV=prod
    GEMINI_API_KEY=tu_api_key
    GEMINI_MODEL=gemini-2.5-flash
    GEMINI_TIMEOUT=60
    PORT=3001
    STATIC_DIR=./static

No existe una instancia global: `load_settings()` se invoca una sola vez al
arrancar y el resultado se pasa explícitamente a `create_app`.
"""

from typing import Any, List, Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(RuntimeError):
    """La configuración no permite arrancar el servicio (p. ej. falta la API key)."""


class Settings(BaseSettings):
    """
    Configuración central del servicio de revisión.

    Atributos principales:
        APP_NAME:
            Nombre de la aplicación (título de FastAPI y healthcheck).
        ENV:
            Entorno de ejecución: "dev", "prod", "test", etc.
        GEMINI_API_KEY:
            API key para autenticar contra la API de Google Gemini.
            Obligatoria: sin ella el proceso no arranca.
        GEMINI_MODEL:
            Modelo de Gemini usado para generar la revisión.
        GEMINI_TIMEOUT:
            Timeout (en segundos) de la llamada al modelo. 0 lo desactiva.
        HOST, PORT:
            Dirección y puerto de escucha de Uvicorn.
        CORS_ORIGINS:
            Orígenes permitidos separados por coma ("*" para todos).
        STATIC_DIR:
            Directorio opcional servido como archivos estáticos en "/".
        LOG_LEVEL:
            Nivel del logger raíz (CRITICAL, ERROR, WARNING, INFO o DEBUG;
            se acepta en minúsculas).
    """

    APP_NAME: str = "review_service"
    ENV: str = "dev"

    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_TIMEOUT: float = 60

    HOST: str = "0.0.0.0"
    PORT: int = 3001

    CORS_ORIGINS: str = "*"
    STATIC_DIR: Optional[str] = None

    LOG_LEVEL: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        extra="ignore",
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def upper_log_level(cls, v: Any) -> Any:
        return v.strip().upper() if isinstance(v, str) else v

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def timeout(self) -> Optional[float]:
        """Timeout efectivo de la llamada al modelo (`None` = sin límite)."""
        return self.GEMINI_TIMEOUT if self.GEMINI_TIMEOUT > 0 else None


def load_settings(**overrides) -> Settings:
    """
    Construye la configuración y verifica la credencial del proveedor.

    Raises:
        ConfigurationError: si `GEMINI_API_KEY` no está definida o está vacía.
    """
    settings = Settings(**overrides)
    if not (settings.GEMINI_API_KEY or "").strip():
        raise ConfigurationError(
            "GEMINI_API_KEY not found. Set it in the environment or in a .env file."
        )
    return settings
