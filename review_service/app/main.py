"""
Punto de entrada principal del servicio de revisión de código.

Expone una función `create_app` que recibe la configuración ya cargada
(facilita el testeo con proveedores falsos) y una función `main` que carga
la configuración, valida la credencial de Gemini y arranca Uvicorn.

Las rutas se definen en el paquete `routers`:
    - health: endpoint de salud.
    - review: POST /review, que consume el proveedor Gemini.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from pydantic import ValidationError
import uvicorn

from .config import ConfigurationError, Settings, load_settings
from .providers.gemini import GeminiProvider
from .routers import health, review

logger = logging.getLogger(__name__)


def create_app(settings: Settings, provider: Optional[Any] = None) -> FastAPI:
    """
    Crea y configura la aplicación FastAPI.

    - Guarda configuración y proveedor en `app.state` (una sola instancia
      por proceso, compartida por todas las peticiones).
    - Configura CORS.
    - Registra los routers de salud y de revisión.
    - Sirve `STATIC_DIR` en "/" si está configurado.

    Args:
        settings: Configuración cargada con `load_settings`.
        provider: Proveedor a usar; por defecto un `GeminiProvider`.

    Returns:
        Instancia configurada de `FastAPI`.
    """
    app = FastAPI(
        title="AI Code Review Service",
        description="Revisión de código con Gemini: legibilidad, buenas prácticas y rendimiento",
        version="1.0.0",
    )

    app.state.settings = settings
    app.state.provider = provider if provider is not None else GeminiProvider(settings)

    # --- CORS Configuration ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Rutas ---
    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(review.router, tags=["review"])

    # --- Archivos estáticos (después de las rutas para no ocultarlas) ---
    if settings.STATIC_DIR:
        static_dir = Path(settings.STATIC_DIR).resolve()
        if static_dir.is_dir():
            app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")
        else:
            logger.warning("STATIC_DIR=%s no existe; no se sirven archivos estáticos", static_dir)

    return app


def main() -> None:
    """
    Carga la configuración y arranca Uvicorn.

    Si falta `GEMINI_API_KEY` (o la configuración es inválida) termina el
    proceso con código 1 antes de abrir ningún puerto.
    """
    # Nivel provisional hasta validar LOG_LEVEL junto con el resto de la configuración
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings()
    except (ConfigurationError, ValidationError) as e:
        logger.error("❌ Error: %s", e)
        sys.exit(1)

    logging.getLogger().setLevel(settings.LOG_LEVEL)

    app = create_app(settings)
    logger.info(
        "✅ AI Code Reviewer backend listening on http://%s:%d (model=%s, env=%s)",
        settings.HOST, settings.PORT, settings.GEMINI_MODEL, settings.ENV,
    )

    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
