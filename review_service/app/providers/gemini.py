"""Proveedor Gemini para la revisión de código.

Envuelve el cliente `google-genai` y expone una única operación asíncrona,
`generate`, que envía el prompt como un solo mensaje de rol "user" y devuelve
el resultado crudo del cliente. La interpretación de ese resultado es tarea
de `normalizer`.

No hay reintentos ni modelos de fallback: cada petición hace exactamente una
llamada al modelo.
"""

import asyncio
import logging
from typing import Any, Optional

from google import genai

from ..config import Settings

logger = logging.getLogger(__name__)


class UpstreamTimeoutError(TimeoutError):
    """La llamada al modelo superó `GEMINI_TIMEOUT`."""


class GeminiProvider:
    """
    Proveedor de revisiones basado en Google Gemini.

    Se construye una sola vez al arrancar a partir de la configuración y se
    comparte entre peticiones; no guarda estado mutable por petición.
    """

    def __init__(self, settings: Settings, client: Optional[genai.Client] = None) -> None:
        self.model_name = settings.GEMINI_MODEL
        self.timeout: Optional[float] = settings.timeout
        self.client = client or genai.Client(api_key=settings.GEMINI_API_KEY)

    async def generate(self, prompt: str) -> Any:
        """
        Envía `prompt` al modelo y devuelve el resultado sin procesar.

        Raises:
            UpstreamTimeoutError: si la llamada excede el timeout configurado.
            Exception: cualquier error del cliente se propaga al llamador.
        """
        call = asyncio.to_thread(self._generate_sync, prompt)
        if self.timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise UpstreamTimeoutError(
                f"Gemini call timed out after {self.timeout:g}s (model={self.model_name})"
            ) from e

    def _generate_sync(self, prompt: str) -> Any:
        logger.debug("Llamando a %s (%d caracteres de prompt)", self.model_name, len(prompt))
        return self.client.models.generate_content(
            model=self.model_name,
            contents=[
                {
                    "role": "user",
                    "parts": [{"text": prompt}],
                }
            ],
        )
