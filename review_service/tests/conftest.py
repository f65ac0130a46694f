"""
Fixtures comunes: configuración de prueba y proveedor falso en memoria.

Ninguna prueba accede a la red; el proveedor Gemini se sustituye por
`FakeProvider`, que registra los prompts recibidos.
"""

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app


class FakeProvider:
    """Proveedor falso: devuelve `result` o lanza `error`."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.prompts = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def settings():
    return Settings(_env_file=None, GEMINI_API_KEY="test-key")


@pytest.fixture
def make_client(settings):
    def _make(provider, **overrides):
        cfg = settings.model_copy(update=overrides) if overrides else settings
        return TestClient(create_app(cfg, provider=provider))
    return _make
