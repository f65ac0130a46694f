"""
Pruebas del normalizador de resultados de Gemini.

Cada forma conocida del sobre debe devolver exactamente el texto embebido;
las formas desconocidas devuelven None y se serializan como JSON válido.
"""

import asyncio
import json
from types import SimpleNamespace

from pydantic import BaseModel

from app.normalizer import (
    CallableResponseText,
    CandidatesText,
    DirectText,
    OutputContentText,
    PlainString,
    ResponseText,
    Unrecognized,
    extract_text,
    match_envelope,
    render_fallback,
)


def extract(result):
    return asyncio.run(extract_text(result))


# ============================================================================
# FORMAS CONOCIDAS
# ============================================================================

def test_callable_response_text():
    result = SimpleNamespace(response=SimpleNamespace(text=lambda: "desde accesor"))
    assert isinstance(match_envelope(result), CallableResponseText)
    assert extract(result) == "desde accesor"


def test_async_callable_response_text():
    async def text():
        return "desde accesor async"

    result = SimpleNamespace(response=SimpleNamespace(text=text))
    assert extract(result) == "desde accesor async"


def test_response_text_string():
    result = {"response": {"text": "Looks fine."}}
    assert match_envelope(result) == ResponseText("Looks fine.")
    assert extract(result) == "Looks fine."


def test_candidates_text():
    result = {"candidates": [{"content": {"parts": [{"text": "Use 'let'."}]}}]}
    assert match_envelope(result) == CandidatesText("Use 'let'.")
    assert extract(result) == "Use 'let'."


def test_candidates_text_with_attribute_objects():
    part = SimpleNamespace(text="atributos")
    candidate = SimpleNamespace(content=SimpleNamespace(parts=[part]))
    result = SimpleNamespace(candidates=[candidate])
    assert extract(result) == "atributos"


def test_output_content_text():
    result = {"output": [{"content": [{"text": "salida"}]}]}
    assert match_envelope(result) == OutputContentText("salida")
    assert extract(result) == "salida"


def test_direct_text():
    result = SimpleNamespace(text="directo")
    assert match_envelope(result) == DirectText("directo")
    assert extract(result) == "directo"


def test_plain_string():
    assert match_envelope("solo texto") == PlainString("solo texto")
    assert extract("solo texto") == "solo texto"


# ============================================================================
# PRIORIDAD Y CAÍDAS ENTRE FORMAS
# ============================================================================

def test_response_wins_over_candidates():
    result = {
        "response": {"text": "primero"},
        "candidates": [{"content": {"parts": [{"text": "segundo"}]}}],
        "text": "tercero",
    }
    assert extract(result) == "primero"


def test_response_without_text_falls_through():
    result = {"response": {"other": 1}, "text": "directo"}
    assert extract(result) == "directo"


def test_empty_candidates_falls_through_to_direct_text():
    result = {"candidates": [], "text": "directo"}
    assert extract(result) == "directo"


def test_candidate_without_string_text_falls_through_to_output():
    result = {
        "candidates": [{"content": {"parts": [{"text": None}]}}],
        "output": [{"content": [{"text": "salida"}]}],
    }
    assert extract(result) == "salida"


def test_failing_accessor_falls_through_to_candidates():
    def boom():
        raise RuntimeError("accessor roto")

    result = SimpleNamespace(
        response=SimpleNamespace(text=boom),
        candidates=[{"content": {"parts": [{"text": "candidato"}]}}],
    )
    assert extract(result) == "candidato"


def test_accessor_returning_none_falls_through():
    result = SimpleNamespace(response=SimpleNamespace(text=lambda: None), text="directo")
    assert extract(result) == "directo"


def test_property_raising_is_treated_as_missing():
    class Flaky:
        @property
        def candidates(self):
            raise ValueError("no disponible")

        text = "directo"

    assert extract(Flaky()) == "directo"


# ============================================================================
# FORMAS DESCONOCIDAS Y FALLBACK
# ============================================================================

def test_unrecognized_returns_none():
    result = {"foo": 1, "bar": [1, 2]}
    assert isinstance(match_envelope(result), Unrecognized)
    assert extract(result) is None
    assert extract(None) is None
    assert extract(42) is None


def test_fallback_is_parseable_json():
    result = {"foo": 1, "bar": [1, 2], "nested": {"ok": True}}
    rendered = render_fallback(result)
    assert json.loads(rendered) == result
    assert "\n  " in rendered


def test_fallback_serializes_pydantic_models_and_objects():
    class Usage(BaseModel):
        tokens: int

    result = SimpleNamespace(usage=Usage(tokens=12), model="gemini", _private="x")
    assert json.loads(render_fallback(result)) == {"usage": {"tokens": 12}, "model": "gemini"}


class Hostile:
    """Resultado cuyo acceso a cualquier atributo desconocido lanza."""

    def __getattr__(self, name):
        raise RuntimeError(f"boom {name}")


def test_result_raising_on_every_attribute_is_unrecognized():
    assert isinstance(match_envelope(Hostile()), Unrecognized)
    assert extract(Hostile()) is None


def test_fallback_with_result_raising_on_inspection_is_still_json():
    rendered = render_fallback(Hostile())
    assert json.loads(rendered) == "<Hostile>"

    nested = render_fallback({"raw": Hostile(), "ok": 1})
    assert json.loads(nested) == {"raw": "<Hostile>", "ok": 1}


def test_fallback_when_repr_also_fails():
    class Broken:
        def __repr__(self):
            raise RuntimeError("sin repr")

    result = {}
    result["self"] = result
    result["broken"] = Broken()
    # Circular → se intenta repr(), que a su vez falla al llegar a Broken
    assert json.loads(render_fallback(result)) == "<dict>"


def test_fallback_with_circular_reference_is_still_json():
    result = {}
    result["self"] = result
    rendered = render_fallback(result)
    assert isinstance(json.loads(rendered), str)
