"""
Normalización del resultado devuelto por el proveedor.

El sobre ("envelope") que entrega el cliente de Gemini no es estable entre
versiones de la librería: el texto puede llegar como accesor invocable, como
atributo directo, dentro de una lista de candidatos o dentro de una
estructura output/content. Este módulo modela cada forma conocida como una
variante de una unión etiquetada (`Envelope`) y las prueba en orden fijo:

    1. response.text()                       -> CallableResponseText
    2. response.text                         -> ResponseText
    3. candidates[0].content.parts[0].text   -> CandidatesText
    4. output[0].content[0].text             -> OutputContentText
    5. result.text                           -> DirectText
    6. result (str)                          -> PlainString
    7. ninguna                               -> Unrecognized

`match_envelope` es puro y síncrono; `extract_text` resuelve la variante
(esperando al accesor de la forma 1 si hace falta). Cuando no hay texto,
`render_fallback` serializa el resultado completo como JSON indentado.
Ninguna de estas funciones lanza excepciones.
"""

import inspect
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

logger = logging.getLogger(__name__)

_MISSING = object()


# ---------------------------------------------------------------------------
# Variantes del sobre
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CallableResponseText:
    accessor: Callable[[], Any]


@dataclass(frozen=True)
class ResponseText:
    text: str


@dataclass(frozen=True)
class CandidatesText:
    text: str


@dataclass(frozen=True)
class OutputContentText:
    text: str


@dataclass(frozen=True)
class DirectText:
    text: str


@dataclass(frozen=True)
class PlainString:
    text: str


@dataclass(frozen=True)
class Unrecognized:
    result: Any


Envelope = Union[
    CallableResponseText,
    ResponseText,
    CandidatesText,
    OutputContentText,
    DirectText,
    PlainString,
    Unrecognized,
]


# ---------------------------------------------------------------------------
# Acceso tolerante (atributos o claves de diccionario)
# ---------------------------------------------------------------------------


def _field(obj: Any, name: str) -> Any:
    if obj is None or obj is _MISSING:
        return _MISSING
    if isinstance(obj, Mapping):
        return obj.get(name, _MISSING)
    try:
        return getattr(obj, name, _MISSING)
    except Exception:
        # Propiedades que fallan al evaluarse cuentan como ausentes
        logger.debug("Error leyendo atributo %r de %s", name, type(obj).__name__, exc_info=True)
        return _MISSING


def _first(seq: Any) -> Any:
    if isinstance(seq, (list, tuple)) and seq:
        return seq[0]
    return _MISSING


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------


def match_envelope(result: Any, *, include_response: bool = True) -> Envelope:
    """
    Clasifica `result` en la primera variante conocida que encaje.

    Args:
        result: Objeto devuelto por el proveedor (objeto con atributos,
            diccionario o string).
        include_response: Si es False se omiten las formas 1 y 2. Se usa
            cuando el accesor `response.text()` ya falló.

    Returns:
        La variante de `Envelope` correspondiente; `Unrecognized` si ninguna.
    """
    if include_response:
        response = _field(result, "response")
        if response is not _MISSING and response is not None:
            text = _field(response, "text")
            if callable(text):
                return CallableResponseText(text)
            if isinstance(text, str):
                return ResponseText(text)

    first_candidate = _first(_field(result, "candidates"))
    if first_candidate is not _MISSING:
        text = _field(_first(_field(_field(first_candidate, "content"), "parts")), "text")
        if isinstance(text, str):
            return CandidatesText(text)

    text = _field(_first(_field(_first(_field(result, "output")), "content")), "text")
    if isinstance(text, str):
        return OutputContentText(text)

    text = _field(result, "text")
    if isinstance(text, str):
        return DirectText(text)

    if isinstance(result, str):
        return PlainString(result)

    return Unrecognized(result)


async def extract_text(result: Any) -> Optional[str]:
    """
    Extrae el texto de retroalimentación del resultado del proveedor.

    Returns:
        El texto encontrado, o `None` si el resultado no tiene ninguna de
        las formas conocidas (el llamador debe usar `render_fallback`).
    """
    envelope = match_envelope(result)

    if isinstance(envelope, CallableResponseText):
        try:
            value = envelope.accessor()
            if inspect.isawaitable(value):
                value = await value
        except Exception:
            logger.warning("response.text() falló; se prueban las demás formas", exc_info=True)
            value = None
        if isinstance(value, str):
            return value
        envelope = match_envelope(result, include_response=False)

    if isinstance(envelope, Unrecognized):
        return None
    return envelope.text


# ---------------------------------------------------------------------------
# Fallback
# ---------------------------------------------------------------------------


def _to_jsonable(obj: Any) -> Any:
    try:
        if hasattr(obj, "model_dump"):
            try:
                return obj.model_dump(mode="json", exclude_none=True)
            except Exception:
                logger.debug("model_dump falló para %s", type(obj).__name__, exc_info=True)
        if isinstance(obj, Mapping):
            return dict(obj)
        if isinstance(obj, (set, frozenset)):
            return list(obj)
        if isinstance(obj, bytes):
            return obj.decode("utf-8", errors="replace")
        if hasattr(obj, "__dict__") and not callable(obj):
            return {k: v for k, v in vars(obj).items() if not k.startswith("_")}
        return str(obj)
    except Exception:
        # Objetos que fallan al inspeccionarse se representan por su tipo
        logger.debug("No se pudo serializar %s", type(obj).__name__, exc_info=True)
        return f"<{type(obj).__name__}>"


def render_fallback(result: Any) -> str:
    """
    Serializa el resultado completo como JSON indentado (2 espacios).

    El texto devuelto siempre es JSON válido: si la estructura no se puede
    recorrer (p. ej. referencias circulares) se serializa su `repr`, y si
    tampoco `repr` funciona, el nombre de su tipo.
    """
    try:
        return json.dumps(result, indent=2, ensure_ascii=False, default=_to_jsonable)
    except Exception:
        logger.debug("Resultado no serializable; se usa repr()", exc_info=True)
    try:
        text = repr(result)
    except Exception:
        logger.debug("repr() falló para %s", type(result).__name__, exc_info=True)
        text = f"<{type(result).__name__}>"
    return json.dumps(text, indent=2, ensure_ascii=False)
