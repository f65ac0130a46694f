"""
Esquemas Pydantic utilizados por la capa de api del servicio de revisión.

- review:
    Recibe código fuente y devuelve la retroalimentación del modelo.
- errores:
    Cuerpo JSON común a las respuestas 400 / 500.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


# ---------------------------------------------------------------------------
# review
# ---------------------------------------------------------------------------


class ReviewRequest(BaseModel):
    """
    Petición de revisión de código.

    Atributos:
        code:
            Código fuente a revisar. Valores "falsy" (`null`, `false`, `0`)
            se tratan como cadena vacía; `true` y los números se convierten
            a texto como lo haría un cliente JavaScript (`true`, `1`, `1.5`).
    """

    code: str = Field("", description="Código fuente a revisar")

    @field_validator("code", mode="before")
    @classmethod
    def coerce_code(cls, v: Any) -> str:
        """Convierte `code` a string (null/false/0 → "")."""
        if v is None:
            return ""
        if isinstance(v, bool):
            return "true" if v else ""
        if isinstance(v, (int, float)):
            if not v or v != v:
                return ""
            if isinstance(v, float) and v.is_integer():
                return str(int(v))
            return str(v)
        return v


class ReviewResponse(BaseModel):
    """Respuesta con la revisión en texto libre generada por el modelo."""

    review: str


class ErrorResponse(BaseModel):
    """
    Cuerpo de error.

    Atributos:
        error:
            Mensaje legible para el usuario.
        details:
            Error subyacente convertido a texto (solo en fallos del proveedor).
    """

    error: str
    details: Optional[str] = None
