from typing import Any, Optional
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..schemas import ReviewRequest, ReviewResponse, ErrorResponse
from ..normalizer import extract_text, render_fallback
from ..prompts import build_review_prompt

logger = logging.getLogger(__name__)

router = APIRouter()


def provider(request: Request) -> Any:
    """Proveedor construido en `create_app` y compartido por todas las peticiones."""
    return request.app.state.provider


@router.post(
    "/review",
    response_model=ReviewResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def review(payload: Optional[ReviewRequest] = None, llm: Any = Depends(provider)):
    """
    Revisa el código recibido con el modelo y devuelve la retroalimentación.

    - Código vacío (tras `strip`) → 400 sin llamar al modelo.
    - Cualquier fallo del proveedor → 500 con `error` y `details`.
    """
    # Sin cuerpo se trata como {}
    payload = payload or ReviewRequest()
    user_code = payload.code.strip()
    if not user_code:
        return JSONResponse(status_code=400, content={"error": "No code provided"})

    try:
        result = await llm.generate(build_review_prompt(user_code))
    except Exception as e:
        logger.exception("Error in /review endpoint")
        return JSONResponse(
            status_code=500,
            content={"error": "AI review failed", "details": str(e)},
        )

    logger.debug("Raw API result: %r", result)

    feedback = await extract_text(result)
    if feedback is None:
        logger.info("Forma de resultado no reconocida (%s); se serializa completo", type(result).__name__)
        feedback = render_fallback(result)

    return ReviewResponse(review=feedback)
