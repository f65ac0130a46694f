from fastapi import APIRouter, Request

router = APIRouter()

@router.get("", summary="Healthcheck")
def health(request: Request):
    return {"status": "ok", "service": request.app.state.settings.APP_NAME}
