from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])


@router.get("/alive", response_class=PlainTextResponse, include_in_schema=False)
async def alive() -> str:
    """Liveness probe. Touches nothing but the event loop."""
    return "."
