"""FastAPI route for obtaining a bearer token."""
import logging

from fastapi import APIRouter, HTTPException

from venue_hours.errors import AuthError
from venue_hours.models import LoginRequest, TokenResponse
from venue_hours.routers.venue_router import auth_http_error, get_handler

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Log in",
    description="Exchange the admin username and password for a bearer token",
)
def login(request: LoginRequest) -> TokenResponse:
    try:
        handler = get_handler()
        return TokenResponse(**handler.login(request.username, request.password))
    except HTTPException:
        raise
    except AuthError as e:
        raise auth_http_error(e)
    except Exception as e:
        logger.error(f"[AuthRouter] Error in login: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
