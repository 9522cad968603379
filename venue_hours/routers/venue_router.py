"""FastAPI routes for venue endpoints."""
import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from venue_hours.errors import (
    AuthError,
    AuthFailure,
    NotFoundError,
    ValidationError,
)
from venue_hours.models import StatusProjection, VenueView

logger = logging.getLogger(__name__)

# Create router at module level
router = APIRouter()

# auto_error=False so a missing header reaches AuthGate as "no token"
bearer_scheme = HTTPBearer(auto_error=False)

AUTH_STATUS_CODES = {
    AuthFailure.NO_TOKEN: 401,
    AuthFailure.INVALID_CREDENTIALS: 401,
    AuthFailure.INVALID_TOKEN: 403,
}

# Global handler reference - set during startup
_venue_handler = None


def set_venue_handler(handler):
    """Set the venue handler instance (called during startup)."""
    global _venue_handler
    _venue_handler = handler
    logger.info("[VenueRouter] Handler injected successfully")


def get_handler():
    """Get the venue handler, raising error if not initialized."""
    if _venue_handler is None:
        raise HTTPException(status_code=503, detail="Service not ready")
    return _venue_handler


def auth_http_error(e: AuthError) -> HTTPException:
    """Translate an AuthError into its HTTP response."""
    status_code = AUTH_STATUS_CODES[e.kind]
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return HTTPException(status_code=status_code, detail=e.message, headers=headers)


def require_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> dict[str, Any]:
    """Dependency that rejects requests without a valid bearer token."""
    handler = get_handler()
    token = credentials.credentials if credentials else None
    try:
        return handler.auth_gate.authorize(token)
    except AuthError as e:
        raise auth_http_error(e)


@router.get(
    "/venues",
    response_model=list[VenueView],
    summary="List venues",
    description="All venues with their schedules, display hours and current open status",
)
def list_venues() -> list[VenueView]:
    try:
        handler = get_handler()
        return handler.list_venues()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[VenueRouter] Error in list_venues: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get(
    "/venues/status",
    response_model=StatusProjection,
    summary="Open and closed venues",
    description="Venues open right now and venues closed for today by override",
)
def get_status(
    refresh: bool = Query(False, description="Recompute instead of using the cached projection"),
) -> StatusProjection:
    try:
        handler = get_handler()
        return handler.get_status(refresh)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[VenueRouter] Error in get_status: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get(
    "/venues/{venue_id}",
    response_model=VenueView,
    summary="Get a venue",
)
def get_venue(venue_id: int) -> VenueView:
    try:
        handler = get_handler()
        return handler.get_venue(venue_id)
    except HTTPException:
        raise
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"[VenueRouter] Error in get_venue: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.put(
    "/venues/{venue_id}",
    response_model=VenueView,
    summary="Replace a venue's schedule",
    description="Requires a bearer token from /login",
)
def update_venue(
    venue_id: int,
    body: Any = Body(None),
    claims: dict[str, Any] = Depends(require_token),
) -> VenueView:
    try:
        handler = get_handler()
        venue = handler.update_venue(venue_id, body)
        logger.info(f"[VenueRouter] Venue {venue_id} updated by {claims.get('sub')}")
        return venue
    except HTTPException:
        raise
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"[VenueRouter] Error in update_venue: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get(
    "/ping",
    summary="Health check",
    description="Health check endpoint",
)
def ping() -> dict[str, str]:
    """Health check endpoint."""
    handler = get_handler()
    return handler.ping()
