"""
Authentication API endpoints.

The auth endpoint accepts an email and password, validates them against the
request schema (email format and password policy) and returns a fixed
success message. Invalid requests never reach the handler; they are turned
into 400 responses by the request validation exception handler.
"""

from fastapi import APIRouter, status

from app.core.logging_config import get_logger
from app.core.responses import success_response
from app.schemas.auth import AuthRequest, AuthResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "",
    response_model=AuthResponse,
    summary="Authenticate",
    responses={
        status.HTTP_400_BAD_REQUEST: {
            "model": AuthResponse,
            "description": "Email or password failed validation",
        },
        status.HTTP_401_UNAUTHORIZED: {"model": AuthResponse, "description": "Unauthorized"},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": AuthResponse,
            "description": "Internal server error",
        },
    },
)
async def auth(request: AuthRequest):
    """
    Validate an auth request.

    - **email**: required, must be a valid email address
    - **password**: required, must satisfy the configured password policy

    Returns 200 with message "success" once the request validates.
    """
    logger.info("Auth request accepted")
    return success_response(status_code=status.HTTP_200_OK, message="success")
