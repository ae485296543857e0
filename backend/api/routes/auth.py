"""
Auth endpoints.
"""

from fastapi import APIRouter, status
from fastapi.responses import RedirectResponse

from shared.config import get_settings

router = APIRouter()


@router.post("/logout")
async def logout() -> RedirectResponse:
    """Clear the session cookie and send the browser to the login page."""
    settings = get_settings()
    response = RedirectResponse(url="/login", status_code=status.HTTP_302_FOUND)
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        secure=settings.session_cookie_secure,
        httponly=True,
        samesite="lax",
    )
    return response
