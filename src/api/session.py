"""Access token transport: the session cookie and the bearer header fallback."""

from fastapi import Request, Response

from src.config import get_settings

settings = get_settings()

COOKIE_PATH = "/"


def _cookie_attributes() -> dict:
    """Security attributes shared by setting and clearing the cookie."""
    return {
        "path": COOKIE_PATH,
        "httponly": True,
        "secure": settings.is_production,
        "samesite": "none" if settings.is_production else "lax",
    }


def attach_access_token(response: Response, token: str) -> None:
    """Store the access token in an HTTP-only cookie on the response."""
    response.set_cookie(
        key=settings.access_cookie_name,
        value=token,
        max_age=settings.access_token_max_age,
        **_cookie_attributes(),
    )


def extract_access_token(request: Request) -> str | None:
    """Read the access token from the cookie, falling back to a bearer header."""
    token = request.cookies.get(settings.access_cookie_name)
    if token:
        return token

    authorization = request.headers.get("Authorization")
    if authorization:
        scheme, _, value = authorization.partition(" ")
        if scheme.lower() == "bearer" and value.strip():
            return value.strip()
    return None


def clear_access_token(response: Response) -> None:
    """Tell the client to discard the access token cookie."""
    response.delete_cookie(key=settings.access_cookie_name, **_cookie_attributes())
