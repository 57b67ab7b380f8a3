from fastapi import Request, Response
from posadmin.config import settings

COOKIE_NAME = "token"
COOKIE_MAX_AGE = 60 * 60 * 24 * 7

def set_auth_cookie(response: Response, token: str):
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
        path="/",
        max_age=COOKIE_MAX_AGE,
    )

def clear_auth_cookie(response: Response):
    response.set_cookie(
        key=COOKIE_NAME,
        value="",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
        path="/",
        max_age=0,
    )

def get_auth_token(request: Request) -> str | None:
    return request.cookies.get(COOKIE_NAME) or None
