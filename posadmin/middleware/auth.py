import logging
from fastapi import Request
from fastapi.responses import RedirectResponse
from posadmin.auth.cookies import get_auth_token
from posadmin.auth.identity import Identity, IDENTITY_HEADERS
from posadmin.errors import InvalidToken
from posadmin.utils.security import decode_token

logger = logging.getLogger(__name__)

PUBLIC_PATHS = ["/login", "/register", "/health", "/favicon.ico"]
PUBLIC_PREFIXES = ["/api/auth/", "/static/", "/uploads/"]
ADMIN_PREFIXES = ["/admin", "/api/admin"]

LOGIN_URL = "/login"
LANDING_URL = "/dashboard"

def _matches_prefix(path: str, prefix: str) -> bool:
    prefix = prefix.rstrip("/")
    return path == prefix or path.startswith(prefix + "/")

def is_public(path: str) -> bool:
    if path in PUBLIC_PATHS:
        return True
    return any(_matches_prefix(path, p) for p in PUBLIC_PREFIXES)

def is_admin_path(path: str) -> bool:
    return any(_matches_prefix(path, p) for p in ADMIN_PREFIXES)

def _inject_identity(request: Request, identity: Identity):
    trusted = {h.encode("latin-1") for h in IDENTITY_HEADERS}
    headers = [(k, v) for k, v in request.scope["headers"] if k.lower() not in trusted]
    headers.extend(identity.as_headers())
    request.scope["headers"] = headers
    request.state.identity = identity

async def auth_middleware(request: Request, call_next):
    path = request.url.path

    # public paths pass through untouched
    if is_public(path):
        return await call_next(request)

    token = get_auth_token(request)
    if not token:
        logger.debug("No session cookie for %s, redirecting to login", path)
        return RedirectResponse(url=LOGIN_URL, status_code=307)

    try:
        identity = Identity.from_claims(decode_token(token))
    except InvalidToken as e:
        logger.debug("Rejected session token for %s: %s", path, e)
        return RedirectResponse(url=LOGIN_URL, status_code=307)

    if is_admin_path(path) and not identity.is_admin:
        logger.debug("User %s (%s) denied admin path %s", identity.id, identity.role, path)
        return RedirectResponse(url=LANDING_URL, status_code=307)

    _inject_identity(request, identity)
    return await call_next(request)
