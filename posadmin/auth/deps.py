from fastapi import Request, Depends
from posadmin.db.session import SessionLocal
from posadmin.auth.cookies import get_auth_token
from posadmin.auth.identity import Identity
from posadmin.errors import Unauthorized, Forbidden, InvalidToken
from posadmin.utils.security import decode_token


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_identity(request: Request) -> Identity:
    """Re-verify the session cookie; headers injected by the gate are ignored."""
    token = get_auth_token(request)
    if not token:
        raise Unauthorized("Unauthorized")
    try:
        claims = decode_token(token)
    except InvalidToken:
        raise Unauthorized("Unauthorized")
    return Identity.from_claims(claims)

def require_admin(identity: Identity = Depends(get_identity)) -> Identity:
    if not identity.is_admin:
        raise Forbidden("Forbidden - admin role required")
    return identity
