from dataclasses import dataclass
from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError
from posadmin.config import settings
from posadmin.errors import InvalidToken

ALGORITHM = "HS256"
CLAIM_FIELDS = ("id", "email", "name", "role")

pwd_context = CryptContext(schemes=["bcrypt_sha256", "bcrypt"], deprecated="auto")


@dataclass(frozen=True)
class TokenClaims:
    id: int
    email: str
    name: str
    role: str


def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(password: str, hashed: str) -> bool:
    return pwd_context.verify(password, hashed)

def create_access_token(claims: TokenClaims, expires_delta: timedelta | None = None) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta if expires_delta is not None else timedelta(minutes=settings.access_token_expire_minutes))
    to_encode = {
        "sub": str(claims.id),
        "id": claims.id,
        "email": claims.email,
        "name": claims.name,
        "role": claims.role,
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(to_encode, settings.require_secret(), algorithm=ALGORITHM)

def decode_token(token: str) -> TokenClaims:
    """Verify signature and expiry; any failure raises InvalidToken."""
    try:
        payload = jwt.decode(token, settings.require_secret(), algorithms=[ALGORITHM])
    except JWTError as e:
        raise InvalidToken(str(e)) from e

    if any(payload.get(field) in (None, "") for field in CLAIM_FIELDS):
        raise InvalidToken("Token is missing identity claims")
    try:
        user_id = int(payload["id"])
    except (TypeError, ValueError) as e:
        raise InvalidToken("Malformed id claim") from e

    return TokenClaims(
        id=user_id,
        email=str(payload["email"]),
        name=str(payload["name"]),
        role=str(payload["role"]),
    )
