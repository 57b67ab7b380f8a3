import logging
from sqlalchemy import func
from sqlalchemy.orm import Session
from posadmin.errors import BadRequest, Unauthorized, NotFound
from posadmin.models.user import User, ROLE_ADMIN, ROLE_CASHIER
from posadmin.utils.security import hash_password, verify_password, create_access_token, TokenClaims

logger = logging.getLogger(__name__)

def _normalize_email(email: str) -> str:
    return email.strip().lower()

def issue_token(user: User) -> str:
    return create_access_token(TokenClaims(id=user.id, email=user.email, name=user.name, role=user.role))

def register_user(db: Session, name: str, email: str, password: str) -> User:
    email = _normalize_email(email)
    if db.query(User).filter(User.email == email).first():
        raise BadRequest("Email is already registered")

    # first account bootstraps the store owner
    is_first = db.query(func.count(User.id)).scalar() == 0
    role = ROLE_ADMIN if is_first else ROLE_CASHIER

    user = User(name=name.strip(), email=email, password_hash=hash_password(password), role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s with role %s", user.id, user.role)
    return user

def authenticate_user(db: Session, email: str, password: str) -> User:
    user = db.query(User).filter(User.email == _normalize_email(email)).first()
    if not user or not verify_password(password, user.password_hash):
        logger.info("Failed login for %s", email)
        raise Unauthorized("Invalid email or password")
    return user

def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    return user

def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.created_at.asc(), User.id.asc()).all()
