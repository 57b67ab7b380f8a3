from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from posadmin.auth.cookies import set_auth_cookie, clear_auth_cookie
from posadmin.auth.deps import get_db, get_identity, require_admin
from posadmin.auth.identity import Identity
from posadmin.schemas.auth import RegisterIn, LoginIn, AuthOut, MeOut, UserOut
from posadmin.auth.service import register_user, authenticate_user, issue_token, get_user, list_users

router = APIRouter(prefix="/api/auth", tags=["auth"])
admin_router = APIRouter(prefix="/api/admin", tags=["admin"])

@router.post("/register", response_model=AuthOut, status_code=status.HTTP_201_CREATED)
def register(body: RegisterIn, response: Response, db: Session = Depends(get_db)):
    user = register_user(db, body.name, body.email, body.password)
    set_auth_cookie(response, issue_token(user))
    return AuthOut(user=UserOut.model_validate(user), message="Registration successful")

@router.post("/login", response_model=AuthOut)
def login(body: LoginIn, response: Response, db: Session = Depends(get_db)):
    user = authenticate_user(db, body.email, body.password)
    set_auth_cookie(response, issue_token(user))
    return AuthOut(user=UserOut.model_validate(user), message="Login successful")

@router.post("/logout")
def logout(response: Response):
    clear_auth_cookie(response)
    return {"success": True, "message": "Logout successful"}

@router.get("/me", response_model=MeOut)
def me(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    return MeOut(user=UserOut.model_validate(get_user(db, identity.id)))

@admin_router.get("/users", response_model=list[UserOut])
def users(identity: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    return list_users(db)
