from datetime import datetime
from pydantic import BaseModel, EmailStr, Field
from pydantic.alias_generators import to_camel

class RegisterIn(BaseModel):
    name: str = Field(min_length=2, max_length=120)
    email: EmailStr
    password: str = Field(min_length=6, max_length=256)

class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

class UserOut(BaseModel):
    id: int
    name: str
    email: str
    role: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True

class AuthOut(BaseModel):
    user: UserOut
    message: str

class MeOut(BaseModel):
    user: UserOut
