from pydantic import BaseModel, EmailStr
from typing import Optional


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str
    name: str
    phone: Optional[str] = None


class SignInRequest(BaseModel):
    email: EmailStr
    password: str


class AppUser(BaseModel):
    id: str
    name: str
    email: str
    avatar: str = ""


class AuthResponse(BaseModel):
    access_token: Optional[str] = None  # None when email confirmation is pending
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    user: AppUser


class AdminUser(BaseModel):
    id: str
    email: str
    name: str


class AdminAuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    admin: AdminUser
