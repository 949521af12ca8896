from fastapi import APIRouter, Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.database.supabase_client import get_supabase
from app.modules.auth.schemas import SignUpRequest, SignInRequest, AuthResponse, AdminAuthResponse
from app.modules.auth.service import AuthService
from app.core.dependencies import get_current_user_id, is_admin
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])

# Security scheme for JWT Bearer token
security = HTTPBearer()


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


@router.post("/sign-up", response_model=AuthResponse, status_code=201)
async def sign_up(
    sign_up_data: SignUpRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user"""
    return service.sign_up(sign_up_data)


@router.post("/sign-in", response_model=AuthResponse)
async def sign_in(
    sign_in_data: SignInRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Sign in and get access token"""
    return service.sign_in(sign_in_data)


@router.post("/admin/sign-in", response_model=AdminAuthResponse)
async def admin_sign_in(
    sign_in_data: SignInRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Sign in to the admin panel"""
    return service.admin_sign_in(sign_in_data)


@router.post("/sign-out", status_code=200)
async def sign_out(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Sign out and drop the cached session"""
    service.sign_out(token)
    return {"message": "Signed out successfully"}


@router.get("/me")
async def get_current_user(
    current_user: Dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase),
):
    """Get current authenticated user and whether they can open the admin panel"""
    return {**current_user, "is_admin": is_admin(current_user, supabase)}
