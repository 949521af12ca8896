"""
Core dependencies for route protection and admin checks
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.database.supabase_client import get_supabase
from app.modules.auth.service import AuthService
from supabase import Client
from typing import Optional
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    token = credentials.credentials
    return auth_service.get_current_user(token)


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(optional_security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[dict]:
    """Current user when a bearer token is sent, None for anonymous callers (contact form, mortgage leads)"""
    if credentials is None:
        return None
    return auth_service.get_current_user(credentials.credentials)


def check_is_admin(supabase: Client, user_id: Optional[str] = None, email: Optional[str] = None) -> bool:
    """True if the email or id belongs to an active row of admin_users"""
    try:
        if email:
            normalized_email = email.lower().strip()
            result = supabase.table("admin_users")\
                .select("id, email, is_active")\
                .eq("email", normalized_email)\
                .eq("is_active", True)\
                .execute()
            if result.data:
                return True
        if user_id:
            result = supabase.table("admin_users")\
                .select("id, is_active")\
                .eq("id", user_id)\
                .eq("is_active", True)\
                .execute()
            if result.data:
                return True
        return False
    except Exception as e:
        logger.error(f"Error checking admin status: {e}")
        return False


def is_admin(user_data: dict, supabase: Client) -> bool:
    return check_is_admin(supabase, user_id=user_data.get("id"), email=user_data.get("email"))


def require_admin(
    user_data: dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase)
) -> dict:
    """Dependency for admin panel routes"""
    if not is_admin(user_data, supabase):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return user_data


def check_owner_or_admin(owner_id: Optional[str], user_data: dict, supabase: Client) -> dict:
    """Allow the listing owner or an admin"""
    if owner_id and owner_id == user_data["id"]:
        return user_data
    if is_admin(user_data, supabase):
        return user_data
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Only the owner or an admin can modify this property"
    )

