import hashlib
import time
from supabase import Client
from app.modules.auth.schemas import (
    SignUpRequest, SignInRequest, AuthResponse, AppUser, AdminAuthResponse, AdminUser
)
from app.core.formatters import utc_now_iso
from fastapi import HTTPException
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def clear_auth_cache() -> None:
    _AUTH_USER_CACHE.clear()


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        result = self.supabase.table("users")\
            .select("*")\
            .eq("id", user_id)\
            .maybe_single()\
            .execute()
        if not result or not result.data:
            return None
        return result.data

    @staticmethod
    def _to_app_user(profile: Dict[str, Any]) -> AppUser:
        return AppUser(
            id=profile["id"],
            name=profile.get("name") or "",
            email=profile.get("email") or "",
            avatar=profile.get("avatar_url") or ""
        )

    def sign_up(self, sign_up_data: SignUpRequest) -> AuthResponse:
        """Create a Supabase Auth account and its public.users profile"""
        normalized_email = sign_up_data.email.lower().strip()
        try:
            existing = self.supabase.table("users")\
                .select("id, email")\
                .eq("email", normalized_email)\
                .execute()
            if existing.data:
                raise HTTPException(status_code=400, detail="User with this email already exists")

            auth_response = self.supabase.auth.sign_up({
                "email": normalized_email,
                "password": sign_up_data.password,
                "options": {
                    "data": {"name": sign_up_data.name.strip()}
                }
            })
            if not auth_response.user:
                raise HTTPException(status_code=400, detail="Failed to create account")

            result = self.supabase.table("users").insert({
                "id": auth_response.user.id,
                "email": normalized_email,
                "name": sign_up_data.name.strip(),
                "phone": sign_up_data.phone.strip() if sign_up_data.phone else None,
                "avatar_url": None,
                "is_verified": False,
                "is_active": True,
                "metadata": {},
            }).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create user profile")

            session = auth_response.session
            return AuthResponse(
                access_token=session.access_token if session else None,
                refresh_token=session.refresh_token if session else None,
                user=self._to_app_user(result.data[0])
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            logger.error(f"Sign up error: {error_message}")
            if "already registered" in error_message.lower() or "already exists" in error_message.lower():
                raise HTTPException(status_code=400, detail="User with this email already exists")
            if "row-level security" in error_message.lower():
                raise HTTPException(
                    status_code=500,
                    detail="Database security policy error. Row Level Security policies for public.users must allow sign-up."
                )
            raise HTTPException(status_code=500, detail=f"Sign up failed: {error_message}")

    def sign_in(self, sign_in_data: SignInRequest) -> AuthResponse:
        """Password sign-in; the profile must exist and be active"""
        normalized_email = sign_in_data.email.lower().strip()
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": normalized_email,
                "password": sign_in_data.password
            })
        except Exception as e:
            logger.info(f"Sign in rejected for {normalized_email}: {e}")
            raise HTTPException(status_code=401, detail="Invalid email or password")

        if not auth_response.user or not auth_response.session:
            raise HTTPException(status_code=401, detail="Invalid email or password")

        try:
            profile = self._get_profile(auth_response.user.id)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not profile:
            raise HTTPException(status_code=401, detail="Invalid email or password")
        if not profile.get("is_active", True):
            raise HTTPException(status_code=403, detail="Account is inactive. Please contact support.")

        try:
            now = utc_now_iso()
            self.supabase.table("users")\
                .update({"last_login": now, "updated_at": now})\
                .eq("id", profile["id"])\
                .execute()
        except Exception as e:
            # Sign in is still successful
            logger.error(f"Error updating last_login: {e}")

        return AuthResponse(
            access_token=auth_response.session.access_token,
            refresh_token=auth_response.session.refresh_token,
            user=self._to_app_user(profile)
        )

    def admin_sign_in(self, sign_in_data: SignInRequest) -> AdminAuthResponse:
        """Sign in and require an active admin_users row for the email"""
        normalized_email = sign_in_data.email.lower().strip()
        try:
            admin_result = self.supabase.table("admin_users")\
                .select("*")\
                .eq("email", normalized_email)\
                .maybe_single()\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        admin = admin_result.data if admin_result else None
        if not admin:
            raise HTTPException(status_code=401, detail="Invalid admin credentials")
        if not admin.get("is_active"):
            raise HTTPException(status_code=403, detail="Admin account is inactive. Please contact support.")

        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": normalized_email,
                "password": sign_in_data.password
            })
        except Exception as e:
            logger.info(f"Admin sign in rejected for {normalized_email}: {e}")
            raise HTTPException(status_code=401, detail="Invalid admin credentials")
        if not auth_response.user or not auth_response.session:
            raise HTTPException(status_code=401, detail="Invalid admin credentials")

        try:
            now = utc_now_iso()
            self.supabase.table("admin_users")\
                .update({"last_login": now, "updated_at": now})\
                .eq("id", admin["id"])\
                .execute()
        except Exception as e:
            logger.error(f"Error updating admin last_login: {e}")

        return AdminAuthResponse(
            access_token=auth_response.session.access_token,
            admin=AdminUser(id=admin["id"], email=admin["email"], name=admin.get("name") or "")
        )

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token. Uses short TTL cache to reduce auth API calls."""
        try:
            cache_key = hashlib.sha256(token.encode()).hexdigest()
            now = time.monotonic()
            if cache_key in _AUTH_USER_CACHE:
                user_data, expiry = _AUTH_USER_CACHE[cache_key]
                if now < expiry:
                    return user_data
                del _AUTH_USER_CACHE[cache_key]
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            user = user_response.user
            user_metadata = user.user_metadata or {}
            user_data = {
                "id": user.id,
                "email": user.email,
                "name": user_metadata.get("name") or user_metadata.get("full_name") or (user.email or "").split("@")[0],
                "user_metadata": user_metadata,
                "app_metadata": user.app_metadata or {},
            }
            if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
                _AUTH_USER_CACHE[cache_key] = (user_data, now + _AUTH_CACHE_TTL_SEC)
            return user_data
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

    def sign_out(self, token: str) -> None:
        """Drop the cached user for this token; the shared client keeps no per-user session"""
        _AUTH_USER_CACHE.pop(hashlib.sha256(token.encode()).hexdigest(), None)
