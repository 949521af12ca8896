from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Admin dashboard and background poller bypass RLS with this key

    # Storage buckets
    property_images_bucket: str = "KanpurRealty"
    avatars_bucket: str = "avatars"

    # AWS S3 (optional; Supabase Storage is used when not configured)
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_region: str = "ap-south-1"
    s3_bucket_name: Optional[str] = None

    # NewsAPI
    news_api_key: Optional[str] = None
    news_api_url: str = "https://newsapi.org/v2/everything"
    news_cache_hours: int = 6

    # Push notifications
    expo_push_url: str = "https://exp.host/--/api/v2/push/send"
    http_timeout_seconds: float = 10.0

    # Saved search polling
    saved_search_poll_enabled: bool = False
    saved_search_poll_minutes: int = 30

    # App
    app_name: str = "plotify-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:8081,http://localhost:19006,http://127.0.0.1:8081"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def s3_configured(self) -> bool:
        return all([self.aws_access_key_id, self.aws_secret_access_key, self.s3_bucket_name])

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
