import asyncio
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from app.config import settings
from app.modules.users import routes as users_routes
from app.modules.auth import routes as auth_routes
from app.modules.storage import routes as storage_routes
from app.modules.listings import routes as listings_routes
from app.modules.reviews import routes as reviews_routes
from app.modules.favorites import routes as favorites_routes
from app.modules.saved_searches import routes as saved_searches_routes
from app.modules.notifications import routes as notifications_routes
from app.modules.approvals import routes as approvals_routes
from app.modules.removal_requests import routes as removal_requests_routes
from app.modules.admin import routes as admin_routes
from app.modules.announcements import routes as announcements_routes
from app.modules.forums import routes as forums_routes
from app.modules.contacts import routes as contacts_routes
from app.modules.mortgage import routes as mortgage_routes
from app.modules.news import routes as news_routes
from app.modules.saved_searches.poller import saved_search_poller_loop

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include module routes
for module_routes in (
    auth_routes,
    users_routes,
    storage_routes,
    listings_routes,
    reviews_routes,
    favorites_routes,
    saved_searches_routes,
    notifications_routes,
    approvals_routes,
    removal_requests_routes,
    admin_routes,
    announcements_routes,
    forums_routes,
    contacts_routes,
    mortgage_routes,
    news_routes,
):
    app.include_router(module_routes.router, prefix="/api/v1")


_poller_task = None


@app.on_event("startup")
async def startup_event():
    global _poller_task
    logger.info("Application startup")

    if settings.saved_search_poll_enabled:
        _poller_task = asyncio.create_task(saved_search_poller_loop())
        logger.info(
            f"Saved search poller started - checking every {settings.saved_search_poll_minutes} minutes"
        )


@app.on_event("shutdown")
async def shutdown_event():
    if _poller_task is not None:
        _poller_task.cancel()
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": "Welcome to plotify-backend", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness probe: extend here with a Supabase ping if needed."""
    return {"status": "ready"}
