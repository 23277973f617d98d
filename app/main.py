import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from app.config import settings
from app.core.errors import register_exception_handlers
from app.database.supabase_client import SupabaseClients
from app.modules.auth import routes as auth_routes
from app.modules.users import routes as users_routes
from app.modules.reports import routes as reports_routes
from app.modules.triangle import routes as triangle_routes
from app.modules.learning import routes as learning_routes

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
app.state.supabase = SupabaseClients(settings)
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
register_exception_handlers(app, expose_details=settings.debug and not settings.is_production)


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


app.add_middleware(SlowAPIMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include module routes
app.include_router(auth_routes.router, prefix="/api")
app.include_router(users_routes.router, prefix="/api")
app.include_router(reports_routes.router, prefix="/api")
app.include_router(triangle_routes.router, prefix="/api")
app.include_router(learning_routes.router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    if settings.is_supabase_configured:
        logger.info("Application startup")
    else:
        logger.warning("Application startup in demo mode: Supabase is not configured")


@app.on_event("shutdown")
async def shutdown_event():
    app.state.supabase.reset()
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": "Welcome to esim-triangle-backend", "status": "healthy"}


@app.get("/api/config")
async def public_config():
    """Lets the frontend know whether it talks to Supabase or runs in demo mode."""
    return {"app_name": settings.app_name, "demo_mode": not settings.is_supabase_configured}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness probe: ready once the provider is configured."""
    return {"status": "ready" if settings.is_supabase_configured else "demo"}


def run():
    import uvicorn

    logger.info(f"Backend running on port {settings.port}")
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())
