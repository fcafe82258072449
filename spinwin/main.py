from fastapi import FastAPI, HTTPException, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from dotenv import load_dotenv
import logging

# Load environment variables as early as possible
load_dotenv()

from .config import settings
from .dependencies import get_store
from .middleware import SecurityMiddleware, LoggingMiddleware, ErrorHandlingMiddleware
from .exceptions import http_exception_handler, validation_exception_handler
from .routers import verification_router, offers_router, admin_router, maintenance_router
from .schemas.common.common import HealthResponse
from .application.ports.kv_store import KeyValueStore
from .application.time_utils import resolve_timezone
from .infrastructure.kv.redis_store import RedisKeyValueStore

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format=settings.LOG_FORMAT
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"Starting {settings.APP_NAME}...")
    # fail fast on a bad zone name rather than on the first spin
    resolve_timezone(settings.COOLDOWN_TIMEZONE)
    if not settings.otp_config_valid:
        logger.warning("Neither email nor phone OTP is enabled; nobody can verify")
    if settings.ADMIN_API_KEY == "admin-secret-key":
        logger.warning("ADMIN_API_KEY is using the default value")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME}...")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
    docs_url=("/docs" if settings.DOCS_ENABLED else None),
    redoc_url=("/redoc" if settings.DOCS_ENABLED else None),
    openapi_url=("/openapi.json" if settings.DOCS_ENABLED else None)
)

# Add custom exception handlers
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

# Add middleware
app.add_middleware(ErrorHandlingMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityMiddleware)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.allowed_methods_list,
    allow_headers=settings.allowed_headers_list,
)

app.include_router(verification_router.router)
app.include_router(offers_router.router)
app.include_router(admin_router.router)
app.include_router(maintenance_router.router)


@app.get("/health", response_model=HealthResponse)
def health(store: KeyValueStore = Depends(get_store)):
    if isinstance(store, RedisKeyValueStore):
        status = "ok" if store.ping() else "degraded"
        return HealthResponse(status=status, store="redis", version=settings.APP_VERSION)
    return HealthResponse(status="ok", store="memory", version=settings.APP_VERSION)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("spinwin.main:app", host=settings.HOST, port=settings.PORT)
