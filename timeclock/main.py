from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from atams.db import Base, init_database
from atams.db import session as atams_session
from atams.logging import setup_logging_from_settings, get_logger
from atams.middleware import RequestIDMiddleware
from atams.exceptions import setup_exception_handlers
from atams.api import health_router

from timeclock.core.config import settings
from timeclock.api.v1.api import api_router
from timeclock.models import User, ClockEvent, AuditLog  # noqa: F401
from timeclock.services.user_service import UserService

# Setup logging
setup_logging_from_settings(settings)
logger = get_logger(__name__)

# Initialize database with connection pool settings
init_database(
    settings.DATABASE_URL,
    settings.DEBUG,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_recycle=settings.DB_POOL_RECYCLE,
    pool_timeout=settings.DB_POOL_TIMEOUT,
    pool_pre_ping=settings.DB_POOL_PRE_PING
)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    description="PIN kiosk clock-in / clock-out with weekly timesheets",
    swagger_ui_parameters={
        "persistAuthorization": True,
    },
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.cors_methods_list,
    allow_headers=settings.cors_headers_list,
)

# Request ID middleware
app.add_middleware(RequestIDMiddleware)

# Exception handlers
setup_exception_handlers(app)

# Include routers
app.include_router(health_router, prefix="/health", tags=["Health"])
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
def bootstrap() -> None:
    """Create tables and the default admin when missing"""
    engine = atams_session.engine
    with engine.begin() as conn:
        if conn.dialect.name == "postgresql":
            conn.execute(text("CREATE SCHEMA IF NOT EXISTS timeclock"))
        Base.metadata.create_all(bind=conn)

    if not settings.BOOTSTRAP_DEFAULT_ADMIN:
        return

    db = atams_session.SessionLocal()
    try:
        UserService().ensure_default_admin(db)
    finally:
        db.close()
    logger.info("Startup bootstrap completed")


@app.get("/", tags=["Root"])
async def root():
    """API Root - Basic information"""
    return {"name": settings.APP_NAME, "version": settings.APP_VERSION}
