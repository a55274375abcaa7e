from atams import AtamsBaseSettings


class Settings(AtamsBaseSettings):
    """
    Application Settings

    Inherits from AtamsBaseSettings which includes:
    - DATABASE_URL (required)
    - ENCRYPTION_ENABLED, ENCRYPTION_KEY, ENCRYPTION_IV (response encryption)
    - LOGGING_ENABLED, LOG_LEVEL, LOG_TO_FILE, LOG_FILE_PATH
    - CORS_ORIGINS, CORS_ALLOW_CREDENTIALS, CORS_ALLOW_METHODS, CORS_ALLOW_HEADERS
    - RATE_LIMIT_ENABLED, RATE_LIMIT_REQUESTS, RATE_LIMIT_WINDOW
    - DEBUG

    All settings can be overridden via .env file or by redefining them here.
    """
    APP_NAME: str = "Kiosk Timesheet"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Required by AtamsBaseSettings, admin auth is local (see ADMIN_JWT_*)
    ATLAS_APP_CODE: str = "TIMECLOCK"

    # Admin JWT Settings
    ADMIN_JWT_SECRET: str = "change-me-admin-jwt-secret"
    ADMIN_JWT_ALG: str = "HS256"
    ADMIN_TOKEN_EXPIRE_MINUTES: int = 1440

    # PIN / credential settings
    PIN_HASH_ROUNDS: int = 12
    PIN_MIN_LENGTH: int = 4
    PIN_MAX_LENGTH: int = 12

    # Default admin created on startup when missing
    BOOTSTRAP_DEFAULT_ADMIN: bool = True
    DEFAULT_ADMIN_EMAIL: str = "admin@system.local"
    DEFAULT_ADMIN_PASSWORD: str = "admin123"

    # Admin dashboard
    NOTIFICATION_LIMIT: int = 20
    AUDIT_PAGE_MAX: int = 1000


settings = Settings()
