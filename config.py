import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

class Config:
    # Secrets (signs bearer tokens)
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")

    # SQLite database file stored next to the app as appointments.db
    # Any backend with partial unique indexes works (SQLite, PostgreSQL)
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(BASE_DIR, "appointments.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # SQLite writers queue on the database lock for up to this many seconds
    SQLITE_BUSY_TIMEOUT_SECONDS = int(os.getenv("SQLITE_BUSY_TIMEOUT_SECONDS", "30"))
    SQLALCHEMY_ENGINE_OPTIONS = (
        {"connect_args": {"timeout": SQLITE_BUSY_TIMEOUT_SECONDS}}
        if SQLALCHEMY_DATABASE_URI.startswith("sqlite")
        else {}
    )

    # Browser origins allowed to call the API ("*" or a comma-separated list)
    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

    # Bearer token lifetime: 24 hours
    TOKEN_LIFETIME_SECONDS = int(os.getenv("TOKEN_LIFETIME_SECONDS", str(24 * 60 * 60)))

    # Business calendar: start times open..close inclusive
    BUSINESS_OPEN_HOUR = int(os.getenv("BUSINESS_OPEN_HOUR", "9"))
    BUSINESS_CLOSE_HOUR = int(os.getenv("BUSINESS_CLOSE_HOUR", "17"))
    SLOT_GRANULARITY_MINUTES = int(os.getenv("SLOT_GRANULARITY_MINUTES", "60"))

    # Password policy
    PASSWORD_MIN_LEN = 8
    PASSWORD_MAX_LEN = 128
    PASSWORD_REQUIRE_UPPER = True
    PASSWORD_REQUIRE_LOWER = True
    PASSWORD_REQUIRE_DIGIT = True
    PASSWORD_REQUIRE_SYMBOL = True
    BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

    # Registration
    NAME_MIN_LEN = 2
    NAME_MAX_LEN = 50

    # Basic app settings
    DEBUG = False
