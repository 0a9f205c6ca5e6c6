import os
from typing import List


class Settings:
    DEBUG = os.getenv("DEBUG", "1") == "1"
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Secrets (externalized)
    SECRET_KEY = os.getenv("JOBLY_SECRET_KEY")
    if not SECRET_KEY:
        if DEBUG:
            SECRET_KEY = "secret-dev"
        else:
            raise RuntimeError("JOBLY_SECRET_KEY environment variable is not set. Fail Closed.")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

    # Speed up bcrypt during tests, since the algorithm safety isn't being tested
    BCRYPT_WORK_FACTOR = int(os.getenv("BCRYPT_WORK_FACTOR", "12"))

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = [
        o for o in os.getenv("JOBLY_CORS", "http://localhost:3000").split(",") if o
    ]

    # Rate limiting for the credential endpoints
    AUTH_RATE_LIMIT = os.getenv("AUTH_RATE_LIMIT", "10/minute")

    # Database
    DATABASE_URL = os.getenv("DATABASE_URL", "postgresql://localhost/jobly")


settings = Settings()
