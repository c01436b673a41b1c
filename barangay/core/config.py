# Centralised application configuration
# (environment variables, constants, defaults).

import os


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    def __init__(self):
        self.APP_NAME = os.getenv("APP_NAME", "Barangay Records Backend")
        self.PORT = int(os.getenv("PORT", "5000"))
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

        # Empty means the document store lives in memory only
        self.DATA_FILE = os.getenv("DATA_FILE", "")

        self.BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

        self.JWT_SECRET = os.getenv("JWT_SECRET", "dev-change-me")
        self.JWT_ISSUER = os.getenv("JWT_ISSUER", "barangay-local")
        self.JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "barangay-web")
        self.ACCESS_TOKEN_TTL_SECONDS = int(os.getenv("ACCESS_TOKEN_TTL_SECONDS", "900"))  # 15 Minutes
        self.ADMIN_AUTH_REQUIRED = _env_bool("ADMIN_AUTH_REQUIRED", "false")

        self.CORS_ORIGINS = [
            o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if o.strip()
        ]

        self.RATE_LIMIT_ENABLED = _env_bool("RATE_LIMIT_ENABLED", "false")
        self.MAX_LOGIN_ATTEMPTS_PER_MINUTE = int(os.getenv("MAX_LOGIN_ATTEMPTS_PER_MINUTE", "10"))

        self.SEED_DEFAULT_ADMIN = _env_bool("SEED_DEFAULT_ADMIN", "true")
        self.DEFAULT_ADMIN_IDENTITY = os.getenv("DEFAULT_ADMIN_IDENTITY", "admin")
        self.DEFAULT_ADMIN_SECRET = os.getenv("DEFAULT_ADMIN_SECRET", "admin")


settings = Settings()
