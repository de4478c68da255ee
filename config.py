import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./credcore.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Tokens
    JWT_ACCESS_SECRET = data.get("JWT_ACCESS_SECRET")
    JWT_REFRESH_SECRET = data.get("JWT_REFRESH_SECRET")
    JWT_ISSUER = data.get("JWT_ISSUER", "iFi")
    JWT_AUDIENCE = data.get("JWT_AUDIENCE", "iFi-users")
    TOKEN_VERSION = int(data.get("TOKEN_VERSION", 2))
    ACCESS_TOKEN_TTL_MINUTES = int(data.get("ACCESS_TOKEN_TTL_MINUTES", 15))
    REFRESH_TOKEN_TTL_DAYS = int(data.get("REFRESH_TOKEN_TTL_DAYS", 7))
    PASSWORD_RESET_TTL_MINUTES = int(data.get("PASSWORD_RESET_TTL_MINUTES", 60))

    # Secrets at rest and inbound notifications
    ENCRYPTION_KEY = data.get("ENCRYPTION_KEY")
    WEBHOOK_SECRET = data.get("WEBHOOK_SECRET")

    # Rate limiting
    RATE_LIMIT_BACKEND = data.get("RATE_LIMIT_BACKEND", "memory")
    REDIS_URL = data.get("REDIS_URL", "redis://localhost:6379/0")

    STORE_TIMEOUT_SECONDS = float(data.get("STORE_TIMEOUT_SECONDS", 5))
    SESSION_SWEEP_INTERVAL_SECONDS = int(data.get("SESSION_SWEEP_INTERVAL_SECONDS", 3600))

    # 0 disables Strict-Transport-Security
    HSTS_MAX_AGE_SECONDS = int(data.get("HSTS_MAX_AGE_SECONDS", 31536000))
