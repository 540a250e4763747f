# products_api/config.py
import os

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Service configuration, read once from the environment (and .env)."""
    APP_ENV = os.environ.get("APP_ENV", "production").strip().lower()

    HOST = os.environ.get("HOST", "0.0.0.0")
    PORT = int(os.environ.get("PORT", "3000"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    # Load the three sample products at startup
    SEED_SAMPLE_DATA = _env_flag("SEED_SAMPLE_DATA", "true")

    # CORS
    ALLOWED_ORIGINS = [o.strip() for o in os.environ.get("ALLOWED_ORIGINS", "*").split(",") if o.strip()]

    # Header checked by the auth middleware
    API_KEY_HEADER = "x-api-key"

    # Pagination defaults for GET /api/products
    DEFAULT_PAGE = 1
    DEFAULT_LIMIT = 10

    @classmethod
    def is_development(cls) -> bool:
        return cls.APP_ENV == "development"
