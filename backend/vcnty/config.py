# backend/vcnty/config.py
from pydantic import BaseModel
import os

class Settings(BaseModel):
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "http://localhost:8501")

    # Upstream VCNTY backend (stores / items / orders)
    VCNTY_API_URL: str = os.getenv("VCNTY_API_URL", "http://localhost/api")

    # Bulk import
    MAX_UPLOAD_BYTES: int = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))
    DEFAULT_CURRENCY: str = os.getenv("DEFAULT_CURRENCY", "EUR")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_JSON: bool = os.getenv("LOG_JSON", "false").lower() in ("1", "true", "yes")

settings = Settings()
