from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    APP_NAME: str = "TaxBuddy API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Supabase
    SUPABASE_URL: str = ""
    SUPABASE_KEY: str = ""
    SUPABASE_SERVICE_ROLE_KEY: str = ""
    CALCULATIONS_TABLE: str = "saved_calculations"

    # Document extraction (Supabase edge function)
    EXTRACTION_FUNCTION: str = "analyze-tax-docs"
    EXTRACTION_TIMEOUT: float = 60.0
    EXTRACTION_MAX_PAYLOAD_BYTES: int = 8 * 1024 * 1024

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
