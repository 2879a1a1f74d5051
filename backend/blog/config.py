from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)

    # Application settings
    ENV: str = "dev"
    DEBUG: bool = False
    SECRET_KEY: str = "your-secret-key-change-in-production"
    HOST: str = "127.0.0.1"
    PORT: int = 8080

    # Database settings
    DATABASE_URL: str = "sqlite:///./blog.db"
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 20

    # Sessions
    SESSION_COOKIE: str = "session"
    SESSION_MAX_AGE: int = 14 * 24 * 60 * 60

    # Application specific
    PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100
    BCRYPT_ROUNDS: int = 12
    TEMPLATES_DIR: Optional[str] = None

    # Security
    ALLOWED_ORIGINS: str = "http://localhost:8080,http://127.0.0.1:8080"
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 30
    AUTH_RATE_LIMIT_PER_MINUTE: int = 10

    @property
    def allowed_origins_list(self) -> List[str]:
        """Convert comma-separated ALLOWED_ORIGINS to list"""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.ENV.lower() == "prod"
