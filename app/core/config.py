from typing import List

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Booking API"
    API_PREFIX: str = "/api"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    ENVIRONMENT: str = "production"
    CORS_ORIGINS: List[str] = ["*"]

    # MongoDB
    MONGODB_URI: str = "mongodb://localhost:27017/bookings"
    MONGODB_DB_NAME: str = "bookings"
    MONGODB_COLLECTION: str = "bookings"
    MONGODB_TIMEOUT_MS: int = 5000

    # Logging
    LOG_DIR: str = "logs"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
