'''
Holds all the configurations
'''
from decimal import Decimal
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """
    Manages application configuration using environment variables.
    """
    # Application Metadata
    APP_NAME: str = "Batch Admin Backend"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "The backend API for the batch and teacher admin console."
    TEST_MODE: bool = False

    # Database URL
    DATABASE_URL_PROD: str = "postgresql+psycopg://localhost/batch_admin"
    DATABASE_URL_TEST: str = "sqlite+aiosqlite:///:memory:"
    @property
    def database_url(self) -> str:
        """
        Dynamically returns the correct database URL based on the test_mode flag.
        """
        if self.TEST_MODE:
            return self.DATABASE_URL_TEST
        return self.DATABASE_URL_PROD

    # JWT Settings
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    BCRYPT_ROUNDS: int = 10

    # CORS
    BACKEND_CORS_ORIGINS: list[str] = []

    # Revenue attribution
    TEACHER_EARNINGS_RATE: Decimal = Decimal("0.30")  # share of completed sales
    BATCH_TEACHER_SHARE_RATE: Decimal = Decimal("0.20")
    BATCH_PLATFORM_SHARE_RATE: Decimal = Decimal("0.30")

    class Config:
        env_file = ".env" # automatically loads the .env

# Create a single, importable instance of the settings
settings = Settings()
