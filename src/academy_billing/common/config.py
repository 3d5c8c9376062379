'''
Holds all the configurations
'''
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """
    Manages application configuration using environment variables.
    """
    # Application Metadata
    APP_NAME: str = "Academy Billing"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Per-student billing cycle engine for the academy platform."
    TEST_MODE: bool = False
    LOG_LEVEL: str = "INFO"

    # Escalation thresholds, in days since the current period's due date
    ESCALATION_WARNING_DAYS: int = 5
    ESCALATION_BLOCK_DAYS: int = 10

    # How many students the overdue report returns by default
    OVERDUE_LIST_LIMIT: int = 10

    # Extra CORS origins for deployed frontends
    BACKEND_CORS_ORIGINS: list[str] = []

    class Config:
        env_file = ".env" # automatically loads the .env
        extra = "ignore"

# Create a single, importable instance of the settings
settings = Settings()
