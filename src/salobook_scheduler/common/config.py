'''
Holds all the configurations
'''
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """
    Manages scheduler configuration using environment variables.
    """
    # Application Metadata
    APP_NAME: str = "Salobook Scheduler"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Availability timelines and booking slot sequencing for Salobook."
    TEST_MODE: bool = False

    # Time-off blocks are stored in UTC while schedules and breaks are local
    # wall-clock times. This is the fixed offset applied to the blocks.
    LOCAL_UTC_OFFSET_MINUTES: int = 330  # +05:30, Sri Lanka

    # Fallback labels for segments whose source record has no reason
    DEFAULT_BREAK_REASON: str = "Break"
    DEFAULT_TIME_OFF_REASON: str = "Time Off"

    # Extra CORS origins on top of the ones hardcoded in main.py
    BACKEND_CORS_ORIGINS: list[str] = []

    class Config:
        env_file = ".env" # automatically loads the .env

# Create a single, importable instance of the settings
settings = Settings()
