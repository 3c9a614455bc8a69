"""
Configuration module for the Flight Booking Chat application.
Handles environment variables and application settings.
"""
import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration class."""

    # Model host
    OLLAMA_HOST: str = os.getenv("OLLAMA_HOST", "http://localhost:11434")
    CHAT_MODEL: str = os.getenv("CHAT_MODEL", "llama3.1:8b")
    SAMPLE_DATA_MODEL: str = os.getenv("SAMPLE_DATA_MODEL", os.getenv("CHAT_MODEL", "llama3.1:8b"))

    # Sessions
    SESSION_SECRET: str = os.getenv("SESSION_SECRET", "")
    SESSION_ALGORITHM: str = os.getenv("SESSION_ALGORITHM", "HS256")
    SESSION_TTL_MINUTES: int = int(os.getenv("SESSION_TTL_MINUTES", "60"))

    # Storage
    DATABASE_PATH: str = os.getenv("DATABASE_PATH", "data/bookings.db")

    # API Configuration
    OPEN_METEO_URL: str = "https://api.open-meteo.com/v1/forecast"

    # Application Settings
    APP_TITLE: str = "Flight Booking Chat"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    MAX_TOOL_ROUNDTRIPS: int = int(os.getenv("MAX_TOOL_ROUNDTRIPS", "5"))

    # Timeouts (in seconds)
    WEATHER_TIMEOUT: float = 10.0
    MAX_REDIRECTS: int = 5

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and print warnings for missing secrets."""
        if not cls.SESSION_SECRET:
            print("   WARNING: SESSION_SECRET not found in .env file")
            print("   Every request will be rejected until a session signing secret is configured.")


Config.validate()
