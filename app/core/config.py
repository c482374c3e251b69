from pydantic_settings import BaseSettings
from typing import List
import os
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    # App Settings
    APP_NAME: str = os.getenv("APP_NAME", "SalonSlots")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # MongoDB Settings
    MONGO_URI: str = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    DB_NAME: str = os.getenv("DB_NAME", "salonslots_db")

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",  # Next.js frontend
    ]

    # Booking defaults
    DEFAULT_SERVICE_DURATION_MINUTES: int = int(os.getenv("DEFAULT_SERVICE_DURATION_MINUTES", "30"))
    DEFAULT_BOOKING_DURATION_MINUTES: int = int(os.getenv("DEFAULT_BOOKING_DURATION_MINUTES", "60"))
    DEFAULT_OPEN_TIME: str = os.getenv("DEFAULT_OPEN_TIME", "09:00")
    DEFAULT_CLOSE_TIME: str = os.getenv("DEFAULT_CLOSE_TIME", "17:00")

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
