import os
from typing import Annotated, List
from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

# Load environment variables from the correct .env file
env_file = ".env.production" if os.getenv("APP_ENV") == "production" else ".env"
load_dotenv(env_file)

class Settings(BaseSettings):
    APP_ENV: str = "development"
    DEBUG: bool = False
    DATABASE_URL: str
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_MINUTES: int = 60 * 12
    ALLOWED_ORIGINS: Annotated[List[str], NoDecode] = ["*"]
    LOG_LEVEL: str = "info"

    # Public URL the voice provider calls back on
    PUBLIC_BASE_URL: str = "http://localhost:8000"

    # File uploads
    UPLOAD_DIR: str = "uploads"
    UPLOAD_URL_PREFIX: str = "/uploads"

    # Bland AI (outbound voice calls)
    BLAND_AI_API_KEY: str = ""
    BLAND_AI_BASE_URL: str = "https://api.bland.ai/v1"
    BLAND_AI_VOICE: str = "nat"

    # ElevenLabs (voice cloning)
    ELEVENLABS_API_KEY: str = ""
    ELEVENLABS_BASE_URL: str = "https://api.elevenlabs.io/v1"

    EXTERNAL_TIMEOUT_SECONDS: float = 60.0

    @field_validator("ALLOWED_ORIGINS", mode="before")
    def split_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

settings = Settings()
