from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql+asyncpg://user:password@db:5432/clubs_db"
    REDIS_URL: str = "redis://localhost:6379/0"
    GOOGLE_API_KEY: str = "your_google_key"
    # Google Maps web service endpoints
    GEOCODE_API_URL: str = "https://maps.googleapis.com/maps/api/geocode/json"
    DISTANCE_MATRIX_API_URL: str = "https://maps.googleapis.com/maps/api/distancematrix/json"
    STATIC_MAP_API_URL: str = "https://maps.googleapis.com/maps/api/staticmap"
    # How many closest clubs to return, fixed for the process lifetime
    CLOSEST_CLUBS_TO_RETURN: int = Field(5, ge=1)
    DEFAULT_REGION: str = "ca"
    HTTP_TIMEOUT_SECONDS: float = 10.0
    ANNOTATION_TIMEOUT_SECONDS: float = 5.0
    ANNOTATION_CONCURRENCY: int = Field(5, ge=1)
    STATIC_MAP_SIZE: str = "573x300"
    STATIC_MAP_TYPE: str = "roadmap"
    STATIC_MAP_FORMAT: str = "png"
    STATIC_MAP_VERIFY: bool = False
    LOG_LEVEL: str = "INFO"
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
