from __future__ import annotations
import os
from pydantic import BaseModel

class Settings(BaseModel):
    environment: str = os.getenv("ENVIRONMENT", "dev")
    app_name: str = os.getenv("APP_NAME", "virtual-reservoir-api")
    app_display_name: str = os.getenv("APP_DISPLAY_NAME", "Virtual Reservoir")
    app_version: str = os.getenv("APP_VERSION", "0.1.0")
    git_sha: str = os.getenv("GIT_SHA", "dev")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    database_url: str = os.getenv("DATABASE_URL", "postgresql+asyncpg://postgres:postgres@db:5432/reservoir_dev")
    s3_endpoint: str = os.getenv("S3_ENDPOINT", "http://minio:9000")
    s3_access_key: str = os.getenv("S3_ACCESS_KEY", "minioadmin")
    s3_secret_key: str = os.getenv("S3_SECRET_KEY", "minioadmin")
    s3_bucket_photos: str = os.getenv("S3_BUCKET_PHOTOS", "photos")
    photo_prefix: str = os.getenv("PHOTO_PREFIX", "waterbutt_photos")

    # Reservoir target, the UK's smallest real reservoir
    goal_litres: int = int(os.getenv("GOAL_LITRES", "43000030"))
    # Delete the uploaded photo when the record insert fails (off keeps the photo)
    cleanup_orphan_photos: bool = os.getenv("CLEANUP_ORPHAN_PHOTOS", "0") == "1"

settings = Settings()
