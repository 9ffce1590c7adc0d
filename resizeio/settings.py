import os
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="resizeio_",
        env_file=os.getenv("DOTENV_PATH", ".env"),
        extra="ignore",
    )

    public_name: str = "http://localhost:8100"

    # derivative root prefix, always ends with a slash
    dir: str = "images/"
    cache_expiry: int = 60 * 60 * 24
    browser_cache: int = 60 * 60 * 24 * 30

    backend: str = "local"
    local_root: str = "./storage/public"
    local_base_url: str = "http://localhost:8100/storage"

    # set to enable promotion of missing sources from a local staging disk
    staging_root: Optional[str] = None

    s3_endpoint_url: Optional[str] = None
    s3_region_name: str = "us-east-1"
    s3_bucket: str = "resizeio"
    s3_prefix: str = ""
    s3_custom_domain: Optional[str] = None
    s3_access_key_id: Optional[str] = None
    s3_secret_access_key: Optional[str] = None

    video_placeholder: str = "/static/placeholders/video.svg"
    file_placeholder: str = "/static/placeholders/file.svg"
    raster_extensions: List[str] = ["jpg", "jpeg", "png", "gif"]
    video_extensions: List[str] = ["mp4", "webm"]


settings = Settings()
