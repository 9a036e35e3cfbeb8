from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Typography
    font_path: str = "assets/fonts/Inter"

    # Image fitting - never upscale the product beyond 1.2x
    image_scale_cap: float = 1.2

    # Export CLI
    output_dir: str = "generated_images"

    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
