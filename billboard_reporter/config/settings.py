from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    data_dir: str = "data"

    vision_provider: str = "google"
    google_vision_api_key: str = ""
    google_vision_endpoint: str = "https://vision.googleapis.com/v1/images:annotate"
    vision_timeout_seconds: int = 30
    vision_text_max_results: int = 50
    vision_object_max_results: int = 20
    vision_logo_max_results: int = 10

    zone_max_allowed_size: str = "Medium"
    protected_site_threshold: float = 0.7
