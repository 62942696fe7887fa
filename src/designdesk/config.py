from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    api_url: str  # Base URL of the design API, e.g. https://studio.example.com
    api_token: str | None = None  # Bearer token sent with every request (optional)
    debug: bool = False
    request_timeout: float = 30.0  # Seconds per request, no retries
    notification_poll_interval: float = 30.0
    workspace_poll_interval: float = 60.0
    max_upload_size: int = 10 * 1024 * 1024  # Per file, checked before upload
    watch_stage_id: str | None = None  # Stage whose notifications the entry point watches

    model_config = {
        "env_file": [".env"],
        "env_prefix": "DESIGNDESK_",
        "extra": "ignore",
    }
