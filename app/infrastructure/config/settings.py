"""Application settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings."""

    debug_mode: bool = False
    api_base_url: str = "http://localhost:8000"
    api_timeout_seconds: float = 5.0
    llm_enabled: bool = False
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_timeout_seconds: int = 10
    whatsapp_send_enabled: bool = False  # When false, outbound messages are only logged
    meta_access_token: str = ""
    meta_phone_number_id: str = ""
    meta_verify_token: str = ""
    meta_api_version: str = "v22.0"
    meta_validate_signature: bool = False
    meta_app_secret: str = ""
    session_monitor_enabled: bool = True
    session_monitor_interval_seconds: int = 60
    redis_url: str = "redis://localhost:6379/0"
    webhook_dedup_enabled: bool = False
    webhook_dedup_ttl_seconds: int = 3600

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
    )


settings = Settings()
