from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 8000

    events_provider: str = "meta"
    meta_pixel_id: str = ""
    meta_access_token: str = ""
    meta_test_event_code: str = ""
    meta_graph_base_url: str = "https://graph.facebook.com"
    meta_graph_api_version: str = "v21.0"
    meta_timeout_seconds: int = 15

    default_event_source_url: str = "https://lyftgrowth.com/lead-form"
    app_event_source_url: str = "https://lyftgrowth.com/go/app/"

    bridge_token: str = ""
    smtp_host: str = ""
    smtp_port: int = 465
    smtp_secure: bool = True
    smtp_user: str = ""
    smtp_pass: str = ""
    smtp_timeout_seconds: int = 30

    pdf_engine: str = "pymupdf"
