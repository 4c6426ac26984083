from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ALLOWED_EXTENSIONS = [
    "xlsx",
    "xls",
    "csv",
    "pdf",
    "png",
    "jpg",
    "jpeg",
    "gif",
    "webp",
    "bmp",
    "svg",
]

DEFAULT_ALLOWED_MIME_TYPES = [
    "application/pdf",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel",
    "image/png",
    "image/jpeg",
    "image/gif",
    "image/webp",
    "image/bmp",
    "image/svg+xml",
]


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    api_base_url: str = "http://localhost:8000/api/v1"
    api_timeout_seconds: int = 30
    api_token: str = ""

    organization_id: str = ""
    organization_name: str = ""

    document_api_engine: str = "http"

    max_file_size_bytes: int = 100 * 1024 * 1024
    allowed_extensions: list[str] = DEFAULT_ALLOWED_EXTENSIONS
    allowed_mime_types: list[str] = DEFAULT_ALLOWED_MIME_TYPES
