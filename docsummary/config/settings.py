from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "docsummary"
    db_username: str = "docsummary"
    db_password: str = "secret"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_pool_timeout_seconds: float = 5.0
    db_auto_migrate: bool = True

    uploads_dir: Path = Path("uploads")

    s3_endpoint: str = ""
    s3_region: str = ""
    s3_bucket: str = ""
    s3_access_key_id: str = ""
    s3_secret_access_key: str = ""
    s3_public_url: str = ""
    s3_presign_ttl_seconds: int = 3600
    s3_download_timeout_seconds: int = 30

    pdf_engine: str = "pdfplumber"

    analysis_provider: str = "openrouter"
    analysis_api_key: str = ""
    analysis_model_name: str = "gpt-4o-mini"
    analysis_base_url: str = ""
    analysis_timeout_seconds: int = 30

    @property
    def s3_enabled(self) -> bool:
        """Object storage is used only when every connection setting is present."""
        return all(
            (
                self.s3_endpoint,
                self.s3_region,
                self.s3_bucket,
                self.s3_access_key_id,
                self.s3_secret_access_key,
            )
        )

    @property
    def db_conninfo(self) -> str:
        return (
            f"host={self.db_host} "
            f"port={self.db_port} "
            f"dbname={self.db_database} "
            f"user={self.db_username} "
            f"password={self.db_password}"
        )
