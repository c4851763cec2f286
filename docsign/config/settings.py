"""
Application Settings.

Centraliza toda configuração via .env / variáveis de ambiente.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Configurações carregadas de variáveis de ambiente."""

    # --- App ---
    env: str = "development"
    debug: bool = True
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"

    # --- Database ---
    database_url: str = "sqlite:///docsign.db"

    # --- Storage ---
    storage_backend: str = "local"        # "local" | "minio"
    local_storage_dir: str = "uploads"
    public_base_url: str = "http://localhost:8000"
    minio_endpoint: str = "http://localhost:9000"
    minio_access_key: str = ""
    minio_secret_key: str = ""
    minio_bucket: str = "docsign"
    minio_secure: bool = False
    minio_public_url: str = ""
    upload_folder: str = "docsign_uploads"
    signed_folder: str = "docsign_signed"
    max_upload_mb: int = 25

    # --- Tokens ---
    share_token_secret: str = "change-me"
    share_token_algorithm: str = "HS256"
    share_token_ttl_days: int = 7
    auth_token_secret: str = "change-me"
    auth_token_algorithm: str = "HS256"

    # --- Sharing / Email ---
    frontend_url: str = "http://localhost:5173"
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = True
    mail_from: str = '"DocSign App" <no-reply@docsign.com>'

    # --- Rendering ---
    image_scale: float = 0.5
    text_font: str = "Helvetica"
    text_font_path: str = ""          # TTF registered as text_font for non-Latin names
    text_size: int = 20
    date_size: int = 10

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    """Singleton de settings."""
    return Settings()
