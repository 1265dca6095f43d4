"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "budgetkollen"
    log_level: str = "INFO"

    # Municipality tax data (Skatteverket open data)
    tax_year: int = 2025
    skatteverket_api_url: str = (
        "https://skatteverket.entryscape.net/rowstore/dataset/c67b320b-ffee-4876-b073-dd9236cd2a99"
    )
    skatteverket_page_size: int = 100
    skatteverket_request_delay_seconds: float = 0.05
    kommun_table_output: str = "kommunalskatt_2025.json"

    # HTTP Client
    http_timeout_seconds: float = 10.0
    fetch_max_retries: int = 3
    fetch_backoff_base: float = 0.5  # Exponential backoff base in seconds


settings = Settings()
