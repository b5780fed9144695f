from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # OpenSanctions API settings
    opensanctions_api_key: str = ""  # empty means unauthenticated requests
    opensanctions_base_url: str = "https://api.opensanctions.org"

    # Transport settings
    min_request_interval: float = 0.1  # seconds between request issue times
    request_timeout: float = 10.0

    # Enrichment settings
    adjacent_limit: int | None = None
    search_limit: int = 20
    max_concurrent_lookups: int = 8

    log_level: str = "INFO"  # Can be DEBUG, INFO, WARNING, ERROR, CRITICAL


settings = Settings()
