from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    store_url: str = "redis://localhost:6379/0"
    local_store_url: str = "redis://localhost:6379/0"
    # host this process is served from; compared against local_host at startup
    host: str = ""
    local_host: str = "localhost:3000"
    table_name: str = "users"
    log_level: str = "INFO"
    reject_duplicate_ids: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
