import logging

from pydantic import BaseModel

from users_api.core.config import Settings
from users_api.repositories.interface import UserRepository
from users_api.repositories.user_repo import RedisUserRepository

logger = logging.getLogger(__name__)


class StoreConfig(BaseModel):
    url: str
    table_name: str
    local: bool = False


def select_store_config(host: str, settings: Settings) -> StoreConfig:
    """Pick the local development store when ``host`` is exactly the local
    host, the managed store otherwise."""
    if host == settings.local_host:
        return StoreConfig(url=settings.local_store_url, table_name=settings.table_name, local=True)
    return StoreConfig(url=settings.store_url, table_name=settings.table_name)


def get_store(config: StoreConfig) -> UserRepository:
    logger.info(
        "Using %s store for table %s",
        "local" if config.local else "managed",
        config.table_name,
    )
    return RedisUserRepository(redis_url=config.url, table_name=config.table_name)
