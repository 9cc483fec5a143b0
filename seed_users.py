import argparse
import asyncio
import logging

from users_api.core.config import settings
from users_api.core.logging_config import setup_logging
from users_api.repositories.store import get_store, select_store_config

logger = logging.getLogger("seed_users")


async def seed(count: int, host: str) -> int:
    repo = get_store(select_store_config(host, settings))
    try:
        for i in range(1, count + 1):
            await repo.put({"id": str(i), "uname": f"user{i}"})
    finally:
        await repo.close()
    return count


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Populate the user table with sample users")
    parser.add_argument("--count", type=int, default=1000)
    parser.add_argument("--host", default=settings.local_host, help="host used to pick the store")
    args = parser.parse_args()

    setup_logging(settings.log_level)
    inserted = asyncio.run(seed(args.count, args.host))
    logger.info("Inserted %d users", inserted)
