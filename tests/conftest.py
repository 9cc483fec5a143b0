from typing import Dict

import pytest

from users_api.core.errors import ConditionalCheckFailedError
from users_api.repositories.interface import UserRepository


class InMemoryUserRepository(UserRepository):
    """Dict-backed repository with the same result shapes as the Redis one."""

    def __init__(self):
        self.items: Dict[str, Dict] = {}
        self.error = None
        self.closed = False

    def _maybe_fail(self):
        if self.error is not None:
            raise self.error

    async def get(self, user_id: str) -> Dict:
        self._maybe_fail()
        item = self.items.get(user_id)
        return {"Item": dict(item)} if item else {}

    async def scan(self) -> Dict:
        self._maybe_fail()
        items = [dict(item) for item in self.items.values()]
        return {"Items": items, "Count": len(items), "ScannedCount": len(items)}

    async def put(self, item: Dict, *, overwrite: bool = True) -> None:
        self._maybe_fail()
        if not overwrite and item["id"] in self.items:
            raise ConditionalCheckFailedError()
        self.items[item["id"]] = dict(item)

    async def update(self, user_id: str, changes: Dict) -> Dict:
        self._maybe_fail()
        item = self.items.get(user_id)
        if item is None or item["id"] != user_id:
            raise ConditionalCheckFailedError()
        item.update(changes)
        return {"Attributes": dict(item)}

    async def delete(self, user_id: str) -> Dict:
        self._maybe_fail()
        item = self.items.pop(user_id, None)
        return {"Attributes": item} if item else {}

    async def ping(self) -> bool:
        self._maybe_fail()
        return True

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def store():
    return InMemoryUserRepository()
