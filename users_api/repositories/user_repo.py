import json
import logging
from typing import Dict, List, Optional

import redis.asyncio as redis
from redis.exceptions import NoScriptError, RedisError

from users_api.core.errors import ConditionalCheckFailedError, StoreError
from users_api.repositories.interface import UserRepository

logger = logging.getLogger(__name__)

# Lua script: apply changes to an existing record only if its stored id matches.
# KEYS[1] = record key
# ARGV[1] = expected id
# ARGV[2] = JSON object of fields to set
# Return: the new JSON document, or nil when the condition fails
UPDATE_SCRIPT = """
local raw = redis.call("GET", KEYS[1])
if not raw then
  return nil
end
local item = cjson.decode(raw)
if item["id"] ~= ARGV[1] then
  return nil
end
local changes = cjson.decode(ARGV[2])
for field, value in pairs(changes) do
  item[field] = value
end
local encoded = cjson.encode(item)
redis.call("SET", KEYS[1], encoded)
return encoded
"""


def _store_error(error: RedisError) -> StoreError:
    return StoreError(str(error) or type(error).__name__, kind=type(error).__name__)


class RedisUserRepository(UserRepository):
    """Redis-Based Async Implementation of UserRepository Interface"""

    def __init__(self, *, redis_url: str, table_name: str, client: Optional[redis.Redis] = None):
        self._redis = client or redis.from_url(redis_url, decode_responses=True)
        self.table_name = table_name
        self._update_sha: Optional[str] = None

    def _user_key(self, user_id: str) -> str:
        return f"{self.table_name}:{user_id}"

    def _decode(self, key: str, data: str) -> Dict:
        try:
            return json.loads(data)
        except ValueError:
            raise StoreError(f"Stored record {key} is not valid JSON", kind="CorruptItem")

    async def get(self, user_id: str) -> Dict:
        key = self._user_key(user_id)
        try:
            data = await self._redis.get(key)
        except RedisError as e:
            raise _store_error(e)

        if not data:
            return {}
        return {"Item": self._decode(key, data)}

    async def scan(self) -> Dict:
        items: List[Dict] = []
        # use SCAN to iterate over keys(does not block Redis like KEYS)
        cursor = 0
        try:
            while True:
                cursor, keys = await self._redis.scan(
                    cursor=cursor, match=f"{self.table_name}:*", count=100
                )
                for key in keys:
                    value = await self._redis.get(key)
                    if value:
                        items.append(self._decode(key, value))

                if cursor == 0:  # scan complete
                    break
        except RedisError as e:
            raise _store_error(e)

        return {"Items": items, "Count": len(items), "ScannedCount": len(items)}

    async def put(self, item: Dict, *, overwrite: bool = True) -> None:
        key = self._user_key(item["id"])
        try:
            if overwrite:
                await self._redis.set(key, json.dumps(item))
                return
            # SET NX → only set if not exists (atomic)
            created = await self._redis.set(key, json.dumps(item), nx=True)
        except RedisError as e:
            raise _store_error(e)

        if not created:
            raise ConditionalCheckFailedError()

    async def _run_update(self, key: str, user_id: str, changes: Dict) -> Optional[str]:
        args = [user_id, json.dumps(changes)]
        if self._update_sha is None:
            self._update_sha = await self._redis.script_load(UPDATE_SCRIPT)
        try:
            return await self._redis.evalsha(self._update_sha, 1, key, *args)
        except NoScriptError:
            # script cache was flushed on the server
            logger.debug("update script missing, falling back to EVAL")
            self._update_sha = None
            return await self._redis.eval(UPDATE_SCRIPT, 1, key, *args)

    async def update(self, user_id: str, changes: Dict) -> Dict:
        key = self._user_key(user_id)
        try:
            result = await self._run_update(key, user_id, changes)
        except RedisError as e:
            raise _store_error(e)

        if result is None:
            raise ConditionalCheckFailedError()
        return {"Attributes": self._decode(key, result)}

    async def delete(self, user_id: str) -> Dict:
        key = self._user_key(user_id)
        try:
            # GETDEL → read and remove in one atomic step
            data = await self._redis.getdel(key)
        except RedisError as e:
            raise _store_error(e)

        if not data:
            return {}
        return {"Attributes": self._decode(key, data)}

    async def ping(self) -> bool:
        try:
            return bool(await self._redis.ping())
        except RedisError as e:
            raise _store_error(e)

    async def close(self) -> None:
        await self._redis.aclose()
