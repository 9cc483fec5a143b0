from abc import ABC, abstractmethod
from typing import Dict


class UserRepository(ABC):
    """
    An Async Repository Interface over a single table of user records.
    Results mirror the shapes returned to clients: ``{"Item": ...}``,
    ``{"Items": [...]}`` and ``{"Attributes": ...}``.
    Backend failures are raised as ``StoreError``.
    """

    @abstractmethod
    async def get(self, user_id: str) -> Dict: ...

    @abstractmethod
    async def scan(self) -> Dict: ...

    @abstractmethod
    async def put(self, item: Dict, *, overwrite: bool = True) -> None: ...

    @abstractmethod
    async def update(self, user_id: str, changes: Dict) -> Dict: ...

    @abstractmethod
    async def delete(self, user_id: str) -> Dict: ...

    @abstractmethod
    async def ping(self) -> bool: ...

    @abstractmethod
    async def close(self) -> None: ...
