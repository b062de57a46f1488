"""Store interface consumed by the decorator.

``redis.asyncio.Redis`` satisfies it, with or without ``decode_responses``.
The default lock client needs a real ``redis.asyncio.Redis``, since it runs
redis-py's lock scripts against it.
"""

from typing import Optional, Protocol, Union


class CacheStore(Protocol):
    async def get(self, name: str) -> Optional[Union[str, bytes]]:
        ...

    async def set(
        self,
        name: str,
        value: str,
        ex: Optional[int] = None,
        px: Optional[int] = None,
        nx: bool = False,
    ) -> Optional[bool]:
        ...

    async def delete(self, *names: str) -> int:
        ...
