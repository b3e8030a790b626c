# crew_directory/core/cache.py
# 行程內 (in-process) 查詢快取：以 key 快取查詢結果，依 TTL 或標籤 (tag) 失效
import logging
import time
from typing import Any, Awaitable, Callable, Dict, Iterable, NamedTuple, FrozenSet

logger = logging.getLogger(__name__)


class _CacheEntry(NamedTuple):
    value: Any
    expires_at: float
    tags: FrozenSet[str]


class QueryCache:
    """
    以 key 快取 loader 的結果。

    - 超過 ttl_seconds 後重新計算
    - 任一關聯 tag 被 revalidate_tag() 後重新計算
    - 不保證 single-flight：同時 miss 的請求可能各自呼叫 loader
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        # 結構: {key: _CacheEntry}
        self._entries: Dict[str, _CacheEntry] = {}
        # 每個 tag 被失效的次數，用來辨識「載入途中被失效」的結果
        self._tag_versions: Dict[str, int] = {}
        self._clock = clock

    async def cached(
        self,
        key: str,
        ttl_seconds: float,
        tags: Iterable[str],
        loader: Callable[[], Awaitable[Any]],
    ) -> Any:
        tags = frozenset(tags)
        entry = self._entries.get(key)
        if entry is not None and entry.expires_at > self._clock():
            return entry.value

        # 記下載入前的 tag 版本
        versions_before = {tag: self._tag_versions.get(tag, 0) for tag in tags}

        logger.info(f"Cache miss for '{key}', loading from source")
        # loader 拋出的例外直接往上傳，不寫入快取
        value = await loader()

        # 載入途中若有 tag 被失效，結果可能是舊資料：回傳但不寫入
        if any(self._tag_versions.get(tag, 0) != version for tag, version in versions_before.items()):
            logger.info(f"Cache entry '{key}' was invalidated while loading; not storing result")
            return value

        self._entries[key] = _CacheEntry(value, self._clock() + ttl_seconds, tags)
        return value

    def revalidate_tag(self, tag: str) -> None:
        """讓所有帶有此 tag 的快取項目失效 (可重複呼叫)"""
        self._tag_versions[tag] = self._tag_versions.get(tag, 0) + 1
        stale_keys = [key for key, entry in self._entries.items() if tag in entry.tags]
        for key in stale_keys:
            del self._entries[key]
        logger.info(f"Revalidated tag '{tag}', dropped {len(stale_keys)} entries")

    def clear(self) -> None:
        self._entries.clear()


# 實例化快取 (所有請求共用)
query_cache = QueryCache()
