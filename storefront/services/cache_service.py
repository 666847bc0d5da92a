# storefront/services/cache_service.py
import json

import redis
from redis.exceptions import RedisError

from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ProductCache:
    """
    Cache-aside dla katalogu:
    -get / set z TTL (SETEX), wygasa samo, bez wlasnej polityki eviction
    -delete po zmianie stanow magazynowych
    -wartosci trzymane jako JSON
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @redis_retry()
    def _get(self, key: str):
        return self.redis.get(key)

    @redis_retry()
    def _setex(self, key: str, ttl: int, value: str):
        return self.redis.setex(key, ttl, value)

    @redis_retry()
    def _delete(self, key: str):
        return self.redis.delete(key)

    def get_json(self, key: str):
        try:
            raw = self._get(key)
        except RedisError as e:
            logger.warning(f"Cache GET {key} failed: {e}")
            return None
        return json.loads(raw) if raw else None

    def set_json(self, key: str, value, ttl: int) -> bool:
        try:
            self._setex(key, ttl, json.dumps(value))
            return True
        except RedisError as e:
            logger.warning(f"Cache SETEX {key} failed: {e}")
            return False

    def delete(self, key: str) -> bool:
        try:
            return bool(self._delete(key))
        except RedisError as e:
            logger.warning(f"Cache DEL {key} failed: {e}")
            return False

    def ping(self) -> bool:
        try:
            return bool(self.redis.ping())
        except RedisError:
            return False


_cache: ProductCache | None = None


def get_cache() -> ProductCache | None:
    """
    Zaleznosc FastAPI. Pusty REDIS_URL wylacza cache - odczyty ida prosto do bazy.
    Klient redis trzyma pule polaczen, wiec tworzony jest raz.
    """
    global _cache
    if not REDIS_URL:
        return None
    if _cache is None:
        _cache = ProductCache()
    return _cache
