# bookstore/services/lock_service.py
import redis

from bookstore.utils.retry import redis_retry
from bookstore.utils.settings import REDIS_URL
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)

# porownaj i usun atomowo - lua w redisie wykonuje sie jako jedna operacja
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""


class LockService:
    """
    Blokada checkoutu per uzytkownik: dwa rownolegle zamowienia
    nie moga przepisac tego samego koszyka.
    """

    def __init__(self, url: str | None = None):
        self.redis = redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def _key(user_id: int) -> str:
        return f"checkout:{user_id}:lock"

    @redis_retry()
    def acquire_checkout_lock(self, user_id: int, token: str, ttl: int) -> bool:
        key = self._key(user_id)
        logger.info(f"Acquire lock {key}")
        # SET checkout:1:lock <token> NX EX ttl
        return bool(self.redis.set(name=key, value=token, nx=True, ex=ttl))

    @redis_retry()
    def release_checkout_lock(self, user_id: int, token: str) -> bool:
        key = self._key(user_id)
        logger.info(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)
