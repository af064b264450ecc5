import redis
import json
import logging
import os
from typing import Optional, Any

logger = logging.getLogger(__name__)

# Redis configuration; caching is off unless REDIS_HOST is set
REDIS_HOST = os.getenv('REDIS_HOST')
REDIS_PORT = int(os.getenv('REDIS_PORT', 6379))
REDIS_DB = int(os.getenv('REDIS_DB', 0))
REDIS_PASSWORD = os.getenv('REDIS_PASSWORD', None)

# Cache TTL settings (in seconds)
CACHE_TTL_SHORT = 300  # 5 minutes
CACHE_TTL_MEDIUM = 600  # 10 minutes


def _connect() -> Optional[redis.Redis]:
    if not REDIS_HOST:
        logger.info("REDIS_HOST not set; caching disabled")
        return None

    try:
        client = redis.Redis(
            host=REDIS_HOST,
            port=REDIS_PORT,
            db=REDIS_DB,
            password=REDIS_PASSWORD,
            decode_responses=True,
            socket_connect_timeout=5
        )
        client.ping()
        logger.info(f"Redis connected at {REDIS_HOST}:{REDIS_PORT}")
        return client
    except redis.RedisError as e:
        logger.warning(f"Redis connection failed: {str(e)}. Caching will be disabled.")
        return None


redis_client = _connect()


class CacheManager:
    """Manager for Redis caching operations"""

    @staticmethod
    def is_available() -> bool:
        return redis_client is not None

    @staticmethod
    def get(key: str) -> Optional[Any]:
        """Cached value, or None when missing or Redis fails"""
        if not CacheManager.is_available():
            return None

        try:
            value = redis_client.get(key)
            if value:
                return json.loads(value)
            return None
        except redis.RedisError as e:
            logger.error(f"Cache get error for key '{key}': {str(e)}")
            return None

    @staticmethod
    def set(key: str, value: Any, ttl: int = CACHE_TTL_MEDIUM) -> bool:
        """JSON-encode ``value`` and store it for ``ttl`` seconds"""
        if not CacheManager.is_available():
            return False

        try:
            redis_client.setex(
                key,
                ttl,
                json.dumps(value, default=str)  # default=str handles datetime, etc.
            )
            logger.debug(f"Cached key '{key}' with TTL {ttl}s")
            return True
        except redis.RedisError as e:
            logger.error(f"Cache set error for key '{key}': {str(e)}")
            return False

    @staticmethod
    def delete(key: str) -> bool:
        if not CacheManager.is_available():
            return False

        try:
            redis_client.delete(key)
            logger.debug(f"Deleted cache key '{key}'")
            return True
        except redis.RedisError as e:
            logger.error(f"Cache delete error for key '{key}': {str(e)}")
            return False

    @staticmethod
    def invalidate_user_cache(user_id: int):
        """Drop every cached entry derived from a user's profile or posts"""
        CacheManager.delete(build_user_profile_cache_key(user_id))
        logger.debug(f"Invalidated cache for user {user_id}")


def build_user_profile_cache_key(user_id: int) -> str:
    """Build cache key for user profile"""
    return f"user:profile:{user_id}"
