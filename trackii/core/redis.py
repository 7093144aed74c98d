import redis

from trackii.core.config import settings

_pool = redis.ConnectionPool(
    host=settings.REDIS_HOST,
    port=settings.REDIS_PORT,
    db=settings.REDIS_DB,
    decode_responses=True,
)


def get_redis_client() -> redis.Redis:
    return redis.Redis(connection_pool=_pool)
