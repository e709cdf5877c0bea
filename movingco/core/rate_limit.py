import logging

from movingco.core.config import settings
from movingco.core.exceptions import RateLimitError
from movingco.core.metrics import rate_limit_exceeded
from movingco.core.redis import get_redis

logger = logging.getLogger(__name__)


async def check_rate_limit(user_id: int, scope: str = "quotes"):
    redis = get_redis()
    if redis is None:
        return
    key = f"rl:{scope}:{user_id}"
    current = await redis.get(key)
    if current is None:
        await redis.set(key, "1", ex=settings.RATE_LIMIT_WINDOW)
        return
    count = int(current)
    if count >= settings.RATE_LIMIT:
        rate_limit_exceeded.labels(scope=scope).inc()
        logger.warning(f"Rate limit exceeded for user {user_id} on {scope}")
        raise RateLimitError(
            f"Rate limit exceeded. Try again in {settings.RATE_LIMIT_WINDOW // 60} minutes."
        )
    await redis.incr(key)
