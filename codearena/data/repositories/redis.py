from redis.asyncio import Redis
from redis.exceptions import RedisError

from codearena.config import Config, logger
from codearena.errors import AppException

redis_logger = logger.getChild("redis")

BLOCKLIST_PREFIX = "blocklist:jti:"


class RedisClient:
    """
    Process-wide Redis connection holding revoked token ids.

    Entries expire together with the longest-lived token, so the blocklist
    never outgrows the set of tokens that could still be presented.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.redis = None
        return cls._instance

    async def _connection(self) -> Redis:
        if self.redis is not None:
            return self.redis
        connection = Redis(
            host=Config.REDIS_HOST,
            port=Config.REDIS_PORT,
            password=Config.REDIS_PASSWORD,
            decode_responses=True,
        )
        try:
            await connection.ping()
        except RedisError as e:
            redis_logger.error(f"Redis connection error: {str(e)}")
            raise AppException(status_code=500, detail="Redis connection error", error=str(e))
        redis_logger.info(f"Connected to Redis at {Config.REDIS_HOST}:{Config.REDIS_PORT}")
        self.redis = connection
        return connection

    async def close(self) -> None:
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None

    async def add_jti_to_blocklist(self, jti: str) -> None:
        connection = await self._connection()
        try:
            await connection.set(
                f"{BLOCKLIST_PREFIX}{jti}", "revoked", ex=Config.JWT_REFRESH_TOKEN_EXPIRY
            )
        except RedisError as e:
            raise AppException(status_code=500, detail="Redis operation failed", error=str(e))

    async def token_in_blocklist(self, jti: str) -> bool:
        connection = await self._connection()
        try:
            return await connection.exists(f"{BLOCKLIST_PREFIX}{jti}") > 0
        except RedisError as e:
            raise AppException(status_code=500, detail="Redis operation failed", error=str(e))


redis_client = RedisClient()


def get_redis_client() -> RedisClient:
    return redis_client
