"""
Nonce Stores
============
Replay protection by remembering (KeyID, Nonce) pairs for one lifetime window.
"""

import threading
import time
from typing import Callable, Dict, Protocol, Tuple
import structlog
from redis.exceptions import RedisError

from ..errors import InternalError

logger = structlog.get_logger(__name__)


class NonceStore(Protocol):
    """Anything that can atomically check and record a nonce."""

    def check_and_store(self, key_id: str, nonce, ttl_seconds: int) -> bool:
        ...


class InMemoryNonceStore:
    """
    In-memory nonce store for a single process.

    In production with several workers, use RedisNonceStore.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._lock = threading.Lock()
        self._expires: Dict[Tuple[str, str], float] = {}

    def check_and_store(self, key_id: str, nonce, ttl_seconds: int) -> bool:
        """
        Atomically check that a nonce is fresh and record it.

        Args:
            key_id: Caller the nonce belongs to
            nonce: Nonce from the request
            ttl_seconds: How long to remember the nonce

        Returns:
            True if the nonce had not been seen for this caller
        """
        entry = (key_id, str(nonce))
        with self._lock:
            now = self._clock()
            self._cleanup(now)

            if entry in self._expires:
                logger.warning("nonce_replay_detected", key_id=key_id, nonce=str(nonce)[:8])
                return False

            self._expires[entry] = now + ttl_seconds
            return True

    def _cleanup(self, now: float) -> None:
        """Remove expired nonces."""
        expired = [entry for entry, expires_at in self._expires.items() if expires_at <= now]
        for entry in expired:
            del self._expires[entry]

    def __len__(self) -> int:
        with self._lock:
            return len(self._expires)


class RedisNonceStore:
    """
    Redis-backed nonce store shared by every service instance.

    Uses SET NX EX so check and insert happen in one atomic command.
    """

    def __init__(self, redis_client, prefix: str = "apisign:nonce"):
        """
        Args:
            redis_client: Synchronous Redis client
            prefix: Key prefix for stored nonces
        """
        self.redis = redis_client
        self.prefix = prefix

    def get_key(self, key_id: str, nonce) -> str:
        """Generate the Redis key for a nonce."""
        return f"{self.prefix}:{key_id}:{nonce}"

    def check_and_store(self, key_id: str, nonce, ttl_seconds: int) -> bool:
        """
        Record the nonce; False if it was already present.

        Raises:
            InternalError: If Redis cannot be reached
        """
        try:
            stored = self.redis.set(self.get_key(key_id, nonce), "1", nx=True, ex=ttl_seconds)
        except RedisError as e:
            logger.error("nonce_store_unavailable", error=str(e))
            raise InternalError(f"Nonce store unavailable: {e}", key_id=key_id) from e
        if not stored:
            logger.warning("nonce_replay_detected", key_id=key_id, nonce=str(nonce)[:8])
            return False
        return True
