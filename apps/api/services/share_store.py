"""
Share Store - Redis-backed share links

- create_share: random 8-char id, SET NX EX (30 days), regenerate on collision
- get_share: GET by id; expiry is Redis TTL only
"""

import json
import logging
import re
import secrets
import string
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from redis import Redis
from redis.exceptions import RedisError

from config import ShareSettings
from exceptions import ShareCreationFailure, ShareLookupFailure, ShareNotFound

logger = logging.getLogger(__name__)

# nanoid's URL-safe alphabet
SHARE_ID_ALPHABET = string.ascii_letters + string.digits + "_-"


@dataclass
class ShareRecord:
    """Stored share payload"""
    shareId: str
    data: Any
    createdAt: str  # ISO 8601, UTC

    def to_json(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)

    @classmethod
    def from_json(cls, raw: str) -> "ShareRecord":
        return cls(**json.loads(raw))


def generate_share_id(length: int = 8) -> str:
    return "".join(secrets.choice(SHARE_ID_ALPHABET) for _ in range(length))


class ShareStore:
    """Share links in Redis, one string key per share"""

    def __init__(self, redis: Optional[Redis], settings: Optional[ShareSettings] = None):
        self.redis = redis
        self.settings = settings or ShareSettings()
        self._id_pattern = re.compile(
            rf"^[A-Za-z0-9_-]{{{self.settings.id_length}}}$"
        )

    @classmethod
    def from_url(cls, redis_url: str, settings: Optional[ShareSettings] = None) -> "ShareStore":
        """
        Connect to Redis

        An unset or unreachable Redis leaves the store unavailable instead of
        failing app startup; share calls then raise.
        """
        if not redis_url:
            logger.warning("[ShareStore] REDIS_URL not configured - share links disabled")
            return cls(None, settings)

        redis = Redis.from_url(redis_url, decode_responses=True)
        try:
            redis.ping()
            logger.info("[ShareStore] Redis connected")
        except RedisError as e:
            # keep the client: redis-py reconnects on the next command
            logger.error(f"[ShareStore] Redis not reachable yet: {e}")
        return cls(redis, settings)

    @property
    def is_available(self) -> bool:
        return self.redis is not None

    def _key(self, share_id: str) -> str:
        return f"{self.settings.key_prefix}{share_id}"

    def create_share(self, data: Any) -> str:
        """
        Persist `data` and return its share id

        Raises:
            ShareCreationFailure: store unavailable/erroring, or every
                generated id collided
        """
        if not self.is_available:
            raise ShareCreationFailure("Share storage is not configured")

        attempts = self.settings.id_max_attempts
        for attempt in range(1, attempts + 1):
            share_id = generate_share_id(self.settings.id_length)
            record = ShareRecord(
                shareId=share_id,
                data=data,
                createdAt=datetime.now(timezone.utc).isoformat(),
            )

            try:
                created = self.redis.set(
                    self._key(share_id),
                    record.to_json(),
                    nx=True,
                    ex=self.settings.ttl_seconds,
                )
            except RedisError as e:
                logger.error(f"[ShareStore] ❌ Failed to write share: {e}")
                raise ShareCreationFailure(
                    "Failed to create share link",
                    details={"reason": str(e)},
                ) from e

            if created:
                logger.info(f"[ShareStore] Created share {share_id}")
                return share_id

            logger.warning(f"[ShareStore] Share id collision ({attempt}/{attempts}): {share_id}")

        raise ShareCreationFailure(
            "Failed to create share link",
            details={"reason": f"share id collided {attempts} times"},
        )

    def get_share(self, share_id: str) -> Any:
        """
        Return the data stored under `share_id`

        Raises:
            ShareNotFound: unknown, expired, or malformed id
            ShareLookupFailure: store unavailable/erroring
        """
        if not self._id_pattern.match(share_id or ""):
            raise ShareNotFound("Share link not found")

        if not self.is_available:
            raise ShareLookupFailure("Share storage is not configured")

        try:
            raw = self.redis.get(self._key(share_id))
        except RedisError as e:
            logger.error(f"[ShareStore] ❌ Failed to read share {share_id}: {e}")
            raise ShareLookupFailure(
                "Failed to fetch shared data",
                details={"reason": str(e)},
            ) from e

        if raw is None:
            raise ShareNotFound("Share link not found")

        return ShareRecord.from_json(raw).data

    def health(self) -> Dict[str, Any]:
        if not self.is_available:
            return {"available": False}
        try:
            self.redis.ping()
            return {"available": True}
        except RedisError as e:
            return {"available": False, "error": str(e)}
