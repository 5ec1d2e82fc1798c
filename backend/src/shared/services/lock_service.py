"""
Editing Lock Service

Cooperative soft lock on a post, plus who-is-viewing presence.

Lock protocol:
==============
    request_lock(post, user)
      ├── caller already holds an active lock → extend expires_at
      └── otherwise
            delete expired rows for the post
            INSERT inside a savepoint
              ├── ok             → acquired
              └── unique clash   → not acquired, report current holder

Clients poll check_lock every 30s and re-request to keep the lock alive.
There is no queueing: whoever inserts first after expiry wins.

Presence lives in a Redis hash per post ("presence:{post_id}") keyed by
user id. Entries older than PRESENCE_TTL_SECONDS are ignored on read.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.adapters.redis_adapter import PRESENCE_PREFIX, RedisAdapter, get_redis_adapter
from src.shared.core.logging import get_logger
from src.shared.models.base import utcnow
from src.shared.models.editing_lock import EditingLock
from src.shared.models.profile import Profile
from src.shared.repositories.editing_lock_repository import EditingLockRepository
from src.shared.utils.constants import LOCK_DURATION_MINUTES, PRESENCE_TTL_SECONDS

logger = get_logger(__name__)


@dataclass
class LockStatus:
    is_locked: bool
    locked_by: Optional[UUID] = None
    locked_by_email: Optional[str] = None
    expires_at: Optional[datetime] = None

    @classmethod
    def from_lock(cls, lock: Optional[EditingLock], user_id: UUID) -> "LockStatus":
        if lock is None:
            return cls(is_locked=False)
        return cls(
            is_locked=lock.user_id != user_id,
            locked_by=lock.user_id,
            locked_by_email=lock.user_email,
            expires_at=lock.expires_at,
        )


@dataclass
class LockResult:
    acquired: bool
    lock: LockStatus


def presence_key(post_id: UUID) -> str:
    return f"{PRESENCE_PREFIX}{post_id}"


class LockService:
    def __init__(self, session: AsyncSession, redis: Optional[RedisAdapter] = None) -> None:
        self.session = session
        self.repo = EditingLockRepository(session)
        self.redis = redis or get_redis_adapter()

    # ═══════════════════════════════════════════════════════════════════════════
    # LOCKS
    # ═══════════════════════════════════════════════════════════════════════════

    async def check_lock(self, post_id: UUID, user_id: UUID, now: Optional[datetime] = None) -> LockStatus:
        lock = await self.repo.get_active(post_id, now or utcnow())
        return LockStatus.from_lock(lock, user_id)

    async def request_lock(self, post_id: UUID, user: Profile, now: Optional[datetime] = None) -> LockResult:
        now = now or utcnow()
        expires_at = now + timedelta(minutes=LOCK_DURATION_MINUTES)

        current = await self.repo.get_active(post_id, now)
        if current is not None and current.user_id == user.id:
            current = await self.repo.apply(current, expires_at=expires_at)
            return LockResult(acquired=True, lock=LockStatus.from_lock(current, user.id))

        if current is None:
            await self.repo.delete_expired(post_id, now)
            inserted = await self.repo.try_insert(
                post_id=post_id,
                user_id=user.id,
                user_email=user.email,
                expires_at=expires_at,
            )
            if inserted:
                logger.info("Editing lock acquired", post_id=str(post_id), user_id=str(user.id))
                return LockResult(
                    acquired=True,
                    lock=LockStatus(
                        is_locked=False,
                        locked_by=user.id,
                        locked_by_email=user.email,
                        expires_at=expires_at,
                    ),
                )
            # Lost the race; whoever won is the holder now
            current = await self.repo.get_for_post(post_id)

        return LockResult(acquired=False, lock=LockStatus.from_lock(current, user.id))

    async def release_lock(self, post_id: UUID, user_id: UUID) -> bool:
        released = await self.repo.delete_for_user(post_id, user_id)
        if released:
            logger.info("Editing lock released", post_id=str(post_id), user_id=str(user_id))
        return released

    # ═══════════════════════════════════════════════════════════════════════════
    # PRESENCE
    # ═══════════════════════════════════════════════════════════════════════════

    def touch_presence(self, post_id: UUID, user: Profile, now: Optional[datetime] = None) -> bool:
        """Heartbeat from an open editor."""
        now = now or utcnow()
        return self.redis.hset_json(
            presence_key(post_id),
            str(user.id),
            {
                "user_id": str(user.id),
                "full_name": user.display_name,
                "online_at": now.isoformat(),
            },
            ttl=PRESENCE_TTL_SECONDS,
        )

    def get_viewers(self, post_id: UUID, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        now = now or utcnow()
        cutoff = now - timedelta(seconds=PRESENCE_TTL_SECONDS)

        viewers = []
        for entry in self.redis.hgetall_json(presence_key(post_id)).values():
            try:
                online_at = datetime.fromisoformat(entry["online_at"])
            except (KeyError, TypeError, ValueError):
                continue
            if online_at >= cutoff:
                viewers.append(entry)
        return sorted(viewers, key=lambda v: v["online_at"])

    def leave(self, post_id: UUID, user_id: UUID) -> bool:
        return self.redis.hdel(presence_key(post_id), str(user_id)) > 0
