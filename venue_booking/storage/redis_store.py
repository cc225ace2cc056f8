"""Redis-backed reservation store with change notifications."""

import asyncio
from typing import Optional, Sequence

import redis.asyncio as redis
from pydantic import ValidationError
from redis.exceptions import RedisError

from venue_booking.logging import get_logger
from venue_booking.models.errors import PersistenceError
from venue_booking.models.reservation import Reservation
from venue_booking.storage.repository_base import (
    ChangeCallback,
    LostCallback,
    ReservationStore,
    Subscription,
)

logger = get_logger(__name__)


class RedisSubscription(Subscription):
    """Pub/sub listener task feeding reloaded lists to a callback."""

    def __init__(self, pubsub, task: asyncio.Task, channel: str):
        self._pubsub = pubsub
        self._task = task
        self._channel = channel

    async def unsubscribe(self) -> None:
        """Stop the listener and release the pub/sub connection."""
        if not self._task.done():
            self._task.cancel()
        try:
            await self._task
        except (asyncio.CancelledError, RedisError):
            pass

        try:
            await self._pubsub.unsubscribe(self._channel)
        except RedisError as e:
            logger.warning("redis_unsubscribe_failed", channel=self._channel, error=str(e))
        finally:
            await self._pubsub.aclose()

        logger.info("redis_subscription_closed", channel=self._channel)


class RedisReservationStore(ReservationStore):
    """
    Stores reservations in a Redis hash keyed by reservation id.

    The whole hash is replaced in one MULTI/EXEC transaction and a change
    notification is published so other sessions reload.
    """

    name = "remote"

    def __init__(
        self,
        redis_url: str,
        key_prefix: str = "venue",
        client: Optional[redis.Redis] = None,
    ):
        """Initialize store; pass ``client`` to reuse an existing connection."""
        self.redis_url = redis_url
        self.key_prefix = key_prefix
        self._client: redis.Redis | None = client

    @property
    def hash_key(self) -> str:
        return f"{self.key_prefix}:reservations"

    @property
    def channel(self) -> str:
        return f"{self.key_prefix}:reservations:changed"

    async def connect(self) -> None:
        """Establish Redis connection."""
        if self._client is None:
            self._client = redis.from_url(self.redis_url, decode_responses=True)
        logger.info("redis_store_connected", url=self.redis_url)

    async def disconnect(self) -> None:
        """Close Redis connection."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _require_client(self) -> redis.Redis:
        if not self._client:
            raise RuntimeError("Redis client not connected")
        return self._client

    async def load_all(self) -> list[Reservation]:
        """Load every reservation, ordered by event date."""
        client = self._require_client()
        try:
            raw = await client.hgetall(self.hash_key)
        except RedisError as e:
            logger.warning("redis_load_failed", error=str(e))
            raise PersistenceError(self.name, "load", str(e)) from e

        reservations = []
        for reservation_id, payload in raw.items():
            try:
                reservations.append(Reservation.model_validate_json(payload))
            except ValidationError as e:
                # One corrupt entry should not hide the rest
                logger.error(
                    "redis_entry_invalid",
                    reservation_id=reservation_id,
                    error_count=e.error_count(),
                )

        reservations.sort(key=lambda r: (r.event_date, r.event_time, r.id))
        logger.debug("redis_reservations_loaded", count=len(reservations))
        return reservations

    async def save_all(self, reservations: Sequence[Reservation]) -> None:
        """Replace the hash atomically and notify subscribers."""
        client = self._require_client()
        mapping = {
            reservation.id: reservation.model_dump_json(by_alias=True)
            for reservation in reservations
        }

        try:
            async with client.pipeline(transaction=True) as pipe:
                pipe.delete(self.hash_key)
                if mapping:
                    pipe.hset(self.hash_key, mapping=mapping)
                pipe.publish(self.channel, str(len(mapping)))
                await pipe.execute()
        except RedisError as e:
            logger.warning("redis_save_failed", error=str(e))
            raise PersistenceError(self.name, "save", str(e)) from e

        logger.debug("redis_reservations_saved", count=len(mapping))

    async def subscribe(
        self,
        on_change: ChangeCallback,
        on_lost: Optional[LostCallback] = None,
    ) -> Optional[Subscription]:
        """Reload the hash on every change notification and pass it on."""
        client = self._require_client()
        pubsub = client.pubsub()
        try:
            await pubsub.subscribe(self.channel)
        except RedisError as e:
            await pubsub.aclose()
            logger.warning("redis_subscribe_failed", error=str(e))
            raise PersistenceError(self.name, "subscribe", str(e)) from e

        task = asyncio.create_task(self._listen(pubsub, on_change, on_lost))
        logger.info("redis_subscription_started", channel=self.channel)
        return RedisSubscription(pubsub, task, self.channel)

    async def _listen(
        self,
        pubsub,
        on_change: ChangeCallback,
        on_lost: Optional[LostCallback],
    ) -> None:
        try:
            async for message in pubsub.listen():
                if message.get("type") != "message":
                    continue

                try:
                    reservations = await self.load_all()
                except PersistenceError as e:
                    logger.warning("redis_reload_failed", error=str(e))
                    continue

                try:
                    await on_change(reservations)
                except Exception as e:
                    logger.error("redis_change_callback_failed", error=str(e), exc_info=True)
        except RedisError as e:
            logger.error("redis_subscription_lost", channel=self.channel, error=str(e))
            if on_lost is not None:
                on_lost(str(e))
