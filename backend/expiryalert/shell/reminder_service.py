"""Reminder Service - Runs the daily expired-items check against the preference store.

Wraps the pure reminder decision with the delay, locking and persistence it needs.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone, tzinfo
from typing import AsyncIterator, Callable, Iterable, Protocol

from ..core.expiry import as_timezone, summarize_freshness
from ..core.models import FoodItem, ReminderDecision, ReminderState
from ..core.reminder import local_today, maybe_fire
from .device import hash_device_id
from .firestore_client import StoreUnavailableError


logger = logging.getLogger(__name__)

DEFAULT_DELAY_SECONDS = 1.2


class ReminderStore(Protocol):
    """Durable get/set of the reminder day marker.

    ``get_reminder_state`` returns None when nothing was saved and raises
    StoreUnavailableError when the read fails.
    """

    def get_reminder_state(self, device_key: str) -> ReminderState | None: ...

    def save_reminder_state(self, device_key: str, state: ReminderState) -> bool: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExpiredReminderService:
    """Checks whether to show the expired reminder for a device.

    Only one check per device is in flight at a time, so two foreground
    events on the same day cannot both fire.
    """

    def __init__(
        self,
        store: ReminderStore,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self.delay_seconds = delay_seconds
        self._clock = clock
        self._locks: dict[str, asyncio.Lock] = {}
        self._holders: dict[str, int] = {}

    @asynccontextmanager
    async def _device_lock(self, device_key: str) -> AsyncIterator[None]:
        """Serialize checks for one device; the lock is dropped once unused."""
        lock = self._locks.setdefault(device_key, asyncio.Lock())
        self._holders[device_key] = self._holders.get(device_key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._holders[device_key] -= 1
            if not self._holders[device_key]:
                del self._holders[device_key]
                del self._locks[device_key]

    async def check_after_delay(
        self, device_id: str, items: Iterable[FoodItem], tz: str | tzinfo
    ) -> ReminderDecision:
        """Wait the foreground delay, then run the check."""
        await asyncio.sleep(self.delay_seconds)
        return await self.check_now(device_id, items, tz)

    async def check_now(
        self, device_id: str, items: Iterable[FoodItem], tz: str | tzinfo
    ) -> ReminderDecision:
        """Classify the snapshot and fire at most once per local day.

        Args:
            device_id: Raw device identifier
            items: Current food item snapshot
            tz: Viewer's timezone

        Returns:
            ReminderDecision. A fire is only reported once the new day marker
            has been persisted.
        """
        zone = as_timezone(tz)
        device_key = hash_device_id(device_id)

        async with self._device_lock(device_key):
            now = self._clock()
            counts = summarize_freshness(items, now, zone)
            today = local_today(now, zone)

            try:
                stored = await asyncio.to_thread(self._store.get_reminder_state, device_key)
            except StoreUnavailableError:
                logger.warning(
                    "Reminder not shown for device %s: day marker could not be read",
                    device_key[:8],
                )
                return ReminderDecision(
                    should_fire=False, count=counts.expired, state=ReminderState()
                )
            state = stored or ReminderState()

            decision = maybe_fire(counts.expired, today, state)
            if not decision.should_fire:
                return decision

            saved = await asyncio.to_thread(
                self._store.save_reminder_state, device_key, decision.state
            )
            if not saved:
                logger.warning(
                    "Reminder not shown for device %s: day marker could not be saved",
                    device_key[:8],
                )
                return ReminderDecision(should_fire=False, count=decision.count, state=state)

            logger.info(
                "Expired reminder fired for device %s on %s (%d expired)",
                device_key[:8], today, decision.count,
            )
            return decision
