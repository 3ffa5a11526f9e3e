"""Dispatch engine: stash store, suppression decision and notifier fan-out."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from cloudtail.dispatch.rwlock import ReadWriteLock
from cloudtail.errors import DeliveryError
from cloudtail.stashes.models import Stash, matches

if TYPE_CHECKING:
    from cloudtail.events.models import Event
    from cloudtail.notifiers.base import Notifier

logger = logging.getLogger(__name__)


class DeliveryStatus(StrEnum):
    OK = "ok"
    ERROR = "error"
    SUPPRESSED = "suppressed"


@dataclass(frozen=True, slots=True)
class DeliveryResult:
    notifier: str
    status: DeliveryStatus
    stash_id: int | None = None
    error: str | None = None


class Controller:
    """Owns the live stashes and notifiers and dispatches events to them.

    ``process`` holds the lock in shared mode for its whole run, outbound
    notifier calls included, so dispatches proceed in parallel while
    ``add_stash`` and ``add_notifier`` wait for exclusive access.
    """

    def __init__(self) -> None:
        self._stashes: dict[int, Stash] = {}
        self._notifiers: list[Notifier] = []
        self._lock = ReadWriteLock()
        self._last_stash_id = 0
        self._stats_lock = threading.Lock()
        self._stats: dict[str, int] = {
            "events_processed": 0,
            "deliveries_ok": 0,
            "deliveries_failed": 0,
            "deliveries_suppressed": 0,
        }

    def add_stash(self, stash: Stash) -> int:
        with self._lock.write():
            self._last_stash_id += 1
            stash_id = self._last_stash_id
            self._stashes[stash_id] = stash
        return stash_id

    def add_notifier(self, notifier: Notifier) -> None:
        with self._lock.write():
            self._notifiers.append(notifier)

    def list_stashes(self) -> dict[int, Stash]:
        with self._lock.read():
            return dict(self._stashes)

    def notifier_names(self) -> list[str]:
        with self._lock.read():
            return [notifier.name for notifier in self._notifiers]

    def stats(self) -> dict[str, int]:
        with self._lock.read():
            sizes = {"stashes": len(self._stashes), "notifiers": len(self._notifiers)}
        with self._stats_lock:
            return {**self._stats, **sizes}

    def process(self, event: Event) -> list[DeliveryResult]:
        """Evaluate stashes per notifier and deliver the event where not suppressed.

        A failing notifier never prevents delivery to the ones after it.
        """
        results: list[DeliveryResult] = []
        with self._lock.read():
            for notifier in self._notifiers:
                results.append(self._dispatch_one(notifier, event))
        self._record(results)
        return results

    def _dispatch_one(self, notifier: Notifier, event: Event) -> DeliveryResult:
        name = notifier.name
        stash_id = self._first_match(name, event)
        if stash_id is not None:
            logger.info(
                "fn=process_event action=discard dest=%s id=%s stash=%d",
                name,
                event.event_id,
                stash_id,
            )
            return DeliveryResult(name, DeliveryStatus.SUPPRESSED, stash_id=stash_id)

        try:
            notifier.send(event)
        except DeliveryError as exc:
            logger.warning(
                "fn=process_event action=send dest=%s id=%s status=error err=%s",
                name,
                event.event_id,
                exc,
            )
            return DeliveryResult(name, DeliveryStatus.ERROR, error=str(exc))
        except Exception as exc:
            logger.exception(
                "fn=process_event action=send dest=%s id=%s status=error",
                name,
                event.event_id,
            )
            return DeliveryResult(name, DeliveryStatus.ERROR, error=repr(exc))

        logger.info(
            "fn=process_event action=send dest=%s id=%s status=ok",
            name,
            event.event_id,
        )
        return DeliveryResult(name, DeliveryStatus.OK)

    def _first_match(self, destination: str, event: Event) -> int | None:
        # caller holds the read lock
        for stash_id, stash in self._stashes.items():
            if matches(stash, event, destination):
                logger.debug("fn=process_event action=match stash=%d", stash_id)
                return stash_id
            logger.debug("fn=process_event action=noMatch stash=%d", stash_id)
        return None

    def _record(self, results: list[DeliveryResult]) -> None:
        with self._stats_lock:
            self._stats["events_processed"] += 1
            for result in results:
                if result.status is DeliveryStatus.OK:
                    self._stats["deliveries_ok"] += 1
                elif result.status is DeliveryStatus.ERROR:
                    self._stats["deliveries_failed"] += 1
                else:
                    self._stats["deliveries_suppressed"] += 1
