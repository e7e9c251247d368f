"""Append-only notification log with synchronous observers.

Every state change in a collection appends exactly one notification
(add_many_to_whitelist appends one per address). Observers are called
after the append, in subscription order. A failing observer is logged
and skipped; it never undoes the state change that produced the
notification.

Notification names:
    Mint(amount, minter)
    Withdraw(amount, owner)
    PauseStateChanged(paused)
    AddedToWhitelist(address)
    RemovedFromWhitelist(address)
    WhitelistOnlyToggled(whitelist_only)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

logger = logging.getLogger(__name__)

MINT = "Mint"
WITHDRAW = "Withdraw"
PAUSE_STATE_CHANGED = "PauseStateChanged"
ADDED_TO_WHITELIST = "AddedToWhitelist"
REMOVED_FROM_WHITELIST = "RemovedFromWhitelist"
WHITELIST_ONLY_TOGGLED = "WhitelistOnlyToggled"


@dataclass(frozen=True)
class Notification:
    """A single emitted notification."""

    sequence: int  # Monotonic, starts at 1
    name: str
    args: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"sequence": self.sequence, "name": self.name, "args": dict(self.args)}


Observer = Callable[[Notification], None]


class NotificationLog:
    """Ordered, append-only record of notifications."""

    def __init__(self) -> None:
        self._records: list[Notification] = []
        self._observers: list[Observer] = []

    def emit(self, name: str, **args: Any) -> Notification:
        notification = Notification(sequence=len(self._records) + 1, name=name, args=args)
        self._records.append(notification)
        for observer in list(self._observers):
            try:
                observer(notification)
            except Exception:
                logger.warning(
                    "Observer %r failed on %s #%d",
                    observer, name, notification.sequence, exc_info=True,
                )
        return notification

    def subscribe(self, observer: Observer) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> bool:
        """Remove an observer. Returns False if it was not subscribed."""
        try:
            self._observers.remove(observer)
        except ValueError:
            return False
        return True

    @property
    def records(self) -> list[Notification]:
        """All notifications so far, oldest first (a copy)."""
        return list(self._records)

    def by_name(self, name: str) -> list[Notification]:
        return [n for n in self._records if n.name == name]

    def __len__(self) -> int:
        return len(self._records)
