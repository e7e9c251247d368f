"""JSONL event logger - durable trail of collection notifications"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..config import get
from .events import Notification, NotificationLog


class EventLogger:
    """Append-only JSONL event file, cleared when the logger is created.

    The path comes from the output_file argument, or logging.output_file
    in config when none is given. Each line carries a monotonic
    'sequence' field for ordering.
    """

    output_path: Path
    _sequence: int

    def __init__(self, output_file: str | None = None) -> None:
        resolved_file = output_file or get("logging.output_file") or "events.jsonl"
        if not isinstance(resolved_file, str):
            resolved_file = "events.jsonl"
        self.output_path = Path(resolved_file)
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        # A new logger starts a new trail
        self.output_path.write_text("")
        self._sequence = 0

    def log(self, event_type: str, data: dict[str, Any]) -> None:
        """Append one event line to the JSONL file."""
        self._sequence += 1
        event: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "sequence": self._sequence,
            "event_type": event_type,
            **data,
        }
        with open(self.output_path, "a") as f:
            f.write(json.dumps(event) + "\n")

    def log_notification(self, notification: Notification) -> None:
        """Persist a collection notification.

        The notification's own sequence is kept as 'notification_sequence'
        so the file can be cross-checked against the in-memory log.
        """
        self.log(notification.name, {
            "notification_sequence": notification.sequence,
            **notification.args,
        })

    def attach(self, notifications: NotificationLog) -> None:
        """Persist every future notification emitted on the given log."""
        notifications.subscribe(self.log_notification)

    def read_recent(self, n: int | None = None) -> list[dict[str, Any]]:
        """Read the last N events from the log.

        N defaults to logging.default_recent from config.
        """
        if n is None:
            default_recent = get("logging.default_recent")
            n = default_recent if isinstance(default_recent, int) else 50
        if not self.output_path.exists():
            return []
        lines = [line for line in self.output_path.read_text().splitlines() if line]
        return [json.loads(line) for line in lines[-n:]]
