"""Event bus primitives."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Iterable, List

from graphlab.graph.ids import utc_now


@dataclass
class Event:
    """Record of one action executed against a graph session."""

    ts: str
    level: str
    msg: str
    action: str | None = None
    target_ids: List[str] = field(default_factory=list)
    extras: dict | None = None

    def to_payload(self) -> dict:
        return asdict(self)


@dataclass
class EventBus:
    """Append-only in-memory event bus."""

    events: List[Event] = field(default_factory=list)

    def emit(
        self,
        *,
        level: str,
        msg: str,
        action: str | None = None,
        target_ids: Iterable[str] | None = None,
        extras: dict | None = None,
    ) -> Event:
        """Create and store a new :class:`Event`."""

        event = Event(
            ts=utc_now(),
            level=level,
            msg=msg,
            action=action,
            target_ids=list(target_ids or []),
            extras=extras,
        )
        self.events.append(event)
        return event

    def history(self) -> Iterable[Event]:
        """Return the chronological event history."""

        return tuple(self.events)

    def for_action(self, action: str) -> List[Event]:
        return [event for event in self.events if event.action == action]
