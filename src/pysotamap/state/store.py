"""In-memory merged player state.

This is the only component allowed to merge candidate updates. It is not
thread-safe by itself; the watcher is its only writer.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from pysotamap.models.player import PlayerState
from pysotamap.state.events import PlayerEvent, PlayerField
from pysotamap.state.policy import should_accept_update

_logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _FieldTimestamps:
    area_name: datetime | None = None
    map_name: datetime | None = None
    loc: datetime | None = None

    def get(self, player_field: PlayerField) -> datetime | None:
        value: datetime | None = getattr(self, player_field.value)
        return value

    def set(self, player_field: PlayerField, value: datetime) -> None:
        setattr(self, player_field.value, value)


class PlayerStateStore:
    """Merge :class:`PlayerEvent` candidates field by field.

    Each field keeps the timestamp of the claim that set it. A candidate
    replaces a field only when its timestamp is strictly newer, so the
    result does not depend on which source was read first.
    """

    def __init__(self) -> None:
        self._state = PlayerState()
        self._applied_at = _FieldTimestamps()

    @property
    def state(self) -> PlayerState:
        return self._state

    def apply(self, event: PlayerEvent) -> bool:
        """Apply one event; return whether any field changed value."""
        updates: dict[str, object] = {}
        for player_field, value in event.data.items():
            if not should_accept_update(
                applied_at=self._applied_at.get(player_field),
                incoming_at=event.timestamp,
            ):
                _logger.debug(
                    "Dropping %s=%r from %s at %s (field set at %s)",
                    player_field.value,
                    value,
                    event.source.value,
                    event.timestamp.isoformat(),
                    self._applied_at.get(player_field),
                )
                continue
            self._applied_at.set(player_field, event.timestamp)
            updates[player_field.value] = value

        if not updates:
            return False

        previous = self._state
        self._state = previous.model_copy(update=updates)
        return self._state != previous

    def apply_all(self, events: Iterable[PlayerEvent]) -> bool:
        changed = False
        for event in events:
            changed = self.apply(event) or changed
        return changed
