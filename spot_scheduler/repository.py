"""
Spot repository interface.

The scheduler core never persists anything; the orchestration layer
(service.py) talks to a repository through this protocol.
"""

from __future__ import annotations

from typing import Protocol

from loguru import logger

from spot_scheduler.core.models import OutcomeRecord, SpotRecord


class SpotRepository(Protocol):
    """Interface for spot persistence."""

    def load_active_spots(self) -> list[SpotRecord]:
        """Return all active spots."""
        ...

    def save(self, spot: SpotRecord) -> None:
        """Insert or replace a spot."""
        ...

    def append_history(self, spot_id: str, record: OutcomeRecord) -> None:
        """Append an outcome to a spot's practice log."""
        ...


class InMemorySpotRepository:
    """Dictionary-backed repository for tests and embedding."""

    def __init__(self, spots: list[SpotRecord] | None = None):
        self._spots: dict[str, SpotRecord] = {}
        self._history: dict[str, list[OutcomeRecord]] = {}
        for spot in spots or []:
            self.save(spot)

    def load_active_spots(self) -> list[SpotRecord]:
        return [s for s in self._spots.values() if s.is_active]

    def save(self, spot: SpotRecord) -> None:
        self._spots[spot.id] = spot

    def append_history(self, spot_id: str, record: OutcomeRecord) -> None:
        self._history.setdefault(spot_id, []).append(record)
        logger.debug(f"History appended for {spot_id}: {record.outcome.value}")

    def get(self, spot_id: str) -> SpotRecord | None:
        return self._spots.get(spot_id)

    def history(self, spot_id: str) -> list[OutcomeRecord]:
        return list(self._history.get(spot_id, []))
