"""Exceptions raised at the repository boundary."""


class SchedulerError(Exception):
    """Base class for spot scheduler errors."""
    pass


class SpotNotFoundError(SchedulerError):
    """Raised when a spot id is not present among the active spots."""

    def __init__(self, spot_id: str):
        super().__init__(f"Spot not found: {spot_id}")
        self.spot_id = spot_id
