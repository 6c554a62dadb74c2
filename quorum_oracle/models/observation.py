"""Observation data models"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Observation:
    """
    A single value contributed by a validator.

    Carries no author or timestamp: authenticity is established by the
    capability check at posting time, not stored on the observation.
    """
    value: int

    def to_dict(self) -> dict:
        return {"value": self.value}


@dataclass(frozen=True)
class FoldSummary:
    """
    Record of one fold of pending observations.

    Attributes:
        value: Published value (floor mean of the batch)
        timestamp: Timestamp supplied when the fold happened
        num_observations: Number of observations folded
        median: Median of the batch
        min_value: Smallest observation in the batch
        max_value: Largest observation in the batch
        std: Population standard deviation of the batch
    """
    value: int
    timestamp: int
    num_observations: int
    median: float
    min_value: int
    max_value: int
    std: float

    @property
    def range(self) -> Tuple[int, int]:
        """(min, max) of the folded batch"""
        return (self.min_value, self.max_value)

    @property
    def spread_bps(self) -> float:
        """Max spread across the batch in basis points of the published value"""
        if self.value == 0:
            return 0.0
        return (self.max_value - self.min_value) / self.value * 10000

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return {
            "value": self.value,
            "timestamp": self.timestamp,
            "num_observations": self.num_observations,
            "median": self.median,
            "min_value": self.min_value,
            "max_value": self.max_value,
            "std": self.std,
            "spread_bps": self.spread_bps,
        }
