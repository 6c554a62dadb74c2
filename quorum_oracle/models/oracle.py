"""Oracle state data model"""

from dataclasses import dataclass, field
from typing import List, Optional

from .observation import Observation, FoldSummary


@dataclass
class OracleState:
    """
    Shared aggregation record.

    Attributes:
        id: Opaque identity, stable for the instance's lifetime
        interval: Elapsed time after which any pending post forces a fold
        min_posts: Number of pending observations that forces a fold
        last_update: Timestamp of the most recent fold (0 before the first)
        pending: Observations posted since the last fold
        published: Current aggregate exposed to readers
        last_fold: Summary of the most recent fold, if any
    """
    id: str
    interval: int
    min_posts: int
    last_update: int = 0
    pending: List[Observation] = field(default_factory=list)
    published: int = 0
    last_fold: Optional[FoldSummary] = None

    @property
    def pending_count(self) -> int:
        return len(self.pending)

    @property
    def pending_values(self) -> List[int]:
        return [o.value for o in self.pending]

    def to_dict(self) -> dict:
        """Convert to dictionary for monitoring"""
        return {
            "id": self.id,
            "interval": self.interval,
            "min_posts": self.min_posts,
            "last_update": self.last_update,
            "pending": self.pending_values,
            "published": self.published,
            "last_fold": self.last_fold.to_dict() if self.last_fold else None,
        }
