"""
Aggregation of pending observations.

The published value is the floor mean of the pending batch. Alongside it,
each fold records descriptive statistics of the batch (median, range,
dispersion) for monitoring; those never feed back into the published value.
"""

import logging
from typing import Sequence

import numpy as np

from ..errors import EmptyAggregation
from ..models.observation import FoldSummary
from ..models.oracle import OracleState

logger = logging.getLogger(__name__)


def floor_mean(values: Sequence[int]) -> int:
    """
    Integer mean rounded down: [10, 11] -> 10.

    Raises:
        EmptyAggregation: no values
    """
    if len(values) == 0:
        raise EmptyAggregation("cannot aggregate an empty batch")
    return sum(values) // len(values)


def summarize(values: Sequence[int], timestamp: int) -> FoldSummary:
    """
    Build the fold summary for a batch of observation values.

    Raises:
        EmptyAggregation: no values
    """
    mean = floor_mean(values)
    arr = np.asarray(values, dtype=np.float64)

    return FoldSummary(
        value=mean,
        timestamp=timestamp,
        num_observations=len(values),
        median=float(np.median(arr)),
        min_value=min(values),
        max_value=max(values),
        std=float(np.std(arr)),
    )


def should_fold(oracle: OracleState, timestamp: int) -> bool:
    """
    Trigger policy: fold when the quorum is reached OR the published
    value is stale.

    Quorum: len(pending) >= min_posts
    Staleness: timestamp - last_update > interval (strict)
    """
    quorum_reached = oracle.pending_count >= oracle.min_posts
    stale = timestamp - oracle.last_update > oracle.interval
    return quorum_reached or stale


def fold(oracle: OracleState, timestamp: int) -> int:
    """
    Publish the mean of all pending observations.

    Sets `published`, clears `pending` and sets `last_update` to
    `timestamp`. On an empty batch nothing is modified.

    Returns:
        The new published value

    Raises:
        EmptyAggregation: no pending observations
    """
    if not oracle.pending:
        raise EmptyAggregation(f"oracle {oracle.id} has no pending observations")

    summary = summarize(oracle.pending_values, timestamp)

    oracle.published = summary.value
    oracle.pending = []
    oracle.last_update = timestamp
    oracle.last_fold = summary

    logger.debug(
        f"Oracle {oracle.id} folded {summary.num_observations} observations "
        f"at t={timestamp}: published={summary.value}"
    )
    return summary.value
