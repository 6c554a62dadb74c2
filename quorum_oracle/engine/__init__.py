"""Aggregation engine: oracle lifecycle, trigger policy and fold"""

from .core import create, list_validator, post, force_update, read
from .aggregation import fold, should_fold, floor_mean, summarize

__all__ = [
    "create",
    "list_validator",
    "post",
    "force_update",
    "read",
    "fold",
    "should_fold",
    "floor_mean",
    "summarize",
]
