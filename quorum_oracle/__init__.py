"""
Quorum Oracle - capability-gated observation aggregation

An owner lists validators; validators post observations; the oracle folds
pending observations into a published mean once a quorum of posts arrives
or the published value goes stale. Anyone may read the published value.
"""

__version__ = "1.0.0"

from .main import OracleService
from .registry import OracleRegistry
from .engine import create, list_validator, post, force_update, read, fold
from .capabilities import verify_owner, verify_validator
from .models import (
    OracleState,
    Observation,
    FoldSummary,
    CapabilityRole,
    OwnerCapability,
    ValidatorCapability,
)
from .errors import (
    OracleError,
    AuthError,
    OwnerMismatch,
    ValidatorMismatch,
    EmptyAggregation,
    TimestampRegression,
    InvalidObservation,
    UnknownOracle,
)

__all__ = [
    # Service
    "OracleService",
    "OracleRegistry",
    # Engine
    "create",
    "list_validator",
    "post",
    "force_update",
    "read",
    "fold",
    "verify_owner",
    "verify_validator",
    # Models
    "OracleState",
    "Observation",
    "FoldSummary",
    "CapabilityRole",
    "OwnerCapability",
    "ValidatorCapability",
    # Errors
    "OracleError",
    "AuthError",
    "OwnerMismatch",
    "ValidatorMismatch",
    "EmptyAggregation",
    "TimestampRegression",
    "InvalidObservation",
    "UnknownOracle",
]
