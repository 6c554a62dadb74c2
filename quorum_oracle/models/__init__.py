"""Data models for the quorum oracle"""

from .oracle import OracleState
from .observation import Observation, FoldSummary
from .capability import (
    Capability,
    CapabilityRole,
    OwnerCapability,
    ValidatorCapability,
)

__all__ = [
    "OracleState",
    "Observation",
    "FoldSummary",
    "Capability",
    "CapabilityRole",
    "OwnerCapability",
    "ValidatorCapability",
]
