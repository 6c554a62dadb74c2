"""Capability token data models"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class CapabilityRole(Enum):
    """Role granted by a capability"""
    OWNER = "owner"          # May list validators and force updates
    VALIDATOR = "validator"  # May post observations


@dataclass(frozen=True)
class Capability:
    """
    Bearer token bound to exactly one oracle.

    Attributes:
        id: Unique identity of the token itself
        oracle_id: Identity of the oracle this token is valid for
        role: Role the token grants
    """
    id: str
    oracle_id: str
    role: CapabilityRole

    def is_bound_to(self, oracle_id: str) -> bool:
        return self.oracle_id == oracle_id

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "oracle_id": self.oracle_id,
            "role": self.role.value,
        }


@dataclass(frozen=True)
class OwnerCapability(Capability):
    """Administrative control over one oracle. Minted once, at creation."""
    role: CapabilityRole = field(default=CapabilityRole.OWNER, init=False)


@dataclass(frozen=True)
class ValidatorCapability(Capability):
    """Posting rights on one oracle. Minted by the owner when listing."""
    role: CapabilityRole = field(default=CapabilityRole.VALIDATOR, init=False)
    issued_to: Optional[str] = None

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["issued_to"] = self.issued_to
        return d
