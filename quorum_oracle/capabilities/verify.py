"""
Capability verification.

A capability authorizes an operation when it grants the required role and
its bound identity equals the target oracle's identity. Possession is
established by the caller's host; only the binding is checked here.
"""

from ..errors import OwnerMismatch, ValidatorMismatch
from ..models.capability import Capability, OwnerCapability, ValidatorCapability
from ..models.oracle import OracleState


def verify_owner(oracle: OracleState, cap: Capability) -> None:
    """
    Check that `cap` is an owner capability for `oracle`.

    Raises:
        OwnerMismatch: wrong role or bound to another oracle
    """
    if not isinstance(cap, OwnerCapability) or not cap.is_bound_to(oracle.id):
        raise OwnerMismatch(
            f"capability {getattr(cap, 'id', cap)!r} is not an owner "
            f"capability for oracle {oracle.id}"
        )


def verify_validator(oracle: OracleState, cap: Capability) -> None:
    """
    Check that `cap` is a validator capability for `oracle`.

    Raises:
        ValidatorMismatch: wrong role or bound to another oracle
    """
    if not isinstance(cap, ValidatorCapability) or not cap.is_bound_to(oracle.id):
        raise ValidatorMismatch(
            f"capability {getattr(cap, 'id', cap)!r} is not a validator "
            f"capability for oracle {oracle.id}"
        )
