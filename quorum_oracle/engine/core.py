"""
Oracle lifecycle and update operations.

Flow:
1. Owner creates an oracle and receives its owner capability
2. Owner lists validators (mints validator capabilities)
3. Validators post observations; the trigger policy decides when to fold
4. Owner may force a fold at any time
5. Anyone reads the published value

Every operation checks authorization and inputs before touching state, so a
raised error always leaves the oracle exactly as it was.
"""

import logging
import numbers
from typing import Optional, Tuple, Union

from ..capabilities.verify import verify_owner, verify_validator
from ..errors import InvalidObservation, TimestampRegression
from ..identity import IdentityProvider, uuid_identity
from ..models.capability import Capability, OwnerCapability, ValidatorCapability
from ..models.observation import Observation
from ..models.oracle import OracleState
from .aggregation import fold, should_fold

# Unsigned 64-bit amounts
MAX_OBSERVATION = 2 ** 64 - 1

logger = logging.getLogger(__name__)


def create(
    interval: int,
    min_posts: int,
    new_id: Optional[IdentityProvider] = None,
) -> Tuple[OracleState, OwnerCapability]:
    """
    Create an oracle and the owner capability bound to it.

    Args:
        interval: Staleness window after which any post forces a fold
        min_posts: Pending count that forces a fold (0 = fold on every post)
        new_id: Identity provider (random uuid if not given)

    Returns:
        Tuple of (oracle, owner capability)
    """
    if interval < 0:
        raise ValueError(f"interval must be non-negative, got {interval}")
    if min_posts < 0:
        raise ValueError(f"min_posts must be non-negative, got {min_posts}")

    new_id = new_id or uuid_identity
    oracle = OracleState(id=new_id(), interval=interval, min_posts=min_posts)
    owner_cap = OwnerCapability(id=new_id(), oracle_id=oracle.id)

    if min_posts == 0:
        logger.warning(f"Oracle {oracle.id} created with min_posts=0: every post will fold")

    logger.debug(f"Created oracle {oracle.id} (interval={interval}, min_posts={min_posts})")
    return oracle, owner_cap


def list_validator(
    oracle: OracleState,
    owner_cap: Capability,
    recipient: str,
    new_id: Optional[IdentityProvider] = None,
) -> ValidatorCapability:
    """
    Mint a validator capability for `recipient`.

    Does not modify the oracle.

    Raises:
        OwnerMismatch: `owner_cap` does not control `oracle`
    """
    verify_owner(oracle, owner_cap)

    new_id = new_id or uuid_identity
    cap = ValidatorCapability(id=new_id(), oracle_id=oracle.id, issued_to=recipient)

    logger.debug(f"Oracle {oracle.id}: listed validator {recipient} ({cap.id})")
    return cap


def _check_timestamp(oracle: OracleState, timestamp: int) -> None:
    if timestamp < oracle.last_update:
        raise TimestampRegression(
            f"oracle {oracle.id}: timestamp {timestamp} is earlier than "
            f"last update {oracle.last_update}"
        )


def _to_observation(value: Union[int, Observation]) -> Observation:
    if isinstance(value, Observation):
        value = value.value
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidObservation(f"observation must be an integer, got {value!r}")
    if value < 0:
        raise InvalidObservation(f"observation must be non-negative, got {value}")
    if value > MAX_OBSERVATION:
        raise InvalidObservation(f"observation exceeds {MAX_OBSERVATION}, got {value}")
    return Observation(int(value))


def post(
    oracle: OracleState,
    validator_cap: Capability,
    timestamp: int,
    value: Union[int, Observation],
    reject_regression: bool = True,
) -> Optional[int]:
    """
    Post an observation and fold if the trigger policy fires.

    Args:
        oracle: Target oracle
        validator_cap: Capability of the posting validator
        timestamp: Caller-supplied current time
        value: Observed value
        reject_regression: Reject timestamps earlier than `last_update`

    Returns:
        New published value if a fold happened, else None

    Raises:
        ValidatorMismatch: `validator_cap` is not valid for `oracle`
        InvalidObservation: value is not an integer in [0, 2**64 - 1]
        TimestampRegression: timestamp goes backwards (if rejecting)
    """
    verify_validator(oracle, validator_cap)
    observation = _to_observation(value)
    if reject_regression:
        _check_timestamp(oracle, timestamp)

    oracle.pending.append(observation)
    if not should_fold(oracle, timestamp):
        return None

    try:
        return fold(oracle, timestamp)
    except Exception:
        oracle.pending.pop()
        raise


def force_update(
    oracle: OracleState,
    owner_cap: Capability,
    timestamp: int,
    reject_regression: bool = True,
) -> int:
    """
    Fold pending observations regardless of the trigger policy.

    Returns:
        New published value

    Raises:
        OwnerMismatch: `owner_cap` does not control `oracle`
        TimestampRegression: timestamp goes backwards (if rejecting)
        EmptyAggregation: nothing pending
    """
    verify_owner(oracle, owner_cap)
    if reject_regression:
        _check_timestamp(oracle, timestamp)

    return fold(oracle, timestamp)


def read(oracle: OracleState) -> int:
    """Current published value. Open to everyone."""
    return oracle.published
