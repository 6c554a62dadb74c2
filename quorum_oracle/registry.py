"""
In-memory oracle registry.

Oracles are addressed by identity in an explicit store rather than held as
globals. Engine operations are exposed by oracle id; the registry owns the
identity provider used for new oracles and capabilities.
"""

import logging
from typing import Dict, List, Optional, Tuple, Union

from . import engine
from .errors import UnknownOracle
from .identity import IdentityProvider, uuid_identity
from .models.capability import Capability, OwnerCapability, ValidatorCapability
from .models.observation import Observation
from .models.oracle import OracleState

logger = logging.getLogger(__name__)


class OracleRegistry:
    """
    Identity-keyed store of oracle instances.
    """

    def __init__(self, new_id: Optional[IdentityProvider] = None):
        """
        Args:
            new_id: Identity provider for oracles and capabilities
        """
        self.new_id = new_id or uuid_identity
        self._oracles: Dict[str, OracleState] = {}

    def __contains__(self, oracle_id: str) -> bool:
        return oracle_id in self._oracles

    def __len__(self) -> int:
        return len(self._oracles)

    def ids(self) -> List[str]:
        return list(self._oracles)

    def get(self, oracle_id: str) -> OracleState:
        """
        Look up an oracle.

        Raises:
            UnknownOracle: nothing registered under `oracle_id`
        """
        try:
            return self._oracles[oracle_id]
        except KeyError:
            raise UnknownOracle(f"no oracle registered with id {oracle_id}") from None

    def create(self, interval: int, min_posts: int) -> Tuple[OracleState, OwnerCapability]:
        oracle, owner_cap = engine.create(interval, min_posts, new_id=self.new_id)
        self._oracles[oracle.id] = oracle
        logger.info(f"Registered oracle {oracle.id}")
        return oracle, owner_cap

    def list_validator(
        self, oracle_id: str, owner_cap: Capability, recipient: str
    ) -> ValidatorCapability:
        return engine.list_validator(
            self.get(oracle_id), owner_cap, recipient, new_id=self.new_id
        )

    def post(
        self,
        oracle_id: str,
        validator_cap: Capability,
        timestamp: int,
        value: Union[int, Observation],
        reject_regression: bool = True,
    ) -> Optional[int]:
        return engine.post(
            self.get(oracle_id), validator_cap, timestamp, value,
            reject_regression=reject_regression,
        )

    def force_update(
        self,
        oracle_id: str,
        owner_cap: Capability,
        timestamp: int,
        reject_regression: bool = True,
    ) -> int:
        return engine.force_update(
            self.get(oracle_id), owner_cap, timestamp,
            reject_regression=reject_regression,
        )

    def read(self, oracle_id: str) -> int:
        return engine.read(self.get(oracle_id))
