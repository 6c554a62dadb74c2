"""
Quorum Oracle - Service Orchestrator

Coordinates the pieces an application needs around the engine:
1. Create oracles with configured defaults
2. List validators on behalf of owners
3. Accept posts and forced updates, applying the configured timestamp policy
4. Keep a bounded history of publications per oracle
5. Expose state for monitoring
"""

import logging
from collections import deque
from typing import Deque, Dict, List, Optional, Tuple, Union

from .config import OracleConfig, load_config
from .errors import OracleError
from .identity import IdentityProvider
from .models.capability import Capability, OwnerCapability, ValidatorCapability
from .models.observation import FoldSummary, Observation
from .models.oracle import OracleState
from .registry import OracleRegistry

logger = logging.getLogger(__name__)


class OracleService:
    """
    Main oracle orchestrator.

    Wraps an OracleRegistry with configuration defaults, logging and
    publication history.
    """

    def __init__(
        self,
        config: Optional[OracleConfig] = None,
        new_id: Optional[IdentityProvider] = None,
    ):
        """
        Initialize the service.

        Args:
            config: Oracle configuration (loads default if not provided)
            new_id: Identity provider for oracles and capabilities
        """
        self.config = config or load_config()
        self.registry = OracleRegistry(new_id=new_id)
        self._history: Dict[str, Deque[FoldSummary]] = {}

    @property
    def reject_regression(self) -> bool:
        return self.config.engine.reject_timestamp_regression

    def create_oracle(
        self,
        interval: Optional[int] = None,
        min_posts: Optional[int] = None,
    ) -> Tuple[OracleState, OwnerCapability]:
        """
        Create an oracle, falling back to configured thresholds.

        Returns:
            Tuple of (oracle, owner capability)
        """
        if interval is None:
            interval = self.config.engine.default_interval
        if min_posts is None:
            min_posts = self.config.engine.default_min_posts

        oracle, owner_cap = self.registry.create(interval, min_posts)
        self._history[oracle.id] = deque(maxlen=self.config.engine.history_size)

        logger.info(f"Oracle {oracle.id} created (interval={interval}, min_posts={min_posts})")
        return oracle, owner_cap

    def list_validator(
        self, oracle_id: str, owner_cap: Capability, recipient: str
    ) -> ValidatorCapability:
        try:
            cap = self.registry.list_validator(oracle_id, owner_cap, recipient)
        except OracleError as e:
            logger.warning(f"Listing {recipient} on {oracle_id} rejected: {e}")
            raise

        logger.info(f"Oracle {oracle_id}: validator {recipient} listed")
        return cap

    def post(
        self,
        oracle_id: str,
        validator_cap: Capability,
        timestamp: int,
        value: Union[int, Observation],
    ) -> Optional[int]:
        """
        Post an observation.

        Returns:
            New published value if the post triggered a fold, else None
        """
        try:
            published = self.registry.post(
                oracle_id, validator_cap, timestamp, value,
                reject_regression=self.reject_regression,
            )
        except OracleError as e:
            logger.warning(f"Post to {oracle_id} rejected: {e}")
            raise

        if published is not None:
            self._record_fold(oracle_id)
        return published

    def force_update(self, oracle_id: str, owner_cap: Capability, timestamp: int) -> int:
        """
        Fold pending observations now, bypassing the trigger policy.
        """
        try:
            published = self.registry.force_update(
                oracle_id, owner_cap, timestamp,
                reject_regression=self.reject_regression,
            )
        except OracleError as e:
            logger.warning(f"Forced update of {oracle_id} rejected: {e}")
            raise

        self._record_fold(oracle_id)
        return published

    def read(self, oracle_id: str) -> int:
        return self.registry.read(oracle_id)

    def history(self, oracle_id: str) -> List[FoldSummary]:
        """Fold summaries for an oracle, oldest first"""
        self.registry.get(oracle_id)
        return list(self._history.get(oracle_id, ()))

    def _record_fold(self, oracle_id: str):
        summary = self.registry.get(oracle_id).last_fold
        self._history[oracle_id].append(summary)
        logger.info(
            f"Oracle {oracle_id} published {summary.value} "
            f"from {summary.num_observations} observations at t={summary.timestamp}"
        )

    def get_state(self, oracle_id: str) -> dict:
        """
        Get current oracle state for debugging/monitoring.
        """
        oracle = self.registry.get(oracle_id)
        return {
            **oracle.to_dict(),
            "history": [s.to_dict() for s in self._history.get(oracle_id, ())],
        }
