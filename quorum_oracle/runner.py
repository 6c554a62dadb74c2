"""
Quorum Oracle Runner

Drives one oracle with simulated validators posting noisy observations.

Usage:
    python -m quorum_oracle.runner
    python -m quorum_oracle.runner --ticks 50 --validators 7 --min-posts 4 --seed 1
"""

import argparse
import logging
import signal
import sys
import time
from typing import List, Optional

import numpy as np

from .config import OracleConfig, load_config
from .identity import SequentialIdentity
from .main import OracleService
from .models.observation import FoldSummary

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO", log_file: str = ""):
    """Configure root logging for the CLI"""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt='%H:%M:%S',
        handlers=handlers,
    )


class OracleRunner:
    """
    Runs one oracle against simulated validators.

    Each tick the clock advances by `tick_seconds` and every validator posts
    with probability `post_probability` a value drawn around `base_value`.
    """

    def __init__(
        self,
        config: Optional[OracleConfig] = None,
        interval: Optional[int] = None,
        min_posts: Optional[int] = None,
        tick_delay: float = 0.0,
    ):
        self.config = config or load_config()
        self.sim = self.config.simulation
        self.tick_delay = tick_delay

        self.service = OracleService(self.config, new_id=SequentialIdentity("sim"))
        self.oracle, self.owner_cap = self.service.create_oracle(interval, min_posts)
        self.validators = [
            self.service.list_validator(self.oracle.id, self.owner_cap, f"validator-{i}")
            for i in range(self.sim.num_validators)
        ]

        self._rng = np.random.default_rng(self.sim.seed)
        self._clock = 0
        self._running = False
        self._tick_count = 0

    @property
    def clock(self) -> int:
        return self._clock

    def _draw(self) -> int:
        value = self._rng.normal(self.sim.base_value, self.sim.noise_std)
        return max(0, int(round(value)))

    def tick(self) -> List[FoldSummary]:
        """Single simulation step. Returns the folds it produced."""
        self._tick_count += 1
        self._clock += self.sim.tick_seconds

        folds = []
        posted = 0
        for cap in self.validators:
            if self._rng.random() >= self.sim.post_probability:
                continue
            posted += 1
            published = self.service.post(self.oracle.id, cap, self._clock, self._draw())
            if published is not None:
                folds.append(self.oracle.last_fold)

        logger.info(
            f"[{self._tick_count}] t={self._clock} posts={posted} "
            f"pending={self.oracle.pending_count} published={self.service.read(self.oracle.id)}"
        )
        return folds

    def run(self, ticks: int) -> List[FoldSummary]:
        """Run for a number of ticks (or until stopped)"""
        logger.info(
            f"Starting oracle {self.oracle.id}: interval={self.oracle.interval} "
            f"min_posts={self.oracle.min_posts} validators={len(self.validators)}"
        )
        logger.info("-" * 60)

        self._running = True
        folds: List[FoldSummary] = []
        try:
            for _ in range(ticks):
                if not self._running:
                    break
                folds.extend(self.tick())
                if self.tick_delay:
                    time.sleep(self.tick_delay)
        finally:
            self.stop()

        return folds

    def stop(self):
        self._running = False
        logger.info(
            f"Oracle runner stopped after {self._tick_count} ticks, "
            f"{len(self.service.history(self.oracle.id))} publications"
        )


def main(argv: Optional[List[str]] = None):
    """Main entry point"""
    parser = argparse.ArgumentParser(description="Quorum Oracle simulation runner")
    parser.add_argument("--config", "-c", help="Path to YAML/JSON config file")
    parser.add_argument(
        "--ticks", "-t",
        type=int,
        default=20,
        help="Number of ticks to simulate (default: 20)"
    )
    parser.add_argument("--validators", "-v", type=int, help="Number of simulated validators")
    parser.add_argument("--interval", "-i", type=int, help="Staleness interval")
    parser.add_argument("--min-posts", "-m", type=int, help="Quorum threshold")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument(
        "--delay",
        type=float,
        default=0.0,
        help="Wall-clock seconds to sleep between ticks"
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single tick and exit"
    )

    args = parser.parse_args(argv)

    config = load_config(args.config)
    if args.validators is not None:
        config.simulation.num_validators = args.validators
    if args.seed is not None:
        config.simulation.seed = args.seed

    errors = config.validate()
    if args.interval is not None and args.interval < 0:
        errors.append("--interval must be non-negative")
    if args.min_posts is not None and args.min_posts < 0:
        errors.append("--min-posts must be non-negative")
    if errors:
        parser.error("; ".join(errors))

    setup_logging(config.log_level, config.log_file)

    runner = OracleRunner(
        config,
        interval=args.interval,
        min_posts=args.min_posts,
        tick_delay=args.delay,
    )

    def signal_handler(sig, frame):
        logger.info("Shutting down...")
        runner._running = False

    previous_handler = signal.signal(signal.SIGINT, signal_handler)
    try:
        folds = runner.run(1 if args.once else args.ticks)
    finally:
        signal.signal(signal.SIGINT, previous_handler)

    print(f"\nPublished: {runner.service.read(runner.oracle.id)}")
    print(f"Publications: {len(folds)}")
    if folds:
        last = folds[-1]
        print(f"Last fold: {last.num_observations} obs, median {last.median:.1f}, "
              f"spread {last.spread_bps:.1f} bps")
    return 0


if __name__ == "__main__":
    sys.exit(main())
