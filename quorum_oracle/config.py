"""
Oracle settings: engine thresholds and policy, simulated validators, logging.

Values come from dataclass defaults, then an optional YAML or JSON file,
then environment variables (a local .env is read at import).
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Any, Union
from pathlib import Path
import os
import json
import logging

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()


# ============ Sub-Configurations ============

@dataclass
class EngineConfig:
    """Aggregation engine defaults and policy"""
    # Defaults for new oracles
    default_interval: int = 60
    default_min_posts: int = 3

    # Reject posts/forced updates timestamped before the last update
    reject_timestamp_regression: bool = True

    # Fold summaries kept per oracle
    history_size: int = 100

    def validate(self) -> List[str]:
        """Return a list of problems; empty when the settings are usable"""
        errors = []
        if self.default_interval < 0:
            errors.append("default_interval must be non-negative")
        if self.default_min_posts < 0:
            errors.append("default_min_posts must be non-negative")
        if self.history_size <= 0:
            errors.append("history_size must be positive")
        return errors


@dataclass
class SimulationConfig:
    """Simulated validator configuration for the runner"""
    num_validators: int = 5
    base_value: int = 30000
    noise_std: float = 50.0

    # Chance each validator posts on a given tick
    post_probability: float = 0.5

    # Clock advance per tick
    tick_seconds: int = 10

    seed: Optional[int] = None

    def validate(self) -> List[str]:
        errors = []
        if self.num_validators <= 0:
            errors.append("num_validators must be positive")
        if self.base_value < 0:
            errors.append("base_value must be non-negative")
        if self.noise_std < 0:
            errors.append("noise_std must be non-negative")
        if not 0 < self.post_probability <= 1:
            errors.append("post_probability must be in (0, 1]")
        if self.tick_seconds <= 0:
            errors.append("tick_seconds must be positive")
        return errors


# ============ Main Configuration ============

@dataclass
class OracleConfig:
    """Top-level settings, one section per component"""
    engine: EngineConfig = field(default_factory=EngineConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)

    # Logging
    log_level: str = "INFO"
    log_file: str = ""

    def validate(self) -> List[str]:
        """Problems across all sections"""
        errors = []
        errors.extend(self.engine.validate())
        errors.extend(self.simulation.validate())

        if logging.getLevelName(self.log_level.upper()) not in (
            logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL
        ):
            errors.append(f"unknown log_level '{self.log_level}'")

        return errors

    def to_dict(self) -> Dict[str, Any]:
        """Plain nested dict, as written by save_config"""
        return asdict(self)


# ============ Configuration Loading ============

ENV_MAPPINGS = {
    "ORACLE_INTERVAL": (("engine", "default_interval"), int),
    "ORACLE_MIN_POSTS": (("engine", "default_min_posts"), int),
    "ORACLE_REJECT_TIMESTAMP_REGRESSION": (("engine", "reject_timestamp_regression"), bool),
    "ORACLE_HISTORY_SIZE": (("engine", "history_size"), int),
    "ORACLE_SIM_VALIDATORS": (("simulation", "num_validators"), int),
    "ORACLE_SIM_SEED": (("simulation", "seed"), int),
    "LOG_LEVEL": (("log_level",), str),
    "LOG_FILE": (("log_file",), str),
}


TRUE_STRINGS = ("1", "true", "yes", "on")
FALSE_STRINGS = ("0", "false", "no", "off")


def _coerce(value: str, target: type) -> Any:
    if target is bool:
        flag = value.strip().lower()
        if flag in TRUE_STRINGS:
            return True
        if flag in FALSE_STRINGS:
            return False
        raise ValueError(f"not a boolean: {value!r}")
    return target(value)


def _apply_env_overrides(config_dict: Dict) -> Dict:
    """Overlay ENV_MAPPINGS values onto a raw config dict, typed"""
    for env_var, (path, target) in ENV_MAPPINGS.items():
        value = os.getenv(env_var)
        if value is None:
            continue

        try:
            typed = _coerce(value, target)
        except ValueError:
            raise ValueError(f"Invalid value for {env_var}: {value!r}") from None

        current = config_dict
        for key in path[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]
        current[path[-1]] = typed

    return config_dict


def _dict_to_config(d: Dict) -> OracleConfig:
    """Raw dict (file and env layers) to typed sections"""
    return OracleConfig(
        engine=EngineConfig(**d.get("engine", {})),
        simulation=SimulationConfig(**d.get("simulation", {})),
        log_level=d.get("log_level", "INFO"),
        log_file=d.get("log_file", ""),
    )


CONFIG_SEARCH_PATHS = [
    Path("quorum_oracle.yaml"),
    Path("quorum_oracle.json"),
    Path("config/quorum_oracle.yaml"),
    Path("config/quorum_oracle.json"),
]


def _find_config_path() -> Optional[Path]:
    """QUORUM_ORACLE_CONFIG wins; otherwise the first search path that exists"""
    env_path = os.getenv("QUORUM_ORACLE_CONFIG")
    if env_path:
        return Path(env_path)
    return next((p for p in CONFIG_SEARCH_PATHS if p.exists()), None)


def _read_config_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.warning(f"No config file at {path}, using defaults")
        return {}

    logger.info(f"Reading oracle config from {path}")
    with open(path, 'r') as f:
        if path.suffix in ('.yaml', '.yml'):
            return yaml.safe_load(f) or {}
        if path.suffix == '.json':
            return json.load(f)
    raise ValueError(f"Unsupported config file format: {path.suffix}")


def load_config(config_path: Optional[Union[str, Path]] = None) -> OracleConfig:
    """
    Build an OracleConfig from defaults, an optional file and the environment.

    Environment overrides (see ENV_MAPPINGS) take precedence over file
    values, which take precedence over dataclass defaults. Without an
    explicit path, QUORUM_ORACLE_CONFIG and then CONFIG_SEARCH_PATHS are
    consulted.

    Raises:
        ValueError: unreadable override, unsupported file type or failed validation
    """
    path = Path(config_path) if config_path is not None else _find_config_path()
    config_dict = _read_config_file(path) if path is not None else {}

    config = _dict_to_config(_apply_env_overrides(config_dict))

    errors = config.validate()
    for error in errors:
        logger.error(f"Invalid oracle config: {error}")
    if errors:
        raise ValueError(f"Configuration validation failed with {len(errors)} errors")

    return config


def save_config(config: OracleConfig, path: Union[str, Path], format: str = "yaml") -> None:
    """Write `config` as YAML or JSON so load_config can read it back"""
    if format not in ("yaml", "json"):
        raise ValueError(f"Unsupported format: {format}")

    path = Path(path)
    with open(path, 'w') as f:
        if format == "yaml":
            yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(config.to_dict(), f, indent=2)

    logger.info(f"Wrote oracle config to {path}")


def generate_default_config(path: Union[str, Path], format: str = "yaml") -> None:
    save_config(OracleConfig(), path, format)
