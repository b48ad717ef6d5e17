"""Trust evaluation configuration.

``TrustConfig`` carries the tunable constants of the evaluator: level
thresholds, per-level cache lifetimes, and the staking tier table. Factor
weights are deliberately not configurable.

Config files are YAML documents with any of these top-level keys::

    thresholds:            # minimum score per level
      VOUCHED: 0.7
      COMMUNITY: 0.4
      UNKNOWN: 0.05
    cache_ttl_seconds:     # null means "never expires"
      SELF: null
      UNKNOWN: 300
    staking_tiers:
      Archon: 1.0
      Neophyte: 0.0

Missing keys keep their defaults.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from trustgate.core.trust.models import (
    SCORE_MAX,
    SCORE_MIN,
    SCORED_LEVELS,
    STAKING_TIER_SCORES,
    TRUST_CACHE_TTL,
    TRUST_THRESHOLDS,
    TrustLevel,
)
from trustgate.exceptions import ConfigError

logger = logging.getLogger(__name__)

_CONFIG_KEYS = frozenset({"thresholds", "cache_ttl_seconds", "staking_tiers"})

@dataclass
class TrustConfig:
    """Tunable evaluator constants.

    Attributes:
        thresholds: Minimum score for VOUCHED, COMMUNITY and UNKNOWN.
            Scores below the UNKNOWN threshold map to REVOKED. SELF and
            REVOKED take no threshold.
        cache_ttl_seconds: Cache lifetime per level; None never expires.
        staking_tier_scores: Score in [0, 1] per staking tier name.
    """

    thresholds: dict[TrustLevel, float] = field(
        default_factory=lambda: dict(TRUST_THRESHOLDS)
    )
    cache_ttl_seconds: dict[TrustLevel, float | None] = field(
        default_factory=lambda: dict(TRUST_CACHE_TTL)
    )
    staking_tier_scores: dict[str, float] = field(
        default_factory=lambda: dict(STAKING_TIER_SCORES)
    )

    def validate(self) -> None:
        """Raise ConfigError if any value breaks the ordering rules.

        Rules:
        1. Exactly VOUCHED, COMMUNITY and UNKNOWN have thresholds,
           strictly descending.
        2. The UNKNOWN threshold lies in (-1, 1], so REVOKED-by-score is
           reachable.
        3. Every level has a TTL that is None or non-negative.
        4. Staking tier scores lie in [0, 1].
        """
        extra = set(self.thresholds) - set(SCORED_LEVELS)
        if extra:
            names = ", ".join(sorted(level.name for level in extra))
            raise ConfigError(f"No threshold may be set for {names}")

        previous: float | None = None
        for level in SCORED_LEVELS:
            if level not in self.thresholds:
                raise ConfigError(f"Missing threshold for level {level.name}")
            value = self.thresholds[level]
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise ConfigError(f"Threshold for {level.name} must be numeric")
            if previous is not None and value >= previous:
                raise ConfigError(
                    f"Thresholds must strictly descend: {level.name}={value} "
                    f"is not below {previous}"
                )
            previous = value

        unknown = self.thresholds[TrustLevel.UNKNOWN]
        if unknown <= SCORE_MIN or unknown > SCORE_MAX:
            raise ConfigError(
                f"UNKNOWN threshold must be in ({SCORE_MIN}, {SCORE_MAX}], got {unknown}"
            )

        for level in TrustLevel:
            if level not in self.cache_ttl_seconds:
                raise ConfigError(f"Missing cache TTL for level {level.name}")
            ttl = self.cache_ttl_seconds[level]
            if ttl is not None and (not isinstance(ttl, (int, float)) or ttl < 0):
                raise ConfigError(
                    f"Cache TTL for {level.name} must be null or non-negative, got {ttl!r}"
                )

        for tier, score in self.staking_tier_scores.items():
            if not isinstance(score, (int, float)) or not 0.0 <= score <= 1.0:
                raise ConfigError(
                    f"Staking tier '{tier}' score must be in [0, 1], got {score!r}"
                )

    def ttl_for(self, level: TrustLevel) -> float | None:
        return self.cache_ttl_seconds[level]


def _parse_level(name: Any, section: str) -> TrustLevel:
    try:
        return TrustLevel[str(name).upper()]
    except KeyError:
        raise ConfigError(f"Unknown trust level '{name}' in '{section}'") from None


def _section(data: dict[str, Any], key: str) -> dict[Any, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"Config section '{key}' must be a mapping")
    return value


def config_from_dict(data: dict[str, Any]) -> TrustConfig:
    """Build and validate a TrustConfig from a parsed document."""
    unknown = set(data) - _CONFIG_KEYS
    if unknown:
        raise ConfigError(f"Unknown config keys: {sorted(unknown)}")

    config = TrustConfig()
    for name, value in _section(data, "thresholds").items():
        level = _parse_level(name, "thresholds")
        if level == TrustLevel.REVOKED:
            raise ConfigError("REVOKED has no threshold; it is everything below UNKNOWN")
        if level == TrustLevel.SELF:
            raise ConfigError("SELF has no threshold; it is reserved for the local identity")
        config.thresholds[level] = value
    for name, value in _section(data, "cache_ttl_seconds").items():
        config.cache_ttl_seconds[_parse_level(name, "cache_ttl_seconds")] = value
    for tier, value in _section(data, "staking_tiers").items():
        config.staking_tier_scores[str(tier)] = value

    config.validate()
    return config


def load_config(path: str | Path) -> TrustConfig:
    """Load a TrustConfig from a YAML file.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, or
            contains invalid values.
    """
    path = Path(path)
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in config file {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    config = config_from_dict(raw)
    logger.debug("Loaded trust config from %s", path)
    return config
