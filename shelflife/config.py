"""TOML configuration loader for the estimation engine."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .openfoodfacts import DEFAULT_SEARCH_URL, DEFAULT_USER_AGENT


@dataclass
class LookupConfig:
    enabled: bool = True
    base_url: str = DEFAULT_SEARCH_URL
    timeout: float = 4.0
    page_size: int = 5
    user_agent: str = DEFAULT_USER_AGENT


@dataclass
class ReviewConfig:
    low_confidence_threshold: float = 0.5


@dataclass
class TablesConfig:
    path: str = ""  # empty → shipped tables


@dataclass
class EstimatorConfig:
    lookup: LookupConfig = field(default_factory=LookupConfig)
    review: ReviewConfig = field(default_factory=ReviewConfig)
    tables: TablesConfig = field(default_factory=TablesConfig)


def load_config(path: str | Path | None = None) -> EstimatorConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    Lookup settings can be overridden via environment variables.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    lkp = raw.get("lookup", {})
    rev = raw.get("review", {})
    tbl = raw.get("tables", {})

    # Resolve lookup settings: environment variable → config file → default
    enabled = lkp.get("enabled", True)
    env_enabled = os.environ.get("SHELFLIFE_LOOKUP_ENABLED", "")
    if env_enabled:
        enabled = env_enabled.strip().lower() not in ("0", "false", "no", "off")

    timeout = float(lkp.get("timeout", 4.0))
    env_timeout = os.environ.get("SHELFLIFE_LOOKUP_TIMEOUT", "")
    if env_timeout:
        timeout = float(env_timeout)
    if timeout <= 0:
        raise ValueError(f"lookup timeout must be positive: {timeout!r}")

    threshold = float(rev.get("low_confidence_threshold", 0.5))
    if not 0.0 <= threshold <= 1.0:
        raise ValueError(
            f"low_confidence_threshold must be within [0, 1]: {threshold!r}"
        )

    return EstimatorConfig(
        lookup=LookupConfig(
            enabled=bool(enabled),
            base_url=lkp.get("base_url", DEFAULT_SEARCH_URL),
            timeout=timeout,
            page_size=int(lkp.get("page_size", 5)),
            user_agent=lkp.get("user_agent", DEFAULT_USER_AGENT),
        ),
        review=ReviewConfig(low_confidence_threshold=threshold),
        tables=TablesConfig(path=tbl.get("path", "")),
    )
