# -*- coding: utf-8 -*-
"""
GHG Disclosure Engine Configuration

Centralized configuration for the disclosure engine covering:
- Default disclosure standard validated by the compliance validator
- Default Scope 2 method feeding total GHG
- Presentation precision for every rounded output field
- Metrics toggle

Configuration only affects defaults and presentation. The static lookup
tables (scope map, unit factors, fuel renewability, removal types) are
module constants and cannot be changed through configuration.

All settings can be overridden via environment variables with the
``GL_DISCLOSURE_`` prefix (e.g. ``GL_DISCLOSURE_SCOPE2_METHOD``), or loaded
from a YAML file.

Example:
    >>> from ghg_disclosure.config import get_config
    >>> cfg = get_config()
    >>> print(cfg.standard, cfg.scope2_method)
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ghg_disclosure.models import DisclosureStandard, Scope2Method

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Environment variable prefix
# ---------------------------------------------------------------------------

_ENV_PREFIX = "GL_DISCLOSURE_"


# ---------------------------------------------------------------------------
# DisclosureConfig
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DisclosureConfig:
    """Complete configuration for the GHG disclosure engine.

    Attributes:
        standard: Disclosure standard checked by the compliance validator.
        scope2_method: Scope 2 method feeding total GHG when the caller
            does not choose one.
        emissions_precision: Decimal places for tCO2e fields.
        percentage_precision: Decimal places for percentage fields.
        energy_precision: Decimal places for MWh/GJ fields.
        revenue_intensity_precision: Decimal places for tCO2e per currency unit.
        employee_intensity_precision: Decimal places for tCO2e per FTE.
        area_intensity_precision: Decimal places for tCO2e per floor area unit.
        production_intensity_precision: Decimal places for tCO2e per product unit.
        progress_precision: Decimal places for target progress fractions.
        enable_metrics: Whether Prometheus collectors are updated.
    """

    # -- Defaults ------------------------------------------------------------
    standard: str = DisclosureStandard.ESRS_E1.value
    scope2_method: str = Scope2Method.LOCATION_BASED.value

    # -- Presentation precision ----------------------------------------------
    emissions_precision: int = 2
    percentage_precision: int = 1
    energy_precision: int = 2
    revenue_intensity_precision: int = 6
    employee_intensity_precision: int = 3
    area_intensity_precision: int = 4
    production_intensity_precision: int = 4
    progress_precision: int = 4

    # -- Observability -------------------------------------------------------
    enable_metrics: bool = True

    def __post_init__(self) -> None:
        DisclosureStandard(self.standard)
        Scope2Method(self.scope2_method)
        for f in fields(self):
            if f.name.endswith("_precision"):
                value = getattr(self, f.name)
                if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 12:
                    raise ValueError(f"{f.name} must be an integer between 0 and 12, got {value!r}")

    # ------------------------------------------------------------------
    # Factory helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> DisclosureConfig:
        """Build a DisclosureConfig from environment variables.

        Every field can be overridden via ``GL_DISCLOSURE_<FIELD_UPPER>``.
        Boolean values accept ``true/1/yes`` (case-insensitive).
        Integer values are parsed via ``int()``; invalid values fall back
        to the default with a warning.

        Returns:
            Populated DisclosureConfig instance.
        """
        prefix = _ENV_PREFIX

        def _env(name: str) -> Optional[str]:
            return os.environ.get(f"{prefix}{name}")

        def _bool(name: str, default: bool) -> bool:
            val = _env(name)
            if val is None:
                return default
            return val.strip().lower() in ("true", "1", "yes")

        def _int(name: str, default: int) -> int:
            val = _env(name)
            if val is None:
                return default
            try:
                return int(val)
            except ValueError:
                logger.warning(
                    "Invalid integer for %s%s=%s, using default %d",
                    prefix, name, val, default,
                )
                return default

        def _str(name: str, default: str) -> str:
            val = _env(name)
            if val is None:
                return default
            return val.strip()

        config = cls(
            standard=_str("STANDARD", cls.standard).upper(),
            scope2_method=_str("SCOPE2_METHOD", cls.scope2_method).lower(),
            emissions_precision=_int("EMISSIONS_PRECISION", cls.emissions_precision),
            percentage_precision=_int("PERCENTAGE_PRECISION", cls.percentage_precision),
            energy_precision=_int("ENERGY_PRECISION", cls.energy_precision),
            revenue_intensity_precision=_int(
                "REVENUE_INTENSITY_PRECISION", cls.revenue_intensity_precision,
            ),
            employee_intensity_precision=_int(
                "EMPLOYEE_INTENSITY_PRECISION", cls.employee_intensity_precision,
            ),
            area_intensity_precision=_int(
                "AREA_INTENSITY_PRECISION", cls.area_intensity_precision,
            ),
            production_intensity_precision=_int(
                "PRODUCTION_INTENSITY_PRECISION", cls.production_intensity_precision,
            ),
            progress_precision=_int("PROGRESS_PRECISION", cls.progress_precision),
            enable_metrics=_bool("ENABLE_METRICS", cls.enable_metrics),
        )

        logger.info(
            "DisclosureConfig loaded: standard=%s, scope2_method=%s, "
            "emissions_precision=%d, metrics=%s",
            config.standard,
            config.scope2_method,
            config.emissions_precision,
            config.enable_metrics,
        )
        return config

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> DisclosureConfig:
        """Build a DisclosureConfig from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown disclosure config keys: {unknown}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> DisclosureConfig:
        """Load configuration from a YAML file.

        The settings may sit at the top level or under a ``disclosure:`` key.

        Args:
            path: Path to the YAML file.

        Returns:
            Populated DisclosureConfig instance.
        """
        path = Path(path)
        with path.open(encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a mapping")
        section = data.get("disclosure", data)
        if not isinstance(section, dict):
            raise ValueError(f"'disclosure' section in {path} must be a mapping")
        config = cls.from_dict(section)
        logger.info("DisclosureConfig loaded from %s", path)
        return config


# ---------------------------------------------------------------------------
# Thread-safe singleton accessor
# ---------------------------------------------------------------------------

_config_instance: Optional[DisclosureConfig] = None
_config_lock = threading.Lock()


def get_config() -> DisclosureConfig:
    """Return the singleton DisclosureConfig, creating from env if needed."""
    global _config_instance
    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = DisclosureConfig.from_env()
    return _config_instance


def set_config(config: DisclosureConfig) -> None:
    """Replace the singleton DisclosureConfig (useful for testing).

    Args:
        config: New configuration to install.
    """
    global _config_instance
    with _config_lock:
        _config_instance = config
    logger.info("DisclosureConfig replaced programmatically")


def reset_config() -> None:
    """Reset the singleton (primarily for test teardown)."""
    global _config_instance
    with _config_lock:
        _config_instance = None


__all__ = [
    "DisclosureConfig",
    "get_config",
    "set_config",
    "reset_config",
]
