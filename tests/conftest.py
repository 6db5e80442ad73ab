# -*- coding: utf-8 -*-
"""Pytest configuration and shared fixtures."""

import os
from decimal import Decimal

import pytest

from ghg_disclosure.config import DisclosureConfig, reset_config, set_config
from ghg_disclosure.models import (
    ActivityEmissionRecord,
    ClimateTarget,
    CompanyMetrics,
    EnergyRecord,
    OffsetRecord,
)
from ghg_disclosure.setup import reset_disclosure_service

PERIOD = "2025"


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    """Give every test a fresh config singleton built from a clean env."""
    for name in list(os.environ):
        if name.startswith("GL_DISCLOSURE_"):
            monkeypatch.delenv(name)
    reset_config()
    reset_disclosure_service()
    yield
    reset_config()
    reset_disclosure_service()


@pytest.fixture
def metrics_disabled():
    """Install a config with Prometheus collectors switched off."""
    set_config(DisclosureConfig(enable_metrics=False))


def make_record(category, scope, co2e, *, biogenic="0", market=None,
                period=PERIOD, record_id=None):
    """Build an ActivityEmissionRecord with string-typed decimals."""
    return ActivityEmissionRecord(
        activity_category=category,
        scope=scope,
        co2e_total=co2e,
        biogenic_co2=biogenic,
        co2e_market_based=market,
        reporting_period_id=period,
        record_id=record_id,
    )


@pytest.fixture
def mixed_scope_records():
    """Scope totals 10 / 5 / 20 tCO2e spread over several categories."""
    return [
        make_record("stationary_combustion", "SCOPE_1", "6"),
        make_record("mobile_sources", "SCOPE_1", "4", biogenic="1.5"),
        make_record("electricity", "SCOPE_2", "5", market="3"),
        make_record("business_travel_air", "SCOPE_3", "12"),
        make_record("waste", "SCOPE_3", "8"),
    ]


@pytest.fixture
def scope3_only_records():
    """Only value-chain emissions, no direct or energy-indirect data."""
    return [make_record("commuting", "SCOPE_3", "7.25")]


@pytest.fixture
def company_metrics():
    """Denominators for intensity ratios."""
    return CompanyMetrics(
        revenue=Decimal("1000000"),
        employees=50,
        floor_area=Decimal("2500"),
        production_units=Decimal("700"),
    )


@pytest.fixture
def energy_records():
    """1000 kWh grid electricity plus 3600 MJ renewable electricity."""
    return [
        EnergyRecord(source="electricity", quantity="1000", unit="kWh"),
        EnergyRecord(source="electricity", quantity="3600", unit="MJ", renewable=True),
    ]


@pytest.fixture
def climate_target():
    """50% reduction 2020 -> 2030, measured in 2025 at 80% of base."""
    return ClimateTarget(
        target_id="T-1",
        target_type="absolute",
        scope_coverage="SCOPE_1+2",
        base_year=2020,
        base_year_emissions=Decimal("1000"),
        target_year=2030,
        target_reduction_percentage=Decimal("50"),
        last_measured_year=2025,
        last_measured_emissions=Decimal("800"),
        science_based=True,
    )


def make_offset(offset_id, offset_type, amount, *, certified=True, verified=True,
                retired=True, cost=None):
    """Build an OffsetRecord with toggles for each quality criterion."""
    return OffsetRecord(
        offset_id=offset_id,
        offset_type=offset_type,
        project_name=f"{offset_type} project",
        amount_tco2e=amount,
        vintage_year=2024,
        certification_standard="Gold Standard" if certified else None,
        verified_by="SCS Global" if verified else None,
        retirement_status="retired" if retired else "held",
        cost_per_tco2e=cost,
    )


@pytest.fixture
def record_factory():
    """Factory for ActivityEmissionRecord."""
    return make_record


@pytest.fixture
def offset_factory():
    """Factory for OffsetRecord."""
    return make_offset
