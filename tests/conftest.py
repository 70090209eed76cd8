"""Canonical test fixtures used across engine and API tests.

Federal: single filer, $55,363 AGI (exactly $50,000 CA taxable after the
$5,363 CA standard deduction).
Assets: $10K 5-year computer, $100K 5-year machine with Section 179 + bonus.
"""

import pytest
from datetime import date
from decimal import Decimal

from taxcore.models.asset import DepreciableAsset, DepreciationMethod
from taxcore.models.federal import FederalReturnSummary, FilingStatus, StateData


@pytest.fixture
def ca_single_federal() -> FederalReturnSummary:
    return FederalReturnSummary(
        agi=Decimal("55363"),
        filing_status=FilingStatus.SINGLE,
        tax_year=2024,
        state_withheld=Decimal("1000"),
    )


@pytest.fixture
def ny_family_federal() -> FederalReturnSummary:
    """Low-income MFJ filer with federal EITC."""
    return FederalReturnSummary(
        agi=Decimal("40000"),
        filing_status=FilingStatus.MFJ,
        tax_year=2024,
        earned_income=Decimal("40000"),
        eitc=Decimal("1000"),
        state_withheld=Decimal("900"),
    )


@pytest.fixture
def ny_retiree_data() -> StateData:
    return StateData(
        out_of_state_muni_bond_interest=Decimal("200"),
        in_state_muni_bond_interest=Decimal("500"),
        public_employee_pension=Decimal("1000"),
        pension_income=Decimal("30000"),
        qualifying_children=2,
    )


@pytest.fixture
def five_year_computer() -> DepreciableAsset:
    """$10K computer, no elections."""
    return DepreciableAsset(
        name="Workstation",
        cost_basis=Decimal("10000"),
        date_placed_in_service=date(2024, 3, 1),
        asset_type="computers",
    )


@pytest.fixture
def machine_with_elections() -> DepreciableAsset:
    """$100K 5-year machine: $30K Section 179, then 60% bonus on the rest."""
    return DepreciableAsset(
        name="CNC machine",
        cost_basis=Decimal("100000"),
        date_placed_in_service=date(2024, 5, 15),
        recovery_period=Decimal("5"),
        method=DepreciationMethod.MACRS,
        section_179_elected=True,
        section_179_amount=Decimal("30000"),
        bonus_elected=True,
    )


@pytest.fixture
def straight_line_equipment() -> DepreciableAsset:
    return DepreciableAsset(
        name="Shelving",
        cost_basis=Decimal("10000"),
        salvage_value=Decimal("1000"),
        date_placed_in_service=date(2024, 1, 10),
        recovery_period=Decimal("5"),
        method=DepreciationMethod.STRAIGHT_LINE,
    )
