from datetime import date
from decimal import Decimal

import pytest

from taxcore.engine.asset_classes import recovery_period_for, resolve_recovery_period
from taxcore.models.asset import DepreciableAsset


@pytest.mark.parametrize("label,period", [
    ("computers", "5"),
    ("Automobiles", "5"),
    (" office_furniture ", "7"),
    ("tractor_units", "3"),
    ("vessels", "10"),
    ("land_improvements", "15"),
    ("farm_buildings", "20"),
    ("residential_rental", "27.5"),
    ("nonresidential_real_property", "39"),
])
def test_known_asset_types(label, period):
    assert recovery_period_for(label) == Decimal(period)


def test_unknown_type_is_seven_year():
    assert recovery_period_for("spaceship") == Decimal("7")


def test_explicit_period_wins():
    asset = DepreciableAsset(
        cost_basis=Decimal("1000"),
        date_placed_in_service=date(2024, 1, 1),
        asset_type="computers",
        recovery_period=Decimal("15"),
    )
    assert resolve_recovery_period(asset) == Decimal("15")


def test_classified_by_type(five_year_computer):
    assert resolve_recovery_period(five_year_computer) == Decimal("5")
