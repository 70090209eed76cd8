"""Per-asset depreciation: elections, regular depreciation for the service
year, and the full schedule.

Pure functions. DepreciableAsset in, DepreciationResult out.
"""

from decimal import Decimal

from taxcore.models.asset import DepreciableAsset, DepreciationMethod
from taxcore.models.results import DepreciationResult, ElectionAllocation, ScheduleEntry
from taxcore.engine.asset_classes import resolve_recovery_period
from taxcore.engine.elections import DEFAULT_LIMITS, DepreciationLimits, allocate_elections
from taxcore.engine.methods import macrs_depreciation, units_of_production_depreciation
from taxcore.engine.schedule import generate_schedule

ZERO = Decimal("0.00")


def _regular_depreciation(
    asset: DepreciableAsset,
    allocation: ElectionAllocation,
    recovery_period: Decimal,
    year_in_service: int,
    schedule: list[ScheduleEntry],
) -> Decimal:
    if year_in_service < 1 or allocation.depreciable_basis <= 0:
        return ZERO

    if asset.method is DepreciationMethod.UNITS_OF_PRODUCTION:
        return units_of_production_depreciation(
            allocation.depreciable_basis,
            asset.salvage_value,
            asset.total_units,
            asset.units_this_year,
        )

    # Read from the schedule so the closing year matches it to the cent
    if schedule:
        if year_in_service > len(schedule):
            return ZERO
        return schedule[year_in_service - 1].depreciation

    # MACRS class without a rate table
    return macrs_depreciation(allocation.depreciable_basis, recovery_period, year_in_service)


def calculate_depreciation(
    asset: DepreciableAsset,
    year_in_service: int = 1,
    limits: DepreciationLimits = DEFAULT_LIMITS,
) -> DepreciationResult:
    """Depreciation for one asset in its Nth service year.

    Section 179 and bonus are taken in the first service year only; later
    years report regular depreciation alone.
    """
    recovery_period = resolve_recovery_period(asset)
    allocation = allocate_elections(asset, limits)
    schedule = generate_schedule(asset, allocation, recovery_period)

    regular = _regular_depreciation(asset, allocation, recovery_period, year_in_service, schedule)

    if year_in_service == 1:
        section_179 = allocation.section_179
        bonus = allocation.bonus
    else:
        section_179 = ZERO
        bonus = ZERO

    return DepreciationResult(
        cost_basis=asset.cost_basis,
        business_use_percent=asset.business_use_percent,
        adjusted_basis=allocation.adjusted_basis,
        method=asset.method,
        recovery_period=recovery_period,
        year_in_service=year_in_service,
        section_179_deduction=section_179,
        bonus_depreciation=bonus,
        regular_depreciation=regular,
        current_year_depreciation=section_179 + bonus + regular,
        schedule=schedule,
    )
