"""Year-by-year depreciation schedule projection.

Applies the asset's method to the post-election basis, accumulating
depreciation from the first-year elections onward. The final year takes
whatever book value is left so the schedule closes exactly.
"""

from decimal import Decimal

from taxcore.models.asset import DepreciableAsset, DepreciationMethod
from taxcore.models.results import ElectionAllocation, ScheduleEntry
from taxcore.engine.methods import (
    macrs_depreciation,
    macrs_rates,
    straight_line_depreciation,
    straight_line_years,
)


def schedule_length(method: DepreciationMethod, recovery_period: Decimal) -> int:
    """Number of service years in the schedule. Units-of-production has none."""
    if method is DepreciationMethod.MACRS:
        return len(macrs_rates(recovery_period))
    if method is DepreciationMethod.STRAIGHT_LINE:
        return straight_line_years(recovery_period)
    return 0


def _closing_value(asset: DepreciableAsset, allocation: ElectionAllocation) -> Decimal:
    # MACRS ignores salvage; straight-line stops at salvage
    if asset.method is DepreciationMethod.STRAIGHT_LINE:
        return min(asset.salvage_value, allocation.depreciable_basis)
    return Decimal("0")


def _year_amount(
    asset: DepreciableAsset,
    basis: Decimal,
    recovery_period: Decimal,
    year: int,
) -> Decimal:
    if asset.method is DepreciationMethod.STRAIGHT_LINE:
        return straight_line_depreciation(basis, asset.salvage_value, recovery_period, year)
    return macrs_depreciation(basis, recovery_period, year)


def generate_schedule(
    asset: DepreciableAsset,
    allocation: ElectionAllocation,
    recovery_period: Decimal,
) -> list[ScheduleEntry]:
    years = schedule_length(asset.method, recovery_period)
    if years == 0:
        return []

    basis = allocation.depreciable_basis
    closing = _closing_value(asset, allocation)
    accumulated = allocation.total_elections
    schedule: list[ScheduleEntry] = []

    for year in range(1, years + 1):
        beginning = allocation.adjusted_basis - accumulated
        if year == years:
            depreciation = max(Decimal("0.00"), beginning - closing)
        else:
            depreciation = min(_year_amount(asset, basis, recovery_period, year), beginning)
        accumulated += depreciation

        schedule.append(
            ScheduleEntry(
                year=year,
                beginning_book_value=beginning,
                depreciation=depreciation,
                accumulated_depreciation=accumulated,
                ending_book_value=allocation.adjusted_basis - accumulated,
            )
        )

    if allocation.section_179 > 0 or allocation.bonus > 0:
        first = schedule[0]
        first.section_179 = allocation.section_179
        first.bonus_depreciation = allocation.bonus
        first.total_first_year = allocation.total_elections + first.depreciation

    return schedule
