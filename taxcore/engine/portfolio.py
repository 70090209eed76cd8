"""Portfolio-level depreciation checks and totals.

Mid-quarter convention test, Section 179 limitation checks, and the
tax-year aggregate across all assets. Limit breaches are reported as
advisory issues, never raised.
"""

import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from taxcore.models.asset import DepreciableAsset
from taxcore.models.results import (
    AssetDepreciationDetail,
    MidQuarterCheck,
    PortfolioDepreciationResult,
    Section179Validation,
)
from taxcore.engine.depreciation import calculate_depreciation
from taxcore.engine.elections import DEFAULT_LIMITS, DepreciationLimits

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
Q4_FIRST_MONTH = 10


def _usd(amount: Decimal) -> str:
    if amount == amount.to_integral_value():
        return f"${amount:,.0f}"
    return f"${amount:,.2f}"


def year_in_service(date_placed_in_service: date, tax_year: int) -> int:
    """1 for the year the asset was placed in service, 2 the next, and so on."""
    return tax_year - date_placed_in_service.year + 1


def check_mid_quarter_convention(
    assets: Sequence[DepreciableAsset],
    limits: DepreciationLimits = DEFAULT_LIMITS,
) -> MidQuarterCheck:
    """Flag when more than 40% of basis was placed in service in Q4.

    Advisory only: the calculators keep using half-year convention.
    """
    total_basis = sum((a.cost_basis for a in assets), Decimal("0"))
    q4_basis = sum(
        (a.cost_basis for a in assets if a.date_placed_in_service.month >= Q4_FIRST_MONTH),
        Decimal("0"),
    )

    q4_share = q4_basis / total_basis if total_basis > 0 else Decimal("0")
    requires = q4_share > limits.mid_quarter_threshold
    if requires:
        logger.info("Mid-quarter convention required: %.1f%% of basis placed in Q4", q4_share * 100)

    return MidQuarterCheck(
        requires_mid_quarter=requires,
        q4_percentage=int((q4_share * 100).quantize(Decimal("1"), ROUND_HALF_UP)),
        note=(
            f"More than {limits.mid_quarter_threshold * 100:.0f}% of assets placed in service "
            "in Q4. Mid-quarter convention required."
            if requires
            else "Half-year convention applies."
        ),
    )


def validate_section_179(
    assets: Sequence[DepreciableAsset],
    business_income: Decimal,
    limits: DepreciationLimits = DEFAULT_LIMITS,
) -> Section179Validation:
    """Check the portfolio's Section 179 election against the statutory limits."""
    requested = sum(
        (a.section_179_amount for a in assets if a.section_179_elected), Decimal("0")
    )
    total_cost = sum((a.cost_basis for a in assets), Decimal("0"))
    issues: list[str] = []

    if requested > limits.section_179_max:
        issues.append(f"Section 179 exceeds maximum of {_usd(limits.section_179_max)}")

    # Dollar-for-dollar reduction once investment passes the threshold
    phase_out_reduction = max(Decimal("0"), total_cost - limits.section_179_phase_out_threshold)
    if phase_out_reduction > 0:
        issues.append(
            f"Section 179 reduced by {_usd(phase_out_reduction)} "
            "due to investment exceeding threshold"
        )

    if requested > business_income:
        issues.append(f"Section 179 limited to business income of {_usd(business_income)}")

    allowed = max(Decimal("0"), min(requested, limits.section_179_max, business_income))

    for issue in issues:
        logger.warning("Section 179 validation: %s", issue)

    return Section179Validation(
        is_valid=not issues,
        issues=issues,
        requested_section_179=requested,
        total_cost=total_cost,
        phase_out_reduction=phase_out_reduction,
        allowed_section_179=allowed.quantize(TWO_PLACES, ROUND_HALF_UP),
    )


def calculate_total_depreciation(
    assets: Sequence[DepreciableAsset],
    tax_year: int,
    limits: DepreciationLimits = DEFAULT_LIMITS,
) -> PortfolioDepreciationResult:
    """Depreciation deduction for every asset in a tax year, with portfolio totals."""
    result = PortfolioDepreciationResult(tax_year=tax_year, asset_count=len(assets))

    for asset in assets:
        dep = calculate_depreciation(
            asset,
            year_in_service=year_in_service(asset.date_placed_in_service, tax_year),
            limits=limits,
        )
        result.total_depreciation += dep.current_year_depreciation
        result.total_section_179 += dep.section_179_deduction
        result.total_bonus += dep.bonus_depreciation
        result.details.append(AssetDepreciationDetail(asset_name=asset.name, result=dep))

    result.total_depreciation = result.total_depreciation.quantize(TWO_PLACES, ROUND_HALF_UP)
    result.total_section_179 = result.total_section_179.quantize(TWO_PLACES, ROUND_HALF_UP)
    result.total_bonus = result.total_bonus.quantize(TWO_PLACES, ROUND_HALF_UP)
    return result
