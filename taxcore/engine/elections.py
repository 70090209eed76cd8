"""First-year elections: Section 179 expensing, then bonus depreciation.

Each step reduces the basis available to the next; whatever is left is
recovered through regular depreciation.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from taxcore.config import Settings, settings
from taxcore.models.asset import DepreciableAsset
from taxcore.models.results import ElectionAllocation

TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class DepreciationLimits:
    """Statutory limits for one tax year."""
    section_179_max: Decimal
    section_179_phase_out_threshold: Decimal
    vehicle_limit: Decimal
    suv_limit: Decimal
    bonus_rate: Decimal
    mid_quarter_threshold: Decimal

    @classmethod
    def from_settings(cls, s: Settings) -> "DepreciationLimits":
        return cls(
            section_179_max=s.section_179_max_deduction,
            section_179_phase_out_threshold=s.section_179_phase_out_threshold,
            vehicle_limit=s.section_179_vehicle_limit,
            suv_limit=s.section_179_suv_limit,
            bonus_rate=s.bonus_depreciation_rate,
            mid_quarter_threshold=s.mid_quarter_threshold,
        )


DEFAULT_LIMITS = DepreciationLimits.from_settings(settings)


def adjusted_basis(asset: DepreciableAsset) -> Decimal:
    """Cost basis scaled to business-use percentage."""
    return (asset.cost_basis * asset.business_use_percent / 100).quantize(
        TWO_PLACES, ROUND_HALF_UP
    )


def section_179_deduction(
    asset: DepreciableAsset,
    basis: Decimal,
    limits: DepreciationLimits = DEFAULT_LIMITS,
) -> Decimal:
    """Requested Section 179 amount after the per-asset caps."""
    if not asset.section_179_elected or asset.section_179_amount <= 0:
        return Decimal("0.00")

    deduction = min(asset.section_179_amount, limits.section_179_max)
    if asset.is_vehicle:
        deduction = min(deduction, limits.vehicle_limit)
    if asset.is_heavy_suv:
        deduction = min(deduction, limits.suv_limit)
    # Can't expense more than the business-use basis
    deduction = min(deduction, basis)
    return deduction.quantize(TWO_PLACES, ROUND_HALF_UP)


def allocate_elections(
    asset: DepreciableAsset,
    limits: DepreciationLimits = DEFAULT_LIMITS,
) -> ElectionAllocation:
    """Split adjusted basis into Section 179, bonus, and the regular depreciable basis."""
    basis = adjusted_basis(asset)
    remaining = basis

    s179 = section_179_deduction(asset, basis, limits)
    remaining -= s179

    bonus = Decimal("0.00")
    if asset.bonus_elected and remaining > 0:
        bonus = (remaining * limits.bonus_rate).quantize(TWO_PLACES, ROUND_HALF_UP)
        remaining -= bonus

    return ElectionAllocation(
        adjusted_basis=basis,
        section_179=s179,
        bonus=bonus,
        depreciable_basis=remaining,
    )
