from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from taxcore.models.asset import DepreciationMethod


@dataclass
class ScheduleEntry:
    year: int
    beginning_book_value: Decimal
    depreciation: Decimal
    accumulated_depreciation: Decimal
    ending_book_value: Decimal

    # First-year elections (year 1 only, when elected)
    section_179: Optional[Decimal] = None
    bonus_depreciation: Optional[Decimal] = None
    total_first_year: Optional[Decimal] = None


@dataclass(frozen=True)
class ElectionAllocation:
    """How an asset's adjusted basis is split between elections and regular depreciation."""
    adjusted_basis: Decimal
    section_179: Decimal
    bonus: Decimal
    depreciable_basis: Decimal  # Left for MACRS / SL / units after both elections

    @property
    def total_elections(self) -> Decimal:
        return self.section_179 + self.bonus


@dataclass
class DepreciationResult:
    cost_basis: Decimal
    business_use_percent: Decimal
    adjusted_basis: Decimal
    method: DepreciationMethod
    recovery_period: Decimal
    year_in_service: int

    section_179_deduction: Decimal = Decimal("0")
    bonus_depreciation: Decimal = Decimal("0")
    regular_depreciation: Decimal = Decimal("0")
    current_year_depreciation: Decimal = Decimal("0")

    schedule: list[ScheduleEntry] = field(default_factory=list)


@dataclass
class AssetDepreciationDetail:
    asset_name: str
    result: DepreciationResult


@dataclass
class PortfolioDepreciationResult:
    tax_year: int
    total_depreciation: Decimal = Decimal("0")
    total_section_179: Decimal = Decimal("0")
    total_bonus: Decimal = Decimal("0")
    asset_count: int = 0
    details: list[AssetDepreciationDetail] = field(default_factory=list)


@dataclass
class Section179Validation:
    is_valid: bool
    issues: list[str]
    requested_section_179: Decimal
    total_cost: Decimal
    phase_out_reduction: Decimal
    allowed_section_179: Decimal


@dataclass(frozen=True)
class MidQuarterCheck:
    requires_mid_quarter: bool
    q4_percentage: int  # Whole percent of cost basis placed in service Oct-Dec
    note: str
