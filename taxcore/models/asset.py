from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


class DepreciationMethod(Enum):
    MACRS = "MACRS"
    STRAIGHT_LINE = "straight-line"
    UNITS_OF_PRODUCTION = "units-of-production"


@dataclass(frozen=True)
class DepreciableAsset:
    cost_basis: Decimal
    date_placed_in_service: date
    asset_type: Optional[str] = None  # e.g. "computers"; mapped to a MACRS class
    recovery_period: Optional[Decimal] = None  # Explicit class, wins over asset_type
    method: DepreciationMethod = DepreciationMethod.MACRS
    salvage_value: Decimal = Decimal("0")
    name: str = ""

    # Elections
    section_179_elected: bool = False
    section_179_amount: Decimal = Decimal("0")
    bonus_elected: bool = False

    business_use_percent: Decimal = Decimal("100")
    is_vehicle: bool = False  # IRC 280F passenger auto cap
    is_heavy_suv: bool = False  # 6,000+ lb GVWR SUV cap

    # Units-of-production only
    total_units: Decimal = Decimal("0")
    units_this_year: Decimal = Decimal("0")

    def __post_init__(self):
        if self.cost_basis < 0:
            raise ValueError(f"Cost basis cannot be negative: {self.cost_basis}")
        if self.salvage_value < 0:
            raise ValueError(f"Salvage value cannot be negative: {self.salvage_value}")
        if not Decimal("0") <= self.business_use_percent <= Decimal("100"):
            raise ValueError(
                f"Business use must be between 0 and 100 percent: {self.business_use_percent}"
            )
        if self.section_179_amount < 0:
            raise ValueError("Section 179 amount cannot be negative.")
        if self.total_units < 0 or self.units_this_year < 0:
            raise ValueError("Production units cannot be negative.")
        if self.recovery_period is None and not self.asset_type:
            raise ValueError("Recovery period required when no asset type is given.")
        if self.recovery_period is not None and self.recovery_period <= 0:
            raise ValueError(f"Recovery period must be positive: {self.recovery_period}")

    @property
    def placed_in_service_year(self) -> int:
        return self.date_placed_in_service.year
