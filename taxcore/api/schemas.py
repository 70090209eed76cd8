"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field


# ---- Request schemas ----

class FederalReturnRequest(BaseModel):
    agi: Decimal
    filing_status: str = "single"
    tax_year: int | None = None

    itemized_deductions: Decimal = Decimal("0")
    state_local_tax_deduction: Decimal = Decimal("0")
    medical_deductions: Decimal = Decimal("0")
    mortgage_interest: Decimal = Decimal("0")
    charitable_contributions: Decimal = Decimal("0")

    earned_income: Decimal = Decimal("0")
    eitc: Decimal = Decimal("0")
    social_security_benefits: Decimal = Decimal("0")
    state_withheld: Decimal = Decimal("0")


class StateDataRequest(BaseModel):
    out_of_state_muni_bond_interest: Decimal = Decimal("0")
    in_state_muni_bond_interest: Decimal = Decimal("0")
    hsa_deduction: Decimal = Decimal("0")
    public_employee_pension: Decimal = Decimal("0")
    social_security_benefits: Decimal = Decimal("0")
    pension_income: Decimal = Decimal("0")
    retirement_income: Decimal = Decimal("0")
    qualifying_children: int = Field(0, ge=0)
    state_withheld: Decimal | None = None


class StateReturnRequest(BaseModel):
    federal_return: FederalReturnRequest
    state_data: StateDataRequest | None = None


class RequiredReturnsRequest(BaseModel):
    income_by_state: dict[str, Decimal]


class StateCompareRequest(BaseModel):
    taxable_income: Decimal = Field(..., ge=0)
    states: list[str] | None = Field(None, description="State codes; all states if omitted")


class AssetRequest(BaseModel):
    name: str = ""
    cost_basis: Decimal
    date_placed_in_service: date
    asset_type: str | None = None
    recovery_period: Decimal | None = None
    method: str = "MACRS"
    salvage_value: Decimal = Decimal("0")

    section_179_elected: bool = False
    section_179_amount: Decimal = Decimal("0")
    bonus_elected: bool = False

    business_use_percent: Decimal = Decimal("100")
    is_vehicle: bool = False
    is_heavy_suv: bool = False

    total_units: Decimal = Decimal("0")
    units_this_year: Decimal = Decimal("0")


class AssetDepreciationRequest(BaseModel):
    asset: AssetRequest
    year_in_service: int = 1


class PortfolioRequest(BaseModel):
    assets: list[AssetRequest]
    tax_year: int | None = None


class Section179Request(BaseModel):
    assets: list[AssetRequest]
    business_income: Decimal


class MidQuarterRequest(BaseModel):
    assets: list[AssetRequest]


# ---- Response schemas ----

class StateFormDataResponse(BaseModel):
    form_number: str
    form_title: str
    state_code: str
    state_name: str
    tax_year: int
    sections: dict[str, dict]


class StateReturnResponse(BaseModel):
    state_code: str
    state_name: str
    has_income_tax: bool
    tax_year: int
    filing_status: str
    form_number: str
    form_title: str
    message: str = ""

    federal_agi: Decimal
    state_additions: Decimal
    state_subtractions: Decimal
    state_agi: Decimal

    standard_deduction: Decimal
    itemized_deduction: Decimal
    deduction_type: str
    deduction_amount: Decimal

    state_taxable_income: Decimal
    state_tax: Decimal
    state_credits: Decimal
    state_tax_after_credits: Decimal

    state_withheld: Decimal
    state_refund: Decimal
    state_owed: Decimal

    form_data: StateFormDataResponse | None = None


class BracketResponse(BaseModel):
    lower: Decimal
    upper: Decimal | None
    rate: Decimal


class StateProfileResponse(BaseModel):
    code: str
    name: str
    form_number: str
    form_title: str
    has_income_tax: bool
    brackets: list[BracketResponse]
    standard_deductions: dict[str, Decimal]
    filing_threshold: Decimal


class StateSummaryResponse(BaseModel):
    code: str
    name: str
    has_income_tax: bool


class RequiredReturnResponse(BaseModel):
    state_code: str
    state_name: str
    income: Decimal
    filing_threshold: Decimal
    form_number: str
    form_title: str


class StateTaxSummaryResponse(BaseModel):
    state_code: str
    state_name: str
    has_income_tax: bool
    taxable_income: Decimal
    tax_liability: Decimal
    effective_rate: Decimal
    marginal_rate: Decimal
    is_flat: bool


class ScheduleEntryResponse(BaseModel):
    year: int
    beginning_book_value: Decimal
    depreciation: Decimal
    accumulated_depreciation: Decimal
    ending_book_value: Decimal
    section_179: Decimal | None = None
    bonus_depreciation: Decimal | None = None
    total_first_year: Decimal | None = None


class DepreciationResponse(BaseModel):
    cost_basis: Decimal
    business_use_percent: Decimal
    adjusted_basis: Decimal
    method: str
    recovery_period: Decimal
    year_in_service: int
    section_179_deduction: Decimal
    bonus_depreciation: Decimal
    regular_depreciation: Decimal
    current_year_depreciation: Decimal
    schedule: list[ScheduleEntryResponse]


class AssetDepreciationDetailResponse(BaseModel):
    asset_name: str
    depreciation: DepreciationResponse


class PortfolioResponse(BaseModel):
    tax_year: int
    total_depreciation: Decimal
    total_section_179: Decimal
    total_bonus: Decimal
    asset_count: int
    details: list[AssetDepreciationDetailResponse]


class Section179Response(BaseModel):
    is_valid: bool
    issues: list[str]
    requested_section_179: Decimal
    total_cost: Decimal
    phase_out_reduction: Decimal
    allowed_section_179: Decimal


class MidQuarterResponse(BaseModel):
    requires_mid_quarter: bool
    q4_percentage: int
    note: str
