"""State profile and state return data types."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from taxcore.models.federal import FilingStatus


class DeductionType(Enum):
    STANDARD = "standard"
    ITEMIZED = "itemized"


@dataclass(frozen=True)
class Bracket:
    """One marginal bracket covering [lower, upper). upper=None is unbounded."""
    lower: Decimal
    upper: Optional[Decimal]
    rate: Decimal

    @property
    def width(self) -> Optional[Decimal]:
        if self.upper is None:
            return None
        return self.upper - self.lower


@dataclass(frozen=True)
class StateProfile:
    code: str
    name: str
    form_number: str
    form_title: str
    has_income_tax: bool
    brackets: tuple[Bracket, ...]
    standard_deductions: Mapping[FilingStatus, Decimal]
    filing_threshold: Decimal

    def __post_init__(self):
        validate_brackets(self.code, self.brackets)
        # Freeze the deduction table so profiles are safe to share
        object.__setattr__(
            self, "standard_deductions", MappingProxyType(dict(self.standard_deductions))
        )

    def standard_deduction(self, filing_status: FilingStatus) -> Decimal:
        """Standard deduction for a filing status; unlisted statuses use the single amount."""
        table = self.standard_deductions
        if filing_status in table:
            return table[filing_status]
        return table.get(FilingStatus.SINGLE, Decimal("0"))


def validate_brackets(code: str, brackets: tuple[Bracket, ...]) -> None:
    """Brackets must tile [0, inf) in ascending order with non-decreasing rates."""
    if not brackets:
        raise ValueError(f"{code}: bracket table is empty")
    if brackets[0].lower != 0:
        raise ValueError(f"{code}: first bracket must start at 0")
    if brackets[-1].upper is not None:
        raise ValueError(f"{code}: last bracket must be unbounded")

    for prev, nxt in zip(brackets, brackets[1:]):
        if prev.upper is None or prev.upper != nxt.lower:
            raise ValueError(f"{code}: gap or overlap at {prev.upper} / {nxt.lower}")
        if nxt.rate < prev.rate:
            raise ValueError(f"{code}: rates must be non-decreasing")
    for b in brackets:
        if b.upper is not None and b.upper <= b.lower:
            raise ValueError(f"{code}: empty bracket at {b.lower}")


@dataclass
class StateFormData:
    """Form-oriented projection of a state return."""
    form_number: str
    form_title: str
    state_code: str
    state_name: str
    tax_year: int
    sections: dict[str, dict] = field(default_factory=dict)


@dataclass
class StateReturnResult:
    state_code: str
    state_name: str
    has_income_tax: bool
    tax_year: int
    filing_status: FilingStatus
    form_number: str = "N/A"
    form_title: str = ""
    message: str = ""

    # Income
    federal_agi: Decimal = Decimal("0")
    state_additions: Decimal = Decimal("0")
    state_subtractions: Decimal = Decimal("0")
    state_agi: Decimal = Decimal("0")

    # Deductions
    standard_deduction: Decimal = Decimal("0")
    itemized_deduction: Decimal = Decimal("0")
    deduction_type: DeductionType = DeductionType.STANDARD
    deduction_amount: Decimal = Decimal("0")

    # Tax
    state_taxable_income: Decimal = Decimal("0")
    state_tax: Decimal = Decimal("0")
    state_credits: Decimal = Decimal("0")
    state_tax_after_credits: Decimal = Decimal("0")

    # Payments / result
    state_withheld: Decimal = Decimal("0")
    state_refund: Decimal = Decimal("0")
    state_owed: Decimal = Decimal("0")

    form_data: Optional[StateFormData] = None


@dataclass(frozen=True)
class RequiredStateReturn:
    state_code: str
    state_name: str
    income: Decimal
    filing_threshold: Decimal
    form_number: str
    form_title: str


@dataclass(frozen=True)
class StateTaxSummary:
    state_code: str
    state_name: str
    has_income_tax: bool
    taxable_income: Decimal
    tax_liability: Decimal
    effective_rate: Decimal  # Percent, two places
    marginal_rate: Decimal
    is_flat: bool = False
