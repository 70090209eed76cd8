from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional


class FilingStatus(Enum):
    SINGLE = "single"
    MFJ = "married_filing_jointly"
    MFS = "married_filing_separately"
    HOH = "head_of_household"


@dataclass(frozen=True)
class FederalReturnSummary:
    """Summary of a completed federal return, as supplied by the 1040 aggregation."""
    agi: Decimal
    filing_status: FilingStatus = FilingStatus.SINGLE
    tax_year: int = 2024

    # Itemized deductions (Schedule A)
    itemized_deductions: Decimal = Decimal("0")  # Total claimed on the federal return
    state_local_tax_deduction: Decimal = Decimal("0")  # SALT component
    medical_deductions: Decimal = Decimal("0")
    mortgage_interest: Decimal = Decimal("0")
    charitable_contributions: Decimal = Decimal("0")

    # Credits / income detail
    earned_income: Decimal = Decimal("0")
    eitc: Decimal = Decimal("0")
    social_security_benefits: Decimal = Decimal("0")

    state_withheld: Decimal = Decimal("0")


@dataclass(frozen=True)
class StateData:
    """State-specific inputs that do not appear on the federal return."""
    out_of_state_muni_bond_interest: Decimal = Decimal("0")
    in_state_muni_bond_interest: Decimal = Decimal("0")
    hsa_deduction: Decimal = Decimal("0")  # Added back by states that don't allow it
    public_employee_pension: Decimal = Decimal("0")
    social_security_benefits: Decimal = Decimal("0")  # Taxable SS included in federal AGI
    pension_income: Decimal = Decimal("0")
    retirement_income: Decimal = Decimal("0")
    qualifying_children: int = 0
    state_withheld: Optional[Decimal] = None  # Overrides FederalReturnSummary.state_withheld
