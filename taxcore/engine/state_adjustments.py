"""State additions/subtractions to federal AGI and the itemized-vs-standard choice.

Universal rules apply to every state; per-state rules are looked up by code
in STATE_ADJUSTMENT_RULES. States without an entry get the universal rules
only and follow the federal itemized total.

Pure functions. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from types import MappingProxyType
from typing import Callable, Optional

from taxcore.models.federal import FederalReturnSummary, StateData
from taxcore.models.state import DeductionType

TWO_PLACES = Decimal("0.01")

NY_PENSION_EXCLUSION_CAP = Decimal("20000")

Rule = Callable[[FederalReturnSummary, StateData], Decimal]
ItemizedRule = Callable[[FederalReturnSummary], Decimal]


@dataclass(frozen=True)
class StateAdjustmentRules:
    additions: Optional[Rule] = None
    subtractions: Optional[Rule] = None
    itemized: Optional[ItemizedRule] = None


def _without_salt(federal: FederalReturnSummary) -> Decimal:
    # State income tax can't be deducted on the state's own return
    return federal.itemized_deductions - federal.state_local_tax_deduction


def _nj_itemized(federal: FederalReturnSummary) -> Decimal:
    return (
        federal.medical_deductions
        + federal.mortgage_interest
        + federal.charitable_contributions
    )


STATE_ADJUSTMENT_RULES = MappingProxyType({
    "CA": StateAdjustmentRules(
        # CA does not conform to the federal HSA deduction
        additions=lambda federal, data: data.hsa_deduction,
        # Social Security is exempt from CA tax
        subtractions=lambda federal, data: min(
            data.social_security_benefits, federal.social_security_benefits
        ),
        itemized=_without_salt,
    ),
    "NY": StateAdjustmentRules(
        additions=lambda federal, data: data.public_employee_pension,
        subtractions=lambda federal, data: min(data.pension_income, NY_PENSION_EXCLUSION_CAP),
        itemized=_without_salt,
    ),
    "NJ": StateAdjustmentRules(
        additions=lambda federal, data: data.hsa_deduction,
        itemized=_nj_itemized,
    ),
    "PA": StateAdjustmentRules(
        subtractions=lambda federal, data: data.retirement_income,
    ),
})

_NO_RULES = StateAdjustmentRules()


def _rules_for(state_code: str) -> StateAdjustmentRules:
    return STATE_ADJUSTMENT_RULES.get(state_code, _NO_RULES)


def state_additions(
    state_code: str,
    federal: FederalReturnSummary,
    state_data: StateData,
) -> Decimal:
    """Income the state taxes that federal AGI excludes."""
    # Interest on other states' municipal bonds
    additions = state_data.out_of_state_muni_bond_interest

    rule = _rules_for(state_code).additions
    if rule is not None:
        additions += rule(federal, state_data)

    return additions.quantize(TWO_PLACES, ROUND_HALF_UP)


def state_subtractions(
    state_code: str,
    federal: FederalReturnSummary,
    state_data: StateData,
) -> Decimal:
    """Income in federal AGI that the state exempts."""
    # In-state municipal bond interest
    subtractions = state_data.in_state_muni_bond_interest

    rule = _rules_for(state_code).subtractions
    if rule is not None:
        subtractions += rule(federal, state_data)

    return subtractions.quantize(TWO_PLACES, ROUND_HALF_UP)


def state_itemized_deduction(state_code: str, federal: FederalReturnSummary) -> Decimal:
    """State itemized deductions, starting from the federal Schedule A total."""
    rule = _rules_for(state_code).itemized
    itemized = rule(federal) if rule is not None else federal.itemized_deductions
    return max(Decimal("0"), itemized).quantize(TWO_PLACES, ROUND_HALF_UP)


def select_deduction(
    standard: Decimal,
    itemized: Decimal,
) -> tuple[DeductionType, Decimal]:
    """Take the larger deduction. Ties go to standard."""
    if itemized > standard:
        return DeductionType.ITEMIZED, itemized
    return DeductionType.STANDARD, standard
