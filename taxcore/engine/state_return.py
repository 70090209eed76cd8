"""State return orchestrator: composes adjustments, deduction choice, bracket
tax, and credits into a complete state return.

Pure computation. No I/O. FederalReturnSummary + StateData in,
StateReturnResult out.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Mapping, Optional

from taxcore.models.federal import FederalReturnSummary, StateData
from taxcore.models.state import (
    Bracket,
    RequiredStateReturn,
    StateFormData,
    StateProfile,
    StateReturnResult,
    StateTaxSummary,
)
from taxcore.engine.brackets import bracket_tax, effective_rate, marginal_rate
from taxcore.engine.state_adjustments import (
    select_deduction,
    state_additions,
    state_itemized_deduction,
    state_subtractions,
)
from taxcore.engine.state_credits import state_credits
from taxcore.engine.state_profiles import (
    COMPARISON_BRACKETS,
    DEFAULT_REGISTRY,
    STATE_NAMES,
    StateProfileRegistry,
)

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0.00")

RateTable = Mapping[str, Optional[tuple[Bracket, ...]]]


def _cents(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def generate_state_return(
    state_code: str,
    federal_return: FederalReturnSummary,
    state_data: Optional[StateData] = None,
    registry: StateProfileRegistry = DEFAULT_REGISTRY,
) -> StateReturnResult:
    """Compute a resident state return from a federal return summary.

    Steps run in a fixed order: adjustments -> state AGI, deduction choice,
    taxable income, bracket tax, credits, refund / amount owed.
    """
    state_data = state_data or StateData()
    profile = registry.profile(state_code)
    code = profile.code

    if not profile.has_income_tax:
        logger.debug("%s has no income tax, skipping state return computation", code)
        return StateReturnResult(
            state_code=code,
            state_name=profile.name,
            has_income_tax=False,
            tax_year=federal_return.tax_year,
            filing_status=federal_return.filing_status,
            form_number=profile.form_number,
            form_title=profile.form_title,
            message=f"{code} does not have a state income tax",
        )

    # 1. Income
    federal_agi = _cents(federal_return.agi)
    additions = state_additions(code, federal_return, state_data)
    subtractions = state_subtractions(code, federal_return, state_data)
    state_agi = _cents(federal_agi + additions - subtractions)

    # 2. Deductions
    standard = profile.standard_deduction(federal_return.filing_status)
    itemized = state_itemized_deduction(code, federal_return)
    deduction_type, deduction_amount = select_deduction(standard, itemized)

    # 3. Taxable income
    taxable_income = _cents(max(Decimal("0"), state_agi - deduction_amount))

    # 4. Tax
    tax = bracket_tax(taxable_income, profile.brackets)

    # 5. Credits
    credits = state_credits(code, federal_return, state_data)
    tax_after_credits = _cents(max(Decimal("0"), tax - credits))

    # 6. Refund or amount owed. Any explicit state figure, including 0, wins.
    withheld = state_data.state_withheld
    if withheld is None:
        withheld = federal_return.state_withheld
    withheld = _cents(withheld)

    net = _cents(tax_after_credits - withheld)
    refund = -net if net < 0 else ZERO
    owed = net if net > 0 else ZERO

    result = StateReturnResult(
        state_code=code,
        state_name=profile.name,
        has_income_tax=True,
        tax_year=federal_return.tax_year,
        filing_status=federal_return.filing_status,
        form_number=profile.form_number,
        form_title=profile.form_title,
        federal_agi=federal_agi,
        state_additions=additions,
        state_subtractions=subtractions,
        state_agi=state_agi,
        standard_deduction=standard,
        itemized_deduction=itemized,
        deduction_type=deduction_type,
        deduction_amount=deduction_amount,
        state_taxable_income=taxable_income,
        state_tax=tax,
        state_credits=credits,
        state_tax_after_credits=tax_after_credits,
        state_withheld=withheld,
        state_refund=refund,
        state_owed=owed,
    )
    result.form_data = build_form_data(profile, result)
    return result


def build_form_data(profile: StateProfile, ret: StateReturnResult) -> StateFormData:
    """Project a computed return onto the state form's sections."""
    return StateFormData(
        form_number=profile.form_number,
        form_title=profile.form_title,
        state_code=ret.state_code,
        state_name=ret.state_name,
        tax_year=ret.tax_year,
        sections={
            "income": {
                "federal_agi": ret.federal_agi,
                "additions": ret.state_additions,
                "subtractions": ret.state_subtractions,
                "state_agi": ret.state_agi,
            },
            "deductions": {
                "type": ret.deduction_type.value,
                "amount": ret.deduction_amount,
            },
            "tax": {
                "taxable_income": ret.state_taxable_income,
                "state_tax": ret.state_tax,
                "credits": ret.state_credits,
                "tax_after_credits": ret.state_tax_after_credits,
            },
            "payments": {
                "withheld": ret.state_withheld,
            },
            "result": {
                "refund": ret.state_refund,
                "owed": ret.state_owed,
            },
        },
    )


def required_state_returns(
    income_by_state: Mapping[str, Decimal],
    registry: StateProfileRegistry = DEFAULT_REGISTRY,
) -> list[RequiredStateReturn]:
    """States where income sourced there meets the filing threshold."""
    required = []
    for state_code, income in income_by_state.items():
        profile = registry.profile(state_code)
        if not profile.has_income_tax:
            continue
        if income >= profile.filing_threshold:
            required.append(
                RequiredStateReturn(
                    state_code=profile.code,
                    state_name=profile.name,
                    income=income,
                    filing_threshold=profile.filing_threshold,
                    form_number=profile.form_number,
                    form_title=profile.form_title,
                )
            )
    return required


def state_tax_summary(
    state_code: str,
    taxable_income: Decimal,
    rates: RateTable = COMPARISON_BRACKETS,
) -> StateTaxSummary:
    """Bracket tax and effective rate for one state on a given taxable income.

    Uses the all-state comparison schedule. Unknown codes report no tax
    under the name "Unknown".
    """
    code = state_code.strip().upper()
    if code not in rates:
        logger.warning("No comparison rates for %r", code)
    brackets = rates.get(code)
    name = STATE_NAMES.get(code, "Unknown")

    if brackets is None:
        return StateTaxSummary(
            state_code=code,
            state_name=name,
            has_income_tax=False,
            taxable_income=taxable_income,
            tax_liability=ZERO,
            effective_rate=ZERO,
            marginal_rate=Decimal("0"),
        )

    liability = bracket_tax(taxable_income, brackets)
    return StateTaxSummary(
        state_code=code,
        state_name=name,
        has_income_tax=True,
        taxable_income=taxable_income,
        tax_liability=liability,
        effective_rate=effective_rate(liability, taxable_income),
        marginal_rate=marginal_rate(taxable_income, brackets),
        is_flat=len(brackets) == 1,
    )


def compare_state_taxes(
    taxable_income: Decimal,
    state_codes: Optional[Iterable[str]] = None,
    rates: RateTable = COMPARISON_BRACKETS,
) -> list[StateTaxSummary]:
    """Tax on the same taxable income across states, lowest liability first."""
    if state_codes is None:
        state_codes = list(rates)
    summaries = [state_tax_summary(code, taxable_income, rates) for code in state_codes]
    return sorted(summaries, key=lambda s: (s.tax_liability, s.state_code))
