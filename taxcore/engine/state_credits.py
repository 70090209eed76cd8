"""State credits derived from federal return data.

Per-state formulas keyed by code; unlisted states have no state credits.
"""

from decimal import Decimal, ROUND_HALF_UP
from types import MappingProxyType
from typing import Callable

from taxcore.models.federal import FederalReturnSummary, StateData

TWO_PLACES = Decimal("0.01")

# California CalEITC
CA_EITC_RATE = Decimal("0.85")
CA_EITC_MAX = Decimal("3529")
CA_EITC_EARNED_INCOME_LIMIT = Decimal("30950")

NY_EITC_RATE = Decimal("0.30")
NY_CHILD_CREDIT = Decimal("330")  # Per qualifying child (Empire State Child Credit)

NJ_EITC_RATE = Decimal("0.40")

CreditRule = Callable[[FederalReturnSummary, StateData], Decimal]


def _california(federal: FederalReturnSummary, data: StateData) -> Decimal:
    if 0 < federal.earned_income < CA_EITC_EARNED_INCOME_LIMIT:
        return min(federal.eitc * CA_EITC_RATE, CA_EITC_MAX)
    return Decimal("0")


def _new_york(federal: FederalReturnSummary, data: StateData) -> Decimal:
    return federal.eitc * NY_EITC_RATE + data.qualifying_children * NY_CHILD_CREDIT


def _new_jersey(federal: FederalReturnSummary, data: StateData) -> Decimal:
    return federal.eitc * NJ_EITC_RATE


STATE_CREDIT_RULES: "MappingProxyType[str, CreditRule]" = MappingProxyType({
    "CA": _california,
    "NY": _new_york,
    "NJ": _new_jersey,
})


def state_credits(
    state_code: str,
    federal: FederalReturnSummary,
    state_data: StateData,
) -> Decimal:
    rule = STATE_CREDIT_RULES.get(state_code)
    if rule is None:
        return Decimal("0.00")
    return rule(federal, state_data).quantize(TWO_PLACES, ROUND_HALF_UP)
