"""Progressive bracket tax arithmetic.

Pure functions. Shared by the state return and state comparison paths.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from taxcore.models.state import Bracket

TWO_PLACES = Decimal("0.01")


def bracket_tax(taxable_income: Decimal, brackets: Sequence[Bracket]) -> Decimal:
    """Tax owed on taxable income under an ascending, gapless bracket table.

    Each bracket taxes only the slice of income inside it; income past the
    last (unbounded) bracket is taxed at the top rate.
    """
    if taxable_income < 0:
        raise ValueError(f"Taxable income cannot be negative: {taxable_income}")

    tax = Decimal("0")
    remaining = taxable_income

    for bracket in brackets:
        if remaining <= 0:
            break
        width = bracket.width
        in_bracket = remaining if width is None else min(remaining, width)
        tax += in_bracket * bracket.rate
        remaining -= in_bracket

    return tax.quantize(TWO_PLACES, ROUND_HALF_UP)


def marginal_rate(taxable_income: Decimal, brackets: Sequence[Bracket]) -> Decimal:
    """Rate applied to the next dollar of income."""
    for bracket in brackets:
        if bracket.upper is None or taxable_income < bracket.upper:
            return bracket.rate
    return brackets[-1].rate


def effective_rate(tax: Decimal, taxable_income: Decimal) -> Decimal:
    """Tax as a percent of taxable income, two places."""
    if taxable_income <= 0:
        return Decimal("0")
    return (tax / taxable_income * 100).quantize(TWO_PLACES, ROUND_HALF_UP)
