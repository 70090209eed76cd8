"""Depreciation method calculators: MACRS table lookup, straight-line with
half-year convention, and units-of-production.

Pure functions. Validates against IRS Pub 946, Appendix A (half-year
convention only; mid-quarter tables are not applied).
"""

from decimal import Decimal, ROUND_CEILING, ROUND_HALF_UP
from types import MappingProxyType

TWO_PLACES = Decimal("0.01")
FIVE_PLACES = Decimal("0.00001")
HALF = Decimal("0.5")


def _rates(*pcts: str) -> tuple[Decimal, ...]:
    return tuple(Decimal(p) for p in pcts)


def service_year_fraction(useful_life: Decimal, year: int) -> Decimal:
    """Share of a full year's straight-line depreciation allowed in a service year.

    Half-year convention: half a year in year 1, full years after, and the
    leftover half year at the end (year life + 1 for whole-number lives).
    Year life itself always gets a full year, so a 5-year asset spans six
    service years rather than being cut short in year 5.
    """
    if year < 1 or useful_life <= 0:
        return Decimal("0")
    y = Decimal(year)
    portion = min(useful_life, y - HALF) - max(Decimal("0"), y - 1 - HALF)
    return max(Decimal("0"), portion)


def straight_line_years(useful_life: Decimal) -> int:
    """Number of service years a half-year straight-line recovery spans."""
    if useful_life <= 0:
        return 0
    return int((useful_life + HALF).to_integral_value(rounding=ROUND_CEILING))


def _straight_line_rates(useful_life: Decimal) -> tuple[Decimal, ...]:
    return tuple(
        (service_year_fraction(useful_life, y) / useful_life).quantize(FIVE_PLACES, ROUND_HALF_UP)
        for y in range(1, straight_line_years(useful_life) + 1)
    )


# Half-year convention tables (200% DB for 3-10 year, 150% DB for 15-20 year).
# Real property uses straight-line over 27.5 / 39 years.
MACRS_HALF_YEAR_RATES = MappingProxyType({
    Decimal("3"): _rates("0.3333", "0.4445", "0.1481", "0.0741"),
    Decimal("5"): _rates("0.2000", "0.3200", "0.1920", "0.1152", "0.1152", "0.0576"),
    Decimal("7"): _rates(
        "0.1429", "0.2449", "0.1749", "0.1249", "0.0893", "0.0892", "0.0893", "0.0446",
    ),
    Decimal("10"): _rates(
        "0.1000", "0.1800", "0.1440", "0.1152", "0.0922", "0.0737",
        "0.0655", "0.0655", "0.0656", "0.0655", "0.0328",
    ),
    Decimal("15"): _rates(
        "0.0500", "0.0950", "0.0855", "0.0770", "0.0693", "0.0623", "0.0590", "0.0590",
        "0.0591", "0.0590", "0.0591", "0.0590", "0.0591", "0.0590", "0.0591", "0.0295",
    ),
    Decimal("20"): _rates(
        "0.0375", "0.0722", "0.0668", "0.0618", "0.0571", "0.0528", "0.0489",
        "0.0452", "0.0447", "0.0447", "0.0446", "0.0446", "0.0446", "0.0446",
        "0.0446", "0.0446", "0.0446", "0.0446", "0.0446", "0.0446", "0.0223",
    ),
    Decimal("27.5"): _straight_line_rates(Decimal("27.5")),
    Decimal("39"): _straight_line_rates(Decimal("39")),
})


def macrs_rates(recovery_period: Decimal) -> tuple[Decimal, ...]:
    """Rate table for a recovery class; empty for classes without a table."""
    return MACRS_HALF_YEAR_RATES.get(Decimal(recovery_period), ())


def macrs_depreciation(
    basis: Decimal,
    recovery_period: Decimal,
    year: int,
) -> Decimal:
    """MACRS depreciation for one service year (half-year convention).

    Args:
        basis: Depreciable basis (after Section 179 and bonus)
        recovery_period: Recovery class in years, e.g. 5 or 27.5
        year: Service year (1-indexed); 0 once the table is exhausted
    """
    rates = macrs_rates(recovery_period)
    if year < 1 or year > len(rates):
        return Decimal("0.00")
    return (basis * rates[year - 1]).quantize(TWO_PLACES, ROUND_HALF_UP)


def straight_line_depreciation(
    basis: Decimal,
    salvage_value: Decimal,
    useful_life: Decimal,
    year: int,
) -> Decimal:
    """(basis - salvage) / life, halved in the first and final service years."""
    depreciable = max(Decimal("0"), basis - salvage_value)
    fraction = service_year_fraction(useful_life, year)
    if fraction == 0:
        return Decimal("0.00")
    annual = depreciable / useful_life
    return (annual * fraction).quantize(TWO_PLACES, ROUND_HALF_UP)


def units_of_production_depreciation(
    basis: Decimal,
    salvage_value: Decimal,
    total_units: Decimal,
    units_this_year: Decimal,
) -> Decimal:
    if total_units == 0:
        return Decimal("0.00")
    depreciable = max(Decimal("0"), basis - salvage_value)
    per_unit = depreciable / total_units
    return (per_unit * units_this_year).quantize(TWO_PLACES, ROUND_HALF_UP)
