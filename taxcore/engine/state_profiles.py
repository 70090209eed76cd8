"""State profile registry: form metadata, brackets, standard deductions,
and filing thresholds for the 50 states plus DC.

Simplified 2024 figures. States without an explicit bracket or deduction
table fall back to the DEFAULT entries; unknown codes get a synthesized
default profile instead of an error.

COMPARISON_BRACKETS is a separate all-state rate schedule used only for
side-by-side liability comparisons.
"""

import logging
from decimal import Decimal
from types import MappingProxyType
from typing import Iterator, Mapping

from taxcore.models.federal import FilingStatus
from taxcore.models.state import Bracket, StateProfile, validate_brackets

logger = logging.getLogger(__name__)

D = Decimal
SINGLE, MFJ, HOH = FilingStatus.SINGLE, FilingStatus.MFJ, FilingStatus.HOH

STATE_NAMES = {
    "AL": "Alabama", "AK": "Alaska", "AZ": "Arizona", "AR": "Arkansas",
    "CA": "California", "CO": "Colorado", "CT": "Connecticut", "DE": "Delaware",
    "FL": "Florida", "GA": "Georgia", "HI": "Hawaii", "ID": "Idaho",
    "IL": "Illinois", "IN": "Indiana", "IA": "Iowa", "KS": "Kansas",
    "KY": "Kentucky", "LA": "Louisiana", "ME": "Maine", "MD": "Maryland",
    "MA": "Massachusetts", "MI": "Michigan", "MN": "Minnesota", "MS": "Mississippi",
    "MO": "Missouri", "MT": "Montana", "NE": "Nebraska", "NV": "Nevada",
    "NH": "New Hampshire", "NJ": "New Jersey", "NM": "New Mexico", "NY": "New York",
    "NC": "North Carolina", "ND": "North Dakota", "OH": "Ohio", "OK": "Oklahoma",
    "OR": "Oregon", "PA": "Pennsylvania", "RI": "Rhode Island", "SC": "South Carolina",
    "SD": "South Dakota", "TN": "Tennessee", "TX": "Texas", "UT": "Utah",
    "VT": "Vermont", "VA": "Virginia", "WA": "Washington", "WV": "West Virginia",
    "WI": "Wisconsin", "WY": "Wyoming", "DC": "District of Columbia",
}

NO_INCOME_TAX = "No State Income Tax"

STATE_FORMS = {
    "AL": ("Form 40", "Alabama Individual Income Tax Return"),
    "AK": ("N/A", NO_INCOME_TAX),
    "AZ": ("Form 140", "Arizona Resident Personal Income Tax Return"),
    "AR": ("AR1000F", "Arkansas Full Year Resident Individual Income Tax Return"),
    "CA": ("Form 540", "California Resident Income Tax Return"),
    "CO": ("Form 104", "Colorado Individual Income Tax Return"),
    "CT": ("Form CT-1040", "Connecticut Resident Income Tax Return"),
    "DE": ("Form 200-01", "Delaware Resident Individual Income Tax Return"),
    "FL": ("N/A", NO_INCOME_TAX),
    "GA": ("Form 500", "Georgia Individual Income Tax Return"),
    "HI": ("Form N-11", "Hawaii Individual Income Tax Return - Resident"),
    "ID": ("Form 40", "Idaho Individual Income Tax Return"),
    "IL": ("Form IL-1040", "Illinois Individual Income Tax Return"),
    "IN": ("Form IT-40", "Indiana Full-Year Resident Individual Income Tax Return"),
    "IA": ("Form IA 1040", "Iowa Individual Income Tax Return"),
    "KS": ("Form K-40", "Kansas Individual Income Tax Return"),
    "KY": ("Form 740", "Kentucky Individual Income Tax Return"),
    "LA": ("Form IT-540", "Louisiana Resident Income Tax Return"),
    "ME": ("Form 1040ME", "Maine Individual Income Tax Return"),
    "MD": ("Form 502", "Maryland Resident Income Tax Return"),
    "MA": ("Form 1", "Massachusetts Resident Income Tax Return"),
    "MI": ("Form MI-1040", "Michigan Individual Income Tax Return"),
    "MN": ("Form M1", "Minnesota Individual Income Tax Return"),
    "MS": ("Form 80-105", "Mississippi Resident Individual Income Tax Return"),
    "MO": ("Form MO-1040", "Missouri Individual Income Tax Return"),
    "MT": ("Form 2", "Montana Individual Income Tax Return"),
    "NE": ("Form 1040N", "Nebraska Individual Income Tax Return"),
    "NV": ("N/A", NO_INCOME_TAX),
    "NH": ("Form DP-10", "New Hampshire Interest and Dividends Tax Return"),
    "NJ": ("Form NJ-1040", "New Jersey Resident Income Tax Return"),
    "NM": ("Form PIT-1", "New Mexico Personal Income Tax Return"),
    "NY": ("Form IT-201", "New York State Resident Income Tax Return"),
    "NC": ("Form D-400", "North Carolina Individual Income Tax Return"),
    "ND": ("Form ND-1", "North Dakota Individual Income Tax Return"),
    "OH": ("Form IT 1040", "Ohio Individual Income Tax Return"),
    "OK": ("Form 511", "Oklahoma Resident Individual Income Tax Return"),
    "OR": ("Form OR-40", "Oregon Individual Income Tax Return"),
    "PA": ("Form PA-40", "Pennsylvania Personal Income Tax Return"),
    "RI": ("Form RI-1040", "Rhode Island Resident Individual Income Tax Return"),
    "SC": ("Form SC1040", "South Carolina Individual Income Tax Return"),
    "SD": ("N/A", NO_INCOME_TAX),
    "TN": ("N/A", "No State Income Tax (Hall Tax repealed)"),
    "TX": ("N/A", NO_INCOME_TAX),
    "UT": ("Form TC-40", "Utah Individual Income Tax Return"),
    "VT": ("Form IN-111", "Vermont Income Tax Return"),
    "VA": ("Form 760", "Virginia Resident Individual Income Tax Return"),
    "WA": ("N/A", NO_INCOME_TAX),
    "WV": ("Form IT-140", "West Virginia Personal Income Tax Return"),
    "WI": ("Form 1", "Wisconsin Income Tax Return"),
    "WY": ("N/A", NO_INCOME_TAX),
    "DC": ("Form D-40", "District of Columbia Individual Income Tax Return"),
}

# NH taxes only interest and dividends (being phased out)
NO_INCOME_TAX_STATES = frozenset({"AK", "FL", "NV", "SD", "TX", "WA", "WY", "TN", "NH"})

DEFAULT = "DEFAULT"

STANDARD_DEDUCTIONS = {
    "CA": {SINGLE: D("5363"), MFJ: D("10726"), HOH: D("10726")},
    "NY": {SINGLE: D("8000"), MFJ: D("16050"), HOH: D("11200")},
    "TX": {SINGLE: D("0"), MFJ: D("0"), HOH: D("0")},
    "FL": {SINGLE: D("0"), MFJ: D("0"), HOH: D("0")},
    "IL": {SINGLE: D("0"), MFJ: D("0"), HOH: D("0")},  # Flat tax, no std deduction
    "PA": {SINGLE: D("0"), MFJ: D("0"), HOH: D("0")},
    "OH": {SINGLE: D("0"), MFJ: D("0"), HOH: D("0")},
    "GA": {SINGLE: D("5400"), MFJ: D("7100"), HOH: D("5400")},
    "NC": {SINGLE: D("12750"), MFJ: D("25500"), HOH: D("19125")},
    "NJ": {SINGLE: D("0"), MFJ: D("0"), HOH: D("0")},  # Uses exemptions instead
    "VA": {SINGLE: D("8000"), MFJ: D("16000"), HOH: D("8000")},
    "WA": {SINGLE: D("0"), MFJ: D("0"), HOH: D("0")},
    "MA": {SINGLE: D("0"), MFJ: D("0"), HOH: D("0")},
    "AZ": {SINGLE: D("13850"), MFJ: D("27700"), HOH: D("20800")},
    "CO": {SINGLE: D("0"), MFJ: D("0"), HOH: D("0")},
    DEFAULT: {SINGLE: D("5000"), MFJ: D("10000"), HOH: D("7500")},
}


def _tiers(*rows: tuple[str, str | None, str]) -> tuple[Bracket, ...]:
    return tuple(
        Bracket(lower=D(lo), upper=D(hi) if hi is not None else None, rate=D(rate))
        for lo, hi, rate in rows
    )


def _flat(rate: str) -> tuple[Bracket, ...]:
    return _tiers(("0", None, rate))


BRACKETS = {
    "CA": _tiers(
        ("0", "10412", "0.01"),
        ("10412", "24684", "0.02"),
        ("24684", "38959", "0.04"),
        ("38959", "54081", "0.06"),
        ("54081", "68350", "0.08"),
        ("68350", "349137", "0.093"),
        ("349137", "418961", "0.103"),
        ("418961", "698271", "0.113"),
        ("698271", None, "0.123"),
    ),
    "NY": _tiers(
        ("0", "8500", "0.04"),
        ("8500", "11700", "0.045"),
        ("11700", "13900", "0.0525"),
        ("13900", "80650", "0.0585"),
        ("80650", "215400", "0.0625"),
        ("215400", "1077550", "0.0685"),
        ("1077550", "5000000", "0.0965"),
        ("5000000", "25000000", "0.103"),
        ("25000000", None, "0.109"),
    ),
    "IL": _flat("0.0495"),
    "PA": _flat("0.0307"),
    "MA": _flat("0.05"),
    "NC": _flat("0.0525"),
    "GA": _tiers(
        ("0", "750", "0.01"),
        ("750", "2250", "0.02"),
        ("2250", "3750", "0.03"),
        ("3750", "5250", "0.04"),
        ("5250", "7000", "0.05"),
        ("7000", None, "0.055"),
    ),
    "VA": _tiers(
        ("0", "3000", "0.02"),
        ("3000", "5000", "0.03"),
        ("5000", "17000", "0.05"),
        ("17000", None, "0.0575"),
    ),
    "NJ": _tiers(
        ("0", "20000", "0.014"),
        ("20000", "35000", "0.0175"),
        ("35000", "40000", "0.035"),
        ("40000", "75000", "0.05525"),
        ("75000", "500000", "0.0637"),
        ("500000", "1000000", "0.0897"),
        ("1000000", None, "0.1075"),
    ),
    DEFAULT: _flat("0.05"),
}

# Simplified; actual thresholds vary by age and filing status
FILING_THRESHOLDS = {
    "CA": D("20913"),
    "NY": D("4000"),
    "IL": D("2625"),
    "PA": D("33"),
    "NJ": D("10000"),
    DEFAULT: D("5000"),
}

# Single-filer rate schedules for every state, used to compare liability on
# the same taxable income. None means no tax on wages. Kept apart from
# BRACKETS, which drive the full return and fall back to DEFAULT.
COMPARISON_BRACKETS = MappingProxyType({
    "AL": _tiers(("0", "500", "0.02"), ("500", "3000", "0.04"), ("3000", None, "0.05")),
    "AK": None,
    "AZ": _flat("0.025"),
    "AR": _tiers(("0", "4300", "0.02"), ("4300", "8500", "0.04"), ("8500", None, "0.044")),
    "CA": _tiers(
        ("0", "10099", "0.01"),
        ("10099", "23942", "0.02"),
        ("23942", "37788", "0.04"),
        ("37788", "52455", "0.06"),
        ("52455", "66295", "0.08"),
        ("66295", "338639", "0.093"),
        ("338639", "406364", "0.103"),
        ("406364", "677275", "0.113"),
        ("677275", None, "0.123"),
    ),
    "CO": _flat("0.044"),
    "CT": _tiers(
        ("0", "10000", "0.03"),
        ("10000", "50000", "0.05"),
        ("50000", "100000", "0.055"),
        ("100000", "200000", "0.06"),
        ("200000", "250000", "0.065"),
        ("250000", "500000", "0.069"),
        ("500000", None, "0.0699"),
    ),
    "DE": _tiers(
        ("0", "2000", "0"),
        ("2000", "5000", "0.022"),
        ("5000", "10000", "0.039"),
        ("10000", "20000", "0.048"),
        ("20000", "25000", "0.052"),
        ("25000", "60000", "0.0555"),
        ("60000", None, "0.066"),
    ),
    "FL": None,
    "GA": _flat("0.0549"),
    "HI": _tiers(
        ("0", "2400", "0.014"),
        ("2400", "4800", "0.032"),
        ("4800", "9600", "0.055"),
        ("9600", "14400", "0.064"),
        ("14400", "19200", "0.068"),
        ("19200", "24000", "0.072"),
        ("24000", "36000", "0.076"),
        ("36000", "48000", "0.079"),
        ("48000", "150000", "0.0825"),
        ("150000", "175000", "0.09"),
        ("175000", "200000", "0.10"),
        ("200000", None, "0.11"),
    ),
    "ID": _flat("0.058"),
    "IL": _flat("0.0495"),
    "IN": _flat("0.0315"),
    "IA": _tiers(
        ("0", "6000", "0.044"),
        ("6000", "30000", "0.0482"),
        ("30000", "75000", "0.057"),
        ("75000", None, "0.06"),
    ),
    "KS": _tiers(("0", "15000", "0.031"), ("15000", "30000", "0.0525"), ("30000", None, "0.057")),
    "KY": _flat("0.04"),
    "LA": _tiers(("0", "12500", "0.0185"), ("12500", "50000", "0.035"), ("50000", None, "0.0425")),
    "ME": _tiers(("0", "24500", "0.058"), ("24500", "58050", "0.0675"), ("58050", None, "0.0715")),
    "MD": _tiers(
        ("0", "1000", "0.02"),
        ("1000", "2000", "0.03"),
        ("2000", "3000", "0.04"),
        ("3000", "100000", "0.0475"),
        ("100000", "125000", "0.05"),
        ("125000", "150000", "0.0525"),
        ("150000", "250000", "0.055"),
        ("250000", None, "0.0575"),
    ),
    "MA": _flat("0.05"),
    "MI": _flat("0.0425"),
    "MN": _tiers(
        ("0", "30070", "0.0535"),
        ("30070", "98760", "0.068"),
        ("98760", "183340", "0.0785"),
        ("183340", None, "0.0985"),
    ),
    "MS": _tiers(("0", "10000", "0.04"), ("10000", None, "0.05")),
    "MO": _tiers(
        ("0", "1207", "0"),
        ("1207", "2414", "0.02"),
        ("2414", "3621", "0.025"),
        ("3621", "4828", "0.03"),
        ("4828", "6035", "0.035"),
        ("6035", "7242", "0.04"),
        ("7242", "8449", "0.045"),
        ("8449", None, "0.048"),
    ),
    "MT": _tiers(("0", "18800", "0.047"), ("18800", None, "0.059")),
    "NE": _tiers(
        ("0", "3700", "0.0246"),
        ("3700", "22170", "0.0351"),
        ("22170", "35730", "0.0501"),
        ("35730", None, "0.0584"),
    ),
    "NV": None,
    # Interest and dividends only
    "NH": _flat("0.03"),
    "NJ": BRACKETS["NJ"],
    "NM": _tiers(
        ("0", "5500", "0.017"),
        ("5500", "11000", "0.032"),
        ("11000", "16000", "0.047"),
        ("16000", "210000", "0.049"),
        ("210000", None, "0.059"),
    ),
    "NY": BRACKETS["NY"],
    "NC": _flat("0.0475"),
    "ND": _tiers(("0", "44725", "0.011"), ("44725", "225975", "0.0204"), ("225975", None, "0.025")),
    "OH": _tiers(("0", "26050", "0"), ("26050", "100000", "0.02765"), ("100000", None, "0.035")),
    "OK": _tiers(
        ("0", "1000", "0.0025"),
        ("1000", "2500", "0.0075"),
        ("2500", "3750", "0.0175"),
        ("3750", "4900", "0.0275"),
        ("4900", "7200", "0.0375"),
        ("7200", None, "0.0475"),
    ),
    "OR": _tiers(
        ("0", "4050", "0.0475"),
        ("4050", "10200", "0.0675"),
        ("10200", "125000", "0.0875"),
        ("125000", None, "0.099"),
    ),
    "PA": _flat("0.0307"),
    "RI": _tiers(("0", "73450", "0.0375"), ("73450", "166950", "0.0475"), ("166950", None, "0.0599")),
    "SC": _tiers(("0", "3200", "0"), ("3200", "16040", "0.03"), ("16040", None, "0.0644")),
    "SD": None,
    "TN": None,
    "TX": None,
    "UT": _flat("0.0465"),
    "VT": _tiers(
        ("0", "45400", "0.0335"),
        ("45400", "110050", "0.066"),
        ("110050", "229550", "0.076"),
        ("229550", None, "0.0875"),
    ),
    "VA": BRACKETS["VA"],
    "WA": None,
    "WV": _tiers(
        ("0", "10000", "0.0236"),
        ("10000", "25000", "0.0315"),
        ("25000", "40000", "0.0354"),
        ("40000", "60000", "0.0472"),
        ("60000", None, "0.0512"),
    ),
    "WI": _tiers(
        ("0", "14320", "0.0354"),
        ("14320", "28640", "0.0465"),
        ("28640", "315310", "0.053"),
        ("315310", None, "0.0765"),
    ),
    "WY": None,
    "DC": _tiers(
        ("0", "10000", "0.04"),
        ("10000", "40000", "0.06"),
        ("40000", "60000", "0.065"),
        ("60000", "250000", "0.085"),
        ("250000", "500000", "0.0925"),
        ("500000", "1000000", "0.0975"),
        ("1000000", None, "0.1075"),
    ),
})

for _code, _brackets in COMPARISON_BRACKETS.items():
    if _brackets is not None:
        validate_brackets(_code, _brackets)


class StateProfileRegistry:
    """Read-only lookup of StateProfile by two-letter code.

    Built once from static tables and then never mutated, so a single
    instance can be shared across threads.
    """

    def __init__(self, profiles: Mapping[str, StateProfile], default: StateProfile):
        self._profiles = MappingProxyType(dict(profiles))
        self._default = default

    def __contains__(self, state_code: str) -> bool:
        return state_code.upper() in self._profiles

    def __iter__(self) -> Iterator[StateProfile]:
        return iter(self._profiles.values())

    def __len__(self) -> int:
        return len(self._profiles)

    @property
    def default(self) -> StateProfile:
        return self._default

    def profile(self, state_code: str) -> StateProfile:
        """Profile for a state code (case-insensitive).

        Unknown codes get the default profile re-labelled with the code.
        """
        code = state_code.strip().upper()
        found = self._profiles.get(code)
        if found is not None:
            return found

        logger.warning("No state profile for %r, using default brackets and deductions", code)
        d = self._default
        return StateProfile(
            code=code,
            name=code,
            form_number=d.form_number,
            form_title=d.form_title,
            has_income_tax=True,
            brackets=d.brackets,
            standard_deductions=d.standard_deductions,
            filing_threshold=d.filing_threshold,
        )

    def no_income_tax_states(self) -> list[StateProfile]:
        return [p for p in self if not p.has_income_tax]


def _build_profile(code: str, name: str) -> StateProfile:
    form_number, form_title = STATE_FORMS.get(code, ("State Form", "State Income Tax Return"))
    return StateProfile(
        code=code,
        name=name,
        form_number=form_number,
        form_title=form_title,
        has_income_tax=code not in NO_INCOME_TAX_STATES,
        brackets=BRACKETS.get(code, BRACKETS[DEFAULT]),
        standard_deductions=STANDARD_DEDUCTIONS.get(code, STANDARD_DEDUCTIONS[DEFAULT]),
        filing_threshold=FILING_THRESHOLDS.get(code, FILING_THRESHOLDS[DEFAULT]),
    )


def build_default_registry() -> StateProfileRegistry:
    profiles = {code: _build_profile(code, name) for code, name in STATE_NAMES.items()}
    default = StateProfile(
        code=DEFAULT,
        name="Default",
        form_number="State Form",
        form_title="State Income Tax Return",
        has_income_tax=True,
        brackets=BRACKETS[DEFAULT],
        standard_deductions=STANDARD_DEDUCTIONS[DEFAULT],
        filing_threshold=FILING_THRESHOLDS[DEFAULT],
    )
    return StateProfileRegistry(profiles, default)


DEFAULT_REGISTRY = build_default_registry()
