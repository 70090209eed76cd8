from decimal import Decimal

import pytest

from taxcore.engine.state_profiles import (
    COMPARISON_BRACKETS,
    DEFAULT_REGISTRY,
    NO_INCOME_TAX_STATES,
    STATE_NAMES,
)
from taxcore.models.federal import FilingStatus
from taxcore.models.state import Bracket, StateProfile


class TestRegistry:
    def test_all_states_and_dc(self):
        assert len(DEFAULT_REGISTRY) == 51
        assert "DC" in DEFAULT_REGISTRY

    def test_lookup_case_insensitive(self):
        assert DEFAULT_REGISTRY.profile("ca").code == "CA"
        assert DEFAULT_REGISTRY.profile(" ny ").form_number == "Form IT-201"

    def test_no_income_tax_states(self):
        codes = {p.code for p in DEFAULT_REGISTRY.no_income_tax_states()}
        assert codes == set(NO_INCOME_TAX_STATES)

    def test_unknown_state_gets_default_profile(self):
        profile = DEFAULT_REGISTRY.profile("ZZ")
        assert profile.code == "ZZ"
        assert profile.has_income_tax
        assert len(profile.brackets) == 1
        assert profile.brackets[0].rate == Decimal("0.05")
        assert profile.standard_deduction(FilingStatus.SINGLE) == Decimal("5000")
        assert profile.filing_threshold == Decimal("5000")

    def test_listed_state_without_tables_uses_defaults(self):
        profile = DEFAULT_REGISTRY.profile("AL")
        assert profile.name == "Alabama"
        assert profile.form_number == "Form 40"
        assert profile.brackets == DEFAULT_REGISTRY.default.brackets

    def test_every_profile_brackets_tile_from_zero(self):
        for profile in DEFAULT_REGISTRY:
            assert profile.brackets[0].lower == 0
            assert profile.brackets[-1].upper is None


class TestComparisonBrackets:
    def test_covers_every_state(self):
        assert set(COMPARISON_BRACKETS) == set(STATE_NAMES)

    def test_no_tax_states(self):
        no_tax = {code for code, brackets in COMPARISON_BRACKETS.items() if brackets is None}
        assert no_tax == {"AK", "FL", "NV", "SD", "TN", "TX", "WA", "WY"}

    def test_read_only(self):
        with pytest.raises(TypeError):
            COMPARISON_BRACKETS["AZ"] = None


class TestStandardDeduction:
    def test_by_filing_status(self):
        ca = DEFAULT_REGISTRY.profile("CA")
        assert ca.standard_deduction(FilingStatus.SINGLE) == Decimal("5363")
        assert ca.standard_deduction(FilingStatus.MFJ) == Decimal("10726")

    def test_unlisted_status_uses_single(self):
        ny = DEFAULT_REGISTRY.profile("NY")
        assert ny.standard_deduction(FilingStatus.MFS) == Decimal("8000")

    def test_tables_are_read_only(self):
        ca = DEFAULT_REGISTRY.profile("CA")
        with pytest.raises(TypeError):
            ca.standard_deductions[FilingStatus.SINGLE] = Decimal("0")


def _profile(brackets):
    return StateProfile(
        code="XX",
        name="Test",
        form_number="X",
        form_title="X",
        has_income_tax=True,
        brackets=tuple(brackets),
        standard_deductions={},
        filing_threshold=Decimal("0"),
    )


class TestBracketValidation:
    def test_gap_rejected(self):
        with pytest.raises(ValueError):
            _profile([
                Bracket(Decimal("0"), Decimal("100"), Decimal("0.01")),
                Bracket(Decimal("200"), None, Decimal("0.02")),
            ])

    def test_bounded_top_rejected(self):
        with pytest.raises(ValueError):
            _profile([Bracket(Decimal("0"), Decimal("100"), Decimal("0.01"))])

    def test_must_start_at_zero(self):
        with pytest.raises(ValueError):
            _profile([Bracket(Decimal("10"), None, Decimal("0.01"))])

    def test_decreasing_rate_rejected(self):
        with pytest.raises(ValueError):
            _profile([
                Bracket(Decimal("0"), Decimal("100"), Decimal("0.05")),
                Bracket(Decimal("100"), None, Decimal("0.02")),
            ])

    def test_empty_deduction_table_falls_back_to_zero(self):
        profile = _profile([Bracket(Decimal("0"), None, Decimal("0.03"))])
        assert profile.standard_deduction(FilingStatus.HOH) == Decimal("0")
