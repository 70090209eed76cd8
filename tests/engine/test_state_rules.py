from decimal import Decimal

from taxcore.engine.state_adjustments import (
    select_deduction,
    state_additions,
    state_itemized_deduction,
    state_subtractions,
)
from taxcore.engine.state_credits import state_credits
from taxcore.models.federal import FederalReturnSummary, StateData
from taxcore.models.state import DeductionType


def _federal(**kwargs) -> FederalReturnSummary:
    return FederalReturnSummary(agi=Decimal("60000"), **kwargs)


class TestAdditions:
    def test_universal_out_of_state_muni(self):
        data = StateData(out_of_state_muni_bond_interest=Decimal("250.50"))
        assert state_additions("OH", _federal(), data) == Decimal("250.50")

    def test_california_hsa_addback(self):
        data = StateData(hsa_deduction=Decimal("3000"), out_of_state_muni_bond_interest=Decimal("100"))
        assert state_additions("CA", _federal(), data) == Decimal("3100.00")

    def test_new_york_public_pension(self, ny_retiree_data):
        assert state_additions("NY", _federal(), ny_retiree_data) == Decimal("1200.00")

    def test_rule_not_applied_to_other_states(self):
        data = StateData(hsa_deduction=Decimal("3000"))
        assert state_additions("TX", _federal(), data) == Decimal("0")


class TestSubtractions:
    def test_new_york_pension_exclusion_capped(self, ny_retiree_data):
        # 500 in-state muni + min(30,000, 20,000) pension
        assert state_subtractions("NY", _federal(), ny_retiree_data) == Decimal("20500.00")

    def test_new_york_pension_under_cap(self):
        data = StateData(pension_income=Decimal("12000"))
        assert state_subtractions("NY", _federal(), data) == Decimal("12000.00")

    def test_pennsylvania_full_retirement_exclusion(self):
        data = StateData(retirement_income=Decimal("85000"))
        assert state_subtractions("PA", _federal(), data) == Decimal("85000.00")

    def test_california_social_security_limited_to_federal(self):
        federal = _federal(social_security_benefits=Decimal("8000"))
        data = StateData(social_security_benefits=Decimal("12000"))
        assert state_subtractions("CA", federal, data) == Decimal("8000.00")

    def test_default_only_in_state_muni(self):
        data = StateData(in_state_muni_bond_interest=Decimal("75"), pension_income=Decimal("9000"))
        assert state_subtractions("GA", _federal(), data) == Decimal("75.00")


class TestItemized:
    def test_follows_federal_by_default(self):
        federal = _federal(itemized_deductions=Decimal("18000"))
        assert state_itemized_deduction("VA", federal) == Decimal("18000.00")

    def test_salt_disallowed_in_ca_and_ny(self):
        federal = _federal(
            itemized_deductions=Decimal("20000"),
            state_local_tax_deduction=Decimal("8000"),
        )
        assert state_itemized_deduction("CA", federal) == Decimal("12000.00")
        assert state_itemized_deduction("NY", federal) == Decimal("12000.00")

    def test_new_jersey_own_components(self):
        federal = _federal(
            itemized_deductions=Decimal("25000"),
            medical_deductions=Decimal("1000"),
            mortgage_interest=Decimal("8000"),
            charitable_contributions=Decimal("2000"),
        )
        assert state_itemized_deduction("NJ", federal) == Decimal("11000.00")

    def test_never_negative(self):
        federal = _federal(
            itemized_deductions=Decimal("5000"),
            state_local_tax_deduction=Decimal("9000"),
        )
        assert state_itemized_deduction("CA", federal) == Decimal("0")


class TestSelectDeduction:
    def test_larger_wins(self):
        assert select_deduction(Decimal("5363"), Decimal("12000")) == (
            DeductionType.ITEMIZED,
            Decimal("12000"),
        )
        assert select_deduction(Decimal("5363"), Decimal("4000")) == (
            DeductionType.STANDARD,
            Decimal("5363"),
        )

    def test_tie_goes_to_standard(self):
        kind, amount = select_deduction(Decimal("5000"), Decimal("5000"))
        assert kind is DeductionType.STANDARD
        assert amount == Decimal("5000")


class TestCredits:
    def test_calEITC(self):
        federal = _federal(earned_income=Decimal("20000"), eitc=Decimal("3000"))
        assert state_credits("CA", federal, StateData()) == Decimal("2550.00")

    def test_calEITC_capped(self):
        federal = _federal(earned_income=Decimal("20000"), eitc=Decimal("5000"))
        assert state_credits("CA", federal, StateData()) == Decimal("3529.00")

    def test_calEITC_income_limit(self):
        federal = _federal(earned_income=Decimal("40000"), eitc=Decimal("500"))
        assert state_credits("CA", federal, StateData()) == Decimal("0")

    def test_calEITC_requires_earned_income(self):
        federal = _federal(eitc=Decimal("500"))
        assert state_credits("CA", federal, StateData()) == Decimal("0")

    def test_new_york_eitc_and_child_credit(self, ny_retiree_data):
        federal = _federal(eitc=Decimal("1000"))
        assert state_credits("NY", federal, ny_retiree_data) == Decimal("960.00")

    def test_new_jersey(self):
        federal = _federal(eitc=Decimal("1234.56"))
        # 493.824 -> 493.82
        assert state_credits("NJ", federal, StateData()) == Decimal("493.82")

    def test_unlisted_state_zero(self):
        federal = _federal(eitc=Decimal("5000"))
        assert state_credits("IL", federal, StateData(qualifying_children=3)) == Decimal("0")
