"""State return routes."""

from fastapi import APIRouter, HTTPException

from taxcore.api.schemas import (
    BracketResponse,
    FederalReturnRequest,
    RequiredReturnResponse,
    RequiredReturnsRequest,
    StateCompareRequest,
    StateDataRequest,
    StateFormDataResponse,
    StateProfileResponse,
    StateReturnRequest,
    StateReturnResponse,
    StateSummaryResponse,
    StateTaxSummaryResponse,
)
from taxcore.config import settings
from taxcore.models.federal import FederalReturnSummary, FilingStatus, StateData
from taxcore.models.state import StateReturnResult
from taxcore.engine.state_profiles import DEFAULT_REGISTRY
from taxcore.engine.state_return import (
    compare_state_taxes,
    generate_state_return,
    required_state_returns,
)

router = APIRouter(prefix="/api/v1", tags=["state"])


def _build_federal(req: FederalReturnRequest) -> FederalReturnSummary:
    try:
        filing_status = FilingStatus(req.filing_status.strip().lower().replace(" ", "_"))
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown filing status: {req.filing_status}")

    return FederalReturnSummary(
        agi=req.agi,
        filing_status=filing_status,
        tax_year=req.tax_year or settings.default_tax_year,
        itemized_deductions=req.itemized_deductions,
        state_local_tax_deduction=req.state_local_tax_deduction,
        medical_deductions=req.medical_deductions,
        mortgage_interest=req.mortgage_interest,
        charitable_contributions=req.charitable_contributions,
        earned_income=req.earned_income,
        eitc=req.eitc,
        social_security_benefits=req.social_security_benefits,
        state_withheld=req.state_withheld,
    )


def _build_state_data(req: StateDataRequest | None) -> StateData:
    if req is None:
        return StateData()
    return StateData(**req.model_dump())


def _return_to_response(result: StateReturnResult) -> StateReturnResponse:
    form_data = None
    if result.form_data is not None:
        fd = result.form_data
        form_data = StateFormDataResponse(
            form_number=fd.form_number,
            form_title=fd.form_title,
            state_code=fd.state_code,
            state_name=fd.state_name,
            tax_year=fd.tax_year,
            sections=fd.sections,
        )

    return StateReturnResponse(
        state_code=result.state_code,
        state_name=result.state_name,
        has_income_tax=result.has_income_tax,
        tax_year=result.tax_year,
        filing_status=result.filing_status.value,
        form_number=result.form_number,
        form_title=result.form_title,
        message=result.message,
        federal_agi=result.federal_agi,
        state_additions=result.state_additions,
        state_subtractions=result.state_subtractions,
        state_agi=result.state_agi,
        standard_deduction=result.standard_deduction,
        itemized_deduction=result.itemized_deduction,
        deduction_type=result.deduction_type.value,
        deduction_amount=result.deduction_amount,
        state_taxable_income=result.state_taxable_income,
        state_tax=result.state_tax,
        state_credits=result.state_credits,
        state_tax_after_credits=result.state_tax_after_credits,
        state_withheld=result.state_withheld,
        state_refund=result.state_refund,
        state_owed=result.state_owed,
        form_data=form_data,
    )


@router.post("/state-returns/required", response_model=list[RequiredReturnResponse])
async def required_returns(req: RequiredReturnsRequest):
    """Which states need a return, given income sourced to each."""
    return [
        RequiredReturnResponse(
            state_code=r.state_code,
            state_name=r.state_name,
            income=r.income,
            filing_threshold=r.filing_threshold,
            form_number=r.form_number,
            form_title=r.form_title,
        )
        for r in required_state_returns(req.income_by_state)
    ]


@router.post("/state-returns/{state_code}", response_model=StateReturnResponse)
async def state_return(state_code: str, req: StateReturnRequest):
    """Federal return summary -> resident state return."""
    federal = _build_federal(req.federal_return)
    state_data = _build_state_data(req.state_data)
    return _return_to_response(generate_state_return(state_code, federal, state_data))


@router.get("/states", response_model=list[StateSummaryResponse])
async def list_states(no_income_tax: bool = False):
    """All states by name, or only those without a wage income tax."""
    profiles = DEFAULT_REGISTRY.no_income_tax_states() if no_income_tax else DEFAULT_REGISTRY
    profiles = sorted(profiles, key=lambda p: p.name)
    return [
        StateSummaryResponse(code=p.code, name=p.name, has_income_tax=p.has_income_tax)
        for p in profiles
    ]


@router.get("/states/{state_code}", response_model=StateProfileResponse)
async def get_state(state_code: str):
    if state_code not in DEFAULT_REGISTRY:
        raise HTTPException(status_code=404, detail=f"Unknown state code: {state_code}")

    p = DEFAULT_REGISTRY.profile(state_code)
    return StateProfileResponse(
        code=p.code,
        name=p.name,
        form_number=p.form_number,
        form_title=p.form_title,
        has_income_tax=p.has_income_tax,
        brackets=[BracketResponse(lower=b.lower, upper=b.upper, rate=b.rate) for b in p.brackets],
        standard_deductions={fs.value: amt for fs, amt in p.standard_deductions.items()},
        filing_threshold=p.filing_threshold,
    )


@router.post("/state-tax/compare", response_model=list[StateTaxSummaryResponse])
async def compare(req: StateCompareRequest):
    """Same taxable income across states, lowest liability first."""
    return [
        StateTaxSummaryResponse(
            state_code=s.state_code,
            state_name=s.state_name,
            has_income_tax=s.has_income_tax,
            taxable_income=s.taxable_income,
            tax_liability=s.tax_liability,
            effective_rate=s.effective_rate,
            marginal_rate=s.marginal_rate,
            is_flat=s.is_flat,
        )
        for s in compare_state_taxes(req.taxable_income, req.states)
    ]
