"""Depreciation routes."""

from fastapi import APIRouter, HTTPException

from taxcore.api.schemas import (
    AssetDepreciationDetailResponse,
    AssetDepreciationRequest,
    AssetRequest,
    DepreciationResponse,
    MidQuarterRequest,
    MidQuarterResponse,
    PortfolioRequest,
    PortfolioResponse,
    ScheduleEntryResponse,
    Section179Request,
    Section179Response,
)
from taxcore.config import settings
from taxcore.models.asset import DepreciableAsset, DepreciationMethod
from taxcore.models.results import DepreciationResult
from taxcore.engine.depreciation import calculate_depreciation
from taxcore.engine.portfolio import (
    calculate_total_depreciation,
    check_mid_quarter_convention,
    validate_section_179,
)

router = APIRouter(prefix="/api/v1/depreciation", tags=["depreciation"])


def _build_asset(req: AssetRequest) -> DepreciableAsset:
    try:
        return DepreciableAsset(
            name=req.name,
            cost_basis=req.cost_basis,
            date_placed_in_service=req.date_placed_in_service,
            asset_type=req.asset_type,
            recovery_period=req.recovery_period,
            method=DepreciationMethod(req.method),
            salvage_value=req.salvage_value,
            section_179_elected=req.section_179_elected,
            section_179_amount=req.section_179_amount,
            bonus_elected=req.bonus_elected,
            business_use_percent=req.business_use_percent,
            is_vehicle=req.is_vehicle,
            is_heavy_suv=req.is_heavy_suv,
            total_units=req.total_units,
            units_this_year=req.units_this_year,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _result_to_response(result: DepreciationResult) -> DepreciationResponse:
    return DepreciationResponse(
        cost_basis=result.cost_basis,
        business_use_percent=result.business_use_percent,
        adjusted_basis=result.adjusted_basis,
        method=result.method.value,
        recovery_period=result.recovery_period,
        year_in_service=result.year_in_service,
        section_179_deduction=result.section_179_deduction,
        bonus_depreciation=result.bonus_depreciation,
        regular_depreciation=result.regular_depreciation,
        current_year_depreciation=result.current_year_depreciation,
        schedule=[
            ScheduleEntryResponse(
                year=e.year,
                beginning_book_value=e.beginning_book_value,
                depreciation=e.depreciation,
                accumulated_depreciation=e.accumulated_depreciation,
                ending_book_value=e.ending_book_value,
                section_179=e.section_179,
                bonus_depreciation=e.bonus_depreciation,
                total_first_year=e.total_first_year,
            )
            for e in result.schedule
        ],
    )


@router.post("/asset", response_model=DepreciationResponse)
async def asset_depreciation(req: AssetDepreciationRequest):
    asset = _build_asset(req.asset)
    return _result_to_response(calculate_depreciation(asset, req.year_in_service))


@router.post("/portfolio", response_model=PortfolioResponse)
async def portfolio_depreciation(req: PortfolioRequest):
    """Total depreciation deduction for all assets in a tax year."""
    assets = [_build_asset(a) for a in req.assets]
    result = calculate_total_depreciation(assets, req.tax_year or settings.default_tax_year)
    return PortfolioResponse(
        tax_year=result.tax_year,
        total_depreciation=result.total_depreciation,
        total_section_179=result.total_section_179,
        total_bonus=result.total_bonus,
        asset_count=result.asset_count,
        details=[
            AssetDepreciationDetailResponse(
                asset_name=d.asset_name,
                depreciation=_result_to_response(d.result),
            )
            for d in result.details
        ],
    )


@router.post("/section-179", response_model=Section179Response)
async def section_179(req: Section179Request):
    assets = [_build_asset(a) for a in req.assets]
    v = validate_section_179(assets, req.business_income)
    return Section179Response(
        is_valid=v.is_valid,
        issues=v.issues,
        requested_section_179=v.requested_section_179,
        total_cost=v.total_cost,
        phase_out_reduction=v.phase_out_reduction,
        allowed_section_179=v.allowed_section_179,
    )


@router.post("/mid-quarter", response_model=MidQuarterResponse)
async def mid_quarter(req: MidQuarterRequest):
    assets = [_build_asset(a) for a in req.assets]
    check = check_mid_quarter_convention(assets)
    return MidQuarterResponse(
        requires_mid_quarter=check.requires_mid_quarter,
        q4_percentage=check.q4_percentage,
        note=check.note,
    )
