"""Asset type -> MACRS recovery period (IRS Pub 946, Table B-1 simplified)."""

import logging
from decimal import Decimal
from types import MappingProxyType

from taxcore.models.asset import DepreciableAsset

logger = logging.getLogger(__name__)

DEFAULT_RECOVERY_PERIOD = Decimal("7")

RECOVERY_CLASSES = MappingProxyType({
    Decimal("3"): frozenset({"tractor_units", "race_horses", "qualified_rent_to_own"}),
    Decimal("5"): frozenset({
        "automobiles", "computers", "office_equipment", "research_equipment",
        "appliances", "carpets", "furniture_rental",
    }),
    Decimal("7"): frozenset({
        "office_furniture", "agricultural_machinery", "railroad_track",
        "motorsports_facilities",
    }),
    Decimal("10"): frozenset({
        "vessels", "barges", "tugs", "fruit_trees", "single_purpose_agricultural",
    }),
    Decimal("15"): frozenset({
        "land_improvements", "retail_improvements", "restaurant_property", "gas_stations",
    }),
    Decimal("20"): frozenset({"farm_buildings", "municipal_sewers"}),
    Decimal("27.5"): frozenset({"residential_rental"}),
    Decimal("39"): frozenset({"nonresidential_real_property"}),
})


def recovery_period_for(asset_type: str) -> Decimal:
    """Recovery period for an asset-type label. Unknown labels are 7-year property."""
    label = asset_type.strip().lower()
    for period, labels in RECOVERY_CLASSES.items():
        if label in labels:
            return period
    logger.debug("Unrecognized asset type %r, defaulting to 7-year property", asset_type)
    return DEFAULT_RECOVERY_PERIOD


def resolve_recovery_period(asset: DepreciableAsset) -> Decimal:
    """Explicit recovery period if given, otherwise classify by asset type."""
    if asset.recovery_period is not None:
        return Decimal(asset.recovery_period)
    return recovery_period_for(asset.asset_type)
