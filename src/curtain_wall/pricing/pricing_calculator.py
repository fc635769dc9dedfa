# File: src/curtain_wall/pricing/pricing_calculator.py
"""
Quote pricing.

Prices one quote item at a time and rolls priced items up into quote
totals. Two formulas exist:

Curtain walls are priced from their design aggregates (frame meters,
window meters, corner count and the panel list produced by
:func:`src.curtain_wall.grid.compute_design_data`):

    frame cost        = frame price x frame meters
    windows cost      = leaf price x window meters
    accessories       = (windows + doors) x accessories_2_leaves
    frame accessories = frame meters x accessories_3_leaves
    corners           = corner count x accessories_4_leaves
    glass             = glass rate x billable width x billable height

Windows, doors and skylights are priced from their frame and leaf
lengths, with a per-leaf accessory surcharge for tilt-and-turn systems
and an extra profit rate for large items.

Every money value is per unit times quantity, rounded to cents.
"""

import math
from typing import Any, Dict, Iterable, List, Optional, Union

from ..grid.design_metrics import DesignData
from .pricing_config import PricingConfig
from .profiles import AluminiumProfile
from .quote_types import (
    ItemType,
    PricedItem,
    QuoteItem,
    QuoteTotals,
    SystemType,
)
from ..utils.logging_config import get_logger

logger = get_logger(__name__)

ItemInput = Union[QuoteItem, Dict[str, Any]]


def _money(value: float) -> float:
    return round(value, 2)


def _as_number(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def _design_dict(design_data: Union[DesignData, Dict[str, Any], None]) -> Dict[str, Any]:
    """Design aggregates as a camelCase dictionary."""
    if design_data is None:
        return {}
    if isinstance(design_data, DesignData):
        return design_data.to_dict()
    if not isinstance(design_data, dict):
        return {}
    return dict(design_data)


def _panel_list(panels: Any) -> List[Dict[str, Any]]:
    """Panel entries that are objects; anything else is ignored."""
    if not isinstance(panels, list):
        return []
    return [panel for panel in panels if isinstance(panel, dict)]


def _override_rate(override: Any, fallback: float) -> float:
    """Per-meter rate from a profile override, else ``fallback``.

    An override supplies ``frame_price`` or ``price``; a present value
    wins even when it is 0.
    """
    if not isinstance(override, dict):
        return fallback
    for key in ("frame_price", "price"):
        if override.get(key) is not None:
            return _as_number(override[key])
    return fallback


def _billable(side: float, config: PricingConfig) -> float:
    return max(side, config.min_billable_side)


def _checked_config(config: Optional[PricingConfig]) -> PricingConfig:
    if config is None:
        return PricingConfig()
    config.validate()
    return config


def _coerce_item(item: ItemInput) -> QuoteItem:
    if isinstance(item, QuoteItem):
        return item
    return QuoteItem.from_dict(item)


def _price_curtain_wall(
    item: QuoteItem,
    profile: AluminiumProfile,
    config: PricingConfig
) -> PricedItem:
    design = _design_dict(item.design_data)
    qty = item.quantity

    frame_meters = _as_number(design.get("frameMeters"))
    window_meters = _as_number(design.get("windowMeters"))
    glass_area = _as_number(design.get("glassArea"))
    corner_count = int(_as_number(design.get("cornerCount")))

    panels = _panel_list(design.get("panels"))
    kinds = [str(panel.get("type", "")).lower() for panel in panels]
    num_windows = kinds.count("window")
    num_doors = kinds.count("door")

    panel_area = sum(
        _as_number(panel.get("widthMeters") or panel.get("width"))
        * _as_number(panel.get("heightMeters") or panel.get("height"))
        for panel in panels
    )
    total_area = panel_area if panel_area > 0 else glass_area

    frame_rate = _override_rate(design.get("frameProfile"), profile.frame_price)
    window_rate = _override_rate(design.get("windowProfile"), profile.leaf_price)

    frame_cost = frame_rate * frame_meters
    windows_cost = window_rate * window_meters
    accessories_windows_doors = (num_windows + num_doors) * profile.accessories_2_leaves
    frame_accessories = frame_meters * profile.accessories_3_leaves
    corners_cost = corner_count * profile.accessories_4_leaves

    billable_area = _billable(item.width, config) * _billable(item.height, config)
    glass_cost = profile.glass_rate(item.glass_type) * billable_area

    subtotal = (
        frame_cost
        + windows_cost
        + accessories_windows_doors
        + frame_accessories
        + corners_cost
        + glass_cost
        + item.additional_cost
    )
    profit_rate = profile.base_profit_rate
    profit = profit_rate * subtotal
    total = subtotal + profit

    logger.debug(
        f"Curtain wall {item.id}: frame={frame_meters}m windows={window_meters}m "
        f"corners={corner_count} subtotal={subtotal:.2f}"
    )

    return PricedItem(
        item=item,
        quantity=qty,
        area=_money(total_area * qty),
        frame_cost=_money(frame_cost * qty),
        glass_cost=_money(glass_cost * qty),
        additional_cost_total=_money(item.additional_cost * qty),
        total_before_profit=_money(subtotal * qty),
        profit_rate=round(profit_rate, 4),
        profit_amount=_money(profit * qty),
        total_price=_money(total * qty),
        m2_price=_money(total / (total_area if total_area > 0 else 1)),
        profit_percentage=_money(profit / total * 100 if total else 0.0),
        frame_meters=frame_meters,
        window_meters=window_meters,
        glass_area=glass_area,
        num_windows=num_windows,
        num_doors=num_doors,
        corner_count=corner_count,
        frame_accessories=_money(frame_accessories * qty),
        corners_cost=_money(corners_cost * qty),
        windows_cost=_money(windows_cost * qty),
        accessories_windows_doors=_money(accessories_windows_doors * qty),
    )


def _price_opening(
    item: QuoteItem,
    profile: AluminiumProfile,
    config: PricingConfig
) -> PricedItem:
    qty = item.quantity
    leaves = item.leaves if item.leaves > 0 else 1

    width = _billable(item.width, config)
    height = _billable(item.height, config)

    area = width * height
    frame_length = 2 * (width + height)
    leaf_perimeter = 2 * (width / leaves + height)
    total_leaf_length = leaf_perimeter * leaves

    if item.system == SystemType.TILT_AND_TURN:
        accessories = leaves * config.tilt_and_turn_per_leaf
    else:
        accessories = profile.accessories_for(leaves)

    frame_rate = profile.frame_price_3 if leaves == 3 else profile.frame_price
    frame_cost = frame_rate * frame_length
    leaf_cost = profile.leaf_price * total_leaf_length
    glass_cost = profile.glass_rate(item.glass_type) * area
    net_cost = profile.net_rate(item.net_type) * leaf_perimeter if item.mosquito else 0.0
    arch_cost = profile.arc_price * frame_length if item.arch else 0.0

    subtotal = (
        accessories
        + frame_cost
        + leaf_cost
        + glass_cost
        + net_cost
        + arch_cost
        + item.additional_cost
    )

    profit_rate = profile.base_profit_rate
    if area > config.area_surcharge_threshold:
        profit_rate += math.ceil(area - config.area_surcharge_threshold) * config.area_surcharge_rate

    profit = profit_rate * subtotal
    total = subtotal + profit

    logger.debug(
        f"{item.type.value} {item.id}: {width}x{height}m leaves={leaves} "
        f"profit_rate={profit_rate:.2f} subtotal={subtotal:.2f}"
    )

    return PricedItem(
        item=item,
        quantity=qty,
        area=_money(area * qty),
        frame_length=_money(frame_length * qty),
        leaf_perimeter=_money(leaf_perimeter),
        total_leaf_length=_money(total_leaf_length * qty),
        accessories=_money(accessories * qty),
        frame_cost=_money(frame_cost * qty),
        leaf_cost=_money(leaf_cost * qty),
        glass_cost=_money(glass_cost * qty),
        net_cost=_money(net_cost * qty),
        arch_cost=_money(arch_cost * qty),
        additional_cost_total=_money(item.additional_cost * qty),
        total_before_profit=_money(subtotal * qty),
        profit_rate=round(profit_rate, 2),
        profit_amount=_money(profit * qty),
        total_price=_money(total * qty),
        m2_price=_money(total / area),
        profit_percentage=_money(profit / total * 100 if total else 0.0),
    )


def calculate_item_pricing(
    item: ItemInput,
    config: Optional[PricingConfig] = None
) -> PricedItem:
    """Price a single quote item.

    Args:
        item: QuoteItem or an intake dictionary with camelCase keys
        config: Pricing constants (defaults to PricingConfig())

    Returns:
        PricedItem with the cost breakdown (money values x quantity)

    Raises:
        ValueError: If a supplied config fails validation
    """
    config = _checked_config(config)
    quote_item = _coerce_item(item)
    profile = quote_item.profile or AluminiumProfile()

    if quote_item.profile is None:
        logger.warning(f"Item {quote_item.id} has no profile; material prices are 0")

    if quote_item.type == ItemType.CURTAIN_WALL:
        return _price_curtain_wall(quote_item, profile, config)
    return _price_opening(quote_item, profile, config)


def calculate_quote_totals(
    items: Iterable[Union[PricedItem, ItemInput]],
    discount_percentage: float = 0.0,
    config: Optional[PricingConfig] = None
) -> QuoteTotals:
    """Roll priced items up into quote totals.

    Unpriced items (QuoteItem or dictionaries) are priced first. The
    discount applies to the total price; the payment schedule splits
    the discounted total.

    Args:
        items: Priced or unpriced quote items
        discount_percentage: Discount on the total, 0-100
        config: Pricing constants (defaults to PricingConfig())

    Returns:
        QuoteTotals

    Raises:
        ValueError: If the discount is outside 0-100 or a supplied config
            fails validation
    """
    config = _checked_config(config)
    if not 0 <= discount_percentage <= 100:
        raise ValueError(f"discount_percentage must be within 0-100, got {discount_percentage}")

    priced: List[PricedItem] = [
        entry if isinstance(entry, PricedItem) else calculate_item_pricing(entry, config)
        for entry in items
    ]

    total_m2 = sum(entry.area for entry in priced)
    total_before = sum(entry.total_before_profit for entry in priced)
    total_after = sum(entry.total_price for entry in priced)
    total_profit = total_after - total_before

    discount_amount = total_after * discount_percentage / 100
    total_price = total_after - discount_amount

    totals = QuoteTotals(
        total_m2=_money(total_m2),
        total_before=_money(total_before),
        total_after=_money(total_after),
        total_profit=_money(total_profit),
        total_profit_percentage=_money(total_profit / total_after * 100 if total_after else 0.0),
        total_m2_price=_money(total_after / total_m2 if total_m2 else 0.0),
        discount_percentage=discount_percentage,
        discount_amount=_money(discount_amount),
        total_price=_money(total_price),
        m2_price=_money(total_price / total_m2 if total_m2 else 0.0),
        down_payment=_money(total_price * config.down_payment_share),
        supply_payment=_money(total_price * config.supply_payment_share),
        complete_payment=_money(total_price * config.complete_payment_share),
        items=priced,
    )

    logger.info(
        f"Priced quote: {len(priced)} items, total={totals.total_price:.2f} "
        f"(discount {discount_percentage}%)"
    )
    return totals
