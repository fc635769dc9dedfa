# File: src/curtain_wall/pricing/quote_types.py
"""
Quote data models.

Quote items come from the intake form (or the API) as camelCase
dictionaries; :meth:`QuoteItem.from_dict` normalizes them into typed
dataclasses. Priced items and quote totals serialize back to the same
camelCase keys so the export side sees the shape it always has.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from .profiles import AluminiumProfile


# =============================================================================
# Enums
# =============================================================================

class ItemType(Enum):
    """Kinds of quoted product."""
    WINDOW = "window"
    DOOR = "door"
    SKY_LIGHT = "sky_light"
    CURTAIN_WALL = "curtain_wall"


class SystemType(Enum):
    """Opening systems of a quoted product."""
    SLIDING = "Sliding"
    HINGED = "hinged"
    FIXED = "fixed"
    TILT_AND_TURN = "Tilt and Turn"
    CURTAIN_WALL = "Curtain Wall"


class GlassType(Enum):
    SINGLE = "single"
    DOUBLE = "double"
    TRIPLE = "triple"
    LAMINATED = "laminated"


class NetType(Enum):
    """Mosquito net variants."""
    FIXED = "fixed"
    PLISSE = "plisse"
    PANDA = "panda"


def _enum_value(enum_cls, value, default):
    """Case-insensitive enum lookup falling back to ``default``."""
    if isinstance(value, enum_cls):
        return value
    if value is None:
        return default
    text = str(value).strip().lower()
    for member in enum_cls:
        if member.value.lower() == text:
            return member
    return default


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class QuoteItem:
    """One line of a quote.

    Attributes:
        id: Item identifier
        type: Product kind
        system: Opening system
        width: Width in meters
        height: Height in meters
        leaves: Number of leaves (sashes)
        quantity: Number of identical units
        glass_type: Glazing
        mosquito: Whether a mosquito net is fitted
        net_type: Net variant when ``mosquito`` is set
        arch: Whether the frame is arched
        profile: Aluminium price sheet (None prices everything at 0)
        additional_cost: Flat extra cost per unit
        design_data: Curtain-wall design aggregates (camelCase keys)
    """
    id: str
    type: ItemType = ItemType.WINDOW
    system: SystemType = SystemType.SLIDING
    width: float = 0.0
    height: float = 0.0
    leaves: int = 1
    quantity: int = 1
    glass_type: GlassType = GlassType.SINGLE
    mosquito: bool = False
    net_type: NetType = NetType.FIXED
    arch: bool = False
    profile: Optional["AluminiumProfile"] = None
    additional_cost: float = 0.0
    design_data: Optional[Dict[str, Any]] = None

    @property
    def is_curtain_wall(self) -> bool:
        return self.type == ItemType.CURTAIN_WALL

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QuoteItem":
        """Create an item from an intake/API dictionary.

        Args:
            data: Item dictionary with camelCase keys

        Returns:
            QuoteItem instance
        """
        from .profiles import AluminiumProfile

        profile_data = data.get("profile")
        if isinstance(profile_data, AluminiumProfile):
            profile = profile_data
        else:
            profile = AluminiumProfile.from_dict(profile_data) if profile_data else None

        def number(key, default=0.0):
            try:
                return float(data.get(key) or default)
            except (TypeError, ValueError):
                return default

        return cls(
            id=str(data.get("id", "")),
            type=_enum_value(ItemType, data.get("type"), ItemType.WINDOW),
            system=_enum_value(SystemType, data.get("system"), SystemType.SLIDING),
            width=number("width"),
            height=number("height"),
            leaves=int(number("leaves", 1)) or 1,
            quantity=int(number("quantity", 1)) or 1,
            glass_type=_enum_value(GlassType, data.get("glassType"), GlassType.SINGLE),
            mosquito=bool(data.get("mosquito", False)),
            net_type=_enum_value(NetType, data.get("netType"), NetType.FIXED),
            arch=bool(data.get("arch", False)),
            profile=profile,
            additional_cost=number("additionalCost"),
            design_data=data.get("designData"),
        )


@dataclass
class PricedItem:
    """Cost breakdown of one quote item (all money values x quantity)."""
    item: QuoteItem
    quantity: int
    area: float = 0.0
    frame_length: float = 0.0
    leaf_perimeter: float = 0.0
    total_leaf_length: float = 0.0
    accessories: float = 0.0
    frame_cost: float = 0.0
    leaf_cost: float = 0.0
    glass_cost: float = 0.0
    net_cost: float = 0.0
    arch_cost: float = 0.0
    additional_cost_total: float = 0.0
    total_before_profit: float = 0.0
    profit_rate: float = 0.0
    profit_amount: float = 0.0
    total_price: float = 0.0
    m2_price: float = 0.0
    profit_percentage: float = 0.0
    # Curtain wall specific
    frame_meters: float = 0.0
    window_meters: float = 0.0
    glass_area: float = 0.0
    num_windows: int = 0
    num_doors: int = 0
    corner_count: int = 0
    frame_accessories: float = 0.0
    corners_cost: float = 0.0
    windows_cost: float = 0.0
    accessories_windows_doors: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.item.id,
            "type": self.item.type.value,
            "system": self.item.system.value,
            "width": self.item.width,
            "height": self.item.height,
            "quantity": self.quantity,
            "area": self.area,
            "frameLength": self.frame_length,
            "sachPerimeter": self.leaf_perimeter,
            "totalSachLength": self.total_leaf_length,
            "accessories": self.accessories,
            "frameCost": self.frame_cost,
            "sachCost": self.leaf_cost,
            "glassCost": self.glass_cost,
            "netCost": self.net_cost,
            "archCost": self.arch_cost,
            "additionalCostTotal": self.additional_cost_total,
            "totalBeforeProfit": self.total_before_profit,
            "base_profit_rate": self.profit_rate,
            "profitAmount": self.profit_amount,
            "totalPrice": self.total_price,
            "m2Price": self.m2_price,
            "profitPercentage": self.profit_percentage,
            "frameMeters": self.frame_meters,
            "windowMeters": self.window_meters,
            "glassArea": self.glass_area,
            "numWindows": self.num_windows,
            "numDoors": self.num_doors,
            "cornerCount": self.corner_count,
            "frameAccessories": self.frame_accessories,
            "cornersCost": self.corners_cost,
            "windowsCost": self.windows_cost,
            "accessoriesWindowsDoors": self.accessories_windows_doors,
        }


@dataclass
class QuoteTotals:
    """Roll-up of priced items, after discount."""
    total_m2: float
    total_before: float
    total_after: float
    total_profit: float
    total_profit_percentage: float
    total_m2_price: float
    discount_percentage: float
    discount_amount: float
    total_price: float
    m2_price: float
    down_payment: float
    supply_payment: float
    complete_payment: float
    items: List[PricedItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalM2": self.total_m2,
            "totalBefore": self.total_before,
            "totalAfter": self.total_after,
            "totalProfit": self.total_profit,
            "totalProfitPercentage": self.total_profit_percentage,
            "totalM2Price": self.total_m2_price,
            "discountPercentage": self.discount_percentage,
            "discountAmount": self.discount_amount,
            "totalPrice": self.total_price,
            "m2Price": self.m2_price,
            "downPayment": self.down_payment,
            "supplyPayment": self.supply_payment,
            "completePayment": self.complete_payment,
            "items": [item.to_dict() for item in self.items],
        }
