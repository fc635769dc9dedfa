# File: src/curtain_wall/pricing/profiles.py
"""
Aluminium profile price sheets.

A profile is one supplier system (brand + code) with per-meter frame and
leaf prices, per-item accessory prices, per-m2 glass prices and the base
profit rate applied on top of material cost.

Price sheets arrive with two generations of key names ("sach" and
"mosquito" keys from older sheets, "leaf"/"net" keys from newer ones).
:meth:`AluminiumProfile.from_dict` accepts both.

Example:
    >>> profile = AluminiumProfile.from_dict({"code": "S300", "sach_price": 120})
    >>> profile.leaf_price
    120.0
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .quote_types import GlassType, NetType


def _number(value: Any) -> float:
    """Coerce a price-sheet value to float; blanks and junk count as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _first(data: Dict[str, Any], *keys: str) -> float:
    """First truthy numeric value among ``keys``."""
    for key in keys:
        value = _number(data.get(key))
        if value:
            return value
    return 0.0


@dataclass
class AluminiumProfile:
    """Price sheet of one aluminium system.

    Attributes:
        code: Supplier profile code
        brand: Supplier brand
        name: Display name
        system_type: System family (sliding, hinged, ...)
        frame_price: Frame price per meter (2/4 leaf systems)
        frame_price_3: Frame price per meter for 3 leaf systems
        leaf_price: Leaf (sash) price per meter
        accessories_2_leaves: Accessory set price for 2 leaves
        accessories_3_leaves: Accessory set price for 3 leaves
        accessories_4_leaves: Accessory set price for 4 leaves
        glass_price_single: Glass price per m2
        glass_price_double: Glass price per m2
        glass_price_triple: Glass price per m2
        glass_price_laminated: Glass price per m2
        arc_price: Arch price per meter of frame
        net_price: Fixed mosquito net price per meter of leaf perimeter
        net_price_plisse: Plisse net price per meter
        net_price_panda: Panda net price per meter
        base_profit_rate: Profit fraction applied to material cost
        max_width: Largest supported width (m, 0 = unspecified)
        max_height: Largest supported height (m, 0 = unspecified)
    """
    code: str = ""
    brand: str = ""
    name: str = ""
    system_type: str = ""
    frame_price: float = 0.0
    frame_price_3: float = 0.0
    leaf_price: float = 0.0
    accessories_2_leaves: float = 0.0
    accessories_3_leaves: float = 0.0
    accessories_4_leaves: float = 0.0
    glass_price_single: float = 0.0
    glass_price_double: float = 0.0
    glass_price_triple: float = 0.0
    glass_price_laminated: float = 0.0
    arc_price: float = 0.0
    net_price: float = 0.0
    net_price_plisse: float = 0.0
    net_price_panda: float = 0.0
    base_profit_rate: float = 0.0
    max_width: float = 0.0
    max_height: float = 0.0

    def glass_rate(self, glass_type: GlassType) -> float:
        """Per-m2 glass price for ``glass_type``."""
        return {
            GlassType.SINGLE: self.glass_price_single,
            GlassType.DOUBLE: self.glass_price_double,
            GlassType.TRIPLE: self.glass_price_triple,
            GlassType.LAMINATED: self.glass_price_laminated,
        }[GlassType(glass_type)]

    def net_rate(self, net_type: NetType) -> float:
        """Per-meter mosquito net price for ``net_type``."""
        return {
            NetType.FIXED: self.net_price,
            NetType.PLISSE: self.net_price_plisse,
            NetType.PANDA: self.net_price_panda,
        }[NetType(net_type)]

    def accessories_for(self, leaves: int) -> float:
        """Accessory set price for a leaf count; 0 outside 2-4 leaves."""
        return {
            2: self.accessories_2_leaves,
            3: self.accessories_3_leaves,
            4: self.accessories_4_leaves,
        }.get(leaves, 0.0)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "AluminiumProfile":
        """Create a profile from a price sheet record.

        Args:
            data: Price sheet dictionary in either key generation, or None

        Returns:
            AluminiumProfile (all prices 0 when ``data`` is empty)
        """
        if not data:
            return cls()
        return cls(
            code=str(data.get("code") or data.get("profile_code") or ""),
            brand=str(data.get("brand") or ""),
            name=str(data.get("name") or data.get("profile_name") or ""),
            system_type=str(data.get("system_type") or ""),
            frame_price=_number(data.get("frame_price")),
            frame_price_3=_number(data.get("frame_price_3")),
            leaf_price=_first(data, "sach_price", "leaf_price"),
            accessories_2_leaves=_first(data, "accessories_2_sach", "accessories_2_leaves"),
            accessories_3_leaves=_first(data, "accessories_3_sach", "accessories_3_leaves"),
            accessories_4_leaves=_first(data, "accessories_4_sach", "accessories_4_leaves"),
            glass_price_single=_number(data.get("glass_price_single")),
            glass_price_double=_number(data.get("glass_price_double")),
            glass_price_triple=_number(data.get("glass_price_triple")),
            glass_price_laminated=_number(data.get("glass_price_laminated")),
            arc_price=_number(data.get("arc_price")),
            net_price=_first(data, "mosquito_price_fixed", "net_price"),
            net_price_plisse=_first(data, "mosquito_price_plisse", "net_price_plisse"),
            net_price_panda=_number(data.get("net_price_panda")),
            base_profit_rate=_number(data.get("base_profit_rate")),
            max_width=_first(data, "max_w", "max_width"),
            max_height=_first(data, "max_h", "max_height"),
        )
