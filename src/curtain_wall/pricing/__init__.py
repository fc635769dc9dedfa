# File: src/curtain_wall/pricing/__init__.py
"""
Quote pricing module.

This module provides:
- Aluminium profile price sheets (with legacy key normalization)
- Quote item, priced item and quote total models
- Item pricing for curtain walls, windows, doors and skylights
- Quote totals with discount and payment schedule
"""

from .quote_types import (
    GlassType,
    ItemType,
    NetType,
    PricedItem,
    QuoteItem,
    QuoteTotals,
    SystemType,
)

from .profiles import AluminiumProfile

from .pricing_config import PricingConfig

from .pricing_calculator import (
    calculate_item_pricing,
    calculate_quote_totals,
)

__all__ = [
    # Types
    "GlassType",
    "ItemType",
    "NetType",
    "SystemType",
    "QuoteItem",
    "PricedItem",
    "QuoteTotals",
    "AluminiumProfile",
    # Configuration
    "PricingConfig",
    # Calculator
    "calculate_item_pricing",
    "calculate_quote_totals",
]
