# File: src/curtain_wall/pricing/pricing_config.py
"""
Pricing configuration.

Constants of the company's price formula that are not part of any
supplier price sheet: the tilt-and-turn accessory surcharge, the minimum
billable side, the large-item profit surcharge and the payment schedule.

Example:
    >>> config = PricingConfig(tilt_and_turn_per_leaf=3500.0)
    >>> config.validate()
    []
"""

from dataclasses import dataclass
from typing import List


@dataclass
class PricingConfig:
    """Configuration for item and quote pricing.

    Attributes:
        tilt_and_turn_per_leaf: Accessory price per leaf for tilt-and-turn systems
        min_billable_side: Sides shorter than this are billed at this length (m)
        area_surcharge_threshold: Area above which the profit surcharge starts (m2)
        area_surcharge_rate: Extra profit rate per started m2 above the threshold
        down_payment_share: Share of the total due on signing
        supply_payment_share: Share due on supply
        complete_payment_share: Share due on completion
    """
    tilt_and_turn_per_leaf: float = 3000.0
    min_billable_side: float = 1.0
    area_surcharge_threshold: float = 4.0
    area_surcharge_rate: float = 0.1
    down_payment_share: float = 0.8
    supply_payment_share: float = 0.1
    complete_payment_share: float = 0.1

    def validate(self) -> List[str]:
        """Validate configuration parameters.

        Returns:
            List of validation error messages (empty if valid)

        Raises:
            ValueError: If any validation fails
        """
        errors = []

        if self.tilt_and_turn_per_leaf < 0:
            errors.append("tilt_and_turn_per_leaf cannot be negative")
        if self.min_billable_side <= 0:
            errors.append("min_billable_side must be positive")
        if self.area_surcharge_threshold < 0:
            errors.append("area_surcharge_threshold cannot be negative")
        if self.area_surcharge_rate < 0:
            errors.append("area_surcharge_rate cannot be negative")

        shares = (
            self.down_payment_share,
            self.supply_payment_share,
            self.complete_payment_share,
        )
        if any(share < 0 for share in shares):
            errors.append("payment shares cannot be negative")
        elif abs(sum(shares) - 1.0) > 1e-9:
            errors.append(f"payment shares must sum to 1.0, got {sum(shares)}")

        if errors:
            raise ValueError("PricingConfig validation failed:\n" + "\n".join(errors))

        return errors

    def to_dict(self) -> dict:
        return {
            "tilt_and_turn_per_leaf": self.tilt_and_turn_per_leaf,
            "min_billable_side": self.min_billable_side,
            "area_surcharge_threshold": self.area_surcharge_threshold,
            "area_surcharge_rate": self.area_surcharge_rate,
            "down_payment_share": self.down_payment_share,
            "supply_payment_share": self.supply_payment_share,
            "complete_payment_share": self.complete_payment_share,
        }
