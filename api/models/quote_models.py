from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List, Dict, Any, Optional, Literal


class QuoteItemInput(BaseModel):
    """One quote line as sent by the intake form (camelCase keys accepted)."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Item identifier", min_length=1)
    type: Literal["window", "door", "sky_light", "curtain_wall"] = Field(
        default="window", description="Product kind"
    )
    system: Literal["Sliding", "hinged", "fixed", "Tilt and Turn", "Curtain Wall"] = Field(
        default="Sliding", description="Opening system"
    )
    width: float = Field(description="Width in meters", ge=0)
    height: float = Field(description="Height in meters", ge=0)
    leaves: int = Field(default=1, description="Number of leaves", ge=1, le=8)
    quantity: int = Field(default=1, description="Number of identical units", ge=1)
    glass_type: Literal["single", "double", "triple", "laminated"] = Field(
        default="single", alias="glassType"
    )
    mosquito: bool = Field(default=False, description="Fit a mosquito net")
    net_type: Literal["fixed", "plisse", "panda"] = Field(default="fixed", alias="netType")
    arch: bool = Field(default=False, description="Arched frame")
    profile: Optional[Dict[str, Any]] = Field(
        default=None, description="Aluminium profile price sheet"
    )
    additional_cost: float = Field(default=0.0, alias="additionalCost", ge=0)
    design_data: Optional[Dict[str, Any]] = Field(
        default=None, alias="designData", description="Curtain-wall design aggregates"
    )
    design_id: Optional[str] = Field(
        default=None,
        alias="designId",
        description="Design session to take curtain-wall aggregates from"
    )

    @model_validator(mode='after')
    def validate_item(self) -> 'QuoteItemInput':
        """Design references only make sense for curtain walls."""
        if self.type != "curtain_wall" and (self.design_data or self.design_id):
            raise ValueError("designData/designId are only valid for curtain_wall items")
        if self.design_data is not None and self.design_id is not None:
            raise ValueError("Provide either designData or designId, not both")
        return self

    def to_item_dict(self) -> Dict[str, Any]:
        """Dictionary in the shape QuoteItem.from_dict reads."""
        return self.model_dump(by_alias=True, exclude={"design_id"})


class QuotePriceRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    items: List[QuoteItemInput] = Field(min_length=1)
    discount_percentage: float = Field(
        default=0.0, alias="discountPercentage", ge=0, le=100
    )


class QuotePriceResponse(BaseModel):
    """Priced items and quote totals, keyed the way the export side reads them."""
    items: List[Dict[str, Any]]
    totals: Dict[str, Any]
