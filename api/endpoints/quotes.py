from fastapi import APIRouter, Depends
from typing import Dict, Any

from api.models.quote_models import QuoteItemInput, QuotePriceRequest, QuotePriceResponse
from api.utils.errors import handle_exception
from api.utils.sessions import SessionStore, get_session_store
from src.curtain_wall.pricing.pricing_calculator import (
    calculate_item_pricing,
    calculate_quote_totals,
)

# Set up logging
import logging
logger = logging.getLogger("curtain_wall.api")

router = APIRouter()


def _item_dict(item: QuoteItemInput, store: SessionStore) -> Dict[str, Any]:
    """Intake dictionary for an item, pulling design aggregates from a live session."""
    data = item.to_item_dict()
    if item.design_id:
        data["designData"] = store.get(item.design_id).metrics().to_dict()
    return data


@router.post("/items/price", response_model=Dict[str, Any])
async def price_item(
    item: QuoteItemInput,
    store: SessionStore = Depends(get_session_store)
):
    """Price a single quote item."""
    try:
        priced = calculate_item_pricing(_item_dict(item, store))
        return priced.to_dict()
    except Exception as e:
        raise handle_exception(e, "quote item", item.id)


@router.post("/price", response_model=QuotePriceResponse)
async def price_quote(
    request: QuotePriceRequest,
    store: SessionStore = Depends(get_session_store)
):
    """
    Price every item of a quote and roll them up.

    The discount applies to the total; the down/supply/completion
    payments split the discounted total.
    """
    try:
        logger.info(f"Pricing quote with {len(request.items)} items")
        priced = [calculate_item_pricing(_item_dict(item, store)) for item in request.items]
        totals = calculate_quote_totals(priced, request.discount_percentage)
        totals_dict = totals.to_dict()
        items = totals_dict.pop("items")
        return {"items": items, "totals": totals_dict}
    except Exception as e:
        raise handle_exception(e, "quote")
