"""API router for reference buy-back prices."""

from fastapi import APIRouter, Depends, HTTPException

from models.schemas import (
    GeoPriceResponse,
    MaxPriceRequest,
    MaxPriceResponse,
    PriceSearchRequest,
    PriceSearchResponse,
)
from services.extraction import model_prefix
from services.price_lookup import PriceLookupClient, PriceLookupError, geo_search_url

router = APIRouter()


def get_price_client() -> PriceLookupClient:
    return PriceLookupClient()


def _upstream_error(e: PriceLookupError) -> HTTPException:
    return HTTPException(
        status_code=502,
        detail={
            "error": {
                "code": "PRICE_LOOKUP_FAILED",
                "message": str(e),
                "upstream_status": e.status_code,
            }
        },
    )


@router.post("/search", response_model=PriceSearchResponse)
async def search_prices(
    request: PriceSearchRequest,
    client: PriceLookupClient = Depends(get_price_client),
) -> PriceSearchResponse:
    """Find the catalog page for a model, preferring the requested carrier."""
    prefix = model_prefix(request.model_prefix) or request.model_prefix
    try:
        result = await client.search(prefix, request.carrier)
    except PriceLookupError as e:
        raise _upstream_error(e)
    return PriceSearchResponse(
        model_prefix=result.model_prefix,
        carrier_slug=result.carrier_slug,
        search_url=result.search_url,
        first_link=result.first_link,
    )


@router.post("/max", response_model=MaxPriceResponse)
async def max_price(
    request: MaxPriceRequest,
    client: PriceLookupClient = Depends(get_price_client),
) -> MaxPriceResponse:
    try:
        price = await client.fetch_price(request.query)
    except PriceLookupError as e:
        raise _upstream_error(e)
    return MaxPriceResponse(price=price)


@router.post("/geo", response_model=GeoPriceResponse)
async def geo_prices(request: PriceSearchRequest) -> GeoPriceResponse:
    # Secondary site is not scraped yet, prices are placeholders.
    prefix = model_prefix(request.model_prefix) or request.model_prefix
    return GeoPriceResponse(
        geo_url=geo_search_url(prefix),
        prices={"unused": "—", "used": "—"},
        carrier=request.carrier,
    )
