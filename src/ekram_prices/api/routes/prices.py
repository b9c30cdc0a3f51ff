"""
Price read and update endpoints.
"""

from fastapi import APIRouter, Depends

from ekram_prices.api.dependencies import (
    get_read_prices_use_case,
    get_update_price_use_case,
    update_price_body,
    verify_update_key,
)
from ekram_prices.application.dto.requests import UpdatePriceRequest
from ekram_prices.application.dto.responses import PricesResponse, UpdatePriceResponse
from ekram_prices.application.use_cases import ReadPricesUseCase, UpdatePriceUseCase

router = APIRouter(prefix="/api", tags=["prices"])


@router.api_route("/prices", methods=["GET", "POST"], response_model=PricesResponse)
async def get_prices(
    use_case: ReadPricesUseCase = Depends(get_read_prices_use_case),
) -> PricesResponse:
    """
    Current prices and history.

    Always answers 200; unreadable documents come back empty.
    """
    snapshot = await use_case.execute()
    return use_case.to_response(snapshot)


@router.post(
    "/update-price",
    response_model=UpdatePriceResponse,
    dependencies=[Depends(verify_update_key)],
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": UpdatePriceRequest.model_json_schema()}},
        }
    },
)
async def update_price(
    body: UpdatePriceRequest = Depends(update_price_body),
    use_case: UpdatePriceUseCase = Depends(get_update_price_use_case),
) -> UpdatePriceResponse:
    """Record a price report for one material."""
    result = await use_case.execute(body)
    return use_case.to_response(result)
