"""
Material catalog endpoints.
"""

from fastapi import APIRouter, Depends

from ekram_prices.api.dependencies import get_add_material_use_case
from ekram_prices.application.dto.requests import AddMaterialRequest
from ekram_prices.application.dto.responses import AddMaterialResponse, MaterialsResponse
from ekram_prices.application.use_cases import AddMaterialUseCase

router = APIRouter(prefix="/api", tags=["materials"])


@router.post("/add-material", response_model=AddMaterialResponse)
async def add_material(
    request: AddMaterialRequest,
    use_case: AddMaterialUseCase = Depends(get_add_material_use_case),
) -> AddMaterialResponse:
    """Register a custom material, overwriting any entry with the same key."""
    return await use_case.execute(request)


@router.get("/materials", response_model=MaterialsResponse)
async def list_materials(
    use_case: AddMaterialUseCase = Depends(get_add_material_use_case),
) -> MaterialsResponse:
    """List built-in and custom materials with the bot alias table."""
    return await use_case.list_materials()
