"""
Add Material Use Case.

Registers a custom material so price reports for it are accepted.
"""

from ekram_prices.application.dto.requests import AddMaterialRequest
from ekram_prices.application.dto.responses import AddMaterialResponse, MaterialsResponse
from ekram_prices.core.services import MaterialRegistry


class AddMaterialUseCase:
    """Use case for extending and listing the material catalog."""

    def __init__(self, registry: MaterialRegistry):
        self._registry = registry

    async def execute(self, request: AddMaterialRequest) -> AddMaterialResponse:
        """Execute the add-material use case."""
        key, name = await self._registry.add_material(
            key=request.key,
            name_ar=request.name_ar,
            name_en=request.name_en,
            icon=request.icon,
            unit=request.unit,
        )
        return AddMaterialResponse(material=key, name=name)

    async def list_materials(self) -> MaterialsResponse:
        """Return built-in and custom materials with the alias table."""
        return MaterialsResponse(
            builtin=dict(self._registry.builtin),
            custom=await self._registry.custom_materials(),
            aliases=dict(self._registry.aliases),
        )
