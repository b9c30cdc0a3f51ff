"""Application use cases."""

from ekram_prices.application.use_cases.add_material import AddMaterialUseCase
from ekram_prices.application.use_cases.read_prices import ReadPricesUseCase
from ekram_prices.application.use_cases.update_price import UpdatePriceUseCase

__all__ = [
    "AddMaterialUseCase",
    "ReadPricesUseCase",
    "UpdatePriceUseCase",
]
