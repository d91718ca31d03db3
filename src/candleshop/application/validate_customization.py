"""Application service: Validate Customization use case.

Answers "can this product be made with these options, and what would it
cost?".  An invalid combination is a normal answer here, not an error;
only a missing product is.
"""

from __future__ import annotations

from candleshop.application.dto import CustomizationCheckDTO
from candleshop.domain.model.combination import Combination
from candleshop.domain.repository.option_repository import OptionRepository
from candleshop.domain.repository.product_repository import ProductRepository
from candleshop.domain.service.customization_validator import (
    CustomizationValidator,
    require_product,
)
from candleshop.domain.service.price_calculator import PriceCalculator


class ValidateCustomizationHandler:

    def __init__(
        self,
        option_repo: OptionRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._product_repo = product_repo
        self._validator = CustomizationValidator(option_repo, product_repo)
        self._calculator = PriceCalculator(option_repo, product_repo)

    def handle(self, product_id: str, combination: Combination) -> CustomizationCheckDTO:
        product = require_product(self._product_repo, product_id)

        result = self._validator.validate(product_id, combination)
        if not result.is_valid:
            # Invalid selections are quoted at the plain base price.
            return CustomizationCheckDTO(
                is_valid=False,
                message=result.message or "Invalid customization options",
                price=str(product.base_price.amount),
            )

        quote = self._calculator.price(product_id, combination)
        return CustomizationCheckDTO(
            is_valid=True,
            message="Customization is valid",
            price=str(quote.price.amount),
        )
