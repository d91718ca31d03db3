"""Domain service: customization combination validation.

Decides whether a combination of options can be ordered for a product.
Checks run in a fixed order and stop at the first failure:

  1. every supplied id is well formed;
  2. every supplied id resolves to an option that is available and in stock;
  3. the product exists;
  4. the product offers every supplied option.

Internally the checks raise; ``validate()`` turns the first failure into
a ``ValidationResult`` because the customization endpoint answers with
``isValid`` instead of an error status.  Everything else should call
``ensure_valid()`` and let the exception propagate.
"""

from __future__ import annotations

from dataclasses import dataclass

from candleshop.domain.exceptions import EntityNotFoundError, ValidationError
from candleshop.domain.model.combination import Combination
from candleshop.domain.model.identifiers import is_valid_id, normalize_id
from candleshop.domain.model.option import Option, OptionKind
from candleshop.domain.model.product import Product
from candleshop.domain.repository.option_repository import OptionRepository
from candleshop.domain.repository.product_repository import ProductRepository


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    message: str | None = None
    field: str | None = None

    @staticmethod
    def ok() -> ValidationResult:
        return ValidationResult(is_valid=True)


class CustomizationError(ValidationError):
    """A combination failed one of the validation steps."""

    def __init__(self, message: str, field: str = "customizations") -> None:
        super().__init__(message, {field: message})
        self.field = field


class CustomizationValidator:

    def __init__(self, option_repo: OptionRepository, product_repo: ProductRepository) -> None:
        self._option_repo = option_repo
        self._product_repo = product_repo

    def validate(self, product_id: str, combination: Combination) -> ValidationResult:
        try:
            self.ensure_valid(product_id, combination)
        except CustomizationError as exc:
            return ValidationResult(is_valid=False, message=exc.message, field=exc.field)
        return ValidationResult.ok()

    def ensure_valid(self, product_id: str, combination: Combination) -> Product:
        """Run every check; return the product or raise ``CustomizationError``."""
        selections = list(combination.selections())

        for kind, option_id in selections:
            if not is_valid_id(option_id):
                raise CustomizationError(f"Invalid {kind.value} ID format", _field(kind))

        for kind, option_id in selections:
            self.check_option(kind, option_id)

        product = self._load_product(product_id)

        for kind, option_id in selections:
            if not product.offers(kind, option_id):
                raise CustomizationError(
                    f"Selected {kind.value} is not available for this product", _field(kind)
                )

        return product

    def check_option(self, kind: OptionKind, option_id: str) -> Option:
        option = self._option_repo.get(kind, option_id)
        if option is None:
            raise CustomizationError(f"{kind.label} not found", _field(kind))
        if not option.is_selectable:
            raise CustomizationError(
                f"Selected {kind.value} is not available or out of stock", _field(kind)
            )
        return option

    def _load_product(self, product_id: str) -> Product:
        if not is_valid_id(product_id):
            raise CustomizationError("Invalid product ID format", "productId")
        product = self._product_repo.get_by_id(normalize_id(product_id))
        if product is None:
            raise CustomizationError("Product not found", "productId")
        return product


def _field(kind: OptionKind) -> str:
    return f"{kind.value}Id"


def require_product(product_repo: ProductRepository, product_id: str) -> Product:
    """Load a product or raise ``EntityNotFoundError`` (400 for malformed ids)."""
    if not is_valid_id(product_id):
        raise ValidationError.for_field("productId", "Invalid product ID format")
    product = product_repo.get_by_id(normalize_id(product_id))
    if product is None:
        raise EntityNotFoundError("Product not found")
    return product
